"""Action input configuration.

Inputs can come from three places, highest priority first:
1. Explicit values (CLI options)
2. GitHub Actions environment variables (INPUT_BRANCH-NAME, ...)
3. A YAML config file whose keys are the input names
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

BRANCH_NAME = "branch-name"
VALIDATION_LOGIC = "validation-logic"
TRIM_FROM_START = "trim-from-start"
FAIL_WHEN_NOT_VALID = "fail-when-not-valid"

INPUT_NAMES = (BRANCH_NAME, VALIDATION_LOGIC, TRIM_FROM_START, FAIL_WHEN_NOT_VALID)

_TRUE_VALUES = {"true", "yes", "1", "on"}
_FALSE_VALUES = {"false", "no", "0", "off"}


class BranchValidatorError(Exception):
    """Base class for errors reported by the branch validator host."""


class InvalidActionInput(BranchValidatorError):
    """An action input is missing or has an unusable value."""


def env_var_name(input_name: str) -> str:
    """Environment variable GitHub Actions uses for an input.

    GitHub upper-cases the name and keeps hyphens: ``INPUT_BRANCH-NAME``.
    """
    return f"INPUT_{input_name.replace(' ', '_').upper()}"


def parse_bool(value: Any, input_name: str) -> bool:
    """Parse a boolean input value.

    Raises:
        InvalidActionInput: If the value is not a recognised boolean
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise InvalidActionInput(
        f"The '{input_name}' action input must be 'true' or 'false', got '{value}'."
    )


@dataclass
class ActionInputs:
    """Inputs for a single branch validation run.

    Attributes:
        branch_name: The name of the branch to validate
        validation_logic: The expression used to validate the branch name
        trim_from_start: Prefix removed from the branch name before validation
            (case-insensitive), e.g. "refs/heads/"
        fail_when_not_valid: If True, an invalid branch fails the run
    """

    branch_name: str = ""
    validation_logic: str = ""
    trim_from_start: str = ""
    fail_when_not_valid: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ActionInputs:
        """Create inputs from a dict keyed by input name."""
        unknown = sorted(set(data) - set(INPUT_NAMES))
        if unknown:
            raise InvalidActionInput(
                f"Unknown action input(s): {', '.join(unknown)}. "
                f"Expected one of: {', '.join(INPUT_NAMES)}."
            )

        fail = data.get(FAIL_WHEN_NOT_VALID)
        return cls(
            branch_name=str(data.get(BRANCH_NAME) or ""),
            validation_logic=str(data.get(VALIDATION_LOGIC) or ""),
            trim_from_start=str(data.get(TRIM_FROM_START) or ""),
            fail_when_not_valid=True if fail is None else parse_bool(fail, FAIL_WHEN_NOT_VALID),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> ActionInputs:
        """Load inputs from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise InvalidActionInput(
                f"The config file '{path}' must contain a mapping of action inputs."
            )
        return cls.from_mapping(data)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ActionInputs:
        """Create inputs from GitHub Actions ``INPUT_*`` environment variables."""
        environ = os.environ if environ is None else environ
        data = {
            name: environ[env_var_name(name)]
            for name in INPUT_NAMES
            if environ.get(env_var_name(name))
        }
        return cls.from_mapping(data)

    @classmethod
    def resolve(
        cls,
        overrides: Mapping[str, Any] | None = None,
        config_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> ActionInputs:
        """Merge inputs from the config file, the environment and explicit values.

        Resolution order per input:
        1. overrides (values that are None are ignored)
        2. INPUT_* environment variables
        3. The YAML config file, if given
        4. Defaults
        """
        merged: dict[str, Any] = {}
        if config_path is not None:
            merged.update(cls.from_yaml(config_path).to_dict())

        environ = os.environ if environ is None else environ
        for name in INPUT_NAMES:
            value = environ.get(env_var_name(name))
            if value:
                merged[name] = value

        for name, value in (overrides or {}).items():
            if value is not None:
                merged[name] = value

        return cls.from_mapping(merged)

    def trimmed_branch_name(self) -> str:
        """The branch name with trim_from_start removed, ignoring case."""
        prefix = self.trim_from_start
        if prefix and self.branch_name.lower().startswith(prefix.lower()):
            return self.branch_name[len(prefix):]
        return self.branch_name

    def to_dict(self) -> dict[str, Any]:
        return {
            BRANCH_NAME: self.branch_name,
            VALIDATION_LOGIC: self.validation_logic,
            TRIM_FROM_START: self.trim_from_start,
            FAIL_WHEN_NOT_VALID: self.fail_when_not_valid,
        }
