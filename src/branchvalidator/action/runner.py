"""Branch validator action runner.

Ties the expression pipeline to a CI run: checks the inputs, evaluates the
expression against the branch name, renders the function results and sets
the ``valid-branch`` output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from branchvalidator.action.config import ActionInputs, BranchValidatorError, InvalidActionInput
from branchvalidator.action.console import GitHubConsole
from branchvalidator.expressions import EvaluationOutcome, Evaluator

logger = logging.getLogger(__name__)

VALID_BRANCH_OUTPUT = "valid-branch"


class InvalidSyntaxExpression(BranchValidatorError):
    """The validation expression is malformed."""


class InvalidBranchError(BranchValidatorError):
    """The branch name does not satisfy the validation expression."""


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a single action run.

    Attributes:
        valid_branch: True if the branch satisfied the expression
        message: Human-readable summary, including function results
        outcome: The full evaluation outcome
    """

    valid_branch: bool
    message: str
    outcome: EvaluationOutcome


def format_syntax_error(outcome: EvaluationOutcome) -> str:
    return f"Invalid Syntax\n\t{outcome.message}"


def format_results(title: str, lines: list[str]) -> str:
    body = "\n\t".join(lines)
    return f"{title}\n\nFunction Results:\n\t{body}"


class BranchValidatorAction:
    """Runs branch validation for one set of action inputs.

    Usage:
        action = BranchValidatorAction()
        result = action.run(ActionInputs(branch_name="main", validation_logic="equalTo('main')"))
    """

    def __init__(
        self,
        console: GitHubConsole | None = None,
        evaluator: Evaluator | None = None,
    ):
        self.console = console or GitHubConsole()
        self.evaluator = evaluator or Evaluator()

    def run(self, inputs: ActionInputs) -> ActionResult:
        """Validate the branch named in the inputs.

        Raises:
            InvalidActionInput: If the branch name or expression is empty
            InvalidSyntaxExpression: If the expression is invalid and
                fail_when_not_valid is set
            InvalidBranchError: If the branch is invalid and
                fail_when_not_valid is set
        """
        self.console.write_line("Welcome To The BranchValidator GitHub Action!!")
        self.console.blank_line()
        self.console.write_group(
            "Available Functions", self.evaluator.registry.list_signatures()
        )

        if not inputs.branch_name:
            raise InvalidActionInput(
                "The 'branch-name' action input cannot be null or empty."
            )
        if not inputs.validation_logic or not inputs.validation_logic.strip():
            raise InvalidActionInput(
                "The 'validation-logic' action input cannot be null or empty."
            )

        branch_name = inputs.trimmed_branch_name()
        if branch_name != inputs.branch_name:
            logger.debug("Trimmed branch name %r to %r", inputs.branch_name, branch_name)

        outcome = self.evaluator.execute(inputs.validation_logic, branch_name)
        self.console.set_output(VALID_BRANCH_OUTPUT, str(outcome.result).lower())

        if not outcome.valid:
            return self._finish(
                inputs, outcome, format_syntax_error(outcome), InvalidSyntaxExpression
            )

        if not outcome.result:
            failed = [str(entry) for entry in outcome.failed_entries()]
            return self._finish(
                inputs,
                outcome,
                format_results("Branch Invalid", failed),
                InvalidBranchError,
            )

        message = format_results("Branch Valid", outcome.trace_lines())
        self.console.blank_line()
        self.console.write_line(message)
        return ActionResult(valid_branch=True, message=message, outcome=outcome)

    def _finish(
        self,
        inputs: ActionInputs,
        outcome: EvaluationOutcome,
        message: str,
        error: type[BranchValidatorError],
    ) -> ActionResult:
        if inputs.fail_when_not_valid:
            raise error(message)

        self.console.blank_line()
        self.console.write_line(message)
        return ActionResult(valid_branch=False, message=message, outcome=outcome)
