"""Host integration for running branch validation in a CI job.

Usage:
    from branchvalidator.action import ActionInputs, BranchValidatorAction

    inputs = ActionInputs.from_env()
    result = BranchValidatorAction().run(inputs)
"""

from branchvalidator.action.config import (
    ActionInputs,
    BranchValidatorError,
    InvalidActionInput,
)
from branchvalidator.action.console import GitHubConsole
from branchvalidator.action.runner import (
    ActionResult,
    BranchValidatorAction,
    InvalidBranchError,
    InvalidSyntaxExpression,
)

__all__ = [
    "ActionInputs",
    "ActionResult",
    "BranchValidatorAction",
    "BranchValidatorError",
    "GitHubConsole",
    "InvalidActionInput",
    "InvalidBranchError",
    "InvalidSyntaxExpression",
]
