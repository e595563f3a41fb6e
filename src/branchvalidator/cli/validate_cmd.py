"""Validation CLI commands: validate a branch and check an expression."""

from pathlib import Path

import click

from branchvalidator.action import (
    ActionInputs,
    BranchValidatorAction,
    BranchValidatorError,
)
from branchvalidator.action.config import (
    BRANCH_NAME,
    FAIL_WHEN_NOT_VALID,
    TRIM_FROM_START,
    VALIDATION_LOGIC,
)
from branchvalidator.expressions import Evaluator


@click.command()
@click.option("--branch-name", "-b", default=None, help="The name of the GIT branch.")
@click.option(
    "--validation-logic",
    "-e",
    default=None,
    help="The logic expression to use to validate the branch name.",
)
@click.option(
    "--trim-from-start",
    default=None,
    help="The value to trim from the start of the branch. This is not case sensitive.",
)
@click.option(
    "--fail-when-not-valid/--no-fail-when-not-valid",
    default=None,
    help="Fail with a non-zero exit code if the branch name is not valid.",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file holding the action inputs.",
)
def validate(
    branch_name: str | None,
    validation_logic: str | None,
    trim_from_start: str | None,
    fail_when_not_valid: bool | None,
    config_path: Path | None,
):
    """Validate a branch name against a validation expression.

    Inputs not given as options are read from INPUT_* environment variables
    (as set by GitHub Actions), then from the --config file.
    """
    try:
        inputs = ActionInputs.resolve(
            overrides={
                BRANCH_NAME: branch_name,
                VALIDATION_LOGIC: validation_logic,
                TRIM_FROM_START: trim_from_start,
                FAIL_WHEN_NOT_VALID: fail_when_not_valid,
            },
            config_path=config_path,
        )
        BranchValidatorAction().run(inputs)
    except BranchValidatorError as e:
        click.echo(click.style(str(e), fg="red"), err=True)
        raise SystemExit(1)


@click.command()
@click.argument("expression")
def check(expression: str):
    """Check an expression's syntax and function signatures without a branch."""
    outcome = Evaluator().validate(expression)
    if not outcome.valid:
        click.echo(click.style(f"Invalid Syntax\n\t{outcome.message}", fg="red"), err=True)
        raise SystemExit(1)

    click.echo(click.style("Expression is valid.", fg="green"))
