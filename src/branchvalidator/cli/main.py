"""Branch Validator CLI entry point."""

import logging

import click


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool):
    """Validate branch names against an expression."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


# Register subcommands
from branchvalidator.cli.functions_cmd import functions  # noqa: E402
from branchvalidator.cli.validate_cmd import check, validate  # noqa: E402

cli.add_command(validate)
cli.add_command(check)
cli.add_command(functions)
