"""Functions CLI command: list the available expression functions."""

import json

import click

from branchvalidator.expressions import FunctionCategory, default_registry


@click.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Print full documentation as JSON.")
def functions(as_json: bool):
    """List the functions usable in validation expressions."""
    registry = default_registry()

    if as_json:
        click.echo(json.dumps(registry.export_documentation(), indent=2))
        return

    for category in FunctionCategory:
        definitions = registry.list_by_category(category)
        if not definitions:
            continue
        click.echo(click.style(category.value.title(), bold=True))
        for definition in definitions:
            click.echo(f"  {definition.describe()}")
            click.echo(f"      {definition.description}")
