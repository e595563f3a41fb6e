"""Allow running the CLI with ``python -m branchvalidator``."""

from branchvalidator.cli.main import cli

if __name__ == "__main__":
    cli()
