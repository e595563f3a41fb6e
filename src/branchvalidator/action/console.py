"""Console output for GitHub Actions workflow commands."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Mapping

import click

logger = logging.getLogger(__name__)

GITHUB_OUTPUT = "GITHUB_OUTPUT"


class GitHubConsole:
    """Writes action output using GitHub workflow command syntax.

    Outputs are appended to the file named by GITHUB_OUTPUT. Outside of a
    runner (no GITHUB_OUTPUT), the legacy ``::set-output`` command is printed.
    """

    def __init__(self, environ: Mapping[str, str] | None = None, err: bool = False):
        self.environ = os.environ if environ is None else environ
        self.err = err

    def write_line(self, text: str = "") -> None:
        click.echo(text, err=self.err)

    def blank_line(self) -> None:
        self.write_line()

    def write_group(self, title: str, lines: Iterable[str]) -> None:
        """Write lines inside a collapsible log group."""
        self.write_line(f"::group::{title}")
        for line in lines:
            self.write_line(line)
        self.write_line("::endgroup::")

    def set_output(self, name: str, value: str) -> None:
        """Set an action output value.

        Raises:
            ValueError: If name is empty
        """
        if not name:
            raise ValueError("The output name must not be empty.")

        output_file = self.environ.get(GITHUB_OUTPUT)
        if output_file:
            with open(Path(output_file), "a") as f:
                f.write(f"{name}={value}\n")
            logger.debug("Wrote output %s=%s to %s", name, value, output_file)
            return

        self.write_line(f"::set-output name={name}::{value}")
