"""CLI entry point for reviewflow.

Commands:
  handle  — process the GitHub event that triggered this run
  owners  — show who reviews and approves a set of paths under a local ownership file
"""

from __future__ import annotations

import importlib.metadata
import logging

import click

from reviewflow_cli.commands.handle import handle_cmd
from reviewflow_cli.commands.owners import owners_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("reviewflow"),
    prog_name="reviewflow",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Label-driven /lgtm and /approve workflow for GitHub pull requests."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


main.add_command(handle_cmd)
main.add_command(owners_cmd)
