"""owners command — preview ownership resolution against a local file."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

console = Console()


@click.command("owners")
@click.option(
    "--config-file",
    default=".github/reviewflow.yml",
    show_default=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Local ownership file to resolve against.",
)
@click.argument("paths", nargs=-1, required=True)
def owners_cmd(config_file: str, paths: tuple[str, ...]):
    """Show the reviewers and approvers responsible for PATHS.

    Read-only: parses the local ownership file and makes no GitHub calls.
    """
    from reviewflow_core.errors import ConfigInvalidError
    from reviewflow_core.ownership import parse_config
    from reviewflow_core.resolver import component_matches, resolve_owners

    try:
        config = parse_config(Path(config_file).read_bytes())
    except ConfigInvalidError as e:
        raise click.ClickException(f"{config_file}: {e}")

    matched = [name for name in config.components if any(component_matches(name, p) for p in paths)]
    if not matched:
        console.print("[yellow]No component matches the given paths.[/yellow]")
        return

    table = Table(title=f"Owners — {config_file}", show_header=True, header_style="bold cyan")
    table.add_column("Component", style="bold")
    table.add_column("Reviewers")
    table.add_column("Approvers")
    for name in matched:
        owners = config.components[name]
        table.add_row(name, ", ".join(owners.reviewers) or "—", ", ".join(owners.approvers) or "—")
    console.print(table)

    reviewers, approvers = resolve_owners(config, paths)
    console.print(f"Reviewers: {', '.join(reviewers) or '(none)'}")
    console.print(f"Approvers: {', '.join(approvers) or '(none)'}")
