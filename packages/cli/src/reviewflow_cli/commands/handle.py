"""handle command — run the review state machine for the triggering event."""

from __future__ import annotations

import click
from rich.console import Console

from reviewflow_core.errors import ReviewflowError
from reviewflow_core.machine import Transition

console = Console()

_TRANSITION_MESSAGES = {
    Transition.REVIEW_REQUESTED: "[green]Review requested; labeled 'needs lgtm'.[/green]",
    Transition.APPROVAL_REQUESTED: "[green]LGTM recorded; labeled 'needs approve'.[/green]",
    Transition.READY_FOR_MERGE: "[green]Approved; labeled 'ready for merge'.[/green]",
    Transition.NONE: "[dim]Nothing to do.[/dim]",
}


@click.command("handle")
@click.option("--repo", default=None, help="GitHub repository in owner/name format. Defaults to GITHUB_REPOSITORY.")
@click.option("--event-name", default=None, help="Event kind, e.g. pull_request. Defaults to GITHUB_EVENT_NAME.")
@click.option(
    "--event-path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path to the JSON event payload. Defaults to GITHUB_EVENT_PATH.",
)
@click.option(
    "--config-file",
    default=None,
    help="Ownership file path inside the repository. Defaults to INPUT_CONFIG-FILE or .github/reviewflow.yml.",
)
def handle_cmd(
    repo: str | None,
    event_name: str | None,
    event_path: str | None,
    config_file: str | None,
):
    """Apply the triggering GitHub event to the pull request's review labels.

    Meant to run inside a GitHub Actions workflow listening on pull_request,
    pull_request_target and issue_comment.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub token with issues/pull-requests write access (or use gh CLI)
    """
    from reviewflow_cli.auth import resolve_github_token
    from reviewflow_core.config import load_event, load_settings
    from reviewflow_core.events import Dispatcher
    from reviewflow_core.gh.client import GithubClient
    from reviewflow_core.machine import ReviewStateMachine

    settings = load_settings(
        cli_overrides={
            "repository": repo,
            "event_name": event_name,
            "event_path": event_path,
            "config_file": config_file,
        }
    )

    token = resolve_github_token()
    if not token:
        raise click.UsageError("No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.")
    if not settings["repository"]:
        raise click.UsageError("No repository given. Pass --repo or set GITHUB_REPOSITORY.")
    if not settings["event_name"] or not settings["event_path"]:
        raise click.UsageError("No event given. Pass --event-name and --event-path or run inside GitHub Actions.")

    try:
        payload = load_event(settings["event_path"])
        client = GithubClient.from_token(settings["repository"], token)
        machine = ReviewStateMachine(client, settings["config_file"])
        transition = Dispatcher(machine).dispatch(settings["event_name"], payload)
    except ReviewflowError as e:
        raise click.ClickException(str(e))

    console.print(_TRANSITION_MESSAGES[transition])
