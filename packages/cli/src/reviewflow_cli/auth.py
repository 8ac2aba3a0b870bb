"""GitHub token resolution.

Sources are tried in order and the first non-empty token wins:
  1. GITHUB_TOKEN environment variable
  2. INPUT_REPO-TOKEN (the action's `repo-token` input)
  3. `gh auth token` (GitHub CLI session, for local runs)
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

_TOKEN_ENV_VARS = ("GITHUB_TOKEN", "INPUT_REPO-TOKEN")
_GH_TIMEOUT_SECONDS = 5


def _gh_cli_token() -> str | None:
    try:
        proc = subprocess.run(["gh", "auth", "token"], capture_output=True, text=True, timeout=_GH_TIMEOUT_SECONDS)
    except FileNotFoundError:
        logger.debug("gh CLI not installed")
        return None
    except subprocess.TimeoutExpired:
        logger.debug("gh auth token timed out after %ds", _GH_TIMEOUT_SECONDS)
        return None

    if proc.returncode != 0:
        logger.debug("gh auth token exited with %d", proc.returncode)
        return None
    return proc.stdout.strip() or None


def resolve_github_token() -> str | None:
    """Return a GitHub token, or None when no source provides one."""
    for env_var in _TOKEN_ENV_VARS:
        if os.environ.get(env_var):
            logger.debug("Using GitHub token from %s", env_var)
            return os.environ[env_var]
    return _gh_cli_token()
