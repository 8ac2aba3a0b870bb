import json
import os
from pathlib import Path
from typing import Optional

from reviewflow_core.errors import NotFoundError, ReviewflowError

DEFAULT_SETTINGS: dict = {
    "config_file": ".github/reviewflow.yml",  # ownership file path inside the target repository
    "repository": None,  # "owner/name"
    "event_name": None,
    "event_path": None,
}

# GitHub Actions exposes `with:` inputs as INPUT_<NAME> with the name upper-cased.
_ENV_SETTINGS = {
    "config_file": "INPUT_CONFIG-FILE",
    "repository": "GITHUB_REPOSITORY",
    "event_name": "GITHUB_EVENT_NAME",
    "event_path": "GITHUB_EVENT_PATH",
}


def load_settings(cli_overrides: Optional[dict] = None) -> dict:
    """
    Load run settings by merging (in order of precedence):
      1. Built-in defaults
      2. GitHub Actions environment variables
      3. CLI argument overrides
    """
    settings = dict(DEFAULT_SETTINGS)

    for key, env_var in _ENV_SETTINGS.items():
        value = os.environ.get(env_var)
        if value:
            settings[key] = value

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                settings[key] = value

    return settings


def load_event(event_path: str) -> dict:
    """Read the JSON webhook payload GitHub Actions writes for the triggering event."""
    path = Path(event_path)
    if not path.exists():
        raise NotFoundError(event_path)
    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ReviewflowError(f"Event payload {event_path} is not valid JSON: {e}") from e
