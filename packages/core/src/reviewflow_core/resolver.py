"""Map changed file paths to the reviewers and approvers who own them."""

from __future__ import annotations

import logging
from typing import Iterable

from reviewflow_core.ownership import OwnershipConfig

logger = logging.getLogger(__name__)


def component_matches(component: str, path: str) -> bool:
    """Return True if path is the component itself or nested under it.

    Components are plain path prefixes, compared on whole segments:
    "foo/bar" matches "foo/bar" and "foo/bar/baz.ts" but not "foo/barbaz".
    """
    prefix = component.rstrip("/")
    return path == prefix or path.startswith(prefix + "/")


def _extend_unique(acc: list[str], names: Iterable[str]) -> None:
    for name in names:
        if name not in acc:
            acc.append(name)


def resolve_owners(config: OwnershipConfig, changed_files: Iterable[str]) -> tuple[list[str], list[str]]:
    """Return (reviewers, approvers) for the components touched by changed_files.

    Components are visited in config order. Both lists are deduplicated and
    keep first-seen order. No changed files or no matching component yields
    two empty lists.
    """
    files = list(changed_files)
    reviewers: list[str] = []
    approvers: list[str] = []

    for component, owners in config.components.items():
        if not any(component_matches(component, f) for f in files):
            continue
        logger.debug("Component %r matches the change", component)
        _extend_unique(reviewers, owners.reviewers)
        _extend_unique(approvers, owners.approvers)

    return reviewers, approvers
