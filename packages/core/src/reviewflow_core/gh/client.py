"""Platform client interface and its GitHub implementation.

The state machine depends on PlatformClient, never on PyGithub directly, so
tests can drive it with a recording fake. One client is bound to a single
repository; every call is keyed by issue/pull request number.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from github import Github, GithubException

from reviewflow_core.errors import NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewRequest:
    """A pull request as seen by the state machine."""

    owner: str
    repo: str
    number: int
    base_ref: str
    head_ref: str
    labels: frozenset[str]
    author_login: str


@dataclass(frozen=True)
class Comment:
    body: str
    author_login: str


class PlatformClient(ABC):
    """Everything reviewflow needs from the hosting platform.

    Calls are blocking. Failures other than NotFoundError propagate as
    whatever the implementation raises.
    """

    @abstractmethod
    def get_file_content(self, ref: str, path: str) -> bytes:
        """Return the raw bytes of path at ref. Raises NotFoundError if absent."""

    @abstractmethod
    def list_changed_files(self, base_ref: str, head_ref: str) -> list[str]:
        """Return the paths changed between base_ref and head_ref."""

    @abstractmethod
    def create_comment(self, number: int, body: str) -> None:
        """Post a comment on the conversation thread of issue/PR number."""

    @abstractmethod
    def add_labels(self, number: int, labels: Iterable[str]) -> None:
        """Attach labels to issue/PR number."""

    @abstractmethod
    def remove_label(self, number: int, label: str) -> None:
        """Detach a single label from issue/PR number."""

    @abstractmethod
    def get_review_request(self, number: int) -> ReviewRequest:
        """Fetch the current state of pull request number."""


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


class GithubClient(PlatformClient):
    """PlatformClient backed by a PyGithub Repository object."""

    def __init__(self, repo_obj):
        self._repo = repo_obj
        self.owner = repo_obj.owner.login
        self.name = repo_obj.name

    @classmethod
    def from_token(cls, repo_name: str, token: str) -> GithubClient:
        return cls(get_repo(repo_name, token))

    def get_file_content(self, ref: str, path: str) -> bytes:
        try:
            contents = self._repo.get_contents(path, ref=ref)
        except GithubException as e:
            if e.status == 404:
                raise NotFoundError(path, ref) from e
            raise
        # get_contents returns a list when path is a directory.
        if isinstance(contents, list):
            raise NotFoundError(path, ref)
        return contents.decoded_content

    def list_changed_files(self, base_ref: str, head_ref: str) -> list[str]:
        comparison = self._repo.compare(base_ref, head_ref)
        return [f.filename for f in comparison.files]

    def create_comment(self, number: int, body: str) -> None:
        self._repo.get_issue(number).create_comment(body)

    def add_labels(self, number: int, labels: Iterable[str]) -> None:
        self._repo.get_issue(number).add_to_labels(*labels)

    def remove_label(self, number: int, label: str) -> None:
        self._repo.get_issue(number).remove_from_labels(label)

    def get_review_request(self, number: int) -> ReviewRequest:
        pr = self._repo.get_pull(number)
        return ReviewRequest(
            owner=self.owner,
            repo=self.name,
            number=pr.number,
            base_ref=pr.base.sha,
            head_ref=pr.head.sha,
            labels=frozenset(label.name for label in pr.labels),
            author_login=pr.user.login,
        )
