"""Shared fixtures: an in-memory PlatformClient that records every call."""

from __future__ import annotations

import pytest

from reviewflow_core.errors import NotFoundError
from reviewflow_core.gh.client import PlatformClient, ReviewRequest

CONFIG_PATH = ".github/reviewflow.yml"
BASE = "b" * 40
HEAD = "h" * 40

MUTATING_CALLS = ("create_comment", "add_labels", "remove_label")


class RecordingClient(PlatformClient):
    def __init__(self, files=None, changed_files=None, requests=None):
        self.files = dict(files or {})  # (ref, path) -> bytes
        self.changed_files = list(changed_files or [])
        self.requests = dict(requests or {})  # number -> ReviewRequest
        self.calls: list[tuple] = []

    def get_file_content(self, ref, path):
        self.calls.append(("get_file_content", ref, path))
        if (ref, path) not in self.files:
            raise NotFoundError(path, ref)
        return self.files[(ref, path)]

    def list_changed_files(self, base_ref, head_ref):
        self.calls.append(("list_changed_files", base_ref, head_ref))
        return list(self.changed_files)

    def create_comment(self, number, body):
        self.calls.append(("create_comment", number, body))

    def add_labels(self, number, labels):
        self.calls.append(("add_labels", number, list(labels)))

    def remove_label(self, number, label):
        self.calls.append(("remove_label", number, label))

    def get_review_request(self, number):
        self.calls.append(("get_review_request", number))
        return self.requests[number]

    @property
    def mutations(self) -> list[tuple]:
        return [c for c in self.calls if c[0] in MUTATING_CALLS]


def make_request(number=7, labels=(), author="erin", base=BASE, head=HEAD) -> ReviewRequest:
    return ReviewRequest(
        owner="acme",
        repo="widgets",
        number=number,
        base_ref=base,
        head_ref=head,
        labels=frozenset(labels),
        author_login=author,
    )


@pytest.fixture
def owners_yaml() -> bytes:
    return (
        b"components:\n"
        b"  docs:\n"
        b"    reviewers: [alice]\n"
        b"    approvers: [bob]\n"
        b"  src/api:\n"
        b"    reviewers: [carol, alice]\n"
        b"    approvers: [dave]\n"
    )


@pytest.fixture
def make_client(owners_yaml):
    """Build a RecordingClient holding the ownership file at the base ref."""

    def _make(changed_files=("docs/readme.md",), request=None, config=None):
        requests = {request.number: request} if request is not None else {}
        return RecordingClient(
            files={(BASE, CONFIG_PATH): owners_yaml if config is None else config},
            changed_files=changed_files,
            requests=requests,
        )

    return _make
