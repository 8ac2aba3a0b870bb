"""Classify inbound webhook events and route them to the state machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from reviewflow_core.errors import ReviewflowError
from reviewflow_core.gh.client import Comment, ReviewRequest
from reviewflow_core.machine import ReviewStateMachine, Transition

logger = logging.getLogger(__name__)

PULL_REQUEST_EVENTS = ("pull_request", "pull_request_target")
ISSUE_COMMENT_EVENT = "issue_comment"


@dataclass(frozen=True)
class ReviewRequestEvent:
    """A pull request was opened, edited or synchronized."""

    request: ReviewRequest


@dataclass(frozen=True)
class CommentEvent:
    """A comment was posted on an issue or pull request conversation."""

    number: int
    comment: Comment
    on_review_request: bool


@dataclass(frozen=True)
class IgnoredEvent:
    """Any event kind reviewflow does not act on."""

    kind: str


Event = ReviewRequestEvent | CommentEvent | IgnoredEvent


def _field(payload: dict, *path: str):
    value = payload
    for key in path:
        if not isinstance(value, dict) or key not in value:
            raise ReviewflowError(f"Event payload is missing '{'.'.join(path)}'")
        value = value[key]
    return value


def _parse_review_request(payload: dict) -> ReviewRequest:
    pull = _field(payload, "pull_request")
    return ReviewRequest(
        owner=_field(payload, "repository", "owner", "login"),
        repo=_field(payload, "repository", "name"),
        number=_field(pull, "number"),
        base_ref=_field(pull, "base", "sha"),
        head_ref=_field(pull, "head", "sha"),
        labels=frozenset(_field(label, "name") for label in pull.get("labels") or []),
        author_login=_field(pull, "user", "login"),
    )


def _parse_comment(payload: dict) -> CommentEvent:
    issue = _field(payload, "issue")
    return CommentEvent(
        number=_field(issue, "number"),
        comment=Comment(
            body=_field(payload, "comment", "body") or "",
            author_login=_field(payload, "comment", "user", "login"),
        ),
        # Plain issues carry no "pull_request" key at all.
        on_review_request=bool(issue.get("pull_request")),
    )


def parse_event(kind: str, payload: dict) -> Event:
    """Turn a GitHub event name and its JSON payload into an Event."""
    if kind in PULL_REQUEST_EVENTS:
        return ReviewRequestEvent(_parse_review_request(payload))
    if kind == ISSUE_COMMENT_EVENT:
        return _parse_comment(payload)
    return IgnoredEvent(kind)


class Dispatcher:
    def __init__(self, machine: ReviewStateMachine):
        self.machine = machine

    def dispatch(self, kind: str, payload: dict) -> Transition:
        logger.debug("Handling %s", kind)
        event = parse_event(kind, payload)

        if isinstance(event, ReviewRequestEvent):
            return self.machine.handle_review_request(event.request)

        if isinstance(event, CommentEvent):
            if not event.on_review_request:
                logger.debug("Comment on issue #%d is not on a pull request; ignoring", event.number)
                return Transition.NONE
            return self.machine.handle_comment(event.number, event.comment)

        logger.debug("Ignoring unsupported event kind %r", event.kind)
        return Transition.NONE
