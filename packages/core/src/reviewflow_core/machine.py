"""Review-approval state machine.

A pull request moves through three labels:

    (no label) --opened--> "needs lgtm" --/lgtm--> "needs approve" --/approve--> "ready for merge"

Labels are the only state. Nothing is remembered between invocations: every
decision is recomputed from the platform's current labels and the ownership
file at the pull request's base ref, never its head ref.
"""

from __future__ import annotations

import enum
import logging

from reviewflow_core.gh.client import Comment, PlatformClient, ReviewRequest
from reviewflow_core.ownership import OwnershipConfig, parse_config
from reviewflow_core.resolver import resolve_owners

logger = logging.getLogger(__name__)

LABEL_NEEDS_LGTM = "needs lgtm"
LABEL_NEEDS_APPROVE = "needs approve"
LABEL_READY = "ready for merge"

LGTM_COMMAND = "/lgtm"
APPROVE_COMMAND = "/approve"


class State(enum.Enum):
    OPEN = "open"
    NEEDS_LGTM = "needs_lgtm"
    NEEDS_APPROVE = "needs_approve"
    CONFLICTED = "conflicted"  # both pending labels present


class Transition(enum.Enum):
    NONE = "none"
    REVIEW_REQUESTED = "review_requested"
    APPROVAL_REQUESTED = "approval_requested"
    READY_FOR_MERGE = "ready_for_merge"


def current_state(labels) -> State:
    """Read the machine's state from a pull request's label names."""
    needs_lgtm = LABEL_NEEDS_LGTM in labels
    needs_approve = LABEL_NEEDS_APPROVE in labels
    if needs_lgtm and needs_approve:
        return State.CONFLICTED
    if needs_lgtm:
        return State.NEEDS_LGTM
    if needs_approve:
        return State.NEEDS_APPROVE
    return State.OPEN


def mention_list(names: list[str]) -> str:
    return " ".join(f"@{name}" for name in names)


class ReviewStateMachine:
    """Turns pull request and comment events into platform-client calls.

    Calls within a transition are strictly ordered: announcing comment, then
    the new label, then removal of the old label.
    """

    def __init__(self, client: PlatformClient, config_path: str):
        self.client = client
        self.config_path = config_path

    # ------------------------------------------------------------------ #
    # Helpers                                                              #
    # ------------------------------------------------------------------ #

    def load_config(self, ref: str) -> OwnershipConfig:
        return parse_config(self.client.get_file_content(ref, self.config_path))

    def _resolve(self, request: ReviewRequest) -> tuple[list[str], list[str]]:
        config = self.load_config(request.base_ref)
        changed_files = self.client.list_changed_files(request.base_ref, request.head_ref)
        logger.debug("PR #%d changes %d file(s)", request.number, len(changed_files))
        return resolve_owners(config, changed_files)

    # ------------------------------------------------------------------ #
    # Entry points                                                         #
    # ------------------------------------------------------------------ #

    def handle_review_request(self, request: ReviewRequest) -> Transition:
        """Request reviews on a pull request that has not entered the flow yet."""
        if LABEL_NEEDS_LGTM in request.labels or LABEL_NEEDS_APPROVE in request.labels:
            logger.debug("PR #%d already carries a review label; nothing to do", request.number)
            return Transition.NONE

        reviewers, _ = self._resolve(request)
        logger.info("Requesting review on PR #%d from %s", request.number, reviewers)

        self.client.create_comment(request.number, f"Requesting review from: {mention_list(reviewers)}")
        self.client.add_labels(request.number, [LABEL_NEEDS_LGTM])
        return Transition.REVIEW_REQUESTED

    def handle_comment(self, number: int, comment: Comment) -> Transition:
        """Apply a /lgtm or /approve command left on pull request number."""
        request = self.client.get_review_request(number)
        state = current_state(request.labels)

        if state is State.NEEDS_LGTM:
            return self._handle_lgtm(request, comment)
        if state is State.NEEDS_APPROVE:
            return self._handle_approve(request, comment)

        logger.debug("PR #%d is in state %s; ignoring comment", number, state.value)
        return Transition.NONE

    def _handle_lgtm(self, request: ReviewRequest, comment: Comment) -> Transition:
        if LGTM_COMMAND not in comment.body:
            return Transition.NONE

        reviewers, approvers = self._resolve(request)
        if comment.author_login not in reviewers:
            logger.debug("/lgtm from non-reviewer %s on PR #%d", comment.author_login, request.number)
            return Transition.NONE

        logger.info(
            "%s gave /lgtm on PR #%d; requesting approval from %s", comment.author_login, request.number, approvers
        )
        self.client.create_comment(request.number, f"Requesting approval from: {mention_list(approvers)}")
        self.client.add_labels(request.number, [LABEL_NEEDS_APPROVE])
        self.client.remove_label(request.number, LABEL_NEEDS_LGTM)
        return Transition.APPROVAL_REQUESTED

    def _handle_approve(self, request: ReviewRequest, comment: Comment) -> Transition:
        if APPROVE_COMMAND not in comment.body:
            return Transition.NONE

        _, approvers = self._resolve(request)
        if comment.author_login not in approvers:
            logger.debug("/approve from non-approver %s on PR #%d", comment.author_login, request.number)
            return Transition.NONE

        logger.info("%s approved PR #%d", comment.author_login, request.number)
        self.client.add_labels(request.number, [LABEL_READY])
        self.client.remove_label(request.number, LABEL_NEEDS_APPROVE)
        return Transition.READY_FOR_MERGE
