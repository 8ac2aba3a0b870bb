"""Exceptions raised by reviewflow.

A `/lgtm` or `/approve` from someone outside the resolved owner set is a
silent no-op and has no exception.
"""

from __future__ import annotations


class ReviewflowError(Exception):
    """Base exception for all reviewflow errors."""


class ConfigInvalidError(ReviewflowError):
    """Raised when the ownership file is malformed or violates the schema."""

    def __init__(self, message: str, location: str | None = None) -> None:
        self.location = location
        super().__init__(f"{location}: {message}" if location else message)


class NotFoundError(ReviewflowError):
    """Raised when a file or reference does not exist on the platform."""

    def __init__(self, path: str, ref: str | None = None) -> None:
        self.path = path
        self.ref = ref
        super().__init__(f"{path} not found at {ref}" if ref else f"{path} not found")
