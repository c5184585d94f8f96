"""
Exception hierarchy for tag arrangement. Every error carries an error key
from tagorder.core.error_codes so callers can report it without string matching.
"""

from __future__ import annotations

from tagorder.core import error_codes


class ArrangeError(Exception):
    """Base class for all arrangement errors."""

    error_key: str = error_codes.PLACEMENT_FAILED

    def __init__(self, message: str | None = None, error_key: str | None = None) -> None:
        if error_key is not None:
            self.error_key = error_key
        super().__init__(message or error_codes.user_message(self.error_key))


class ValidationError(ArrangeError):
    """Empty selection or missing origin. Raised before any mutation."""

    error_key = error_codes.EMPTY_SELECTION


class NoValidLabelsError(ArrangeError):
    """No selected tag survived anchor resolution."""

    error_key = error_codes.NO_VALID_LABELS


class CommitError(ArrangeError):
    """The document rejected the transaction commit."""

    error_key = error_codes.COMMIT_FAILED


class UserCancelled(ArrangeError):
    """The user aborted an interactive prompt."""

    error_key = error_codes.USER_CANCELLED


class StrictModeAbort(ArrangeError):
    """A per-tag failure in strict mode; the batch is rolled back."""

    error_key = error_codes.STRICT_ABORT


class AnchorResolutionError(ArrangeError):
    """Per-tag: the tagged element or its location is missing."""

    error_key = error_codes.ANCHOR_UNRESOLVED


class GeometryQueryError(ArrangeError):
    """Per-tag: the document could not produce a bounding box."""

    error_key = error_codes.BBOX_UNAVAILABLE


class PlacementRetryExhausted(ArrangeError):
    """Per-tag: overlap repair ran out of shift attempts."""

    error_key = error_codes.RETRY_EXHAUSTED
