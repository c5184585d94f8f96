"""
Structured error codes for arrangement failures and per-tag issues.
Use these keys in exceptions and reports; map to user-facing messages at the edge.
"""

# Fatal (abort the whole operation)
EMPTY_SELECTION = "empty_selection"
NULL_ORIGIN = "null_origin"
NO_VALID_LABELS = "no_valid_labels"
COMMIT_FAILED = "commit_failed"
USER_CANCELLED = "user_cancelled"
STRICT_ABORT = "strict_abort"
UNEXPECTED_ERROR = "unexpected_error"

# Per-tag (absorbed, batch continues)
ANCHOR_UNRESOLVED = "anchor_unresolved"
LABEL_MISSING = "label_missing"
BBOX_UNAVAILABLE = "bbox_unavailable"
RETRY_EXHAUSTED = "retry_exhausted"
PLACEMENT_FAILED = "placement_failed"
LEADER_FAILED = "leader_failed"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    EMPTY_SELECTION: "No tags selected. Select at least one tag.",
    NULL_ORIGIN: "No start point given. Pick the point where the tags should start.",
    NO_VALID_LABELS: "None of the selected tags could be resolved to a tagged element.",
    COMMIT_FAILED: "Could not apply the new tag positions; nothing was changed.",
    USER_CANCELLED: "Cancelled.",
    STRICT_ABORT: "A tag could not be arranged; all changes were rolled back.",
    UNEXPECTED_ERROR: "Arrangement failed unexpectedly; all changes were rolled back. See the log.",
    ANCHOR_UNRESOLVED: "Tagged element has no usable location.",
    LABEL_MISSING: "Tag not found in the document.",
    BBOX_UNAVAILABLE: "Tag has no bounding box in this view; placed as a point.",
    RETRY_EXHAUSTED: "No free slot found within the shift limit; placed at the last candidate.",
    PLACEMENT_FAILED: "Tag could not be moved.",
    LEADER_FAILED: "Leader could not be reconnected.",
}


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
