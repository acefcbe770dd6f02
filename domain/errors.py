"""
Error taxonomy shared by repositories and services.
"""


class ClubError(Exception):
    """Base exception for club ledger errors."""


class ValidationError(ClubError, ValueError):
    """Raised when match, attendance or player edit input is malformed."""

    MISSING_FIELDS = "missing_fields"
    SAME_PLAYER = "same_player"
    WINNER_NOT_PARTICIPANT = "winner_not_participant"
    UNKNOWN_PLAYER = "unknown_player"
    INVALID_STATUS = "invalid_status"
    INVALID_DATE = "invalid_date"
    INVALID_FIELD = "invalid_field"

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


class NotFoundError(ClubError, LookupError):
    """Raised when an update or delete targets an unknown id."""

    def __init__(self, kind: str, entity_id):
        super().__init__(f"{kind.capitalize()} {entity_id} not found.")
        self.kind = kind
        self.entity_id = entity_id


class StoreError(ClubError):
    """Raised when the persistence backend fails.

    In-memory state may already reflect the mutation that was being persisted.
    """


class ConsistencyWarning(UserWarning):
    """A stored match references a player that no longer exists."""
