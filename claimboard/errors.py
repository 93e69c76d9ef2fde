"""
Exception hierarchy for Claimboard.

User-facing failures (ValidationError, NotFoundError) leave state untouched
and are reported back to the caller. LedgerInvariantError marks a broken
internal contract and is never turned into a notification.
"""


class LeaderboardError(Exception):
    """Base exception for leaderboard errors"""

    default_title = "Error"

    def __init__(self, message: str, title: str | None = None):
        super().__init__(message)
        self.message = message
        self.title = title or self.default_title


class ValidationError(LeaderboardError, ValueError):
    """User input failed a precondition (blank name, no selection)"""

    default_title = "Invalid input"


class NotFoundError(LeaderboardError, LookupError):
    """Referenced participant does not exist in the registry"""

    default_title = "User not found"

    def __init__(self, participant_id, message: str | None = None):
        super().__init__(message or f"No participant with id '{participant_id}'.")
        self.participant_id = participant_id


class LedgerInvariantError(LeaderboardError, AssertionError):
    """A claim reached the ledger with a non-positive reward amount"""

    default_title = "Internal error"
