"""Recoverable table errors.

Each error is reported only to the session that caused it; the table is left
exactly as it was.
"""


class TableError(Exception):
    """Base class for rejected intents."""

    kind = "TableError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TableFull(TableError):
    """Join attempted with every seat taken."""

    kind = "TableFull"


class RoundInProgress(TableError):
    """Join attempted while a round is running."""

    kind = "RoundInProgress"


class InvalidWager(TableError):
    """Bet or bankroll outside the allowed range."""

    kind = "InvalidWager"


class IllegalIntent(TableError):
    """Intent not allowed in the current phase or for this session."""

    kind = "IllegalIntent"
