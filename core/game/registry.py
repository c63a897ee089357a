"""Seating: who sits at the table, and on what terms."""

import math
from typing import Any

from loguru import logger

from config import TableConfig
from core.game.errors import IllegalIntent, RoundInProgress, TableFull
from core.game.state import TablePhase
from core.game.table import Player, Table


def clamp_int(value: Any, low: int, high: int) -> int | None:
    """
    Floor a numeric value and clamp it into ``[low, high]``.

    Returns None for anything that is not a finite number (booleans included).
    Numeric strings are accepted.
    """
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return min(max(math.floor(number), low), high)


class SessionRegistry:
    """Maps session ids to seated players and enforces the occupancy policy."""

    def __init__(self, table: Table, rules: TableConfig) -> None:
        self._table = table
        self._rules = rules

    @property
    def is_full(self) -> bool:
        return self._table.seated >= self._rules.capacity

    def find(self, session_id: str) -> Player | None:
        return self._table.find_player(session_id)

    def require(self, session_id: str) -> Player:
        """Return the session's player or raise IllegalIntent if it has no seat."""
        player = self.find(session_id)
        if player is None:
            raise IllegalIntent("You are not seated at the table.")
        return player

    def join(
        self,
        session_id: str,
        name: str | None = None,
        bankroll: Any = None,
        bet: Any = None,
    ) -> Player:
        """
        Seat a new player.

        Args:
            session_id: Session that will own the seat
            name: Display name; blank names get a seat-numbered default
            bankroll: Requested bankroll, clamped to [1, max_bankroll]
            bet: Requested bet, clamped to [1, bankroll]

        Returns:
            The seated player

        Raises:
            IllegalIntent: The session already has a seat
            TableFull: Every seat is taken
            RoundInProgress: The table is not waiting for players
        """
        rules = self._rules
        if self.find(session_id) is not None:
            raise IllegalIntent("You are already seated at the table.")
        if self.is_full:
            raise TableFull(f"Table is full (max {rules.capacity} players).")
        if self._table.phase is not TablePhase.WAITING:
            raise RoundInProgress("Please wait for the current round to finish.")

        requested_roll = rules.default_bankroll if bankroll is None else bankroll
        seat_roll = clamp_int(requested_roll, 1, rules.max_bankroll)
        if seat_roll is None:
            seat_roll = rules.default_bankroll

        requested_bet = rules.default_bet if bet is None else bet
        seat_bet = clamp_int(requested_bet, 1, seat_roll)
        if seat_bet is None:
            seat_bet = min(rules.default_bet, seat_roll)

        display_name = ("" if name is None else str(name)).strip() or f"Player-{self._table.seated + 1}"

        player = Player(id=session_id, name=display_name, bet=seat_bet, bankroll=seat_roll)
        self._table.players.append(player)
        logger.info(
            "{} joined as {!r} (bankroll={}, bet={})",
            session_id, display_name, seat_roll, seat_bet,
        )
        return player

    def leave(self, session_id: str) -> Player | None:
        """
        Remove a player; their cards are abandoned where they lie.

        Resets the whole table when the last player leaves.

        Returns:
            The removed player, or None if the session had no seat
        """
        player = self.find(session_id)
        if player is None:
            return None

        self._table.players.remove(player)
        logger.info("{} ({!r}) left the table", session_id, player.name)

        if not self._table.players:
            self._table.reset()
            logger.info("Table empty, reset to initial state")
        return player
