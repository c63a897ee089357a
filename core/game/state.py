"""Table phase enumeration."""

from enum import Enum


class TablePhase(Enum):
    """
    Table state machine phases.

    Flow: WAITING → DEALING → PLAYERS_ACT → DEALER_TURN → SETTLING → WAITING

    Values are the names observers see in projections.
    """

    # Seating, wagers and ready checks; also the empty-table state
    WAITING = "waiting"

    # Shoe built and cards dealt (transient)
    DEALING = "dealing"

    # Every unlocked player may hit or stand, in any order
    PLAYERS_ACT = "playersAct"

    # Hole card revealed, dealer draws
    DEALER_TURN = "dealerTurn"

    # Showdown: outcomes applied, every hand visible
    SETTLING = "settling"

    def __str__(self) -> str:
        return self.value


# Phases in which the dealer's hole card is visible to everyone
DEALER_VISIBLE_PHASES = frozenset({TablePhase.DEALER_TURN, TablePhase.SETTLING})
