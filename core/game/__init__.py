"""Table state machine, seating, settlement and projections."""

from core.game.events import GameEvent, EventType
from core.game.state import TablePhase
from core.game.errors import (
    TableError,
    TableFull,
    RoundInProgress,
    InvalidWager,
    IllegalIntent,
)
from core.game.table import Player, Dealer, Table
from core.game.settlement import Outcome, Settlement, settle
from core.game.view import TableView, project
from core.game.messages import Dispatcher, MessageLog
from core.game.engine import TableGame

__all__ = [
    "GameEvent",
    "EventType",
    "TablePhase",
    "TableError",
    "TableFull",
    "RoundInProgress",
    "InvalidWager",
    "IllegalIntent",
    "Player",
    "Dealer",
    "Table",
    "Outcome",
    "Settlement",
    "settle",
    "TableView",
    "project",
    "Dispatcher",
    "MessageLog",
    "TableGame",
]
