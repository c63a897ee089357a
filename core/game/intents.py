"""Player intents accepted by the table.

Every intent is a small frozen dataclass tagged with an ``IntentKind``. The
transport layer builds them from validated payloads; the engine dispatches on
``kind``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union


class IntentKind(Enum):
    """Kinds of inbound intent, named as they appear on the wire."""

    JOIN = "join"
    READY = "ready"
    SET_BET = "setBet"
    SET_BANKROLL = "setBankroll"
    ALL_IN = "allIn"
    HIT = "hit"
    STAND = "stand"
    NEW_ROUND = "newRound"
    LEAVE = "leave"


@dataclass(frozen=True)
class Join:
    # Raw values; the registry clamps them
    name: str | None = None
    bankroll: int | float | str | None = None
    bet: int | float | str | None = None

    kind: ClassVar[IntentKind] = IntentKind.JOIN


@dataclass(frozen=True)
class Ready:
    kind: ClassVar[IntentKind] = IntentKind.READY


@dataclass(frozen=True)
class SetBet:
    value: int

    kind: ClassVar[IntentKind] = IntentKind.SET_BET


@dataclass(frozen=True)
class SetBankroll:
    value: int

    kind: ClassVar[IntentKind] = IntentKind.SET_BANKROLL


@dataclass(frozen=True)
class AllIn:
    kind: ClassVar[IntentKind] = IntentKind.ALL_IN


@dataclass(frozen=True)
class Hit:
    kind: ClassVar[IntentKind] = IntentKind.HIT


@dataclass(frozen=True)
class Stand:
    kind: ClassVar[IntentKind] = IntentKind.STAND


@dataclass(frozen=True)
class NewRound:
    kind: ClassVar[IntentKind] = IntentKind.NEW_ROUND


@dataclass(frozen=True)
class Leave:
    """The session disconnected."""

    kind: ClassVar[IntentKind] = IntentKind.LEAVE


Intent = Union[Join, Ready, SetBet, SetBankroll, AllIn, Hit, Stand, NewRound, Leave]
