"""Pydantic schemas for the table's wire protocol."""

from dataclasses import asdict
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from core.game.errors import IllegalIntent, InvalidWager
from core.game.intents import (
    AllIn,
    Hit,
    Intent,
    IntentKind,
    Join,
    NewRound,
    Ready,
    SetBankroll,
    SetBet,
    Stand,
)
from core.game.messages import ErrorNotice, Joined, Message, StateUpdate
from core.game.view import TableView


# Inbound intents
class JoinRequest(BaseModel):
    """
    Request to take a seat.

    Numeric names are kept as text. Bankroll and bet are clamped by the table.
    """

    type: Literal["join"]
    name: str | int | float | None = None
    bankroll: int | float | str | None = None
    bet: int | float | str | None = None

    def to_intent(self) -> Join:
        name = None if self.name is None else str(self.name)
        return Join(name=name, bankroll=self.bankroll, bet=self.bet)


class ReadyRequest(BaseModel):
    type: Literal["ready"]

    def to_intent(self) -> Ready:
        return Ready()


class SetBetRequest(BaseModel):
    """Request to change the bet; the value must be a JSON integer."""

    type: Literal["setBet"]
    value: StrictInt

    def to_intent(self) -> SetBet:
        return SetBet(value=self.value)


class SetBankrollRequest(BaseModel):
    """Request to change the bankroll; the value must be a JSON integer."""

    type: Literal["setBankroll"]
    value: StrictInt

    def to_intent(self) -> SetBankroll:
        return SetBankroll(value=self.value)


class AllInRequest(BaseModel):
    type: Literal["allIn"]

    def to_intent(self) -> AllIn:
        return AllIn()


class HitRequest(BaseModel):
    type: Literal["hit"]

    def to_intent(self) -> Hit:
        return Hit()


class StandRequest(BaseModel):
    type: Literal["stand"]

    def to_intent(self) -> Stand:
        return Stand()


class NewRoundRequest(BaseModel):
    type: Literal["newRound"]

    def to_intent(self) -> NewRound:
        return NewRound()


IntentRequest = Annotated[
    Union[
        JoinRequest,
        ReadyRequest,
        SetBetRequest,
        SetBankrollRequest,
        AllInRequest,
        HitRequest,
        StandRequest,
        NewRoundRequest,
    ],
    Field(discriminator="type"),
]

_intent_adapter: TypeAdapter[Any] = TypeAdapter(IntentRequest)

# Malformed payloads of these types are wager errors rather than illegal intents
WAGER_TYPES = frozenset({IntentKind.SET_BET.value, IntentKind.SET_BANKROLL.value})


def parse_intent(payload: Any) -> Intent:
    """
    Validate a decoded client message into a table intent.

    Raises:
        InvalidWager: A bet or bankroll message without a whole-number value
        IllegalIntent: Any other malformed or unknown message
    """
    try:
        request = _intent_adapter.validate_python(payload)
    except ValidationError as exc:
        msg_type = payload.get("type") if isinstance(payload, dict) else None
        if isinstance(msg_type, str) and msg_type in WAGER_TYPES:
            raise InvalidWager("Invalid amount. Enter a positive whole number.") from exc
        raise IllegalIntent(f"Unrecognised message: {msg_type!r}") from exc
    return request.to_intent()


# Outbound projections
class CamelModel(BaseModel):
    """Serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CardResponse(CamelModel):
    """Card representation; hidden cards carry a sentinel rank."""

    rank: str
    suit: str
    value: int
    hidden: bool = False


class PlayerResponse(CamelModel):
    """Seat representation."""

    id: str
    name: str
    bet: int
    bankroll: int
    hand: list[CardResponse]
    done: bool
    busted: bool
    blackjack: bool
    standing: bool
    ready: bool
    outcome: str | None


class DealerResponse(CamelModel):
    hand: list[CardResponse]


class TableStateResponse(CamelModel):
    """Projection of the table for one observer."""

    phase: str
    round: int
    shoe_remaining_count: int
    dealer: DealerResponse
    dealer_total: int | None
    dealer_bust: bool | None
    players: list[PlayerResponse]

    @classmethod
    def from_view(cls, view: TableView) -> "TableStateResponse":
        return cls.model_validate(asdict(view))


class JoinedMessage(CamelModel):
    type: Literal["joined"] = "joined"
    player: PlayerResponse


class ErrorMessage(CamelModel):
    type: Literal["errorMessage"] = "errorMessage"
    kind: str
    text: str


class StateMessage(CamelModel):
    type: Literal["state"] = "state"
    state: TableStateResponse


def message_to_dict(message: Message) -> dict[str, Any]:
    """Convert an outbound table message to its JSON-ready form."""
    model: CamelModel
    if isinstance(message, Joined):
        model = JoinedMessage(player=PlayerResponse.model_validate(asdict(message.player)))
    elif isinstance(message, ErrorNotice):
        model = ErrorMessage(kind=message.kind, text=message.text)
    elif isinstance(message, StateUpdate):
        model = StateMessage(state=TableStateResponse.from_view(message.view))
    else:
        raise TypeError(f"Unknown message: {message!r}")
    return model.model_dump(by_alias=True)
