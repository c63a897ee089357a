"""Outbound messages and the dispatcher that delivers them."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union

from core.game.view import PlayerView, TableView


@dataclass(frozen=True)
class Joined:
    """Sent once to a joining session with its own unredacted seat."""

    player: PlayerView


@dataclass(frozen=True)
class ErrorNotice:
    """Sent to one session whose intent was rejected."""

    kind: str
    text: str


@dataclass(frozen=True)
class StateUpdate:
    view: TableView


Message = Union[Joined, ErrorNotice, StateUpdate]


class Dispatcher(ABC):
    """Delivers messages to sessions; implemented by the transport layer."""

    @abstractmethod
    def send(self, session_id: str, message: Message) -> None:
        """Deliver a message to one session."""
        ...

    @abstractmethod
    def broadcast(self, message: Message) -> None:
        """Deliver a message to every connected session."""
        ...


class MessageLog(Dispatcher):
    """
    Dispatcher that records deliveries instead of sending them.

    Used when the table runs without a transport, and in tests. Each entry is
    ``(session_id, message)``; broadcasts are recorded with a None session.
    """

    def __init__(self) -> None:
        self.entries: list[tuple[str | None, Message]] = []

    def send(self, session_id: str, message: Message) -> None:
        self.entries.append((session_id, message))

    def broadcast(self, message: Message) -> None:
        self.entries.append((None, message))

    def to(self, session_id: str | None) -> list[Message]:
        """Return messages addressed to one session (None for broadcasts)."""
        return [m for sid, m in self.entries if sid == session_id]

    def last_state(self, session_id: str | None = None) -> TableView | None:
        """Return the latest projection sent to a session, or broadcast."""
        for sid, message in reversed(self.entries):
            if sid == session_id and isinstance(message, StateUpdate):
                return message.view
        return None

    def clear(self) -> None:
        self.entries.clear()
