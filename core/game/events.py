"""Table events for the event system."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of table events."""

    # Seating events
    PLAYER_JOINED = auto()
    PLAYER_LEFT = auto()
    PLAYER_READY = auto()
    WAGER_CHANGED = auto()
    TABLE_RESET = auto()

    # Round flow events
    ROUND_STARTED = auto()
    ROUND_SETTLED = auto()
    ROUND_RESET = auto()

    # Card events
    CARD_DEALT = auto()

    # Player action events
    PLAYER_BLACKJACK = auto()
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_BUSTS = auto()

    # Dealer events
    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    # Outcome events
    PLAYER_SETTLED = auto()

    # Error events
    INTENT_REJECTED = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable table event.

    Events describe what happened at the table. They are kept in a history
    and handed to subscribers; they never carry the face of a hidden card.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


# Type alias for event handlers
EventHandler = Callable[[GameEvent], None]

# Older events are dropped once the history holds this many
DEFAULT_HISTORY_LIMIT = 1000


class EventEmitter:
    """Publishes table events to subscribers, per type or for everything."""

    def __init__(self, history_limit: int | None = DEFAULT_HISTORY_LIMIT) -> None:
        """
        Initialize the emitter.

        Args:
            history_limit: Most recent events to keep, or None to keep all
        """
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: deque[GameEvent] = deque(maxlen=history_limit)

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Remove a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        """Record an event and call its type-specific, then catch-all, handlers."""
        self._event_history.append(event)

        for handler in self._handlers.get(event.event_type, []):
            handler(event)
        for handler in self._handlers.get(None, []):
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Create and emit a new event, returning it."""
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    def of_type(self, event_type: EventType) -> list[GameEvent]:
        """Return recorded events of one type, oldest first."""
        return [e for e in self._event_history if e.event_type is event_type]

    @property
    def history(self) -> list[GameEvent]:
        """Return the event history."""
        return list(self._event_history)

    def clear_history(self) -> None:
        """Clear the event history."""
        self._event_history.clear()
