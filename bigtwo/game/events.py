"""Game events for the event system."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of game events."""

    # Run flow events
    GAME_STARTED = auto()
    GAME_RESTARTED = auto()
    LEVEL_CLEARED = auto()
    LEVEL_STARTED = auto()
    RUN_COMPLETED = auto()
    RUN_FAILED = auto()

    # Card events
    CARDS_DRAWN = auto()
    DRAW_BOOST_USED = auto()
    REDRAW_USED = auto()

    # Player action events
    HAND_PLAYED = auto()
    PLAYER_PASSED = auto()
    CHAIN_EXTENDED = auto()

    # Shop and magic events
    SHOP_OPENED = auto()
    ITEM_PURCHASED = auto()
    SHOP_CLOSED = auto()
    MAGIC_CHOSEN = auto()

    # Error events
    INVALID_ACTION = auto()
    INSUFFICIENT_FUNDS = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable game event.

    Events are the primary communication mechanism between the core engine
    and the presentation layer. `message` is the narrative line shown in the
    on-screen log.
    """

    event_type: EventType
    message: str = ""
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.message or self.data}"


# Type alias for event handlers
EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Simple event emitter for game events.

    Allows subscribing to specific event types or all events, and keeps the
    last few narrative messages for display. Only the newest `history_size`
    events are kept.
    """

    def __init__(self, log_size: int = 8, history_size: int = 256) -> None:
        """Initialize the event emitter."""
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: deque[GameEvent] = deque(maxlen=history_size)
        self._recent: deque[str] = deque(maxlen=log_size)

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
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Unsubscribe from events.

        Args:
            handler: Handler to remove
            event_type: Event type to unsubscribe from
        """
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
            except ValueError:
                pass

    def emit(self, event: GameEvent) -> None:
        """
        Emit an event to all subscribers.

        Args:
            event: The event to emit
        """
        self._event_history.append(event)
        if event.message:
            self._recent.append(event.message)

        # Call type-specific handlers
        if event.event_type in self._handlers:
            for handler in self._handlers[event.event_type]:
                handler(event)

        # Call catch-all handlers
        if None in self._handlers:
            for handler in self._handlers[None]:
                handler(event)

    def emit_new(
        self,
        event_type: EventType,
        message: str = "",
        **data: Any,
    ) -> GameEvent:
        """
        Create and emit a new event.

        Args:
            event_type: Type of event
            message: Narrative line for the recent log
            **data: Event data

        Returns:
            The created event
        """
        event = GameEvent(event_type=event_type, message=message, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Return the event history."""
        return list(self._event_history)

    @property
    def recent_log(self) -> list[str]:
        """Return the most recent narrative messages, oldest first."""
        return list(self._recent)

    def clear_history(self) -> None:
        """Clear the event history and the recent log."""
        self._event_history.clear()
        self._recent.clear()
