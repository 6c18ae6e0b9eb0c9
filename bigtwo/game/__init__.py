"""Game engine and state management."""

from bigtwo.game.events import GameEvent, EventType
from bigtwo.game.state import RunState
from bigtwo.game.engine import (
    ActionResult,
    GameSession,
    PlayResult,
    Rejection,
    SessionSnapshot,
)

__all__ = [
    "GameEvent",
    "EventType",
    "RunState",
    "ActionResult",
    "GameSession",
    "PlayResult",
    "Rejection",
    "SessionSnapshot",
]
