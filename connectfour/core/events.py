"""
Event definitions for the Connect Four engine.

Events let the view layer follow the game without the engine knowing
who renders it. The engine publishes; subscribers re-render.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class EventType(Enum):
    """Types of events in the system."""

    GAME_STARTED = auto()
    TURN_CHANGED = auto()
    MOVE_MADE = auto()  # A piece was placed
    INVALID_MOVE = auto()  # A move was rejected, state unchanged
    GAME_WON = auto()
    GAME_DRAW = auto()
    GAME_RESET = auto()


@dataclass
class Event:
    """
    Base event structure.

    Attributes:
        type: The type of event
        data: Event-specific payload
        timestamp: When the event was created
        source: Which module created the event
    """

    type: EventType
    data: Any = None
    timestamp: float = field(default_factory=time.time)
    source: str = "unknown"

    def __str__(self) -> str:
        return f"[{self.source}] {self.type.name}: {self.data}"
