"""Core infrastructure for the Connect Four engine."""

from .bus import EventBus
from .config import (
    AISettings,
    GameSettings,
    LogLevel,
    PlayerSettings,
    Settings,
    get_settings,
    reset_settings,
)
from .events import Event, EventType
from .types import (
    GamePhase,
    GameState,
    Move,
    MoveRejection,
    MoveResult,
    Player,
    PlayerKind,
    Position,
)


__all__ = [
    # Config
    "get_settings",
    "reset_settings",
    "Settings",
    "GameSettings",
    "PlayerSettings",
    "AISettings",
    "LogLevel",
    # Types
    "Player",
    "PlayerKind",
    "GamePhase",
    "MoveRejection",
    "Position",
    "Move",
    "GameState",
    "MoveResult",
    # Events
    "Event",
    "EventType",
    "EventBus",
]
