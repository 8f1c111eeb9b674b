"""
Tribe Quest Game Engine.

Pure Python game logic with zero UI/database dependencies.
Handles hint tiles, letter reveals, team rotation, passing and scoring.
"""

from tribe_quest.engine.base import (
    EngineConfig,
    GameSnapshot,
    LeaderboardEntry,
    RoundPhase,
    RoundState,
    SetupError,
    Team,
    Word,
)
from tribe_quest.engine.events import EventPayload, GameEvent
from tribe_quest.engine.game import GameEngine
from tribe_quest.engine.ports import (
    GameRepository,
    PersistenceError,
    PersistenceReadError,
    PersistenceWriteError,
)
from tribe_quest.engine.rules import QuestRules
from tribe_quest.engine.scheduler import ManualScheduler, ThreadingScheduler
from tribe_quest.engine.writer import StoreWriter

__all__ = [
    # Data Classes
    "EngineConfig",
    "GameSnapshot",
    "LeaderboardEntry",
    "RoundState",
    "Team",
    "Word",
    # Enums
    "GameEvent",
    "RoundPhase",
    # Events
    "EventPayload",
    # Errors
    "PersistenceError",
    "PersistenceReadError",
    "PersistenceWriteError",
    "SetupError",
    # Engines
    "GameEngine",
    "QuestRules",
    # Ports and scheduling
    "GameRepository",
    "ManualScheduler",
    "StoreWriter",
    "ThreadingScheduler",
]
