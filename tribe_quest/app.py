"""Tribe Quest - Engine Wiring.

Builds a GameEngine from settings for the presentation layer.
"""

from __future__ import annotations

import logging
import random

from tribe_quest.config.settings import Settings, get_settings
from tribe_quest.database.memory import InMemoryGameRepository
from tribe_quest.database.repository import SupabaseGameRepository
from tribe_quest.engine.game import GameEngine
from tribe_quest.engine.ports import GameRepository
from tribe_quest.engine.scheduler import Scheduler

logger = logging.getLogger(__name__)


def create_repository(settings: Settings | None = None) -> GameRepository:
    """Supabase repository when credentials are configured, in-memory otherwise."""
    settings = settings or get_settings()
    if settings.has_supabase:
        from tribe_quest.database.client import get_supabase_client

        return SupabaseGameRepository(get_supabase_client())

    logger.warning("Supabase is not configured; using in-memory storage")
    return InMemoryGameRepository()


def create_engine(
    settings: Settings | None = None,
    *,
    repository: GameRepository | None = None,
    scheduler: Scheduler | None = None,
    rng: random.Random | None = None,
) -> GameEngine:
    """Build a GameEngine with rules and storage taken from settings."""
    settings = settings or get_settings()
    return GameEngine(
        config=settings.engine_config(),
        repository=repository or create_repository(settings),
        scheduler=scheduler,
        rng=rng,
    )
