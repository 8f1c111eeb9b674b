"""
Tribe Quest - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import random

import pytest

from tribe_quest.database.memory import DEFAULT_TEAMS, InMemoryGameRepository
from tribe_quest.engine.base import EngineConfig, Team, Word
from tribe_quest.engine.game import GameEngine
from tribe_quest.engine.scheduler import ManualScheduler


# =============================================================================
# TEAMS AND WORDS
# =============================================================================

@pytest.fixture
def teams() -> tuple[Team, ...]:
    """The four default tribes."""
    return DEFAULT_TEAMS


@pytest.fixture
def short_words() -> list[Word]:
    """Three-letter words get no hint tiles: min(4, floor(3 * 0.3)) == 0."""
    return [
        Word(id=1, text="CAT", points=10),
        Word(id=2, text="DOG", points=20),
        Word(id=3, text="SUN", points=30),
    ]


@pytest.fixture
def long_words() -> list[Word]:
    """Words long enough to receive hint tiles."""
    return [
        Word(id=11, text="ELEPHANT", points=15),
        Word(id=12, text="MOUNTAINEERING", points=25),
    ]


# =============================================================================
# ENGINE
# =============================================================================

@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def repository(teams, short_words) -> InMemoryGameRepository:
    return InMemoryGameRepository(teams=teams, words=short_words)


@pytest.fixture
def engine(config, scheduler) -> GameEngine:
    """Engine without persistence on a virtual clock."""
    return GameEngine(config=config, scheduler=scheduler, rng=random.Random(7))


@pytest.fixture
def stored_engine(config, scheduler, repository) -> GameEngine:
    """Engine writing through the in-memory repository."""
    return GameEngine(
        config=config,
        repository=repository,
        scheduler=scheduler,
        rng=random.Random(7),
    )


@pytest.fixture
def events(engine) -> list:
    """Collects every EventPayload the engine publishes."""
    received: list = []
    engine.subscribe(received.append)
    return received
