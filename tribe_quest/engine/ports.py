"""
Tribe Quest - Persistence Port

The storage operations the engine depends on. Implemented by the Supabase
repository and the in-memory repository in tribe_quest.database.
"""

from typing import Protocol, Sequence

from tribe_quest.engine.base import Team, Word


class PersistenceError(Exception):
    """Base class for storage failures."""


class PersistenceReadError(PersistenceError):
    """Teams or words could not be loaded."""


class PersistenceWriteError(PersistenceError):
    """A game, score or progress write failed."""


class GameRepository(Protocol):
    """Durable store for teams, words, games and running scores."""

    def load_teams(self) -> list[Team]:
        """Teams ordered by id."""
        ...

    def load_words(self) -> list[Word]:
        """Words ordered by creation."""
        ...

    def create_game(self, teams: Sequence[Team], first_word: Word) -> int:
        """Create a game record and return its id."""
        ...

    def init_scores(self, game_id: int, teams: Sequence[Team]) -> None:
        """Insert a zero score row for every team."""
        ...

    def update_score(self, game_id: int, team_id: int, new_total: int) -> None:
        """Store a team's new running total."""
        ...

    def update_game(
        self,
        game_id: int,
        *,
        current_word_id: int | None = None,
        current_team_id: int | None = None,
        status: str | None = None,
    ) -> None:
        """Record the game's progress. Only provided fields are changed."""
        ...
