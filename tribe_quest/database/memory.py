"""
Tribe Quest - In-Memory Game Repository

Persistence port kept entirely in process memory, for offline play and tests.
"""

import itertools
from typing import Sequence

from tribe_quest.database.models import GameRecord, GameScoreRecord
from tribe_quest.engine.base import Team, Word
from tribe_quest.engine.ports import PersistenceWriteError

DEFAULT_TEAMS: tuple[Team, ...] = (
    Team(id=1, name="Thunder Bolts", color="bg-blue-500"),
    Team(id=2, name="Fire Dragons", color="bg-red-500"),
    Team(id=3, name="Green Eagles", color="bg-green-500"),
    Team(id=4, name="Golden Lions", color="bg-yellow-500"),
)


class InMemoryGameRepository:
    """Stores games and scores in dictionaries."""

    def __init__(
        self,
        teams: Sequence[Team] = DEFAULT_TEAMS,
        words: Sequence[Word] = (),
    ) -> None:
        self.teams = list(teams)
        self.words = list(words)
        self.games: dict[int, GameRecord] = {}
        self.scores: dict[tuple[int, int], GameScoreRecord] = {}
        self._game_ids = itertools.count(1)

    def load_teams(self) -> list[Team]:
        return sorted(self.teams, key=lambda team: team.id)

    def load_words(self) -> list[Word]:
        return list(self.words)

    def create_game(self, teams: Sequence[Team], first_word: Word) -> int:
        game_id = next(self._game_ids)
        self.games[game_id] = GameRecord(
            id=game_id,
            current_word_id=first_word.id,
            current_team_id=teams[0].id,
        )
        return game_id

    def init_scores(self, game_id: int, teams: Sequence[Team]) -> None:
        self._require_game(game_id)
        for team in teams:
            self.scores[(game_id, team.id)] = GameScoreRecord(game_id=game_id, team_id=team.id)

    def update_score(self, game_id: int, team_id: int, new_total: int) -> None:
        key = (game_id, team_id)
        if key not in self.scores:
            raise PersistenceWriteError(f"No score row for team {team_id} in game {game_id}.")
        self.scores[key] = self.scores[key].model_copy(update={"points": new_total})

    def update_game(
        self,
        game_id: int,
        *,
        current_word_id: int | None = None,
        current_team_id: int | None = None,
        status: str | None = None,
    ) -> None:
        record = self._require_game(game_id)
        updates = {
            key: value
            for key, value in (
                ("current_word_id", current_word_id),
                ("current_team_id", current_team_id),
                ("status", status),
            )
            if value is not None
        }
        self.games[game_id] = record.model_copy(update=updates)

    def points_for(self, game_id: int) -> dict[int, int]:
        """Durable team totals for a game."""
        return {
            team_id: record.points
            for (gid, team_id), record in self.scores.items()
            if gid == game_id
        }

    def _require_game(self, game_id: int) -> GameRecord:
        if game_id not in self.games:
            raise PersistenceWriteError(f"Unknown game {game_id}.")
        return self.games[game_id]
