"""
Tribe Quest - Supabase Game Repository

Implements the engine's persistence port on top of the table managers.
Client failures are wrapped into PersistenceReadError / PersistenceWriteError
so the engine never sees Supabase-specific exceptions.
"""

from __future__ import annotations

import logging
from typing import Sequence

from supabase import Client

from tribe_quest.database.game import GameManager
from tribe_quest.database.score import ScoreManager
from tribe_quest.database.team import TeamManager
from tribe_quest.database.word import WordManager
from tribe_quest.engine.base import Team, Word
from tribe_quest.engine.ports import PersistenceReadError, PersistenceWriteError

logger = logging.getLogger(__name__)


class SupabaseGameRepository:
    """Persistence port backed by Supabase tables."""

    def __init__(self, client: Client) -> None:
        self._client = client
        self._team_mgr = TeamManager(client)
        self._word_mgr = WordManager(client)
        self._game_mgr = GameManager(client)
        self._score_mgr = ScoreManager(client)

    def load_teams(self) -> list[Team]:
        try:
            records = self._team_mgr.list_all()
        except Exception as exc:
            raise PersistenceReadError(f"Could not load teams: {exc}") from exc
        return [record.to_team() for record in records]

    def load_words(self) -> list[Word]:
        try:
            records = self._word_mgr.list_all()
        except Exception as exc:
            raise PersistenceReadError(f"Could not load words: {exc}") from exc

        words = []
        for record in records:
            try:
                words.append(record.to_word())
            except ValueError:
                logger.warning("Skipping unplayable word %r (id %s)", record.word, record.id)
        return words

    def create_game(self, teams: Sequence[Team], first_word: Word) -> int:
        try:
            record = self._game_mgr.create(
                current_word_id=first_word.id,
                current_team_id=teams[0].id,
            )
        except Exception as exc:
            raise PersistenceWriteError(f"Could not create game: {exc}") from exc
        logger.info("Created game %s", record.id)
        return record.id

    def init_scores(self, game_id: int, teams: Sequence[Team]) -> None:
        try:
            self._score_mgr.init_scores(game_id, [team.id for team in teams])
        except Exception as exc:
            raise PersistenceWriteError(
                f"Could not initialize scores for game {game_id}: {exc}"
            ) from exc

    def update_score(self, game_id: int, team_id: int, new_total: int) -> None:
        try:
            self._score_mgr.update_points(game_id, team_id, new_total)
        except Exception as exc:
            raise PersistenceWriteError(
                f"Could not update score for team {team_id} in game {game_id}: {exc}"
            ) from exc

    def update_game(
        self,
        game_id: int,
        *,
        current_word_id: int | None = None,
        current_team_id: int | None = None,
        status: str | None = None,
    ) -> None:
        try:
            self._game_mgr.update(
                game_id,
                current_word_id=current_word_id,
                current_team_id=current_team_id,
                status=status,
            )
        except Exception as exc:
            raise PersistenceWriteError(f"Could not update game {game_id}: {exc}") from exc
