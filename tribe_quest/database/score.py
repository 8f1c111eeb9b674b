"""
Tribe Quest - Score Manager

CRUD operations for the `game_scores` table.
"""

from typing import Iterable

from supabase import Client

from tribe_quest.database.models import GameScoreRecord


class ScoreManager:
    """Manages per-game team scores in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("game_scores")

    def init_scores(self, game_id: int, team_ids: Iterable[int]) -> list[GameScoreRecord]:
        """Insert a zero score row for every team."""
        rows = [
            {"game_id": game_id, "team_id": team_id, "points": 0}
            for team_id in team_ids
        ]
        data = (
            self.table
            .insert(rows)
            .execute()
        )
        return [GameScoreRecord.model_validate(row) for row in data.data]

    def update_points(self, game_id: int, team_id: int, points: int) -> GameScoreRecord | None:
        """Set a team's running total for a game."""
        data = (
            self.table
            .update({"points": points})
            .eq("game_id", game_id)
            .eq("team_id", team_id)
            .execute()
        )
        if data.data:
            return GameScoreRecord.model_validate(data.data[0])
        return None

