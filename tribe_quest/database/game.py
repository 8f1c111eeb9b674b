"""
Tribe Quest - Game Manager

CRUD operations for the `games` table.
"""

from supabase import Client

from tribe_quest.database.models import GameRecord


class GameManager:
    """Manages game records in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("games")

    def create(self, current_word_id: int, current_team_id: int) -> GameRecord:
        """Create an active game positioned on its first word."""
        data = (
            self.table
            .insert({
                "status": "active",
                "current_word_id": current_word_id,
                "current_team_id": current_team_id,
            })
            .execute()
        )
        return GameRecord.model_validate(data.data[0])

    def get(self, game_id: int) -> GameRecord | None:
        """Look up a game by id."""
        data = (
            self.table
            .select("*")
            .eq("id", game_id)
            .execute()
        )
        if data.data:
            return GameRecord.model_validate(data.data[0])
        return None

    def update(
        self,
        game_id: int,
        *,
        current_word_id: int | None = None,
        current_team_id: int | None = None,
        status: str | None = None,
    ) -> GameRecord | None:
        """Update game fields. Only provided fields are changed."""
        updates: dict = {}
        if current_word_id is not None:
            updates["current_word_id"] = current_word_id
        if current_team_id is not None:
            updates["current_team_id"] = current_team_id
        if status is not None:
            updates["status"] = status

        if not updates:
            return self.get(game_id)

        data = (
            self.table
            .update(updates)
            .eq("id", game_id)
            .execute()
        )
        return GameRecord.model_validate(data.data[0])
