"""
Tribe Quest - Word Manager

Read operations for the `words` table.
"""

from supabase import Client

from tribe_quest.database.models import WordRecord


class WordManager:
    """Manages quest words in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("words")

    def list_all(self) -> list[WordRecord]:
        """Get all words in creation order (the play order)."""
        data = (
            self.table
            .select("*")
            .order("created_at")
            .execute()
        )
        return [WordRecord.model_validate(row) for row in data.data]

