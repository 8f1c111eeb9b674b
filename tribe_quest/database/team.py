"""
Tribe Quest - Team Manager

Read operations for the `teams` table.
"""

from supabase import Client

from tribe_quest.database.models import TeamRecord


class TeamManager:
    """Manages team records in Supabase."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("teams")

    def list_all(self) -> list[TeamRecord]:
        """Get all teams, ordered by id."""
        data = (
            self.table
            .select("*")
            .order("id")
            .execute()
        )
        return [TeamRecord.model_validate(row) for row in data.data]

