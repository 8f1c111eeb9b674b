"""
Tribe Quest - Database Models

Pydantic models that mirror the Supabase table schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from tribe_quest.engine.base import Team, Word


class TeamRecord(BaseModel):
    """Mirrors the `teams` table."""

    id: int
    name: str = Field(max_length=100)
    color: str = Field(max_length=50)
    created_at: datetime | None = None

    model_config = {"from_attributes": True}

    def to_team(self) -> Team:
        return Team(id=self.id, name=self.name, color=self.color)


class WordRecord(BaseModel):
    """Mirrors the `words` table."""

    id: int
    word: str = Field(max_length=50)
    points: int = 10
    created_at: datetime | None = None

    model_config = {"from_attributes": True}

    def to_word(self) -> Word:
        return Word(id=self.id, text=self.word, points=self.points)


class GameRecord(BaseModel):
    """Mirrors the `games` table."""

    id: int
    status: str = "active"
    current_word_id: int | None = None
    current_team_id: int | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class GameScoreRecord(BaseModel):
    """Mirrors the `game_scores` table."""

    id: int | None = None
    game_id: int
    team_id: int
    points: int = 0
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
