"""
Tribe Quest Database Layer.

Supabase integration for teams, words, games and score persistence.
"""

from tribe_quest.database.client import get_supabase_client
from tribe_quest.database.game import GameManager
from tribe_quest.database.memory import InMemoryGameRepository
from tribe_quest.database.models import GameRecord, GameScoreRecord, TeamRecord, WordRecord
from tribe_quest.database.repository import SupabaseGameRepository
from tribe_quest.database.score import ScoreManager
from tribe_quest.database.team import TeamManager
from tribe_quest.database.word import WordManager

__all__ = [
    "get_supabase_client",
    "GameManager",
    "GameRecord",
    "GameScoreRecord",
    "InMemoryGameRepository",
    "ScoreManager",
    "SupabaseGameRepository",
    "TeamManager",
    "TeamRecord",
    "WordManager",
    "WordRecord",
]
