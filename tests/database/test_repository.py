"""Tests for tribe_quest/database: table managers and repositories (mocked client)."""

from unittest.mock import MagicMock

import pytest

from tribe_quest.database.game import GameManager
from tribe_quest.database.memory import DEFAULT_TEAMS, InMemoryGameRepository
from tribe_quest.database.models import GameRecord, TeamRecord, WordRecord
from tribe_quest.database.repository import SupabaseGameRepository
from tribe_quest.database.score import ScoreManager
from tribe_quest.engine.base import Team, Word
from tribe_quest.engine.ports import PersistenceReadError, PersistenceWriteError


@pytest.fixture
def mock_client():
    """Minimal mock Supabase client; each table gets its own query mock."""
    client = MagicMock()
    tables: dict[str, MagicMock] = {}

    def table(name):
        return tables.setdefault(name, MagicMock(name=f"table:{name}"))

    client.table = MagicMock(side_effect=table)
    client.tables = tables
    return client


def _result(rows):
    return MagicMock(data=rows)


class TestModels:
    def test_team_record_to_team(self):
        record = TeamRecord.model_validate({"id": 1, "name": "Thunder Bolts", "color": "bg-blue-500"})
        assert record.to_team() == Team(id=1, name="Thunder Bolts", color="bg-blue-500")

    def test_word_record_to_word(self):
        record = WordRecord.model_validate({"id": 3, "word": "dragon", "points": 15})
        assert record.to_word() == Word(id=3, text="DRAGON", points=15)

    def test_word_record_default_points(self):
        assert WordRecord.model_validate({"id": 3, "word": "CAT"}).points == 10

    def test_game_record_defaults(self):
        record = GameRecord.model_validate({"id": 9})
        assert record.status == "active"
        assert record.current_word_id is None


class TestManagers:
    def test_game_update_only_provided_fields(self, mock_client):
        query = mock_client.table("games")
        query.update.return_value.eq.return_value.execute.return_value = _result(
            [{"id": 1, "status": "finished"}]
        )

        record = GameManager(mock_client).update(1, status="finished")

        query.update.assert_called_once_with({"status": "finished"})
        query.update.return_value.eq.assert_called_once_with("id", 1)
        assert record.status == "finished"

    def test_game_update_without_fields_reads(self, mock_client):
        query = mock_client.table("games")
        query.select.return_value.eq.return_value.execute.return_value = _result([{"id": 1}])

        record = GameManager(mock_client).update(1)

        query.update.assert_not_called()
        assert record.id == 1

    def test_init_scores_inserts_zero_rows(self, mock_client):
        query = mock_client.table("game_scores")
        query.insert.return_value.execute.return_value = _result([
            {"id": 1, "game_id": 5, "team_id": 1, "points": 0},
            {"id": 2, "game_id": 5, "team_id": 2, "points": 0},
        ])

        rows = ScoreManager(mock_client).init_scores(5, [1, 2])

        query.insert.assert_called_once_with([
            {"game_id": 5, "team_id": 1, "points": 0},
            {"game_id": 5, "team_id": 2, "points": 0},
        ])
        assert [row.team_id for row in rows] == [1, 2]

    def test_update_points_filters_game_and_team(self, mock_client):
        query = mock_client.table("game_scores")
        chain = query.update.return_value.eq.return_value.eq.return_value
        chain.execute.return_value = _result([{"game_id": 5, "team_id": 2, "points": 15}])

        record = ScoreManager(mock_client).update_points(5, 2, 15)

        query.update.assert_called_once_with({"points": 15})
        query.update.return_value.eq.assert_called_once_with("game_id", 5)
        query.update.return_value.eq.return_value.eq.assert_called_once_with("team_id", 2)
        assert record.points == 15


class TestSupabaseGameRepository:
    def test_load_teams_ordered_by_id(self, mock_client):
        query = mock_client.table("teams")
        query.select.return_value.order.return_value.execute.return_value = _result([
            {"id": 1, "name": "Thunder Bolts", "color": "bg-blue-500"},
            {"id": 2, "name": "Fire Dragons", "color": "bg-red-500"},
        ])

        teams = SupabaseGameRepository(mock_client).load_teams()

        query.select.return_value.order.assert_called_once_with("id")
        assert [team.name for team in teams] == ["Thunder Bolts", "Fire Dragons"]

    def test_load_words_in_creation_order(self, mock_client):
        query = mock_client.table("words")
        query.select.return_value.order.return_value.execute.return_value = _result([
            {"id": 4, "word": "phoenix", "points": 20},
            {"id": 2, "word": "totem", "points": 10},
        ])

        words = SupabaseGameRepository(mock_client).load_words()

        query.select.return_value.order.assert_called_once_with("created_at")
        assert [word.text for word in words] == ["PHOENIX", "TOTEM"]

    def test_load_words_skips_unplayable(self, mock_client, caplog):
        query = mock_client.table("words")
        query.select.return_value.order.return_value.execute.return_value = _result([
            {"id": 1, "word": "ICE CREAM", "points": 10},
            {"id": 2, "word": "TOTEM", "points": 10},
        ])

        words = SupabaseGameRepository(mock_client).load_words()

        assert [word.id for word in words] == [2]
        assert "Skipping unplayable word" in caplog.text

    def test_load_words_keeps_zero_point_word(self, mock_client):
        query = mock_client.table("words")
        query.select.return_value.order.return_value.execute.return_value = _result([
            {"id": 1, "word": "BONUS", "points": 0},
            {"id": 2, "word": "TOTEM", "points": 10},
        ])

        words = SupabaseGameRepository(mock_client).load_words()

        assert [(word.id, word.points) for word in words] == [(1, 0), (2, 10)]

    def test_load_failure_is_read_error(self, mock_client):
        query = mock_client.table("teams")
        query.select.return_value.order.return_value.execute.side_effect = Exception("boom")

        with pytest.raises(PersistenceReadError, match="boom"):
            SupabaseGameRepository(mock_client).load_teams()

    def test_create_game(self, mock_client):
        query = mock_client.table("games")
        query.insert.return_value.execute.return_value = _result([
            {"id": 42, "status": "active", "current_word_id": 7, "current_team_id": 1},
        ])

        game_id = SupabaseGameRepository(mock_client).create_game(
            list(DEFAULT_TEAMS), Word(id=7, text="CAT")
        )

        assert game_id == 42
        query.insert.assert_called_once_with({
            "status": "active",
            "current_word_id": 7,
            "current_team_id": 1,
        })

    def test_write_failure_is_write_error(self, mock_client):
        query = mock_client.table("game_scores")
        chain = query.update.return_value.eq.return_value.eq.return_value
        chain.execute.side_effect = Exception("network down")

        with pytest.raises(PersistenceWriteError, match="network down"):
            SupabaseGameRepository(mock_client).update_score(1, 2, 10)

    def test_update_game_failure_is_write_error(self, mock_client):
        query = mock_client.table("games")
        query.update.return_value.eq.return_value.execute.side_effect = Exception("nope")

        with pytest.raises(PersistenceWriteError):
            SupabaseGameRepository(mock_client).update_game(1, status="finished")


class TestInMemoryGameRepository:
    def test_default_teams(self):
        repo = InMemoryGameRepository()
        assert [team.name for team in repo.load_teams()] == [
            "Thunder Bolts", "Fire Dragons", "Green Eagles", "Golden Lions",
        ]

    def test_game_ids_increment(self):
        repo = InMemoryGameRepository()
        word = Word(id=1, text="CAT")
        assert repo.create_game(DEFAULT_TEAMS, word) == 1
        assert repo.create_game(DEFAULT_TEAMS, word) == 2

    def test_update_score_requires_row(self):
        repo = InMemoryGameRepository()
        with pytest.raises(PersistenceWriteError):
            repo.update_score(1, 1, 10)

    def test_update_game_unknown(self):
        repo = InMemoryGameRepository()
        with pytest.raises(PersistenceWriteError, match="Unknown game"):
            repo.update_game(3, status="finished")

    def test_scores_round_trip(self):
        repo = InMemoryGameRepository()
        game_id = repo.create_game(DEFAULT_TEAMS, Word(id=1, text="CAT"))
        repo.init_scores(game_id, DEFAULT_TEAMS)
        repo.update_score(game_id, 3, 25)

        assert repo.points_for(game_id) == {1: 0, 2: 0, 3: 25, 4: 0}
