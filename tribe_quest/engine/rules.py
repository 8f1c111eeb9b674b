"""
Tribe Quest - Quest Rules

Word-level rules of the game: hint tiles, the one-tile-per-call reveal rule,
completion, payout, team rotation and ranking.

All methods are stateless class methods operating on immutable data.
"""

import math
import random
from typing import Mapping, Sequence

from tribe_quest.engine.base import EngineConfig, LeaderboardEntry, RoundState, Team


class QuestRules:
    """
    Stateless rules for the quest game.

    All methods are class methods operating on immutable data.
    State is passed in and returned, never stored.
    """

    @classmethod
    def hint_count(cls, word_length: int, config: EngineConfig) -> int:
        """Number of hint tiles for a word: min(cap, floor(length * ratio))."""
        return min(config.hint_reveal_cap, math.floor(word_length * config.hint_reveal_ratio))

    @classmethod
    def choose_hint_positions(
        cls,
        word_length: int,
        config: EngineConfig,
        rng: random.Random | None = None,
    ) -> tuple[int, ...]:
        """Pick distinct hint positions uniformly at random.

        Args:
            word_length: Length of the word
            config: Rules in effect
            rng: Random source (module-level random if None)

        Returns:
            Sorted tuple of distinct positions in [0, word_length)
        """
        rng = rng or random
        count = cls.hint_count(word_length, config)
        return tuple(sorted(rng.sample(range(word_length), count)))

    @classmethod
    def letter_positions(cls, text: str, letter: str) -> tuple[int, ...]:
        """All positions of a letter in the word, ascending."""
        return tuple(i for i, char in enumerate(text) if char == letter)

    @classmethod
    def next_reveal_position(cls, text: str, letter: str, round_state: RoundState) -> int | None:
        """Lowest occurrence of the letter that is not shown yet.

        Only one tile is revealed per correct call, even when the letter
        occurs several times.

        Returns:
            The position to reveal, or None if the letter is absent or all its
            occurrences are already shown
        """
        shown = round_state.shown_positions
        for position in cls.letter_positions(text, letter):
            if position not in shown:
                return position
        return None

    @classmethod
    def is_complete(cls, text: str, round_state: RoundState) -> bool:
        """Check whether guessed and hint tiles together cover the word."""
        return len(round_state.shown_positions) == len(text)

    @classmethod
    def payout(cls, word_points: int, is_passed_question: bool, config: EngineConfig) -> int:
        """Gold for a win: the word's points, or the pass bonus once passed."""
        return config.pass_bonus if is_passed_question else word_points

    @classmethod
    def assigned_team(cls, word_index: int, team_count: int) -> int:
        """Team that owns a word by rotation."""
        return word_index % team_count

    @classmethod
    def next_team(
        cls,
        current_team: int,
        attempted_teams: Sequence[int],
        team_count: int,
    ) -> int | None:
        """
        Find the next team to take over a passed word.

        Cycles from current_team + 1, skipping teams that already attempted.

        Args:
            current_team: Team whose turn just ended
            attempted_teams: Teams that already had a turn (including current)
            team_count: Number of teams in the game

        Returns:
            The next team index, or None if every team has attempted
        """
        attempted = set(attempted_teams)
        if len(attempted) >= team_count:
            return None

        candidate = (current_team + 1) % team_count
        while candidate in attempted:
            candidate = (candidate + 1) % team_count
        return candidate

    @classmethod
    def rank_teams(
        cls,
        teams: Sequence[Team],
        scores: Mapping[int, int],
        round_state: RoundState | None = None,
    ) -> tuple[LeaderboardEntry, ...]:
        """
        Build the leaderboard.

        Sorting is stable, so tied teams keep their original order.

        Args:
            teams: Teams in original order
            scores: Team id to accumulated gold
            round_state: Current round, used for the turn flags

        Returns:
            Leaderboard entries sorted by descending score
        """
        numbered = list(enumerate(teams))
        ordered = sorted(numbered, key=lambda item: -scores.get(item[1].id, 0))

        attempted = set(round_state.attempted_teams) if round_state else set()
        entries = []
        for rank, (index, team) in enumerate(ordered, start=1):
            entries.append(LeaderboardEntry(
                rank=rank,
                team_number=index + 1,
                team=team,
                points=scores.get(team.id, 0),
                is_current=round_state is not None and index == round_state.current_team,
                is_assigned=round_state is not None and index == round_state.assigned_team,
                has_attempted=index in attempted,
            ))
        return tuple(entries)
