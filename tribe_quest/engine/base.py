"""
Tribe Quest - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. Teams, words and round snapshots are immutable (frozen
dataclasses); the engine replaces them on every transition instead of
mutating them in place.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class SetupError(Exception):
    """Raised when a game cannot be started (no teams, no words, failed load)."""


class RoundPhase(Enum):
    """Phase of the round for the active word."""
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"
    FINISHED = "finished"


@dataclass(frozen=True)
class Team:
    """
    A tribe taking part in the game.

    Attributes:
        id: Identity in the persistence store
        name: Display name
        color: Color tag used by the presentation layer
    """
    id: int
    name: str
    color: str = ""


@dataclass(frozen=True)
class Word:
    """
    A quest word.

    Attributes:
        id: Identity in the persistence store
        text: Literal word, uppercase alphabetic
        points: Gold awarded to the assigned team on a win
    """
    id: int
    text: str
    points: int = 10

    def __post_init__(self) -> None:
        """Normalize to uppercase and validate the literal text."""
        text = self.text.strip().upper()
        if not text or not (text.isascii() and text.isalpha()):
            raise ValueError(
                f"Word text must be non-empty and alphabetic, got {self.text!r}."
            )
        if self.points < 0:
            raise ValueError(f"Word points must not be negative, got {self.points}.")
        object.__setattr__(self, "text", text)

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class EngineConfig:
    """
    Tunable rules for a game session.

    Attributes:
        max_wrong_guesses: Wrong guesses before a team is locked out
        hint_reveal_cap: Maximum number of hint tiles per word
        hint_reveal_ratio: Fraction of the word length shown as hints
        pass_bonus: Gold paid for a word won after it was passed
        lockout_delay: Seconds before a locked-out team is passed automatically
        win_delay: Seconds the won word stays on screen before advancing
        reveal_delay: Seconds the lost word is revealed before advancing
    """
    max_wrong_guesses: int = 4
    hint_reveal_cap: int = 4
    hint_reveal_ratio: float = 0.3
    pass_bonus: int = 5
    lockout_delay: float = 2.0
    win_delay: float = 2.0
    reveal_delay: float = 3.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.max_wrong_guesses < 1:
            raise ValueError("max_wrong_guesses must be at least 1.")
        if self.hint_reveal_cap < 0:
            raise ValueError("hint_reveal_cap cannot be negative.")
        if not 0.0 <= self.hint_reveal_ratio < 1.0:
            raise ValueError("hint_reveal_ratio must be in [0, 1).")
        if self.pass_bonus < 0:
            raise ValueError("pass_bonus cannot be negative.")
        for name in ("lockout_delay", "win_delay", "reveal_delay"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative.")


@dataclass(frozen=True)
class RoundState:
    """
    Complete state of the round for one word.

    Attributes:
        word_index: Position in the word sequence
        assigned_team: Team index that owns the word by rotation
        current_team: Team index currently guessing
        attempted_teams: Team indices whose turn on this word has ended, in order
        guessed_letters: Every guess this turn, duplicates included
        revealed_positions: Positions revealed by correct guesses, in order
        default_revealed_positions: Hint positions shown for free, sorted
        wrong_guess_count: Wrong guesses by the current team
        is_passed_question: Whether the word has left its assigned team
        phase: Round phase
    """
    word_index: int
    assigned_team: int
    current_team: int
    attempted_teams: tuple[int, ...] = field(default_factory=tuple)
    guessed_letters: tuple[str, ...] = field(default_factory=tuple)
    revealed_positions: tuple[int, ...] = field(default_factory=tuple)
    default_revealed_positions: tuple[int, ...] = field(default_factory=tuple)
    wrong_guess_count: int = 0
    is_passed_question: bool = False
    phase: RoundPhase = RoundPhase.PLAYING

    @property
    def shown_positions(self) -> frozenset[int]:
        """Union of guessed and hint positions."""
        return frozenset(self.revealed_positions) | frozenset(self.default_revealed_positions)

    @property
    def is_playing(self) -> bool:
        return self.phase is RoundPhase.PLAYING


@dataclass(frozen=True)
class LeaderboardEntry:
    """
    One row of the leaderboard.

    Attributes:
        rank: 1-based position after sorting by score
        team_number: 1-based position of the team in the original order
        team: The team
        points: Accumulated gold
        is_current: Team is guessing right now
        is_assigned: Team owns the current word
        has_attempted: Team has already had its turn on the current word
    """
    rank: int
    team_number: int
    team: Team
    points: int
    is_current: bool = False
    is_assigned: bool = False
    has_attempted: bool = False


@dataclass(frozen=True)
class GameSnapshot:
    """
    Renderable view of the whole game after an operation.

    Attributes:
        game_id: Durable game identity, None when no store write succeeded
        teams: Teams in original order
        words: Quest words in play order
        round: The current round
        scores: Team id to accumulated gold
        leaderboard: Teams ranked by score
        max_wrong_guesses: Lockout threshold in effect
        pass_bonus: Gold paid for passed words
    """
    game_id: int | None
    teams: tuple[Team, ...]
    words: tuple[Word, ...]
    round: RoundState
    scores: Mapping[int, int]
    leaderboard: tuple[LeaderboardEntry, ...]
    max_wrong_guesses: int = 4
    pass_bonus: int = 5

    @property
    def phase(self) -> RoundPhase:
        return self.round.phase

    @property
    def current_word(self) -> Word:
        return self.words[self.round.word_index]

    @property
    def current_team(self) -> Team:
        return self.teams[self.round.current_team]

    @property
    def assigned_team(self) -> Team:
        return self.teams[self.round.assigned_team]

    @property
    def quest_number(self) -> int:
        """1-based number of the current word ("Quest: n/total")."""
        return self.round.word_index + 1

    @property
    def quest_total(self) -> int:
        return len(self.words)

    @property
    def current_payout(self) -> int:
        """Gold the current team would receive for solving the word."""
        if self.round.is_passed_question:
            return self.pass_bonus
        return self.current_word.points

    @property
    def is_locked_out(self) -> bool:
        """True once the current team has used all its wrong guesses."""
        return self.round.wrong_guess_count >= self.max_wrong_guesses

    @property
    def masked_word(self) -> str:
        """Word with hidden letters as underscores, separated by spaces."""
        text = self.current_word.text
        shown = self.round.shown_positions
        return " ".join(
            letter if index in shown else "_"
            for index, letter in enumerate(text)
        )

    @property
    def revealed_word(self) -> str | None:
        """The literal word once every team has failed on it."""
        if len(self.round.attempted_teams) >= len(self.teams):
            return self.current_word.text
        return None
