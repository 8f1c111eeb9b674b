"""
Tribe Quest - Game Event Definitions

Event types and payloads for game state changes pushed to the presentation
layer.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from tribe_quest.engine.base import GameSnapshot, RoundPhase


class GameEvent(Enum):
    """Events that can occur during a game."""

    GAME_STARTED = auto()
    LETTER_REVEALED = auto()
    WRONG_GUESS = auto()
    TEAM_LOCKED_OUT = auto()
    TURN_PASSED = auto()
    WORD_WON = auto()
    WORD_LOST = auto()
    WORD_ADVANCED = auto()
    GAME_FINISHED = auto()
    STATE_UPDATED = auto()


@dataclass
class EventPayload:
    """Wrapper for game event data."""

    event: GameEvent
    game_id: int | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def snapshot(self) -> GameSnapshot | None:
        return self.data.get("snapshot")


# Map round phase changes to game events
_PHASE_EVENT_MAP: dict[RoundPhase, GameEvent] = {
    RoundPhase.WON: GameEvent.WORD_WON,
    RoundPhase.LOST: GameEvent.WORD_LOST,
    RoundPhase.FINISHED: GameEvent.GAME_FINISHED,
}


def classify_transition(
    previous: GameSnapshot | None, current: GameSnapshot
) -> GameEvent:
    """Determine the game event from two consecutive snapshots."""
    if previous is None:
        return GameEvent.GAME_STARTED

    old_round = previous.round
    new_round = current.round

    if new_round.phase != old_round.phase and new_round.phase in _PHASE_EVENT_MAP:
        return _PHASE_EVENT_MAP[new_round.phase]
    if new_round.word_index != old_round.word_index:
        return GameEvent.WORD_ADVANCED
    if new_round.current_team != old_round.current_team:
        return GameEvent.TURN_PASSED
    if len(new_round.revealed_positions) > len(old_round.revealed_positions):
        return GameEvent.LETTER_REVEALED
    if new_round.wrong_guess_count > old_round.wrong_guess_count:
        if new_round.wrong_guess_count >= current.max_wrong_guesses:
            return GameEvent.TEAM_LOCKED_OUT
        return GameEvent.WRONG_GUESS

    return GameEvent.STATE_UPDATED
