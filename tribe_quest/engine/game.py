"""
Tribe Quest - Game Engine

Stateful engine owning the authoritative game: teams, quest words, running
scores and the round for the active word. Every public operation and every
delayed transition runs under one lock, so user actions and timer callbacks
are serialized. Store writes are queued to a background writer and never
run under the lock.

Round lifecycle:
- PLAYING: the current team guesses letters or passes
- WON: the word is solved; advances after win_delay
- LOST: every team failed, the word is revealed; advances after reveal_delay
- FINISHED: no words left (terminal)
"""

from __future__ import annotations

import functools
import logging
import random
import threading
from dataclasses import replace
from typing import Callable, Sequence

from tribe_quest.engine.base import (
    EngineConfig,
    GameSnapshot,
    LeaderboardEntry,
    RoundPhase,
    RoundState,
    SetupError,
    Team,
    Word,
)
from tribe_quest.engine.events import EventPayload, classify_transition
from tribe_quest.engine.ports import GameRepository, PersistenceReadError, PersistenceWriteError
from tribe_quest.engine.rules import QuestRules
from tribe_quest.engine.scheduler import ScheduledTransition, Scheduler, ThreadingScheduler
from tribe_quest.engine.validators import normalize_guess, validate_teams, validate_words
from tribe_quest.engine.writer import StoreWriter

logger = logging.getLogger(__name__)

Listener = Callable[[EventPayload], None]


class GameEngine:
    """Turn-rotation and scoring state machine for one game at a time."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        repository: GameRepository | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self._repository = repository
        self._scheduler = scheduler or ThreadingScheduler()
        self._rng = rng or random.Random()
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []
        self._writer = StoreWriter()

        self._teams: tuple[Team, ...] = ()
        self._words: tuple[Word, ...] = ()
        self._scores: dict[int, int] = {}
        self._round: RoundState | None = None
        self._game_id: int | None = None

        self._pending: ScheduledTransition | None = None
        self._transition_token = 0

    # -- Queries ---------------------------------------------------------

    @property
    def game_id(self) -> int | None:
        return self._game_id

    @property
    def round_state(self) -> RoundState | None:
        return self._round

    @property
    def phase(self) -> RoundPhase | None:
        return self._round.phase if self._round else None

    @property
    def has_pending_transition(self) -> bool:
        return self._pending is not None and self._pending.pending

    def snapshot(self) -> GameSnapshot:
        """Current renderable view of the game."""
        with self._lock:
            if self._round is None:
                raise SetupError("Game has not been started.")
            return GameSnapshot(
                game_id=self._game_id,
                teams=self._teams,
                words=self._words,
                round=self._round,
                scores=dict(self._scores),
                leaderboard=QuestRules.rank_teams(self._teams, self._scores, self._round),
                max_wrong_guesses=self.config.max_wrong_guesses,
                pass_bonus=self.config.pass_bonus,
            )

    def leaderboard(self) -> tuple[LeaderboardEntry, ...]:
        """Teams by descending score; ties keep the original team order."""
        return self.snapshot().leaderboard

    # -- Listeners -------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback for every state change.

        Returns:
            A callable that removes the listener again.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # -- Game setup ------------------------------------------------------

    def start_game(self, teams: Sequence[Team], words: Sequence[Word]) -> GameSnapshot:
        """Start a new game with zeroed scores on the first word.

        Raises:
            SetupError: If teams or words are empty or malformed
        """
        teams = validate_teams(teams)
        words = validate_words(words)

        with self._lock:
            self._cancel_pending()
            self._teams = teams
            self._words = words
            self._scores = {team.id: 0 for team in teams}
            self._game_id = self._create_game_record()
            self._round = self._new_round(0)

            logger.info(
                "Game %s started: %d teams, %d words",
                self._game_id, len(teams), len(words),
            )
            return self._publish(None)

    def start_from_repository(self) -> GameSnapshot:
        """Load teams and words from the repository and start a game.

        Raises:
            SetupError: If nothing can be loaded or either collection is empty
        """
        if self._repository is None:
            raise SetupError("No repository configured.")

        try:
            teams = self._repository.load_teams()
            words = self._repository.load_words()
        except PersistenceReadError as exc:
            raise SetupError(f"Database error: {exc}") from exc

        if not teams:
            raise SetupError("No teams found in database!")
        if not words:
            raise SetupError("No words found in database!")

        return self.start_game(teams, words)

    def restart(self) -> GameSnapshot:
        """Start a new game with the teams and words of the current one."""
        with self._lock:
            if not self._teams:
                raise SetupError("No game to restart.")
            return self.start_game(self._teams, self._words)

    def shutdown(self) -> None:
        """Cancel any pending transition, drop all listeners and stop the writer.

        Store writes already queued still complete in the background.
        """
        with self._lock:
            self._cancel_pending()
            self._listeners.clear()
        self._writer.close()

    def flush_writes(self, timeout: float | None = None) -> bool:
        """Wait for queued store writes; False if the timeout expired first."""
        return self._writer.flush(timeout)

    # -- Player actions --------------------------------------------------

    def guess_letter(self, letter: str) -> GameSnapshot:
        """Guess one letter for the current team.

        Invalid input, a finished turn and a locked-out team are no-ops.
        """
        with self._lock:
            current = self._round
            if current is None or not current.is_playing:
                logger.debug("Ignoring guess %r outside of play", letter)
                return self.snapshot()
            if current.wrong_guess_count >= self.config.max_wrong_guesses:
                logger.debug("Ignoring guess %r from locked-out team", letter)
                return self.snapshot()

            normalized = normalize_guess(letter)
            if normalized is None:
                logger.debug("Ignoring invalid guess %r", letter)
                return self.snapshot()

            previous = self.snapshot()
            word = self._words[current.word_index]
            guessed = current.guessed_letters + (normalized,)
            position = QuestRules.next_reveal_position(word.text, normalized, current)

            if position is None:
                wrong = current.wrong_guess_count + 1
                self._round = replace(current, guessed_letters=guessed, wrong_guess_count=wrong)
                if wrong >= self.config.max_wrong_guesses:
                    logger.info(
                        "Team %s locked out on word %d",
                        self._teams[current.current_team].name, current.word_index + 1,
                    )
                    self._schedule(self.config.lockout_delay, self._auto_pass)
            else:
                self._round = replace(
                    current,
                    guessed_letters=guessed,
                    revealed_positions=current.revealed_positions + (position,),
                )
                if QuestRules.is_complete(word.text, self._round):
                    self._award_win(word)

            return self._publish(previous)

    def pass_question(self) -> GameSnapshot:
        """End the current team's turn without solving the word."""
        with self._lock:
            current = self._round
            if current is None or not current.is_playing:
                logger.debug("Ignoring pass outside of play")
                return self.snapshot()

            previous = self.snapshot()
            self._cancel_pending()

            attempted = current.attempted_teams + (current.current_team,)
            next_team = QuestRules.next_team(current.current_team, attempted, len(self._teams))

            if next_team is None:
                self._round = replace(current, attempted_teams=attempted, phase=RoundPhase.LOST)
                logger.info(
                    "Word %d lost by every team: %s",
                    current.word_index + 1, self._words[current.word_index].text,
                )
                self._schedule(self.config.reveal_delay, self._advance_word)
            else:
                # Hint tiles belong to the word and survive the pass.
                self._round = replace(
                    current,
                    attempted_teams=attempted,
                    current_team=next_team,
                    is_passed_question=True,
                    guessed_letters=(),
                    revealed_positions=(),
                    wrong_guess_count=0,
                    phase=RoundPhase.PLAYING,
                )
                logger.info(
                    "Word %d passed to %s",
                    current.word_index + 1, self._teams[next_team].name,
                )

            return self._publish(previous)

    # -- Transitions -----------------------------------------------------

    def _new_round(self, word_index: int) -> RoundState:
        """Fresh round for a word, owned by its rotation team."""
        self._cancel_pending()
        assigned = QuestRules.assigned_team(word_index, len(self._teams))
        hints = QuestRules.choose_hint_positions(
            len(self._words[word_index]), self.config, self._rng
        )
        return RoundState(
            word_index=word_index,
            assigned_team=assigned,
            current_team=assigned,
            default_revealed_positions=hints,
        )

    def _award_win(self, word: Word) -> None:
        current = self._round
        team = self._teams[current.current_team]
        points = QuestRules.payout(word.points, current.is_passed_question, self.config)
        new_total = self._scores[team.id] + points
        self._scores[team.id] = new_total
        self._round = replace(current, phase=RoundPhase.WON)

        logger.info("%s solved %s for %d gold (total %d)", team.name, word.text, points, new_total)
        self._write(
            "score update",
            lambda repo, game_id: repo.update_score(game_id, team.id, new_total),
        )
        self._schedule(self.config.win_delay, self._advance_word)

    def _auto_pass(self) -> None:
        self.pass_question()

    def _advance_word(self) -> None:
        current = self._round
        if current is None or current.phase not in (RoundPhase.WON, RoundPhase.LOST):
            return

        previous = self.snapshot()
        next_index = current.word_index + 1

        if next_index < len(self._words):
            self._round = self._new_round(next_index)
            logger.info(
                "Advancing to word %d/%d for %s",
                next_index + 1, len(self._words), self._teams[self._round.current_team].name,
            )
            word_id = self._words[next_index].id
            team_id = self._teams[self._round.current_team].id
            self._write(
                "progress update",
                lambda repo, game_id: repo.update_game(
                    game_id, current_word_id=word_id, current_team_id=team_id
                ),
            )
        else:
            self._round = replace(current, phase=RoundPhase.FINISHED)
            logger.info("Game %s finished", self._game_id)
            self._write(
                "status update",
                lambda repo, game_id: repo.update_game(game_id, status="finished"),
            )

        self._publish(previous)

    # -- Scheduling ------------------------------------------------------

    def _schedule(self, delay: float, transition: Callable[[], None]) -> None:
        """Replace any pending transition with a new one."""
        self._cancel_pending()
        token = self._transition_token
        self._pending = self._scheduler.schedule(
            delay, functools.partial(self._fire, token, transition)
        )

    def _cancel_pending(self) -> None:
        self._transition_token += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _fire(self, token: int, transition: Callable[[], None]) -> None:
        with self._lock:
            if token != self._transition_token:
                logger.debug("Discarding stale transition %s", transition.__name__)
                return
            self._pending = None
            transition()

    # -- Persistence -----------------------------------------------------

    def _create_game_record(self) -> int | None:
        if self._repository is None:
            return None
        try:
            game_id = self._repository.create_game(self._teams, self._words[0])
            self._repository.init_scores(game_id, self._teams)
        except PersistenceWriteError:
            logger.warning("Could not create game record; playing without persistence",
                           exc_info=True)
            return None
        return game_id

    def _write(
        self, description: str, operation: Callable[[GameRepository, int], None]
    ) -> None:
        """Queue a store write for the current game; play never waits for it."""
        if self._repository is None or self._game_id is None:
            return
        self._writer.submit(
            f"Game {self._game_id} {description}",
            functools.partial(operation, self._repository, self._game_id),
        )

    # -- Notification ----------------------------------------------------

    def _publish(self, previous: GameSnapshot | None) -> GameSnapshot:
        snapshot = self.snapshot()
        payload = EventPayload(
            event=classify_transition(previous, snapshot),
            game_id=self._game_id,
            data={"snapshot": snapshot},
        )
        for listener in list(self._listeners):
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener failed for %s", payload.event.name)
        return snapshot
