"""Turn lifecycle state machine.

A submission walks Validating -> Matching -> Cascading (-> Refilling) and
back to Idle, or ends the game. Each stage after validation is a scheduled
step so a presentation layer can animate between them. A watchdog armed at
submission forces the phase back to Idle if the sequence does not settle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from ..core.constants import (
    BLOCKED_REASONS,
    DEFAULT_MIN_WORDS,
    INTERACTIVE_PHASES,
    MIN_WORD_LENGTH,
    SETTLED_PHASES,
    Direction,
    GameOverReason,
    Phase,
)
from ..core.models import GameTurnState, Position, Tile, TurnResult, TurnTicket, WordMatch
from ..data.dictionary import WordDictionary
from ..utils.logger import get_logger
from .grid import LetterGrid
from .scheduler import ScheduledTask, TurnScheduler
from .scoring import ScoreCalculator


LOGGER = get_logger(__name__)

HighScoreSink = Callable[[int, int], object]


@dataclass
class TurnConfig:
    min_word_length: int = MIN_WORD_LENGTH
    match_delay: float = 0.3
    clear_delay: float = 0.3
    cascade_delay: float = 0.3
    watchdog_timeout: float = 10.0
    max_strikes: Optional[int] = 3
    time_limit: Optional[int] = 120
    min_words_after_cascade: int = DEFAULT_MIN_WORDS
    regenerate_attempts: int = 50


@dataclass
class PhaseCallbacks:
    """Observers for presentation layers. Every hook is optional."""

    on_phase_change: Optional[Callable[[Phase], None]] = None
    on_grid_update: Optional[Callable[[List[List[Tile]]], None]] = None
    on_match_found: Optional[Callable[[WordMatch], None]] = None
    on_time_tick: Optional[Callable[[int], None]] = None
    on_game_over: Optional[Callable[[GameOverReason], None]] = None
    on_recover: Optional[Callable[[], None]] = None


class TurnOrchestrator:
    """Sequences one submission at a time through the turn phases."""

    def __init__(
        self,
        grid: LetterGrid,
        dictionary: WordDictionary,
        scorer: ScoreCalculator,
        scheduler: TurnScheduler,
        config: Optional[TurnConfig] = None,
        callbacks: Optional[PhaseCallbacks] = None,
        save_high_score: Optional[HighScoreSink] = None,
    ) -> None:
        self.grid = grid
        self.dictionary = dictionary
        self.scorer = scorer
        self.scheduler = scheduler
        self.config = config or TurnConfig()
        self.callbacks = callbacks or PhaseCallbacks()
        self.save_high_score = save_high_score

        self.phase = Phase.IDLE
        self.game_over_reason: Optional[GameOverReason] = None
        self.last_error: Optional[str] = None
        self.current_match: Optional[WordMatch] = None
        self.time_left: Optional[int] = None

        self._phase_before_pause: Optional[Phase] = None
        self._ticket: Optional[TurnTicket] = None
        self._pending_step: Optional[ScheduledTask] = None
        self._watchdog: Optional[ScheduledTask] = None
        self._timer: Optional[ScheduledTask] = None
        self._state_provider: Optional[Callable[[], GameTurnState]] = None

    # ------------------------------------------------------------------
    # Phase helpers
    # ------------------------------------------------------------------
    def _set_phase(self, phase: Phase) -> None:
        if phase == self.phase:
            return
        LOGGER.debug("Phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase
        if self.callbacks.on_phase_change:
            self.callbacks.on_phase_change(phase)

    def _emit_grid(self) -> None:
        if self.callbacks.on_grid_update:
            self.callbacks.on_grid_update(self.grid.clone_tiles())

    def can_interact(self) -> bool:
        return self.phase in INTERACTIVE_PHASES

    def is_playing(self) -> bool:
        return self.phase not in (Phase.GAME_OVER, Phase.PAUSED)

    @property
    def busy(self) -> bool:
        return self._ticket is not None

    def mark_selecting(self) -> None:
        if self.phase == Phase.IDLE:
            self._set_phase(Phase.SELECTING)

    def mark_idle(self) -> None:
        if self.phase == Phase.SELECTING:
            self._set_phase(Phase.IDLE)

    def reset(self) -> None:
        """Cancel everything in flight and start over from Idle."""

        self._cancel_sequence()
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self.game_over_reason = None
        self.last_error = None
        self.time_left = None
        self._phase_before_pause = None
        self._set_phase(Phase.IDLE)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    def validate_word(self, word: str) -> Tuple[bool, Optional[str]]:
        word = word.upper()
        minimum = self.config.min_word_length
        if len(word) < minimum:
            return False, f"Word must be at least {minimum} letters"
        if not self.dictionary.is_valid(word):
            return False, f'"{word}" is not a valid word'
        return True, None

    def process_word(self, state: GameTurnState, word: str, positions: Sequence[Position]) -> TurnTicket:
        """Submit a selected word.

        Rejections complete immediately. Accepted words return a pending
        ticket that finishes when the staged sequence settles.
        """

        word = word.upper()
        if not self.can_interact() or self.busy:
            reason = BLOCKED_REASONS.get(self.phase, "Please wait...")
            LOGGER.info("Submission '%s' blocked: %s", word, reason)
            ticket = TurnTicket(word=word, accepted=False, error=reason, phase=self.phase)
            ticket.finish()
            return ticket

        if len(word) < self.config.min_word_length:
            return self._reject(word, f"Word must be at least {self.config.min_word_length} letters")

        self._set_phase(Phase.VALIDATING)
        if not self.dictionary.is_valid(word):
            return self._strike(state, word)

        self.last_error = None
        breakdown = self.scorer.score_word(word)
        match = WordMatch(word=word, positions=list(positions), direction=Direction.FREEFORM, score=breakdown.total)
        ticket = TurnTicket(word=word, accepted=True, phase=Phase.MATCHING)
        self._ticket = ticket
        self._watchdog = self.scheduler.call_later(self.config.watchdog_timeout, self._on_watchdog, "watchdog")

        LOGGER.info("Accepted '%s' for %d points", word, match.score)
        self.current_match = match
        if self.callbacks.on_match_found:
            self.callbacks.on_match_found(match)
        self._set_phase(Phase.MATCHING)
        self._schedule(self.config.match_delay, lambda: self._clear_step(state, match))
        return ticket

    def _reject(self, word: str, message: str) -> TurnTicket:
        self.last_error = message
        self._set_phase(Phase.IDLE)
        ticket = TurnTicket(word=word, accepted=False, error=message, phase=self.phase)
        ticket.finish()
        return ticket

    def _strike(self, state: GameTurnState, word: str) -> TurnTicket:
        max_strikes = self.config.max_strikes
        if max_strikes is None:
            return self._reject(word, f'"{word}" is not a valid word')

        strikes = state.strikes + 1
        result = TurnResult(
            strikes_delta=1,
            words_found=state.words_found,
            longest_word=state.longest_word,
            combo=state.combo,
            best_combo=state.best_combo,
        )
        if strikes >= max_strikes:
            message = f'"{word}" is not a valid word. Strike {strikes}/{max_strikes}!'
            self.last_error = message
            result.has_moves_left = False
            result.game_over_reason = GameOverReason.STRIKES
            self._end_game(GameOverReason.STRIKES, state.score, state.moves)
        else:
            message = f'"{word}" is not a valid word. Strike {strikes}/{max_strikes}'
            self.last_error = message
            self._set_phase(Phase.IDLE)

        ticket = TurnTicket(word=word, accepted=False, error=message, phase=self.phase)
        ticket.finish(result)
        return ticket

    # ------------------------------------------------------------------
    # Staged steps
    # ------------------------------------------------------------------
    def _schedule(self, delay: float, step: Callable[[], None]) -> None:
        self._pending_step = self.scheduler.call_later(delay, step, "turn-step")

    def _clear_step(self, state: GameTurnState, match: WordMatch) -> None:
        self.grid.clear_selected_positions(match.positions)
        self._emit_grid()
        self._schedule(self.config.clear_delay, lambda: self._cascade_step(state, match))

    def _cascade_step(self, state: GameTurnState, match: WordMatch) -> None:
        self._set_phase(Phase.CASCADING)
        self.grid.apply_gravity()
        self._emit_grid()
        self._schedule(self.config.cascade_delay, lambda: self._settle_step(state, match))

    def _settle_step(self, state: GameTurnState, match: WordMatch) -> None:
        self._pending_step = None
        regenerated = False
        available = self.grid.selectable_word_count()
        if available < self.config.min_words_after_cascade:
            LOGGER.info("Only %d words available, regenerating grid", available)
            self._set_phase(Phase.REFILLING)
            regenerated = self.grid.ensure_minimum_words(
                self.config.min_words_after_cascade, self.config.regenerate_attempts
            )
            self._emit_grid()

        has_moves = self.grid.has_valid_moves()
        combo = state.combo + 1
        result = TurnResult(
            score_delta=match.score,
            moves_delta=1,
            words_found=state.words_found + 1,
            longest_word=match.word if len(match.word) > len(state.longest_word) else state.longest_word,
            combo=combo,
            best_combo=max(combo, state.best_combo),
            has_moves_left=has_moves,
            regenerated=regenerated,
            match=match,
        )

        ticket = self._ticket
        self._disarm_watchdog()
        self._ticket = None
        self.current_match = None

        if has_moves:
            self._set_phase(Phase.IDLE)
        else:
            result.game_over_reason = GameOverReason.NO_MOVES
            self._end_game(GameOverReason.NO_MOVES, state.score + match.score, state.moves + 1)

        if ticket is not None:
            ticket.phase = self.phase
            ticket.finish(result)

    # ------------------------------------------------------------------
    # Recovery
    # ------------------------------------------------------------------
    def _on_watchdog(self) -> None:
        self._watchdog = None
        if self.phase in SETTLED_PHASES and self._ticket is None:
            return
        LOGGER.warning("Turn watchdog fired in phase %s, forcing recovery", self.phase.value)
        self._recover("Turn timed out. Please try again.")

    def force_recover(self) -> None:
        """Manual escape hatch with the same effect as the watchdog."""

        LOGGER.warning("Forced recovery requested in phase %s", self.phase.value)
        self._recover("Recovered from a stuck turn.")

    def _recover(self, message: str) -> None:
        ticket = self._ticket
        self._cancel_sequence()
        self.grid.clear_marks()
        self.last_error = message
        if self.phase != Phase.GAME_OVER:
            self._phase_before_pause = None
            self._set_phase(Phase.IDLE)
        self._emit_grid()
        if self.callbacks.on_recover:
            self.callbacks.on_recover()
        if ticket is not None:
            ticket.recovered = True
            ticket.error = message
            ticket.phase = self.phase
            ticket.finish()

    def _cancel_sequence(self) -> None:
        if self._pending_step is not None:
            self._pending_step.cancel()
            self._pending_step = None
        self._disarm_watchdog()
        self._ticket = None
        self.current_match = None

    def _disarm_watchdog(self) -> None:
        if self._watchdog is not None:
            self._watchdog.cancel()
            self._watchdog = None

    # ------------------------------------------------------------------
    # Pause / resume
    # ------------------------------------------------------------------
    def pause(self) -> bool:
        if self.phase not in INTERACTIVE_PHASES:
            LOGGER.debug("Pause ignored in phase %s", self.phase.value)
            return False
        self._phase_before_pause = self.phase
        self._set_phase(Phase.PAUSED)
        return True

    def resume(self) -> bool:
        if self.phase != Phase.PAUSED:
            return False
        previous = self._phase_before_pause or Phase.IDLE
        self._phase_before_pause = None
        self._set_phase(previous)
        return True

    # ------------------------------------------------------------------
    # Countdown
    # ------------------------------------------------------------------
    def start_timer(self, state_provider: Callable[[], GameTurnState]) -> None:
        if self.config.time_limit is None:
            return
        if self._timer is not None:
            self._timer.cancel()
        self._state_provider = state_provider
        self.time_left = self.config.time_limit
        self._timer = self.scheduler.call_later(1.0, self._tick, "countdown")

    def _tick(self) -> None:
        self._timer = None
        if self.phase == Phase.GAME_OVER or self.time_left is None:
            return
        if self.phase != Phase.PAUSED:
            self.time_left -= 1
            if self.callbacks.on_time_tick:
                self.callbacks.on_time_tick(self.time_left)
            if self.time_left <= 0:
                LOGGER.info("Time is up")
                state = self._state_provider() if self._state_provider else GameTurnState()
                self._cancel_in_flight()
                self._end_game(GameOverReason.TIMEOUT, state.score, state.moves)
                return
        self._timer = self.scheduler.call_later(1.0, self._tick, "countdown")

    def _cancel_in_flight(self) -> None:
        ticket = self._ticket
        self._cancel_sequence()
        if ticket is not None:
            self.grid.clear_marks()
            self._emit_grid()
            ticket.error = "Time is up"
            ticket.finish()

    # ------------------------------------------------------------------
    # Game over
    # ------------------------------------------------------------------
    def _end_game(self, reason: GameOverReason, score: int, moves: int) -> None:
        LOGGER.info("Game over (%s) with score %d after %d moves", reason.value, score, moves)
        self.game_over_reason = reason
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._set_phase(Phase.GAME_OVER)
        if self.callbacks.on_game_over:
            self.callbacks.on_game_over(reason)
        if score > 0 and self.save_high_score is not None:
            self.scheduler.call_soon(lambda: self._persist(score, moves), "save-high-score")

    def _persist(self, score: int, moves: int) -> None:
        try:
            self.save_high_score(score, moves)
        except Exception as exc:
            LOGGER.warning("Failed to save high score %d: %s", score, exc)
