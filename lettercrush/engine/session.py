"""Session-scoped game context.

A ``GameSession`` owns one grid, dictionary, scorer, scheduler and
orchestrator and the caller-side counters the orchestrator reports deltas
against. Nothing here is process-global, so sessions can run side by side.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional

from ..core.constants import BLOCKED_REASONS, Phase
from ..core.exceptions import PersistenceError
from ..core.models import GameTurnState, Position, TurnTicket, WordMatch
from ..data.dictionary import WordDictionary
from ..data.letters import Language
from ..data.wordlists import starter_words, suitable_words
from ..io.highscore_store import HighScoreStore
from ..utils.logger import get_logger
from .generator import GenerationResult, GeneratorConfig
from .grid import GridConfig, LetterGrid
from .orchestrator import PhaseCallbacks, TurnConfig, TurnOrchestrator
from .scheduler import TurnScheduler
from .scoring import ScoreCalculator, ScoringConfig


LOGGER = get_logger(__name__)


@dataclass
class GameConfig:
    language: Language = Language.ENGLISH
    seed: Optional[int] = None
    realtime: bool = False
    grid: GridConfig = field(default_factory=GridConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    turn: TurnConfig = field(default_factory=TurnConfig)

    def __post_init__(self) -> None:
        self.language = Language(self.language)
        self.grid.language = self.language
        self.scoring.language = self.language
        if self.seed is not None and self.grid.rng_seed is None:
            self.grid.rng_seed = self.seed


@dataclass
class BlockedAction:
    type: str
    reason: str
    timestamp: float = field(default_factory=time.time)


class GameSession:
    def __init__(
        self,
        config: GameConfig,
        dictionary: WordDictionary,
        word_source: Iterable[str],
        store: Optional[HighScoreStore] = None,
        callbacks: Optional[PhaseCallbacks] = None,
        scheduler: Optional[TurnScheduler] = None,
    ) -> None:
        self.config = config
        self.dictionary = dictionary
        self.store = store
        self.scorer = ScoreCalculator(config.scoring)
        self.grid = LetterGrid(
            config.grid,
            dictionary,
            list(word_source),
            scorer=self.scorer,
            generator_config=config.generator,
            rng=random.Random(config.grid.rng_seed),
        )
        self.scheduler = scheduler or TurnScheduler(realtime=config.realtime)
        self.orchestrator = TurnOrchestrator(
            self.grid,
            dictionary,
            self.scorer,
            self.scheduler,
            config=config.turn,
            callbacks=callbacks,
            save_high_score=store.save_high_score if store is not None else None,
        )

        self.state = GameTurnState()
        self.selection: List[Position] = []
        self.last_blocked: Optional[BlockedAction] = None
        self.last_error: Optional[str] = None
        self.high_score = self._load_best_score()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> GenerationResult:
        """Reset counters, build a fresh board and start the countdown."""

        self.orchestrator.reset()
        self.state = GameTurnState()
        self.selection = []
        self.last_blocked = None
        self.last_error = None
        result = self.grid.initialize(self.config.grid.min_words)
        self.orchestrator.start_timer(lambda: self.state)
        return result

    @property
    def phase(self) -> Phase:
        return self.orchestrator.phase

    @property
    def current_word(self) -> str:
        return "".join(self.grid.tile(row, col).letter for row, col in self.selection)

    @property
    def time_left(self) -> Optional[int]:
        return self.orchestrator.time_left

    def pause(self) -> bool:
        if not self.orchestrator.pause():
            self._block("pause", f"Cannot pause while {self.phase.value}")
            return False
        return True

    def resume(self) -> bool:
        return self.orchestrator.resume()

    def force_recover(self) -> None:
        self.orchestrator.force_recover()
        self.selection = []

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def toggle_selection(self, row: int, col: int) -> bool:
        """Extend, truncate or reject the selection chain. Returns ``True`` if it changed."""

        if not self.orchestrator.can_interact():
            self._block("selection", BLOCKED_REASONS.get(self.phase, "Please wait..."))
            return False
        self.last_blocked = None

        position = (row, col)
        if not self.grid.bounds.contains(row, col):
            LOGGER.warning("Ignoring selection outside the grid: %s", position)
            return False

        if position in self.selection:
            # Re-tapping drops that tile and everything chosen after it.
            self.selection = self.selection[: self.selection.index(position)]
        else:
            if self.selection and not self.grid.are_adjacent(self.selection[-1], position):
                self.last_error = "Letters must be adjacent"
                return False
            self.selection = self.selection + [position]

        self.last_error = None
        self.grid.mark_selection(self.selection)
        if self.selection:
            self.orchestrator.mark_selecting()
        else:
            self.orchestrator.mark_idle()
        return True

    def clear_selection(self) -> None:
        if not self.orchestrator.can_interact():
            return
        self.selection = []
        self.last_error = None
        self.grid.mark_selection([])
        self.orchestrator.mark_idle()

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    def submit_selection(self) -> TurnTicket:
        blocked = not self.orchestrator.can_interact() or self.orchestrator.busy
        ticket = self.orchestrator.process_word(self.state, self.current_word, list(self.selection))
        if ticket.accepted:
            self.selection = []
            self.last_error = None
        elif blocked:
            self._block("submission", ticket.error or "Please wait...")
        else:
            self.last_error = ticket.error
        ticket.add_done_callback(self._apply_ticket)
        return ticket

    def submit_word(self, match: WordMatch) -> TurnTicket:
        """Select ``match.positions`` as a chain and submit it."""

        self.clear_selection()
        for row, col in match.positions:
            self.toggle_selection(row, col)
        return self.submit_selection()

    def wait(self, ticket: TurnTicket, max_time: float = 30.0) -> bool:
        """Run scheduled steps until ``ticket`` finishes. Returns ``ticket.done``."""

        limit = self.scheduler.now + max_time
        while not ticket.done:
            due = self.scheduler.next_due()
            if due is None or due > limit:
                break
            self.scheduler.advance(due - self.scheduler.now)
        return ticket.done

    def _apply_ticket(self, ticket: TurnTicket) -> None:
        if ticket.recovered:
            self.selection = []
            self.last_error = ticket.error
            return
        result = ticket.result
        if result is None:
            return
        self.state = replace(
            self.state,
            score=self.state.score + result.score_delta,
            moves=self.state.moves + result.moves_delta,
            strikes=self.state.strikes + result.strikes_delta,
            combo=result.combo,
            words_found=result.words_found,
            longest_word=result.longest_word,
            best_combo=result.best_combo,
        )
        self.high_score = max(self.high_score, self.state.score)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def hints(self) -> List[WordMatch]:
        """Every selectable word path on the current board."""

        return self.grid.find_words_with_positions()

    def _block(self, action: str, reason: str) -> None:
        LOGGER.debug("Blocked %s: %s", action, reason)
        self.last_blocked = BlockedAction(type=action, reason=reason)

    def _load_best_score(self) -> int:
        if self.store is None:
            return 0
        try:
            return self.store.best_score() or 0
        except PersistenceError as exc:
            LOGGER.warning("Could not read best score: %s", exc)
            return 0

    def to_jsonable(self) -> dict:
        return {
            "phase": self.phase.value,
            "game_over_reason": self.orchestrator.game_over_reason.value if self.orchestrator.game_over_reason else None,
            "time_left": self.time_left,
            "high_score": self.high_score,
            "state": {
                "score": self.state.score,
                "moves": self.state.moves,
                "combo": self.state.combo,
                "words_found": self.state.words_found,
                "longest_word": self.state.longest_word,
                "best_combo": self.state.best_combo,
                "strikes": self.state.strikes,
            },
            "selection": [list(position) for position in self.selection],
            "grid": self.grid.to_jsonable(),
        }


def create_session(
    config: Optional[GameConfig] = None,
    words: Optional[Iterable[str]] = None,
    store: Optional[HighScoreStore] = None,
    callbacks: Optional[PhaseCallbacks] = None,
    scheduler: Optional[TurnScheduler] = None,
) -> GameSession:
    """Build a session from a word list, falling back to the starter list."""

    config = config or GameConfig()
    word_list = list(words) if words is not None else starter_words(config.language)
    dictionary = WordDictionary(word_list)
    word_source = suitable_words(dictionary.sanitize(word) for word in word_list)
    LOGGER.info(
        "Session dictionary has %d words, %d usable for board generation",
        dictionary.word_count(),
        len(word_source),
    )
    return GameSession(config, dictionary, word_source, store=store, callbacks=callbacks, scheduler=scheduler)
