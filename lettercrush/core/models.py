"""Data models shared by the grid, scorer and turn orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from .constants import Direction, GameOverReason, Phase

Position = Tuple[int, int]


@dataclass
class Tile:
    """A single lettered cell. Owned exclusively by the grid."""

    id: str
    letter: str
    row: int
    col: int
    is_selected: bool = False
    is_matched: bool = False
    selection_order: Optional[int] = None

    @property
    def position(self) -> Position:
        return (self.row, self.col)

    def moved_to(self, row: int, col: int) -> "Tile":
        return replace(self, row=row, col=col)


@dataclass
class WordMatch:
    """A word found on (or submitted from) the grid."""

    word: str
    positions: List[Position]
    direction: Direction
    score: int = 0


@dataclass(frozen=True)
class ScoreBreakdown:
    base: int
    length_bonus: int
    letter_bonus: int
    combo_multiplier: float
    total: int


@dataclass(frozen=True)
class GameTurnState:
    """Read-only snapshot of the caller's session counters."""

    score: int = 0
    moves: int = 0
    combo: int = 0
    words_found: int = 0
    longest_word: str = ""
    best_combo: int = 0
    strikes: int = 0


@dataclass
class TurnResult:
    """Deltas and final values produced by one processed submission."""

    score_delta: int = 0
    moves_delta: int = 0
    strikes_delta: int = 0
    words_found: int = 0
    longest_word: str = ""
    combo: int = 0
    best_combo: int = 0
    has_moves_left: bool = True
    regenerated: bool = False
    game_over_reason: Optional[GameOverReason] = None
    match: Optional[WordMatch] = None


@dataclass
class TurnTicket:
    """Handle returned for every submission.

    Rejected submissions are complete immediately; accepted ones complete once
    the staged sequence settles and ``result`` is filled in.
    """

    word: str
    accepted: bool
    error: Optional[str] = None
    phase: Phase = Phase.IDLE
    result: Optional[TurnResult] = None
    done: bool = False
    recovered: bool = False
    _listeners: list = field(default_factory=list, repr=False, compare=False)

    def add_done_callback(self, callback) -> None:
        if self.done:
            callback(self)
        else:
            self._listeners.append(callback)

    def finish(self, result: Optional[TurnResult] = None) -> None:
        if self.done:
            return
        if result is not None:
            self.result = result
        self.done = True
        listeners, self._listeners = self._listeners, []
        for callback in listeners:
            callback(self)
