"""Shared constants and enumerations for the puzzle engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(str, Enum):
    """How the letters of a matched word are laid out on the grid."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    FREEFORM = "freeform"


class Phase(str, Enum):
    """Turn lifecycle phases. Exactly one is live per session."""

    IDLE = "idle"
    SELECTING = "selecting"
    VALIDATING = "validating"
    MATCHING = "matching"
    CASCADING = "cascading"
    REFILLING = "refilling"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


class GameOverReason(str, Enum):
    NO_MOVES = "no_moves"
    TIMEOUT = "timeout"
    STRIKES = "strikes"


# Phases from which the player may act (select, submit, pause).
INTERACTIVE_PHASES = frozenset({Phase.IDLE, Phase.SELECTING})
# Phases the watchdog treats as settled.
SETTLED_PHASES = frozenset({Phase.IDLE, Phase.PAUSED, Phase.GAME_OVER})

ALL_STEPS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)

DEFAULT_GRID_SIZE = 6
MIN_WORD_LENGTH = 3
DEFAULT_MIN_WORDS = 6


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

# User-facing reasons for actions attempted outside the interactive phases.
BLOCKED_REASONS = {
    Phase.VALIDATING: "Already checking word...",
    Phase.MATCHING: "Processing match...",
    Phase.CASCADING: "Tiles falling...",
    Phase.REFILLING: "Refilling grid...",
    Phase.PAUSED: "Game is paused",
    Phase.GAME_OVER: "Game is over",
}
