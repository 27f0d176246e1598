"""Starting board generation.

Layered, bounded strategy:
  1. Crossword construction: interlock dictionary words through shared letters.
  2. Multi-phase fallback: anchors, crossings, extra words, random fill.
  3. Systematic fallback: short words on fixed non-overlapping coordinates.

Every layer has an attempt budget and a wall-clock budget. When no layer
reaches the word floor the best board seen is accepted.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple

from ..core.constants import Direction, MIN_WORD_LENGTH
from ..core.exceptions import PlacementError
from ..data.dictionary import WordDictionary
from ..data.letters import LetterSampler
from ..utils.logger import get_logger
from .search import find_all_words


LOGGER = get_logger(__name__)

PlacementCells = List[List[Optional[str]]]


@dataclass
class GeneratorConfig:
    pool_size: int = 300
    crossword_attempts: int = 10
    crossword_iterations: int = 20
    candidates_per_iteration: int = 100
    intersections_checked: int = 20
    placements_tried: int = 5
    consecutive_failures: int = 3
    fallback_attempts: int = 50
    extra_word_target: int = 8
    position_attempts: int = 10
    systematic_attempts: int = 20
    time_budget_seconds: float = 2.0


@dataclass
class CrosswordPlacement:
    word: str
    start_row: int
    start_col: int
    direction: Direction

    @property
    def cells(self) -> List[Tuple[int, int]]:
        dr, dc = _step(self.direction)
        return [(self.start_row + dr * i, self.start_col + dc * i) for i in range(len(self.word))]


@dataclass
class CrosswordState:
    cells: PlacementCells
    placements: List[CrosswordPlacement] = field(default_factory=list)
    used_words: Set[str] = field(default_factory=set)


@dataclass
class Intersection:
    row: int
    col: int
    direction: Direction
    word_index: int
    score: float = 0.0


@dataclass
class GenerationResult:
    letters: List[List[str]]
    strategy: str
    found_words: int
    placements: List[CrosswordPlacement] = field(default_factory=list)


class BoardGenerator:
    """Builds a fully lettered board with a soft minimum-word guarantee."""

    def __init__(
        self,
        size: int,
        word_source: Sequence[str],
        dictionary: WordDictionary,
        sampler: LetterSampler,
        config: Optional[GeneratorConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.size = size
        self.word_source = [word.upper() for word in word_source]
        self.dictionary = dictionary
        self.sampler = sampler
        self.config = config or GeneratorConfig()
        self.rng = rng or random.Random()
        self._best: Optional[GenerationResult] = None

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, min_words: int) -> GenerationResult:
        self._best = None

        state = self._generate_crossword(min_words)
        if len(state.placements) >= min_words:
            result = self._finish(state.cells, "crossword", state.placements)
            LOGGER.info(
                "Crossword placed %d words, %d findable",
                len(state.placements),
                result.found_words,
            )
            if result.found_words >= min_words:
                return result

        LOGGER.info(
            "Crossword insufficient (%d words placed), using multi-phase fallback",
            len(state.placements),
        )
        result = self._multi_phase_fallback(min_words)
        if result is not None:
            return result

        LOGGER.info("Random attempts exhausted, using systematic fallback")
        result = self._systematic_fallback(min_words)
        if result is not None:
            return result

        best = self._best
        if best is None:
            raise PlacementError("Generation attempt budget is zero; no board was built")
        LOGGER.warning(
            "Could not guarantee %d words; accepting %s board with %d",
            min_words,
            best.strategy,
            best.found_words,
        )
        return best

    # ------------------------------------------------------------------
    # Layer 1: crossword construction
    # ------------------------------------------------------------------
    def _generate_crossword(self, min_words: int) -> CrosswordState:
        suitable = [w for w in self.word_source if MIN_WORD_LENGTH <= len(w) <= min(6, self.size)]
        self.rng.shuffle(suitable)
        pool = suitable[: self.config.pool_size]

        deadline = time.monotonic() + self.config.time_budget_seconds
        best: Optional[CrosswordState] = None
        for attempt in range(1, self.config.crossword_attempts + 1):
            state = self._build_crossword(pool, min_words)
            if len(state.placements) >= min_words:
                LOGGER.debug("Crossword reached %d words in %d attempts", len(state.placements), attempt)
                return state
            if best is None or len(state.placements) > len(best.placements):
                best = state
            if len(best.placements) >= min_words - 1:
                LOGGER.debug("Crossword stopping early with %d words", len(best.placements))
                break
            if time.monotonic() > deadline:
                LOGGER.warning("Crossword construction time-boxed after %d attempts", attempt)
                break
        return best or self._empty_state()

    def _build_crossword(self, pool: Sequence[str], min_words: int) -> CrosswordState:
        state = self._empty_state()
        candidates = self._shuffle_within_lengths(pool)

        first = self._select_first_word(candidates)
        if first is None:
            return state
        self._place(state, first, self.size // 2, (self.size - len(first)) // 2, Direction.HORIZONTAL)

        iterations = 0
        failures = 0
        while len(state.placements) < min_words and iterations < self.config.crossword_iterations:
            iterations += 1
            placed = False
            tried = 0
            for candidate in candidates:
                if tried >= self.config.candidates_per_iteration:
                    break
                if candidate in state.used_words or len(candidate) > self.size:
                    continue
                tried += 1

                scored = []
                for intersection in self._find_intersections(candidate, state)[: self.config.intersections_checked]:
                    intersection.score = self._score_placement(candidate, intersection, state)
                    if intersection.score > -100:
                        scored.append(intersection)
                scored.sort(key=lambda item: item.score, reverse=True)

                for intersection in scored[: self.config.placements_tried]:
                    if self._can_place_crossing(candidate, intersection.row, intersection.col, intersection.direction, state):
                        self._place(state, candidate, intersection.row, intersection.col, intersection.direction)
                        placed = True
                        break
                if placed:
                    break

            if placed:
                failures = 0
                continue
            failures += 1
            if failures >= self.config.consecutive_failures:
                break
        return state

    def _select_first_word(self, candidates: Sequence[str]) -> Optional[str]:
        for length in (6, 5):
            group = [w for w in candidates if len(w) == length and length <= self.size]
            if group:
                return self.rng.choice(group)
        fitting = [w for w in candidates if len(w) <= self.size]
        return self.rng.choice(fitting) if fitting else None

    def _find_intersections(self, candidate: str, state: CrosswordState) -> List[Intersection]:
        found: List[Intersection] = []
        for placed in state.placements:
            cross = Direction.VERTICAL if placed.direction == Direction.HORIZONTAL else Direction.HORIZONTAL
            for ci, letter in enumerate(candidate):
                for pi, placed_letter in enumerate(placed.word):
                    if letter != placed_letter:
                        continue
                    if placed.direction == Direction.HORIZONTAL:
                        row, col = placed.start_row - ci, placed.start_col + pi
                    else:
                        row, col = placed.start_row + pi, placed.start_col - ci
                    found.append(Intersection(row=row, col=col, direction=cross, word_index=ci))
        self.rng.shuffle(found)
        return found

    def _can_place_crossing(
        self, word: str, row: int, col: int, direction: Direction, state: CrosswordState
    ) -> bool:
        if not self._fits(word, row, col, direction):
            return False
        dr, dc = _step(direction)
        cells = state.cells
        for index, letter in enumerate(word):
            r, c = row + dr * index, col + dc * index
            existing = cells[r][c]
            if existing is not None and existing != letter:
                return False
            if existing is None and not self._side_cells_empty(cells, r, c, direction):
                return False

        before = (row - dr, col - dc)
        after = (row + dr * len(word), col + dc * len(word))
        for r, c in (before, after):
            if 0 <= r < self.size and 0 <= c < self.size and cells[r][c] is not None:
                return False
        return True

    def _side_cells_empty(self, cells: PlacementCells, row: int, col: int, direction: Direction) -> bool:
        # A fresh letter may not sit beside another word running in parallel.
        sides = ((-1, 0), (1, 0)) if direction == Direction.HORIZONTAL else ((0, -1), (0, 1))
        for dr, dc in sides:
            r, c = row + dr, col + dc
            if 0 <= r < self.size and 0 <= c < self.size and cells[r][c] is not None:
                return False
        return True

    def _score_placement(self, word: str, intersection: Intersection, state: CrosswordState) -> float:
        row, col, direction = intersection.row, intersection.col, intersection.direction
        if not self._can_place_crossing(word, row, col, direction, state):
            return -1000.0

        score = 0.0
        dr, dc = _step(direction)
        for index, letter in enumerate(word):
            if state.cells[row + dr * index][col + dc * index] == letter:
                score += 10

        center = (self.size - 1) / 2
        end_row = row + dr * (len(word) - 1)
        end_col = col + dc * (len(word) - 1)
        distance = abs((row + end_row) / 2 - center) + abs((col + end_col) / 2 - center)
        score += max(0.0, 5 - distance)

        if row in (0, self.size - 1) or col in (0, self.size - 1):
            score -= 3
        return score

    def _place(self, state: CrosswordState, word: str, row: int, col: int, direction: Direction) -> None:
        placement = CrosswordPlacement(word=word, start_row=row, start_col=col, direction=direction)
        for (r, c), letter in zip(placement.cells, word):
            state.cells[r][c] = letter
        state.placements.append(placement)
        state.used_words.add(word)

    def _shuffle_within_lengths(self, words: Sequence[str]) -> List[str]:
        """Longest words first, random order inside each length group."""

        groups = {}
        for word in words:
            groups.setdefault(len(word), []).append(word)
        ordered: List[str] = []
        for length in sorted(groups, reverse=True):
            group = groups[length]
            self.rng.shuffle(group)
            ordered.extend(group)
        return ordered

    def _empty_state(self) -> CrosswordState:
        return CrosswordState(cells=self._empty_cells())

    # ------------------------------------------------------------------
    # Layer 2: multi-phase fallback
    # ------------------------------------------------------------------
    def _multi_phase_fallback(self, min_words: int) -> Optional[GenerationResult]:
        seedable = [w for w in self.word_source if MIN_WORD_LENGTH <= len(w) <= min(5, self.size)]
        four_letter = [w for w in seedable if len(w) == 4]

        deadline = time.monotonic() + self.config.time_budget_seconds
        for attempt in range(1, self.config.fallback_attempts + 1):
            cells = self._empty_cells()
            anchors = self._place_anchor_words(cells, self._sample(four_letter, 3))
            if anchors:
                self._place_crossing_words(cells, anchors, seedable)
            self._place_random_words(cells, seedable, self.config.extra_word_target)

            result = self._finish(cells, "multi_phase", anchors)
            if result.found_words >= min_words:
                LOGGER.info("Multi-phase fallback seeded %d words in %d attempts", result.found_words, attempt)
                return result
            if time.monotonic() > deadline:
                LOGGER.warning("Multi-phase fallback time-boxed after %d attempts", attempt)
                break
        return None

    def _anchor_rows(self) -> List[int]:
        return sorted({min(self.size - 1, (2 * i + 1) * self.size // 6) for i in range(3)})

    def _place_anchor_words(self, cells: PlacementCells, words: Sequence[str]) -> List[CrosswordPlacement]:
        placed: List[CrosswordPlacement] = []
        for word, row in zip(words, self._anchor_rows()):
            for col in range(self.size - len(word) + 1):
                try:
                    placed.append(self._commit(cells, word, row, col, Direction.HORIZONTAL))
                    break
                except PlacementError:
                    continue
        return placed

    def _place_crossing_words(
        self,
        cells: PlacementCells,
        anchors: Sequence[CrosswordPlacement],
        candidates: Sequence[str],
    ) -> List[CrosswordPlacement]:
        used = {anchor.word for anchor in anchors}
        placed: List[CrosswordPlacement] = []
        for anchor in anchors:
            options = [
                (word, ci, pi)
                for word in candidates
                if word not in used
                for pi, anchor_letter in enumerate(anchor.word)
                for ci, letter in enumerate(word)
                if letter == anchor_letter
            ]
            self.rng.shuffle(options)
            for word, ci, pi in options:
                if word in used:
                    continue
                row, col = anchor.start_row - ci, anchor.start_col + pi
                if row < 0:
                    continue
                try:
                    placed.append(self._commit(cells, word, row, col, Direction.VERTICAL))
                except PlacementError:
                    continue
                used.add(word)
                break
        return placed

    def _place_random_words(self, cells: PlacementCells, words: Sequence[str], target: int) -> int:
        shuffled = list(words)
        self.rng.shuffle(shuffled)
        horizontal_target = (target + 1) // 2
        placed = 0
        index = 0
        for direction, goal in ((Direction.HORIZONTAL, horizontal_target), (Direction.VERTICAL, target)):
            while placed < goal and index < len(shuffled):
                word = shuffled[index]
                index += 1
                if len(word) > self.size:
                    continue
                for _ in range(self.config.position_attempts):
                    line = self.rng.randrange(self.size)
                    offset = self.rng.randrange(self.size - len(word) + 1)
                    row, col = (line, offset) if direction == Direction.HORIZONTAL else (offset, line)
                    try:
                        self._commit(cells, word, row, col, direction)
                    except PlacementError:
                        continue
                    placed += 1
                    break
        return placed

    # ------------------------------------------------------------------
    # Layer 3: systematic fallback
    # ------------------------------------------------------------------
    def _systematic_positions(self) -> List[Tuple[int, int, Direction]]:
        positions: List[Tuple[int, int, Direction]] = []
        for row in range(0, self.size, 2):
            for col in range(0, self.size - 2, 3):
                positions.append((row, col, Direction.HORIZONTAL))
        for row in range(0, self.size - 2, 3):
            for col in range(0, self.size - 2, 3):
                positions.append((row, col, Direction.VERTICAL))
        return positions

    def _systematic_fallback(self, min_words: int) -> Optional[GenerationResult]:
        three_letter = [w for w in self.word_source if len(w) == 3]
        positions = self._systematic_positions()

        deadline = time.monotonic() + self.config.time_budget_seconds
        for attempt in range(1, self.config.systematic_attempts + 1):
            cells = self._empty_cells()
            words = list(three_letter)
            self.rng.shuffle(words)
            placements: List[CrosswordPlacement] = []
            for word, (row, col, direction) in zip(words, positions):
                try:
                    placements.append(self._commit(cells, word, row, col, direction))
                except PlacementError:
                    continue

            result = self._finish(cells, "systematic", placements)
            if result.found_words >= min_words:
                LOGGER.info("Systematic fallback succeeded with %d words in %d attempts", result.found_words, attempt)
                return result
            if time.monotonic() > deadline:
                LOGGER.warning("Systematic fallback time-boxed after %d attempts", attempt)
                break
        return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _commit(self, cells: PlacementCells, word: str, row: int, col: int, direction: Direction) -> CrosswordPlacement:
        """Write ``word`` if every cell is empty or already holds the same letter."""

        if not self._fits(word, row, col, direction):
            raise PlacementError(f"'{word}' does not fit at {(row, col)}")
        placement = CrosswordPlacement(word=word, start_row=row, start_col=col, direction=direction)
        for (r, c), letter in zip(placement.cells, word):
            if cells[r][c] is not None and cells[r][c] != letter:
                raise PlacementError(f"Letter conflict for '{word}' at {(r, c)}")
        for (r, c), letter in zip(placement.cells, word):
            cells[r][c] = letter
        return placement

    def _fits(self, word: str, row: int, col: int, direction: Direction) -> bool:
        if row < 0 or col < 0:
            return False
        if direction == Direction.HORIZONTAL:
            return row < self.size and col + len(word) <= self.size
        return col < self.size and row + len(word) <= self.size

    def _finish(
        self,
        cells: PlacementCells,
        strategy: str,
        placements: Sequence[CrosswordPlacement],
    ) -> GenerationResult:
        letters = [[cell if cell is not None else self.sampler.draw() for cell in row] for row in cells]
        found = len(find_all_words(letters, self.dictionary))
        result = GenerationResult(letters=letters, strategy=strategy, found_words=found, placements=list(placements))
        if self._best is None or found > self._best.found_words:
            self._best = result
        return result

    def _sample(self, words: Sequence[str], count: int) -> List[str]:
        return self.rng.sample(list(words), min(count, len(words)))

    def _empty_cells(self) -> PlacementCells:
        return [[None] * self.size for _ in range(self.size)]


def _step(direction: Direction) -> Tuple[int, int]:
    return (0, 1) if direction == Direction.HORIZONTAL else (1, 0)
