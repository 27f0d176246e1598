"""Letter grid representation and positional algorithms."""

from __future__ import annotations

import copy
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from ..core.constants import (
    DEFAULT_GRID_SIZE,
    DEFAULT_MIN_WORDS,
    MIN_WORD_LENGTH,
    Bounds,
)
from ..core.models import Position, Tile, WordMatch
from ..data.dictionary import WordDictionary
from ..data.letters import Language, LetterSampler
from ..utils.logger import get_logger
from .generator import BoardGenerator, GenerationResult, GeneratorConfig
from .scoring import ScoreCalculator
from .search import (
    column_has_word,
    find_all_words,
    freeform_paths,
    freeform_words,
    row_has_word,
    straight_line_words,
)
from .validator import GridValidator


LOGGER = get_logger(__name__)

TileMatrix = List[List[Tile]]


@dataclass
class GridConfig:
    """Configuration values driving the grid engine."""

    size: int = DEFAULT_GRID_SIZE
    min_words: int = DEFAULT_MIN_WORDS
    language: Language = Language.ENGLISH
    rng_seed: Optional[int] = None
    max_freeform_length: int = 12
    max_positions_length: int = 8
    min_word_length: int = MIN_WORD_LENGTH

    def bounds(self) -> Bounds:
        return Bounds(rows=self.size, cols=self.size)


def are_adjacent(a: Position, b: Position) -> bool:
    """8-way adjacency: neighbours share an edge or a corner."""

    if a == b:
        return False
    return max(abs(a[0] - b[0]), abs(a[1] - b[1])) <= 1


def letters_of(tiles: Sequence[Sequence[Tile]]) -> List[List[str]]:
    return [[tile.letter for tile in row] for row in tiles]


def try_swap(
    tiles: Sequence[Sequence[Tile]],
    a: Position,
    b: Position,
    dictionary: WordDictionary,
    scorer: Optional[ScoreCalculator] = None,
) -> Optional[Tuple[TileMatrix, List[WordMatch]]]:
    """Swap two tiles on a copy of ``tiles``.

    Returns the new matrix with the straight-line matches it produces, or
    ``None`` when the cells are not adjacent or the swap forms no word. The
    input matrix is never modified.
    """

    size = len(tiles)
    bounds = Bounds(rows=size, cols=size)
    if not (bounds.contains(*a) and bounds.contains(*b)) or not are_adjacent(a, b):
        return None

    swapped = copy.deepcopy([list(row) for row in tiles])
    first = swapped[a[0]][a[1]]
    second = swapped[b[0]][b[1]]
    swapped[a[0]][a[1]] = second.moved_to(*a)
    swapped[b[0]][b[1]] = first.moved_to(*b)

    matches = find_all_words(letters_of(swapped), dictionary, scorer)
    if not matches:
        return None
    return swapped, matches


class LetterGrid:
    """Owns the tile matrix of one game session."""

    def __init__(
        self,
        config: GridConfig,
        dictionary: WordDictionary,
        word_source: Sequence[str],
        scorer: Optional[ScoreCalculator] = None,
        generator_config: Optional[GeneratorConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        config.language = Language(config.language)
        self.config = config
        self.size = config.size
        self.bounds = config.bounds()
        self.dictionary = dictionary
        self.word_source = list(word_source)
        self.scorer = scorer
        self.generator_config = generator_config or GeneratorConfig()
        self.rng = rng or random.Random(config.rng_seed)
        self.sampler = LetterSampler(config.language, self.rng)
        self.validator = GridValidator(self.size)
        self._next_id = 0
        self.tiles: TileMatrix = self._random_tiles()

    # ------------------------------------------------------------------
    # Board generation
    # ------------------------------------------------------------------
    def initialize(self, min_words: Optional[int] = None) -> GenerationResult:
        target = self.config.min_words if min_words is None else min_words
        generator = BoardGenerator(
            self.size,
            self.word_source,
            self.dictionary,
            self.sampler,
            config=self.generator_config,
            rng=self.rng,
        )
        result = generator.generate(target)
        self.tiles = self._tiles_from_letters(result.letters)
        self.validator.check(self.tiles)
        LOGGER.info(
            "Initialized %dx%d board via %s with %d straight-line words",
            self.size,
            self.size,
            result.strategy,
            result.found_words,
        )
        return result

    def regenerate(self) -> None:
        """Replace every tile with a fresh random letter."""

        self.tiles = self._random_tiles()

    def set_language(self, language: Language | str) -> None:
        self.config.language = Language(language)
        self.sampler.set_language(language)

    def set_letters(self, rows: Sequence[Sequence[str]]) -> None:
        """Load a fixed board, one string (or letter list) per row."""

        letters = [[letter.upper() for letter in row] for row in rows]
        tiles = self._tiles_from_letters(letters)
        self.validator.check(tiles)
        self.tiles = tiles

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def tile(self, row: int, col: int) -> Tile:
        return self.tiles[row][col]

    def letters(self) -> List[List[str]]:
        return letters_of(self.tiles)

    def clone_tiles(self) -> TileMatrix:
        return copy.deepcopy(self.tiles)

    @staticmethod
    def are_adjacent(a: Position, b: Position) -> bool:
        return are_adjacent(a, b)

    def find_all_words(self) -> List[WordMatch]:
        return find_all_words(self.letters(), self.dictionary, self.scorer)

    def find_straight_line_words(self) -> List[WordMatch]:
        return straight_line_words(self.letters(), self.dictionary, self.scorer)

    def find_all_possible_words(self) -> Set[str]:
        return freeform_words(self.letters(), self.dictionary, self.config.max_freeform_length)

    def find_words_with_positions(self) -> List[WordMatch]:
        return freeform_paths(self.letters(), self.dictionary, self.config.max_positions_length)

    def selectable_word_count(self) -> int:
        return len(self.find_all_possible_words())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def try_swap(self, a: Position, b: Position) -> List[WordMatch]:
        """Commit the swap only if it forms at least one word."""

        outcome = try_swap(self.tiles, a, b, self.dictionary, self.scorer)
        if outcome is None:
            LOGGER.debug("Swap %s <-> %s rejected", a, b)
            return []
        self.tiles, matches = outcome
        return matches

    def clear_selected_positions(self, positions: Sequence[Position]) -> int:
        """Mark the given cells matched. Returns how many were marked."""

        updated = copy.deepcopy(self.tiles)
        marked = 0
        for row, col in positions:
            if not self.bounds.contains(row, col):
                LOGGER.warning("Skipping out-of-bounds position (%s, %s)", row, col)
                continue
            tile = updated[row][col]
            tile.is_matched = True
            tile.is_selected = False
            tile.selection_order = None
            marked += 1
        self.tiles = updated
        return marked

    def mark_selection(self, positions: Sequence[Position]) -> None:
        """Flag ``positions`` as the current selection chain, 1-based order."""

        order = {position: index for index, position in enumerate(positions, start=1)}
        for row in self.tiles:
            for tile in row:
                tile.selection_order = order.get(tile.position)
                tile.is_selected = tile.selection_order is not None

    def clear_marks(self) -> None:
        """Drop any lingering selection or match flags."""

        for row in self.tiles:
            for tile in row:
                tile.is_selected = False
                tile.is_matched = False
                tile.selection_order = None

    def apply_gravity(self) -> List[Position]:
        """Drop surviving tiles down each column and refill from the top.

        Returns every position whose tile changed, moved or newly created.
        """

        updated: TileMatrix = [[None] * self.size for _ in range(self.size)]  # type: ignore[list-item]
        changed: List[Position] = []
        for col in range(self.size):
            survivors = [self.tiles[row][col] for row in range(self.size) if not self.tiles[row][col].is_matched]
            vacated = self.size - len(survivors)
            for offset, tile in enumerate(survivors):
                row = vacated + offset
                if tile.row != row:
                    changed.append((row, col))
                updated[row][col] = tile.moved_to(row, col)
            for row in range(vacated):
                updated[row][col] = self._new_tile(row, col)
                changed.append((row, col))

        self.validator.check(updated)
        self.tiles = updated
        changed.sort()
        return changed

    def ensure_minimum_words(self, min_words: int = DEFAULT_MIN_WORDS, max_attempts: int = 50) -> bool:
        """Regenerate the whole board until enough words are selectable.

        Returns ``True`` when the board was regenerated.
        """

        count = self.selectable_word_count()
        if count >= min_words:
            return False

        LOGGER.info("Only %d selectable words (< %d), regenerating board", count, min_words)
        for attempt in range(1, max_attempts + 1):
            self.regenerate()
            count = self.selectable_word_count()
            if count >= min_words:
                LOGGER.info("Regenerated board with %d words after %d attempts", count, attempt)
                return True
        LOGGER.warning(
            "Board still has %d selectable words after %d regenerations", count, max_attempts
        )
        return True

    def has_valid_moves(self) -> bool:
        """True if some orthogonal swap would create a straight-line word."""

        letters = self.letters()
        for row in range(self.size):
            for col in range(self.size):
                for dr, dc in ((0, 1), (1, 0)):
                    nr, nc = row + dr, col + dc
                    if not self.bounds.contains(nr, nc):
                        continue
                    letters[row][col], letters[nr][nc] = letters[nr][nc], letters[row][col]
                    found = self._lines_have_word(letters, {row, nr}, {col, nc})
                    letters[row][col], letters[nr][nc] = letters[nr][nc], letters[row][col]
                    if found:
                        return True
        return False

    def _lines_have_word(self, letters: List[List[str]], rows: Set[int], cols: Set[int]) -> bool:
        return any(row_has_word(letters, self.dictionary, r) for r in rows) or any(
            column_has_word(letters, self.dictionary, c) for c in cols
        )

    # ------------------------------------------------------------------
    # Tile factories
    # ------------------------------------------------------------------
    def _new_tile(self, row: int, col: int, letter: Optional[str] = None) -> Tile:
        self._next_id += 1
        return Tile(id=f"tile-{self._next_id}", letter=self.sampler.draw() if letter is None else letter, row=row, col=col)

    def _random_tiles(self) -> TileMatrix:
        return [[self._new_tile(r, c) for c in range(self.size)] for r in range(self.size)]

    def _tiles_from_letters(self, letters: Sequence[Sequence[str]]) -> TileMatrix:
        return [[self._new_tile(r, c, letter) for c, letter in enumerate(row)] for r, row in enumerate(letters)]

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_jsonable(self) -> dict:
        return {
            "size": self.size,
            "language": self.config.language.value,
            "tiles": [
                [
                    {
                        "id": tile.id,
                        "letter": tile.letter,
                        "row": tile.row,
                        "col": tile.col,
                        "is_selected": tile.is_selected,
                        "is_matched": tile.is_matched,
                        "selection_order": tile.selection_order,
                    }
                    for tile in row
                ]
                for row in self.tiles
            ],
        }
