"""Tile invariant checks for a letter grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Set

from ..core.exceptions import GridIntegrityError
from ..core.models import Tile
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

TileMatrix = Sequence[Sequence[Tile]]


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Verifies that every cell holds exactly one well-formed tile."""

    def __init__(self, size: int) -> None:
        self.size = size

    def validate(self, tiles: TileMatrix) -> ValidationResult:
        try:
            self.check(tiles)
        except GridIntegrityError as exc:
            LOGGER.error("Grid integrity check failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def check(self, tiles: TileMatrix) -> None:
        """Raise ``GridIntegrityError`` on the first violated rule."""

        self._check_shape(tiles)
        self._check_coordinates(tiles)
        self._check_unique_ids(tiles)
        self._check_letters(tiles)

    def _check_shape(self, tiles: TileMatrix) -> None:
        if len(tiles) != self.size:
            raise GridIntegrityError(f"Expected {self.size} rows, found {len(tiles)}")
        for r, row in enumerate(tiles):
            if len(row) != self.size:
                raise GridIntegrityError(f"Row {r} has {len(row)} cells, expected {self.size}")
            for c, tile in enumerate(row):
                if not isinstance(tile, Tile):
                    raise GridIntegrityError(f"Cell ({r},{c}) holds no tile")

    def _check_coordinates(self, tiles: TileMatrix) -> None:
        for r, row in enumerate(tiles):
            for c, tile in enumerate(row):
                if tile.position != (r, c):
                    raise GridIntegrityError(
                        f"Tile {tile.id} at ({r},{c}) claims position {tile.position}"
                    )

    def _check_unique_ids(self, tiles: TileMatrix) -> None:
        seen: Set[str] = set()
        for row in tiles:
            for tile in row:
                if tile.id in seen:
                    raise GridIntegrityError(f"Tile id {tile.id} occupies more than one cell")
                seen.add(tile.id)

    def _check_letters(self, tiles: TileMatrix) -> None:
        for r, row in enumerate(tiles):
            for c, tile in enumerate(row):
                letter = tile.letter
                if len(letter) != 1 or not letter.isalpha() or not letter.isupper():
                    raise GridIntegrityError(f"Invalid letter '{letter}' at ({r},{c})")
