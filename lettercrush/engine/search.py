"""Word search over a square letter matrix.

Two modes are supported:

- straight-line scans of every horizontal and vertical run of three or more
  letters, with overlap resolution that keeps the longest word per cell;
- freeform depth-first search from every cell in all eight directions, pruned
  as soon as the spelled string stops being a dictionary prefix.

All functions are pure: they read the matrix and never mutate it. The DFS
keeps its visited flags in a per-call list passed down the recursion.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Set

from ..core.constants import ALL_STEPS, Direction, MIN_WORD_LENGTH
from ..core.models import Position, WordMatch
from ..data.dictionary import WordDictionary
from .scoring import ScoreCalculator

LetterMatrix = Sequence[Sequence[str]]


def straight_line_words(
    letters: LetterMatrix,
    dictionary: WordDictionary,
    scorer: Optional[ScoreCalculator] = None,
) -> List[WordMatch]:
    """Return every valid horizontal and vertical word, overlaps included."""

    size = len(letters)
    matches: List[WordMatch] = []
    for row in range(size):
        for start in range(size - MIN_WORD_LENGTH + 1):
            for end in range(start + MIN_WORD_LENGTH - 1, size):
                word = "".join(letters[row][col] for col in range(start, end + 1))
                if dictionary.is_valid(word):
                    positions = [(row, col) for col in range(start, end + 1)]
                    matches.append(_match(word, positions, Direction.HORIZONTAL, scorer))
    for col in range(size):
        for start in range(size - MIN_WORD_LENGTH + 1):
            for end in range(start + MIN_WORD_LENGTH - 1, size):
                word = "".join(letters[row][col] for row in range(start, end + 1))
                if dictionary.is_valid(word):
                    positions = [(row, col) for row in range(start, end + 1)]
                    matches.append(_match(word, positions, Direction.VERTICAL, scorer))
    return matches


def resolve_overlaps(matches: Sequence[WordMatch]) -> List[WordMatch]:
    """Greedily keep the longest words, dropping any that reuse a kept cell."""

    ordered = sorted(matches, key=lambda match: len(match.word), reverse=True)
    used: Set[Position] = set()
    kept: List[WordMatch] = []
    for match in ordered:
        if any(position in used for position in match.positions):
            continue
        kept.append(match)
        used.update(match.positions)
    return kept


def find_all_words(
    letters: LetterMatrix,
    dictionary: WordDictionary,
    scorer: Optional[ScoreCalculator] = None,
) -> List[WordMatch]:
    return resolve_overlaps(straight_line_words(letters, dictionary, scorer))


def row_has_word(letters: LetterMatrix, dictionary: WordDictionary, row: int) -> bool:
    size = len(letters)
    line = "".join(letters[row])
    return _line_has_word(line, size, dictionary)


def column_has_word(letters: LetterMatrix, dictionary: WordDictionary, col: int) -> bool:
    size = len(letters)
    line = "".join(letters[row][col] for row in range(size))
    return _line_has_word(line, size, dictionary)


def _line_has_word(line: str, size: int, dictionary: WordDictionary) -> bool:
    for start in range(size - MIN_WORD_LENGTH + 1):
        for end in range(start + MIN_WORD_LENGTH, size + 1):
            if dictionary.is_valid(line[start:end]):
                return True
    return False


def freeform_words(
    letters: LetterMatrix,
    dictionary: WordDictionary,
    max_length: int = 12,
) -> Set[str]:
    """Return the distinct words spellable along 8-way adjacent paths."""

    found: Set[str] = set()

    def record(word: str, path: List[Position]) -> None:
        found.add(word)

    _walk_all(letters, dictionary, max_length, record)
    return found


def freeform_paths(
    letters: LetterMatrix,
    dictionary: WordDictionary,
    max_length: int = 8,
) -> List[WordMatch]:
    """Return every (word, path) pair; the same word may appear on many paths."""

    found: List[WordMatch] = []

    def record(word: str, path: List[Position]) -> None:
        found.append(WordMatch(word=word, positions=list(path), direction=Direction.FREEFORM))

    _walk_all(letters, dictionary, max_length, record)
    return found


def _walk_all(
    letters: LetterMatrix,
    dictionary: WordDictionary,
    max_length: int,
    record: Callable[[str, List[Position]], None],
) -> None:
    size = len(letters)
    visited = [[False] * size for _ in range(size)]
    for row in range(size):
        for col in range(size):
            visited[row][col] = True
            _walk(letters, dictionary, max_length, record, visited, row, col, letters[row][col], [(row, col)])
            visited[row][col] = False


def _walk(
    letters: LetterMatrix,
    dictionary: WordDictionary,
    max_length: int,
    record: Callable[[str, List[Position]], None],
    visited: List[List[bool]],
    row: int,
    col: int,
    spelled: str,
    path: List[Position],
) -> None:
    if len(spelled) >= MIN_WORD_LENGTH and dictionary.is_valid(spelled):
        record(spelled.upper(), path)
    if len(spelled) >= 2 and not dictionary.has_prefix(spelled):
        return
    if len(spelled) >= max_length:
        return

    size = len(letters)
    for dr, dc in ALL_STEPS:
        nr, nc = row + dr, col + dc
        if not (0 <= nr < size and 0 <= nc < size) or visited[nr][nc]:
            continue
        visited[nr][nc] = True
        path.append((nr, nc))
        _walk(letters, dictionary, max_length, record, visited, nr, nc, spelled + letters[nr][nc], path)
        path.pop()
        visited[nr][nc] = False


def _match(
    word: str,
    positions: List[Position],
    direction: Direction,
    scorer: Optional[ScoreCalculator],
) -> WordMatch:
    score = scorer.score_word(word).total if scorer is not None else 0
    return WordMatch(word=word, positions=positions, direction=direction, score=score)
