"""Word source helpers: flat word lists from disk or the starter lists."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from ..core.exceptions import DictionaryLoadError
from ..utils.logger import get_logger
from .letters import Language
from .normalization import clean_word
from .starter_words import STARTER_WORDS


LOGGER = get_logger(__name__)


def parse_words_file(path: Path | str) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped."""

    source = Path(path)
    if not source.exists():
        raise DictionaryLoadError(f"Missing word list: {source}")
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DictionaryLoadError(f"Cannot read word list {source}: {exc}") from exc
    return normalize_words(text.splitlines())


def normalize_words(lines: Iterable[str]) -> List[str]:
    """Clean, uppercase and de-duplicate raw entries while keeping their order."""

    seen = set()
    words: List[str] = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        surface = clean_word(line)
        if not surface or surface in seen:
            continue
        seen.add(surface)
        words.append(surface)
    return words


def suitable_words(words: Iterable[str], min_length: int = 3, max_length: int = 6) -> List[str]:
    return [word for word in words if min_length <= len(word) <= max_length]


def starter_words(language: Language | str = Language.ENGLISH) -> List[str]:
    words = list(STARTER_WORDS[Language(language)])
    LOGGER.debug("Using %d starter words for '%s'", len(words), Language(language).value)
    return words
