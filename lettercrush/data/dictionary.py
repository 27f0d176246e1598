"""Prefix-tree dictionary used for word validation and search pruning."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..core.constants import MIN_WORD_LENGTH
from ..utils.logger import get_logger
from .normalization import clean_word


LOGGER = get_logger(__name__)


@dataclass
class TrieNode:
    children: Dict[str, "TrieNode"] = field(default_factory=dict)
    is_word: bool = False


class WordDictionary:
    """Uppercase trie answering membership and prefix queries in O(length).

    ``load`` is the only mutator; lookups never touch the tree shape. Words
    shorter than the minimum length are dropped on insert, so prefixes of
    short entries only exist when a longer word shares them.
    """

    def __init__(self, words: Optional[Iterable[str]] = None, min_length: int = MIN_WORD_LENGTH) -> None:
        self.min_length = min_length
        self._root = TrieNode()
        self._word_count = 0
        if words is not None:
            self.load(words)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load(self, words: Iterable[str]) -> None:
        """Reset the tree and insert every word of at least ``min_length`` letters."""

        self._root = TrieNode()
        self._word_count = 0
        for word in words:
            self._insert(word)
        LOGGER.info("Loaded %d dictionary words", self._word_count)

    def _insert(self, word: str) -> None:
        surface = self.sanitize(word)
        if len(surface) < self.min_length:
            return
        node = self._root
        for char in surface:
            child = node.children.get(char)
            if child is None:
                child = TrieNode()
                node.children[char] = child
            node = child
        if not node.is_word:
            node.is_word = True
            self._word_count += 1

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @staticmethod
    def sanitize(text: str) -> str:
        return clean_word(text)

    def is_valid(self, word: str) -> bool:
        surface = self.sanitize(word)
        if len(surface) < self.min_length:
            return False
        node = self._find_node(surface)
        return node is not None and node.is_word

    def has_prefix(self, prefix: str) -> bool:
        return self._find_node(self.sanitize(prefix)) is not None

    def word_count(self) -> int:
        return self._word_count

    def words_with_prefix(self, prefix: str, max_results: int = 10) -> List[str]:
        """Return up to ``max_results`` complete words beginning with ``prefix``."""

        results: List[str] = []
        start = self.sanitize(prefix)
        node = self._find_node(start)
        if node is None:
            return results
        stack = [(node, start)]
        while stack and len(results) < max_results:
            current, spelled = stack.pop()
            if current.is_word:
                results.append(spelled)
            for char in sorted(current.children, reverse=True):
                stack.append((current.children[char], spelled + char))
        return results

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_valid(word)

    def __len__(self) -> int:
        return self._word_count

    def _find_node(self, text: str) -> Optional[TrieNode]:
        node = self._root
        for char in text:
            node = node.children.get(char)
            if node is None:
                return None
        return node
