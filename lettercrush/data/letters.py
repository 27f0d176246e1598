"""Per-language letter frequency and letter value tables."""

from __future__ import annotations

import random
from enum import Enum
from typing import Dict, Optional

from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class Language(str, Enum):
    ENGLISH = "en"
    POLISH = "pl"


ENGLISH_LETTER_WEIGHTS: Dict[str, float] = {
    "A": 8.2, "B": 1.5, "C": 2.8, "D": 4.3, "E": 12.7, "F": 2.2,
    "G": 2.0, "H": 6.1, "I": 7.0, "J": 0.15, "K": 0.77, "L": 4.0,
    "M": 2.4, "N": 6.7, "O": 7.5, "P": 1.9, "Q": 0.095, "R": 6.0,
    "S": 6.3, "T": 9.1, "U": 2.8, "V": 0.98, "W": 2.4, "X": 0.15,
    "Y": 2.0, "Z": 0.074,
}

# Scrabble-style values.
ENGLISH_LETTER_SCORES: Dict[str, int] = {
    "A": 1, "B": 3, "C": 3, "D": 2, "E": 1, "F": 4,
    "G": 2, "H": 4, "I": 1, "J": 8, "K": 5, "L": 1,
    "M": 3, "N": 1, "O": 1, "P": 3, "Q": 10, "R": 1,
    "S": 1, "T": 1, "U": 1, "V": 4, "W": 4, "X": 8,
    "Y": 4, "Z": 10,
}

# Simplified alphabet, diacritics folded into their base letters.
POLISH_LETTER_WEIGHTS: Dict[str, float] = {
    "A": 8.9, "B": 1.5, "C": 3.9, "D": 3.3, "E": 7.7, "F": 0.3,
    "G": 1.4, "H": 1.1, "I": 8.2, "J": 2.3, "K": 3.5, "L": 2.1,
    "M": 2.8, "N": 5.5, "O": 7.8, "P": 3.1, "R": 4.7, "S": 4.3,
    "T": 4.0, "U": 2.5, "W": 4.7, "Y": 3.8, "Z": 5.6,
}

POLISH_LETTER_SCORES: Dict[str, int] = {
    "A": 1, "B": 3, "C": 2, "D": 2, "E": 1, "F": 5,
    "G": 3, "H": 3, "I": 1, "J": 3, "K": 2, "L": 2,
    "M": 2, "N": 1, "O": 1, "P": 2, "R": 1, "S": 1,
    "T": 2, "U": 3, "W": 1, "Y": 2, "Z": 1,
}

_WEIGHTS = {Language.ENGLISH: ENGLISH_LETTER_WEIGHTS, Language.POLISH: POLISH_LETTER_WEIGHTS}
_SCORES = {Language.ENGLISH: ENGLISH_LETTER_SCORES, Language.POLISH: POLISH_LETTER_SCORES}
_MOST_FREQUENT = {Language.ENGLISH: "E", Language.POLISH: "A"}


def letter_weights(language: Language | str) -> Dict[str, float]:
    return _WEIGHTS[Language(language)]


def letter_scores(language: Language | str) -> Dict[str, int]:
    return _SCORES[Language(language)]


def most_frequent_letter(language: Language | str) -> str:
    return _MOST_FREQUENT[Language(language)]


class LetterSampler:
    """Draws random letters weighted by a language frequency table."""

    def __init__(self, language: Language | str = Language.ENGLISH, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        self.set_language(language)

    def set_language(self, language: Language | str) -> None:
        self.language = Language(language)
        self._letters = list(letter_weights(self.language).keys())
        self._weights = list(letter_weights(self.language).values())
        self._total = sum(self._weights)

    def draw(self) -> str:
        roll = self.rng.random() * self._total
        for letter, weight in zip(self._letters, self._weights):
            roll -= weight
            if roll <= 0:
                return letter
        # Floating point drift can leave a sliver of the roll unconsumed.
        fallback = most_frequent_letter(self.language)
        LOGGER.warning(
            "Weighted letter draw fell through (lang=%s); using '%s'",
            self.language.value,
            fallback,
        )
        return fallback
