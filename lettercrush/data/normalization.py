"""Word normalization shared by every word source."""

from __future__ import annotations

import re

POLISH_DIACRITICS = {
    "ą": "a",
    "ć": "c",
    "ę": "e",
    "ł": "l",
    "ń": "n",
    "ó": "o",
    "ś": "s",
    "ź": "z",
    "ż": "z",
    "Ą": "a",
    "Ć": "c",
    "Ę": "e",
    "Ł": "l",
    "Ń": "n",
    "Ó": "o",
    "Ś": "s",
    "Ź": "z",
    "Ż": "z",
}

WORD_RE = re.compile(r"[^A-Za-z]")


def clean_word(text: str) -> str:
    """Return a normalized uppercase ASCII representation of ``text``."""

    if not text:
        return ""
    transformed = []
    for char in text:
        if char in POLISH_DIACRITICS:
            transformed.append(POLISH_DIACRITICS[char])
        elif char.isalpha():
            transformed.append(char)
    ascii_word = WORD_RE.sub("", "".join(transformed))
    return ascii_word.upper()


__all__ = ["clean_word", "POLISH_DIACRITICS"]
