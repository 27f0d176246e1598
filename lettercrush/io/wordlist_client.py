"""HTTP client for remote word lists."""

from __future__ import annotations

import os
from typing import Any, List, Optional

import requests

from ..core.exceptions import DictionaryLoadError
from ..data.wordlists import normalize_words
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class WordListClient:
    """Fetches a flat word list, either plain text (one word per line) or a JSON array."""

    def __init__(
        self,
        url: Optional[str] = None,
        url_env: str = "LETTERCRUSH_WORDS_URL",
        timeout_seconds: float = 30.0,
    ) -> None:
        self.url = url or os.environ.get(url_env)
        self.url_env = url_env
        self.timeout_seconds = timeout_seconds

    def fetch(self, url: Optional[str] = None) -> List[str]:
        """Download and normalize the word list at ``url``."""
        target = url or self.url
        if not target:
            raise DictionaryLoadError(
                f"No word list URL given and {self.url_env} is not set"
            )
        try:
            response = requests.get(target, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DictionaryLoadError(f"Word list request failed: {exc}") from exc

        words = normalize_words(self._extract_lines(response))
        if not words:
            LOGGER.warning("Word list at %s contained no usable words", target)
            raise DictionaryLoadError(f"Word list at {target} is empty")
        LOGGER.info("Fetched %d words from %s", len(words), target)
        return words

    @staticmethod
    def _extract_lines(response: Any) -> List[str]:
        content_type = response.headers.get("Content-Type", "")
        if "json" in content_type:
            payload = response.json()
            if isinstance(payload, dict):
                payload = payload.get("words") or []
            return [str(item) for item in payload]
        return response.text.splitlines()
