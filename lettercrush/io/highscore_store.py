"""Persistent high-score table.

Scores live in a single JSON document (``local_db/highscores.json`` by
default) holding the best ``MAX_ENTRIES`` results ordered by score.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from ..core.exceptions import PersistenceError
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_STORE_PATH = Path("local_db/highscores.json")
MAX_ENTRIES = 100


class HighScoreStore:
    """Keep the top scores as a JSON document."""

    def __init__(self, path: Path | str = DEFAULT_STORE_PATH, max_entries: int = MAX_ENTRIES) -> None:
        self.path = Path(path)
        self.max_entries = max_entries

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def save_high_score(self, score: int, moves: int) -> str:
        """Record a finished game and return the entry ID."""
        entry = {
            "id": self._new_id(),
            "score": int(score),
            "moves": int(moves),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        entries = self._load()
        entries.append(entry)
        entries.sort(key=lambda item: item["score"], reverse=True)
        kept = entries[: self.max_entries]
        self._write(kept)
        if entry not in kept:
            LOGGER.info("Score %d did not make the top %d", score, self.max_entries)
        else:
            LOGGER.info("High score saved: %s (%d points)", entry["id"], score)
        return entry["id"]

    def top_scores(self, limit: int = 10) -> List[dict]:
        return self._load()[:limit]

    def best_score(self) -> Optional[int]:
        entries = self._load()
        return entries[0]["score"] if entries else None

    def clear(self) -> None:
        self._write([])

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _load(self) -> List[dict]:
        if not self.path.exists():
            return []
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Cannot read high scores from {self.path}: {exc}") from exc
        entries = payload.get("entries", []) if isinstance(payload, dict) else []
        return sorted(entries, key=lambda item: item.get("score", 0), reverse=True)

    def _write(self, entries: List[dict]) -> None:
        doc = {"updated_at": datetime.now(timezone.utc).isoformat(), "entries": entries}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Cannot write high scores to {self.path}: {exc}") from exc

    @staticmethod
    def _new_id() -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
        short_uuid = uuid.uuid4().hex[:8]
        return f"{ts}_{short_uuid}"
