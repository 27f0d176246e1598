import json
import tempfile
import unittest
from pathlib import Path

from lettercrush.core.exceptions import PersistenceError
from lettercrush.io.highscore_store import HighScoreStore


class HighScoreStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.path = Path(self._tmpdir.name) / "nested" / "scores.json"

    def test_empty_store(self) -> None:
        store = HighScoreStore(self.path)
        self.assertEqual(store.top_scores(), [])
        self.assertIsNone(store.best_score())

    def test_scores_are_ordered_and_persisted(self) -> None:
        store = HighScoreStore(self.path)
        store.save_high_score(300, 4)
        entry_id = store.save_high_score(900, 10)
        store.save_high_score(150, 2)

        reopened = HighScoreStore(self.path)
        self.assertEqual([e["score"] for e in reopened.top_scores()], [900, 300, 150])
        self.assertEqual(reopened.top_scores(limit=1)[0]["id"], entry_id)
        self.assertEqual(reopened.best_score(), 900)

    def test_only_top_entries_are_kept(self) -> None:
        store = HighScoreStore(self.path, max_entries=3)
        for score in (10, 50, 20, 40, 30):
            store.save_high_score(score, 1)
        document = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual([e["score"] for e in document["entries"]], [50, 40, 30])

    def test_clear(self) -> None:
        store = HighScoreStore(self.path)
        store.save_high_score(100, 1)
        store.clear()
        self.assertEqual(store.top_scores(), [])

    def test_corrupt_document_raises(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(PersistenceError):
            HighScoreStore(self.path).best_score()

    def test_unwritable_location_raises(self) -> None:
        blocker = Path(self._tmpdir.name) / "file"
        blocker.write_text("", encoding="utf-8")
        store = HighScoreStore(blocker / "scores.json")
        with self.assertRaises(PersistenceError):
            store.save_high_score(10, 1)


if __name__ == "__main__":
    unittest.main()
