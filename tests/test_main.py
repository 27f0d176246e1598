import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from main import main


class MainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.root = Path(self._tmpdir.name)

    def run_main(self, *argv: str) -> int:
        with contextlib.redirect_stdout(io.StringIO()):
            return main(list(argv))

    def test_autoplay_writes_output(self) -> None:
        output = self.root / "game.json"
        code = self.run_main(
            "--seed", "3",
            "--autoplay", "2",
            "--highscores", str(self.root / "scores.json"),
            "--output", str(output),
            "--log-level", "WARNING",
        )
        self.assertEqual(code, 0)
        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(payload["grid"]["size"], 6)
        self.assertEqual(len(payload["grid"]["tiles"]), 6)
        self.assertGreaterEqual(payload["state"]["moves"], 0)

    def test_words_file(self) -> None:
        words = self.root / "words.txt"
        words.write_text("# pets\ncat\ndog\nowl\nrat\nbat\nhen\nant\nfox\n", encoding="utf-8")
        code = self.run_main("--seed", "5", "--words-file", str(words), "--log-level", "ERROR")
        self.assertEqual(code, 0)

    def test_missing_words_file_fails(self) -> None:
        code = self.run_main("--words-file", str(self.root / "nope.txt"), "--log-level", "CRITICAL")
        self.assertEqual(code, 1)

    def test_rejects_tiny_grid(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                self.run_main("--size", "2")


if __name__ == "__main__":
    unittest.main()
