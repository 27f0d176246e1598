import unittest
from unittest.mock import MagicMock, patch

import requests

from lettercrush.core.exceptions import DictionaryLoadError
from lettercrush.io.wordlist_client import WordListClient


def fake_response(text="", payload=None, content_type="text/plain") -> MagicMock:
    response = MagicMock()
    response.headers = {"Content-Type": content_type}
    response.text = text
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


class WordListClientTests(unittest.TestCase):
    @patch("lettercrush.io.wordlist_client.requests.get")
    def test_plain_text_list(self, mock_get: MagicMock) -> None:
        mock_get.return_value = fake_response("cat\n# comment\ndog\n\ncat\n")
        words = WordListClient("https://example.org/words.txt").fetch()
        self.assertEqual(words, ["CAT", "DOG"])
        mock_get.assert_called_once_with("https://example.org/words.txt", timeout=30.0)

    @patch("lettercrush.io.wordlist_client.requests.get")
    def test_json_list(self, mock_get: MagicMock) -> None:
        mock_get.return_value = fake_response(payload={"words": ["kot", "pies"]}, content_type="application/json")
        self.assertEqual(WordListClient().fetch("https://example.org/pl.json"), ["KOT", "PIES"])

    @patch("lettercrush.io.wordlist_client.requests.get")
    def test_network_errors_are_wrapped(self, mock_get: MagicMock) -> None:
        mock_get.side_effect = requests.ConnectionError("offline")
        with self.assertRaises(DictionaryLoadError):
            WordListClient("https://example.org/words.txt").fetch()

    @patch("lettercrush.io.wordlist_client.requests.get")
    def test_empty_list_is_an_error(self, mock_get: MagicMock) -> None:
        mock_get.return_value = fake_response("# nothing here\n")
        with self.assertRaises(DictionaryLoadError):
            WordListClient("https://example.org/words.txt").fetch()

    def test_missing_url(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            with self.assertRaises(DictionaryLoadError):
                WordListClient().fetch()

    @patch("lettercrush.io.wordlist_client.requests.get")
    def test_url_from_environment(self, mock_get: MagicMock) -> None:
        mock_get.return_value = fake_response("owl\n")
        with patch.dict("os.environ", {"LETTERCRUSH_WORDS_URL": "https://example.org/env.txt"}):
            client = WordListClient()
        self.assertEqual(client.fetch(), ["OWL"])
        mock_get.assert_called_once_with("https://example.org/env.txt", timeout=30.0)


if __name__ == "__main__":
    unittest.main()
