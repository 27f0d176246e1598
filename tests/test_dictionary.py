import tempfile
import unittest
from pathlib import Path

from lettercrush.core.exceptions import DictionaryLoadError
from lettercrush.data.dictionary import WordDictionary
from lettercrush.data.normalization import clean_word
from lettercrush.data.wordlists import normalize_words, parse_words_file, starter_words, suitable_words


class DictionaryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.words = ["cat", "DOG", "Bird", "fish", "CATS", "dogs", "at", "a"]
        self.dictionary = WordDictionary(self.words)

    def test_clean_word_folds_polish_diacritics(self) -> None:
        self.assertEqual(clean_word("żółw"), "ZOLW")
        self.assertEqual(clean_word("Ćma-1"), "CMA")

    def test_loaded_words_are_valid_regardless_of_case(self) -> None:
        for word in self.words:
            if len(word) >= 3:
                self.assertTrue(self.dictionary.is_valid(word), word)
                self.assertTrue(self.dictionary.is_valid(word.lower()), word)
                self.assertTrue(self.dictionary.is_valid(word.upper()), word)

    def test_accented_and_hyphenated_entries_round_trip(self) -> None:
        entries = ["żółw", "kość", "ice-cream", "Łódź"]
        dictionary = WordDictionary(entries)
        self.assertEqual(dictionary.word_count(), 4)
        for word in entries:
            self.assertTrue(dictionary.is_valid(word), word)
            self.assertTrue(dictionary.is_valid(word.upper()), word)
            self.assertIn(word, dictionary)
        self.assertTrue(dictionary.is_valid("ZOLW"))
        self.assertTrue(dictionary.has_prefix("ż"))
        self.assertTrue(dictionary.has_prefix("ice-"))
        self.assertEqual(dictionary.words_with_prefix("ko"), ["KOSC"])

    def test_length_floor_uses_normalized_form(self) -> None:
        dictionary = WordDictionary(["a-b", "ox-en"])
        self.assertEqual(dictionary.word_count(), 1)
        self.assertFalse(dictionary.is_valid("a-b"))
        self.assertFalse(dictionary.is_valid("O-X"))
        self.assertTrue(dictionary.is_valid("ox-en"))

    def test_short_words_are_never_valid(self) -> None:
        self.assertFalse(self.dictionary.is_valid("at"))
        self.assertFalse(self.dictionary.is_valid("A"))
        self.assertFalse(self.dictionary.is_valid(""))
        self.assertEqual(self.dictionary.word_count(), 6)

    def test_prefix_is_not_a_word(self) -> None:
        self.assertTrue(self.dictionary.has_prefix("BI"))
        self.assertTrue(self.dictionary.has_prefix("bir"))
        self.assertFalse(self.dictionary.is_valid("BIR"))
        self.assertFalse(self.dictionary.has_prefix("BX"))

    def test_every_prefix_of_every_word_is_live(self) -> None:
        for word in ("CATS", "FISH", "DOGS", "BIRD"):
            for end in range(1, len(word) + 1):
                self.assertTrue(self.dictionary.has_prefix(word[:end]), word[:end])

    def test_has_prefix_is_stable_across_calls(self) -> None:
        results = {self.dictionary.has_prefix("CA") for _ in range(5)}
        self.assertEqual(results, {True})

    def test_duplicates_counted_once(self) -> None:
        dictionary = WordDictionary(["tree", "TREE", "Tree", "trees"])
        self.assertEqual(dictionary.word_count(), 2)
        self.assertEqual(len(dictionary), 2)

    def test_load_resets_previous_words(self) -> None:
        self.dictionary.load(["OWL"])
        self.assertFalse(self.dictionary.is_valid("CAT"))
        self.assertTrue(self.dictionary.is_valid("OWL"))
        self.assertEqual(self.dictionary.word_count(), 1)

    def test_words_with_prefix_in_alphabetical_order(self) -> None:
        dictionary = WordDictionary(["CART", "CAT", "CATS", "CAP", "DOG"])
        self.assertEqual(dictionary.words_with_prefix("CA"), ["CAP", "CART", "CAT", "CATS"])
        self.assertEqual(dictionary.words_with_prefix("ca", max_results=2), ["CAP", "CART"])
        self.assertEqual(dictionary.words_with_prefix("X"), [])

    def test_contains_operator(self) -> None:
        self.assertIn("cat", self.dictionary)
        self.assertNotIn("cow", self.dictionary)
        self.assertNotIn(42, self.dictionary)


class WordListTests(unittest.TestCase):
    def test_parse_words_file_skips_comments_and_blanks(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            sample = Path(tmpdir) / "words.txt"
            sample.write_text("# animals\ncat\n\nDog\ncat\n  owl  \n", encoding="utf-8")
            self.assertEqual(parse_words_file(sample), ["CAT", "DOG", "OWL"])

    def test_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(DictionaryLoadError):
                parse_words_file(Path(tmpdir) / "absent.txt")

    def test_normalize_words_folds_and_deduplicates(self) -> None:
        self.assertEqual(normalize_words(["kość", "KOSC", "dom"]), ["KOSC", "DOM"])

    def test_suitable_words_filters_by_length(self) -> None:
        self.assertEqual(suitable_words(["AT", "CAT", "CACTUS", "CATCHER"]), ["CAT", "CACTUS"])

    def test_starter_lists_are_clean_uppercase(self) -> None:
        for language in ("en", "pl"):
            words = starter_words(language)
            self.assertGreaterEqual(len(suitable_words(words)), 80 if language == "en" else 40)
            for word in words:
                self.assertEqual(word, clean_word(word))


if __name__ == "__main__":
    unittest.main()
