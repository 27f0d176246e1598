import random
import unittest

from lettercrush.core.constants import Direction
from lettercrush.core.exceptions import GridIntegrityError
from lettercrush.data.dictionary import WordDictionary
from lettercrush.engine.grid import GridConfig, LetterGrid, try_swap
from lettercrush.engine.scoring import ScoreCalculator
from lettercrush.engine.search import freeform_words

WORDS = ["CAT", "DOG", "BIRD", "FISH", "CATS", "DOGS"]
BLANK = "ZZZZZZ"


def build_grid(rows, words=WORDS, scorer=None) -> LetterGrid:
    dictionary = WordDictionary(words)
    grid = LetterGrid(GridConfig(size=6), dictionary, [], scorer=scorer, rng=random.Random(11))
    grid.set_letters(list(rows) + [BLANK] * (6 - len(rows)))
    return grid


class StraightLineSearchTests(unittest.TestCase):
    def test_single_horizontal_word(self) -> None:
        grid = build_grid(["CATZZZ"])
        matches = grid.find_all_words()
        self.assertEqual(len(matches), 1)
        self.assertEqual(matches[0].word, "CAT")
        self.assertEqual(matches[0].direction, Direction.HORIZONTAL)
        self.assertEqual(matches[0].positions, [(0, 0), (0, 1), (0, 2)])

    def test_longest_word_wins_on_overlap(self) -> None:
        grid = build_grid(["CATSZZ"])
        self.assertEqual([m.word for m in grid.find_all_words()], ["CATS"])
        self.assertEqual(sorted(m.word for m in grid.find_straight_line_words()), ["CAT", "CATS"])

    def test_vertical_word(self) -> None:
        grid = build_grid(["DZZZZZ", "OZZZZZ", "GZZZZZ"])
        matches = grid.find_all_words()
        self.assertEqual([(m.word, m.direction) for m in matches], [("DOG", Direction.VERTICAL)])
        self.assertEqual(matches[0].positions, [(0, 0), (1, 0), (2, 0)])

    def test_matches_are_scored_when_scorer_given(self) -> None:
        grid = build_grid(["CATZZZ"], scorer=ScoreCalculator())
        self.assertEqual(grid.find_all_words()[0].score, 150)


class FreeformSearchTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = build_grid(["CATZZZ", "DZZZZZ", "ZOZZZZ", "ZZGZZZ"])

    def test_finds_diagonal_and_straight_words(self) -> None:
        self.assertEqual(self.grid.find_all_possible_words(), {"CAT", "DOG"})
        self.assertEqual(self.grid.selectable_word_count(), 2)

    def test_paths_are_reported(self) -> None:
        paths = {m.word: m.positions for m in self.grid.find_words_with_positions()}
        self.assertEqual(paths["DOG"], [(1, 0), (2, 1), (3, 2)])
        self.assertEqual(paths["CAT"], [(0, 0), (0, 1), (0, 2)])

    def test_cells_are_not_reused_within_a_path(self) -> None:
        dictionary = WordDictionary(["TOT"])
        letters = [list("TOZZZZ")] + [list(BLANK) for _ in range(5)]
        self.assertEqual(freeform_words(letters, dictionary), set())

    def test_length_cap_bounds_the_search(self) -> None:
        dictionary = WordDictionary(WORDS)
        letters = [list("CATSZZ")] + [list(BLANK) for _ in range(5)]
        self.assertEqual(freeform_words(letters, dictionary), {"CAT", "CATS"})
        self.assertEqual(freeform_words(letters, dictionary, max_length=3), {"CAT"})


class AdjacencyAndSwapTests(unittest.TestCase):
    def test_adjacency_is_eight_way(self) -> None:
        self.assertTrue(LetterGrid.are_adjacent((0, 0), (1, 1)))
        self.assertTrue(LetterGrid.are_adjacent((2, 2), (2, 1)))
        self.assertFalse(LetterGrid.are_adjacent((0, 0), (0, 0)))
        self.assertFalse(LetterGrid.are_adjacent((0, 0), (0, 2)))

    def test_successful_swap_commits(self) -> None:
        grid = build_grid(["CTAZZZ"])
        ids = (grid.tile(0, 1).id, grid.tile(0, 2).id)
        matches = grid.try_swap((0, 1), (0, 2))
        self.assertEqual([m.word for m in matches], ["CAT"])
        self.assertEqual("".join(grid.letters()[0][:3]), "CAT")
        self.assertEqual((grid.tile(0, 1).id, grid.tile(0, 2).id), (ids[1], ids[0]))
        self.assertEqual(grid.tile(0, 1).position, (0, 1))

    def test_failed_swap_leaves_grid_identical(self) -> None:
        grid = build_grid(["CTAZZZ"])
        before = grid.clone_tiles()
        self.assertEqual(grid.try_swap((3, 3), (3, 4)), [])
        self.assertEqual(grid.tiles, before)

    def test_non_adjacent_swap_is_rejected(self) -> None:
        grid = build_grid(["CTZAZZ"])
        before = grid.clone_tiles()
        self.assertEqual(grid.try_swap((0, 1), (0, 3)), [])
        self.assertEqual(grid.tiles, before)

    def test_pure_swap_does_not_touch_input(self) -> None:
        grid = build_grid(["CTAZZZ"])
        outcome = try_swap(grid.tiles, (0, 1), (0, 2), grid.dictionary)
        self.assertIsNotNone(outcome)
        assert outcome is not None
        swapped, matches = outcome
        self.assertEqual("".join(grid.letters()[0][:3]), "CTA")
        self.assertEqual(swapped[0][1].letter, "A")
        self.assertEqual(matches[0].word, "CAT")


class MutationTests(unittest.TestCase):
    def test_out_of_bounds_positions_are_skipped(self) -> None:
        grid = build_grid(["CATZZZ"])
        with self.assertLogs("lettercrush.engine.grid", level="WARNING"):
            marked = grid.clear_selected_positions([(0, 0), (9, 9), (-1, 0)])
        self.assertEqual(marked, 1)
        self.assertTrue(grid.tile(0, 0).is_matched)
        self.assertEqual(sum(tile.is_matched for row in grid.tiles for tile in row), 1)

    def test_gravity_refills_cleared_top_row(self) -> None:
        grid = build_grid(["CATZZZ"])
        grid.clear_selected_positions([(0, c) for c in range(6)])
        moved = grid.apply_gravity()
        self.assertTrue(moved)
        for row in grid.tiles:
            for tile in row:
                self.assertFalse(tile.is_matched)
                self.assertEqual(len(tile.letter), 1)
                self.assertTrue(tile.letter.isupper())
        grid.validator.check(grid.tiles)

    def test_gravity_drops_tiles_in_order(self) -> None:
        grid = build_grid(["AZZZZZ", "BZZZZZ", "CZZZZZ", "DZZZZZ", "EZZZZZ", "FZZZZZ"])
        old_id = grid.tile(4, 0).id
        grid.clear_selected_positions([(5, 0)])
        moved = grid.apply_gravity()
        self.assertEqual(moved, [(r, 0) for r in range(6)])
        self.assertEqual([grid.tile(r, 0).letter for r in range(1, 6)], list("ABCDE"))
        self.assertEqual(grid.tile(5, 0).id, old_id)
        self.assertEqual(grid.tile(5, 0).position, (5, 0))
        self.assertEqual(grid.tile(5, 1).letter, "Z")

    def test_has_valid_moves(self) -> None:
        self.assertTrue(build_grid(["CTAZZZ"]).has_valid_moves())
        self.assertFalse(build_grid([]).has_valid_moves())

    def test_has_valid_moves_does_not_mutate(self) -> None:
        grid = build_grid(["CTAZZZ"])
        before = grid.clone_tiles()
        grid.has_valid_moves()
        self.assertEqual(grid.tiles, before)

    def test_ensure_minimum_words_keeps_rich_board(self) -> None:
        grid = build_grid(["CATZZZ"])
        self.assertFalse(grid.ensure_minimum_words(min_words=1))
        self.assertEqual("".join(grid.letters()[0][:3]), "CAT")

    def test_ensure_minimum_words_gives_up_after_budget(self) -> None:
        grid = build_grid([])
        with self.assertLogs("lettercrush.engine.grid", level="WARNING"):
            regenerated = grid.ensure_minimum_words(min_words=1000, max_attempts=2)
        self.assertTrue(regenerated)
        grid.validator.check(grid.tiles)


class BoardLoadingTests(unittest.TestCase):
    def test_set_letters_rejects_bad_shapes(self) -> None:
        grid = build_grid([])
        with self.assertRaises(GridIntegrityError):
            grid.set_letters(["CAT"])
        with self.assertRaises(GridIntegrityError):
            grid.set_letters(["CAT1ZZ"] + [BLANK] * 5)

    def test_selection_marks(self) -> None:
        grid = build_grid(["CATZZZ"])
        grid.mark_selection([(0, 2), (0, 1)])
        self.assertEqual(grid.tile(0, 2).selection_order, 1)
        self.assertEqual(grid.tile(0, 1).selection_order, 2)
        self.assertFalse(grid.tile(0, 0).is_selected)
        grid.clear_marks()
        self.assertFalse(any(tile.is_selected for row in grid.tiles for tile in row))

    def test_to_jsonable(self) -> None:
        grid = build_grid(["CATZZZ"])
        payload = grid.to_jsonable()
        self.assertEqual(payload["size"], 6)
        self.assertEqual(payload["language"], "en")
        self.assertEqual(payload["tiles"][0][1]["letter"], "A")

    def test_set_language_switches_refill_letters(self) -> None:
        grid = build_grid([])
        grid.set_language("pl")
        grid.regenerate()
        letters = {letter for row in grid.letters() for letter in row}
        self.assertFalse(letters & {"Q", "V", "X"})


if __name__ == "__main__":
    unittest.main()
