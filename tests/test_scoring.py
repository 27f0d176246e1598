import unittest

from lettercrush.core.constants import Direction
from lettercrush.core.models import WordMatch
from lettercrush.engine.scoring import ScoreCalculator, ScoringConfig


class ScoreWordTests(unittest.TestCase):
    def setUp(self) -> None:
        self.calculator = ScoreCalculator()

    def test_length_bonus_boundaries(self) -> None:
        self.assertEqual(self.calculator.score_word("CAT", 1).length_bonus, 0)
        self.assertEqual(self.calculator.score_word("CATS", 1).length_bonus, 50)
        self.assertEqual(self.calculator.score_word("CRANE", 1).length_bonus, 150)
        self.assertEqual(self.calculator.score_word("CACTUS", 1).length_bonus, 300)
        self.assertEqual(self.calculator.score_word("CATCHER", 1).length_bonus, 500)

    def test_combo_multiplier(self) -> None:
        self.assertEqual(self.calculator.score_word("CAT", combo=1).combo_multiplier, 1.0)
        self.assertEqual(self.calculator.score_word("CAT", combo=2).combo_multiplier, 1.5)
        self.assertEqual(self.calculator.score_word("CAT", combo=3).combo_multiplier, 2.25)

    def test_breakdown_for_cats(self) -> None:
        result = self.calculator.score_word("cats")
        self.assertEqual(result.base, 100)
        self.assertEqual(result.letter_bonus, 60)
        self.assertEqual(result.total, 210)

    def test_combo_scales_total(self) -> None:
        self.assertEqual(self.calculator.score_word("CAT").total, 150)
        self.assertEqual(self.calculator.score_word("CAT", combo=2).total, 225)

    def test_unknown_letters_default_to_one(self) -> None:
        calculator = ScoreCalculator(ScoringConfig(letter_values={"C": 3}))
        self.assertEqual(calculator.score_word("CAT").letter_bonus, 50)

    def test_rounds_half_up(self) -> None:
        calculator = ScoreCalculator(ScoringConfig(base_score=1, letter_values={}))
        # (1 + 30) * 1.5 = 46.5
        self.assertEqual(calculator.score_word("CAT", combo=2).total, 47)

    def test_polish_letter_values(self) -> None:
        calculator = ScoreCalculator(ScoringConfig(language="pl"))
        self.assertEqual(calculator.score_word("KOT").letter_bonus, 50)

    def test_total_is_never_negative(self) -> None:
        calculator = ScoreCalculator(ScoringConfig(base_score=-1000))
        self.assertEqual(calculator.score_word("CAT").total, 0)


class ScoreMatchesTests(unittest.TestCase):
    def test_each_later_match_gets_next_combo_level(self) -> None:
        calculator = ScoreCalculator()
        matches = [
            WordMatch(word="CAT", positions=[(0, 0), (0, 1), (0, 2)], direction=Direction.HORIZONTAL),
            WordMatch(word="CATS", positions=[(1, 0), (1, 1), (1, 2), (1, 3)], direction=Direction.HORIZONTAL),
        ]
        self.assertEqual(calculator.score_matches(matches), 150 + 315)
        self.assertEqual(calculator.score_matches(matches, start_combo=2), 225 + 473)
        self.assertEqual(calculator.score_matches([]), 0)


class FormattingTests(unittest.TestCase):
    def test_format_score(self) -> None:
        self.assertEqual(ScoreCalculator.format_score(999), "999")
        self.assertEqual(ScoreCalculator.format_score(1500), "1.5K")
        self.assertEqual(ScoreCalculator.format_score(2_000_000), "2.0M")

    def test_breakdown_text(self) -> None:
        calculator = ScoreCalculator()
        self.assertEqual(
            ScoreCalculator.breakdown_text(calculator.score_word("CATS")),
            "Base: 100 | Length: +50 | Letters: +60",
        )
        self.assertEqual(
            ScoreCalculator.breakdown_text(calculator.score_word("CATS", combo=2)),
            "Base: 100 | Length: +50 | Letters: +60 | Combo: x1.5",
        )
        self.assertEqual(
            ScoreCalculator.breakdown_text(calculator.score_word("CAT")),
            "Base: 100 | Letters: +50",
        )


if __name__ == "__main__":
    unittest.main()
