"""Word scoring: base points, length and letter bonuses, combo multiplier."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from ..core.models import ScoreBreakdown, WordMatch
from ..data.letters import Language, letter_scores


@dataclass
class ScoringConfig:
    base_score: int = 100
    combo_base: float = 1.5
    language: Language = Language.ENGLISH
    letter_values: Optional[Dict[str, int]] = field(default=None, repr=False)

    def values(self) -> Dict[str, int]:
        return self.letter_values if self.letter_values is not None else letter_scores(self.language)


class ScoreCalculator:
    """Pure, stateless scoring of words and simultaneous match lists."""

    def __init__(self, config: Optional[ScoringConfig] = None) -> None:
        self.config = config or ScoringConfig()

    def score_word(self, word: str, combo: int = 1) -> ScoreBreakdown:
        values = self.config.values()
        base = self.config.base_score
        length_bonus = self.length_bonus(len(word))
        letter_bonus = sum(values.get(char, 1) for char in word.upper()) * 10
        combo_multiplier = self.config.combo_base ** (combo - 1)
        # Half-up rounding, not banker's rounding.
        total = math.floor((base + length_bonus + letter_bonus) * combo_multiplier + 0.5)
        return ScoreBreakdown(
            base=base,
            length_bonus=length_bonus,
            letter_bonus=letter_bonus,
            combo_multiplier=combo_multiplier,
            total=max(0, total),
        )

    def score_matches(self, matches: Sequence[WordMatch], start_combo: int = 1) -> int:
        """Sum word scores, each later word one combo level above the previous."""

        return sum(
            self.score_word(match.word, start_combo + index).total
            for index, match in enumerate(matches)
        )

    @staticmethod
    def length_bonus(length: int) -> int:
        # 3: 0, 4: 50, 5: 150, 6+: 300 then +200 per extra letter
        if length <= 3:
            return 0
        if length == 4:
            return 50
        if length == 5:
            return 150
        return 300 + (length - 6) * 200

    @staticmethod
    def format_score(score: int) -> str:
        if score >= 1_000_000:
            return f"{score / 1_000_000:.1f}M"
        if score >= 1_000:
            return f"{score / 1_000:.1f}K"
        return str(score)

    @staticmethod
    def breakdown_text(result: ScoreBreakdown) -> str:
        parts = [f"Base: {result.base}"]
        if result.length_bonus > 0:
            parts.append(f"Length: +{result.length_bonus}")
        parts.append(f"Letters: +{result.letter_bonus}")
        if result.combo_multiplier > 1:
            parts.append(f"Combo: x{result.combo_multiplier:.1f}")
        return " | ".join(parts)
