"""Pretty-print helpers for letter grids and session summaries."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING

from ..engine.scoring import ScoreCalculator

if TYPE_CHECKING:
    from ..core.models import Tile
    from ..engine.grid import LetterGrid
    from ..engine.session import GameSession


def tile_symbol(tile: Tile) -> str:
    if tile.is_matched:
        return "*"
    if tile.is_selected:
        return tile.letter.lower()
    return tile.letter


def format_grid(grid: LetterGrid) -> str:
    width = grid.size
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(width):
        row_render = " ".join(f"{tile_symbol(grid.tile(r, c)):>2}" for c in range(width))
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_grid(grid: LetterGrid, *, label: str | None = None, stream=None) -> None:
    """Print the letter grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_session_summary(session: GameSession, *, stream=None) -> None:
    """Print grid, word availability and the session counters."""

    stream = stream or sys.stdout
    print(format_grid(session.grid), file=stream)

    # --- Words on the board ---
    straight = session.grid.find_all_words()
    selectable = sorted(session.grid.find_all_possible_words())
    lengths = Counter(len(word) for word in selectable)

    print(file=stream)
    print("--- Words ---", file=stream)
    print(f"  Straight-line: {len(straight)} ({', '.join(m.word for m in straight) or '-'})", file=stream)
    print(f"  Selectable:    {len(selectable)}", file=stream)
    if lengths:
        dist_parts = [f"{l}:{c}" for l, c in sorted(lengths.items())]
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)

    # --- Session ---
    state = session.state
    print(file=stream)
    print("--- Session ---", file=stream)
    print(f"  Phase:         {session.phase.value}", file=stream)
    print(f"  Score:         {ScoreCalculator.format_score(state.score)} (best {ScoreCalculator.format_score(session.high_score)})", file=stream)
    print(f"  Moves:         {state.moves}", file=stream)
    print(f"  Words found:   {state.words_found}", file=stream)
    if state.longest_word:
        print(f"  Longest word:  {state.longest_word}", file=stream)
    print(f"  Best combo:    {state.best_combo}", file=stream)
    if state.strikes:
        print(f"  Strikes:       {state.strikes}", file=stream)
    if session.time_left is not None:
        print(f"  Time left:     {session.time_left}s", file=stream)
    reason = session.orchestrator.game_over_reason
    if reason is not None:
        print(f"  Game over:     {reason.value}", file=stream)
