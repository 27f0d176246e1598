"""CLI entrypoint for the letter-matching puzzle engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from lettercrush.core.constants import DEFAULT_GRID_SIZE, DEFAULT_MIN_WORDS, Phase
from lettercrush.core.exceptions import DictionaryLoadError
from lettercrush.data.letters import Language
from lettercrush.data.wordlists import parse_words_file
from lettercrush.engine.grid import GridConfig
from lettercrush.engine.session import GameConfig, GameSession, create_session
from lettercrush.io.highscore_store import HighScoreStore
from lettercrush.io.wordlist_client import WordListClient
from lettercrush.utils.logger import configure_logging, get_logger
from lettercrush.utils.pretty import pretty_print_grid, print_session_summary


LOGGER = get_logger("lettercrush.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a letter grid and optionally autoplay turns",
    )
    parser.add_argument("--size", type=int, default=DEFAULT_GRID_SIZE, help="Grid size in cells")
    parser.add_argument(
        "--min-words",
        type=int,
        default=DEFAULT_MIN_WORDS,
        help="Minimum straight-line words on the starting board",
    )
    parser.add_argument(
        "--language",
        type=str,
        choices=[lang.value for lang in Language],
        default=Language.ENGLISH.value,
        help="Letter tables and starter word list",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one word per line (# comments and blank lines ignored)",
    )
    source.add_argument("--words-url", type=str, metavar="URL", help="Remote word list (text or JSON array)")
    parser.add_argument("--autoplay", type=int, default=0, metavar="N", help="Submit N found words")
    parser.add_argument("--realtime", action="store_true", help="Honour animation delays while autoplaying")
    parser.add_argument("--highscores", type=Path, help="Path to the high score JSON document")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def load_words(args: argparse.Namespace) -> Optional[List[str]]:
    if args.words_file:
        return parse_words_file(args.words_file)
    if args.words_url:
        return WordListClient(args.words_url).fetch()
    return None


def autoplay(session: GameSession, turns: int) -> int:
    """Submit up to ``turns`` words found on the board. Returns turns played."""

    played = 0
    for _ in range(turns):
        if session.phase == Phase.GAME_OVER:
            break
        hints = sorted(session.hints(), key=lambda match: (-len(match.word), match.positions))
        if not hints:
            LOGGER.info("No selectable words left")
            break
        ticket = session.submit_word(hints[0])
        if not ticket.accepted:
            LOGGER.warning("Autoplay submission '%s' rejected: %s", ticket.word, ticket.error)
            break
        session.wait(ticket)
        played += 1
        if ticket.result is not None:
            LOGGER.info(
                "Played %s for %d points (combo %d)",
                ticket.word,
                ticket.result.score_delta,
                ticket.result.combo,
            )
    return played


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.size < 3:
        parser.error("--size must be at least 3")

    try:
        words = load_words(args)
    except DictionaryLoadError as exc:
        LOGGER.error("%s", exc)
        return 1

    config = GameConfig(
        language=args.language,
        seed=args.seed,
        realtime=args.realtime,
        grid=GridConfig(size=args.size, min_words=args.min_words),
    )
    store = HighScoreStore(args.highscores) if args.highscores else None
    session = create_session(config, words=words, store=store)
    session.start()
    pretty_print_grid(session.grid, label="Starting board:")

    if args.autoplay:
        played = autoplay(session, args.autoplay)
        print(f"\nAutoplayed {played} turn(s)")
        # Let a pending high-score save run.
        session.scheduler.advance(0)

    print()
    print_session_summary(session)

    if args.output:
        args.output.write_text(json.dumps(session.to_jsonable(), ensure_ascii=False, indent=2), encoding="utf-8")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
