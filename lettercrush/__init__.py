"""Puzzle engine for a tile-based word-matching game.

This package exposes the public API surface via:

- ``lettercrush.engine.session.create_session``: builds a session-scoped game context.
- ``lettercrush.engine.grid.LetterGrid``: board generation, word search and cascades.
- ``lettercrush.engine.orchestrator.TurnOrchestrator``: the turn phase state machine.
- ``lettercrush.data.dictionary.WordDictionary``: prefix-tree word validation.
- ``lettercrush.engine.scoring.ScoreCalculator``: word and combo scoring.
"""

from .data.dictionary import WordDictionary
from .engine.grid import GridConfig, LetterGrid
from .engine.orchestrator import PhaseCallbacks, TurnConfig, TurnOrchestrator
from .engine.scoring import ScoreCalculator, ScoringConfig
from .engine.session import GameConfig, GameSession, create_session

__all__ = [
    "WordDictionary",
    "GridConfig",
    "LetterGrid",
    "PhaseCallbacks",
    "TurnConfig",
    "TurnOrchestrator",
    "ScoreCalculator",
    "ScoringConfig",
    "GameConfig",
    "GameSession",
    "create_session",
]

__version__ = "0.1.0"
