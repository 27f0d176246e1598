"""Custom exception hierarchy for the puzzle engine."""


class LetterCrushError(Exception):
    """Base exception for engine failures."""


class DictionaryLoadError(LetterCrushError):
    """Raised when a word list cannot be read or fetched."""


class PlacementError(LetterCrushError):
    """Raised when a word cannot be laid into the construction grid."""


class GridIntegrityError(LetterCrushError):
    """Raised when a board violates the one-letter-per-cell invariant."""


class PersistenceError(LetterCrushError):
    """Raised when the high score store cannot be read or written."""
