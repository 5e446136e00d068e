class ScoringError(Exception):
    """Base for all scoring engine errors."""


class NotFoundError(ScoringError):
    """Competition, tour or category not found."""


class MalformedInputError(ScoringError, ValueError):
    """Input data has the wrong shape (missing pars, bad stroke index, length mismatch)."""


class HandicapRangeError(ScoringError, ValueError):
    """Handicap index outside the allowed range."""
