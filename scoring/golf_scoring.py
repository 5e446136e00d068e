from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from scoring.settings import scoring_settings


def holes_played(scores: Sequence[int]) -> int:
    """Holes with a score or the unreported marker (-1). Unplayed holes are 0."""
    return sum(1 for s in scores if s > 0 or s == scoring_settings.unreported_hole)


def gross_score(scores: Sequence[int]) -> int:
    return sum(s for s in scores if s > 0)


def relative_to_par(scores: Sequence[int], pars: Sequence[int]) -> int:
    """Score minus par over the holes that have a positive score."""
    return sum(score - par for score, par in zip(scores, pars) if score > 0)


def has_invalid_hole(scores: Sequence[int]) -> bool:
    return scoring_settings.unreported_hole in scores


def is_complete_valid_round(scores: Sequence[int]) -> bool:
    """All holes played and none given up."""
    return holes_played(scores) == scoring_settings.holes_per_round and not has_invalid_hole(scores)


@dataclass(frozen=True)
class ScoreMetrics:
    holes_played: int
    gross_score: int
    relative_to_par: int
    has_invalid_hole: bool


def score_metrics(scores: Sequence[int], pars: Sequence[int]) -> ScoreMetrics:
    """All per-round metrics at once."""
    return ScoreMetrics(
        holes_played=holes_played(scores),
        gross_score=gross_score(scores),
        relative_to_par=relative_to_par(scores, pars),
        has_invalid_hole=has_invalid_hole(scores),
    )
