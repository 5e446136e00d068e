"""
Handicap calculations (World Handicap System style, simplified).

Key formulas:
- Course Handicap = Handicap Index x Slope Rating / 113 + (Course Rating - Par)
- Net total = Gross total - Course Handicap
- Per hole: Net = Gross - handicap strokes allocated to that hole
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from scoring.exceptions import HandicapRangeError, MalformedInputError
from scoring.settings import ScoringSettings, scoring_settings

DEFAULT_STROKE_INDEX = (7, 15, 3, 11, 1, 9, 5, 17, 13, 8, 16, 4, 12, 2, 10, 6, 18, 14)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_course_handicap(
    handicap_index: float,
    slope_rating: float,
    course_rating: float,
    par: int,
) -> int:
    """
    Course handicap for a player on a specific tee.

    calculate_course_handicap(15.4, 128, 72.3, 72) -> 18  (17.74 rounded)

    Negative results are "plus" handicaps and are returned as-is.
    """
    raw = handicap_index * slope_rating / scoring_settings.standard_slope_rating + (course_rating - par)
    return round_half_away(raw)


def validate_stroke_index(stroke_index: Optional[Sequence[int]]) -> bool:
    """True if the table holds each number 1..18 exactly once."""
    holes = scoring_settings.holes_per_round
    if not stroke_index or len(stroke_index) != holes:
        return False
    return sorted(stroke_index) == list(range(1, holes + 1))


def get_default_stroke_index() -> List[int]:
    """Reference ordering for courses without a configured stroke index."""
    return list(DEFAULT_STROKE_INDEX)


def distribute_handicap_strokes(
    course_handicap: int,
    stroke_index: Optional[Sequence[int]],
) -> List[int]:
    """
    Allocate course handicap strokes to holes.

    Holes are visited hardest first (stroke index 1) and every full pass of
    18 strokes gives each hole one more. Plus handicaps give strokes back on
    the easiest holes first. Without a stroke index the holes are used in
    order, so the first holes receive the extra strokes.

    The result always sums to ``course_handicap``.
    """
    holes = scoring_settings.holes_per_round

    if not stroke_index:
        base, extra = divmod(course_handicap, holes)
        return [base + 1 if i < extra else base for i in range(holes)]

    if not validate_stroke_index(stroke_index):
        raise MalformedInputError(
            f"Stroke index must contain each number 1-{holes} exactly once"
        )

    full_passes, partial = divmod(abs(course_handicap), holes)
    if course_handicap >= 0:
        # SI 1..partial get the extra stroke
        return [full_passes + (1 if si <= partial else 0) for si in stroke_index]

    # SI 18, 17, ... give back the extra stroke
    return [-(full_passes + (1 if si > holes - partial else 0)) for si in stroke_index]


def calculate_net_scores(gross_scores: Sequence[int], strokes: Sequence[int]) -> List[int]:
    """Per-hole net scores. Unplayed (0) and abandoned (-1) holes are left untouched."""
    if len(gross_scores) != len(strokes):
        raise MalformedInputError("Gross scores and handicap strokes must have same length")
    return [gross if gross <= 0 else gross - allocated for gross, allocated in zip(gross_scores, strokes)]


def calculate_net_total(gross_total: int, course_handicap: int) -> int:
    return gross_total - course_handicap


def validate_handicap_index(
    handicap_index: float,
    settings: ScoringSettings = scoring_settings,
) -> float:
    """Raise HandicapRangeError when the index is outside the configured range."""
    low = settings.min_handicap_index
    high = settings.max_handicap_index
    if not low <= handicap_index <= high:
        raise HandicapRangeError(
            f"Handicap index {handicap_index} outside allowed range ({low} to {high})"
        )
    return handicap_index


@dataclass(frozen=True)
class FullHandicapCalculation:
    handicap_index: float
    course_handicap: int
    strokes_per_hole: List[int]
    gross_scores: Optional[List[int]] = None
    net_scores: Optional[List[int]] = None
    gross_total: Optional[int] = None
    net_total: Optional[int] = None


def calculate_full_handicap(
    handicap_index: float,
    course_rating: float,
    slope_rating: float,
    par: int,
    stroke_index: Optional[Sequence[int]],
    gross_scores: Optional[Sequence[int]] = None,
) -> FullHandicapCalculation:
    """Course handicap, stroke allocation and (for a full scorecard) net figures in one pass."""
    course_handicap = calculate_course_handicap(handicap_index, slope_rating, course_rating, par)
    strokes = distribute_handicap_strokes(course_handicap, stroke_index)

    if gross_scores is None or len(gross_scores) != scoring_settings.holes_per_round:
        return FullHandicapCalculation(handicap_index, course_handicap, strokes)

    gross_total = sum(s for s in gross_scores if s > 0)
    return FullHandicapCalculation(
        handicap_index=handicap_index,
        course_handicap=course_handicap,
        strokes_per_hole=strokes,
        gross_scores=list(gross_scores),
        net_scores=calculate_net_scores(gross_scores, strokes),
        gross_total=gross_total,
        net_total=calculate_net_total(gross_total, course_handicap),
    )


def format_course_handicap(course_handicap: int) -> str:
    """Plus handicaps are shown with a leading '+'."""
    if course_handicap < 0:
        return f"+{abs(course_handicap)}"
    return str(course_handicap)


def format_handicap_index(handicap_index: float) -> str:
    """One decimal place, '+' prefix for plus handicaps."""
    if handicap_index < 0:
        return f"+{abs(handicap_index):.1f}"
    return f"{handicap_index:.1f}"
