from .exceptions import HandicapRangeError, MalformedInputError, NotFoundError, ScoringError
from .settings import ScoringSettings, scoring_settings
from .handicap import (
    DEFAULT_STROKE_INDEX,
    FullHandicapCalculation,
    calculate_course_handicap,
    calculate_full_handicap,
    calculate_net_scores,
    calculate_net_total,
    distribute_handicap_strokes,
    format_course_handicap,
    format_handicap_index,
    get_default_stroke_index,
    round_half_away,
    validate_handicap_index,
    validate_stroke_index,
)
from .golf_scoring import ScoreMetrics, score_metrics
from .points import calculate_default_points, calculate_position_points, calculate_template_points
from .ranking import assign_positions, rank

# Leaderboard, teams, standings and service depend on models and are imported
# from their modules directly (models imports this package).

__all__ = [
    "HandicapRangeError",
    "MalformedInputError",
    "NotFoundError",
    "ScoringError",
    "ScoringSettings",
    "scoring_settings",
    "DEFAULT_STROKE_INDEX",
    "FullHandicapCalculation",
    "calculate_course_handicap",
    "calculate_full_handicap",
    "calculate_net_scores",
    "calculate_net_total",
    "distribute_handicap_strokes",
    "format_course_handicap",
    "format_handicap_index",
    "get_default_stroke_index",
    "round_half_away",
    "validate_handicap_index",
    "validate_stroke_index",
    "ScoreMetrics",
    "score_metrics",
    "calculate_default_points",
    "calculate_position_points",
    "calculate_template_points",
    "assign_positions",
    "rank",
]
