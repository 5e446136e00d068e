"""Conversion between asyncpg database rows and Pydantic domain models.

Centralizes all mapping logic between the tour schema and the scoring
snapshots. JSON columns (scores, pars, stroke index, ratings, point
structures) arrive either decoded or as text; the models accept both.
"""

from typing import List, Optional

from models import (
    CategoryTee,
    Competition,
    Course,
    Participant,
    PointTemplate,
    StoredResult,
    Tee,
    Tour,
    TourCategory,
    TourEnrollment,
)


def _float(value) -> Optional[float]:
    """NUMERIC columns come back as Decimal."""
    return float(value) if value is not None else None


# ================================================================
# Courses and tees
# ================================================================

def course_from_row(row) -> Course:
    """Competition row joined with its course -> Course model."""
    return Course(
        id=row["course_id"],
        name=row["course_name"],
        pars=row["pars"],
        stroke_index=row["course_stroke_index"],
    )


def tee_from_row(row) -> Tee:
    """course_tees row with aggregated ratings_json -> Tee model."""
    return Tee(
        id=row["id"],
        name=row["name"],
        color=row["color"],
        course_rating=_float(row["course_rating"]),
        slope_rating=row["slope_rating"],
        ratings=row["ratings_json"],
        stroke_index=row["stroke_index"],
    )


def category_tee_from_row(row) -> CategoryTee:
    """competition_category_tees row joined with its tee -> CategoryTee model."""
    return CategoryTee(
        category_id=row["category_id"],
        category_name=row["category_name"],
        tee=Tee(
            id=row["tee_id"],
            name=row["tee_name"],
            color=row["tee_color"],
            course_rating=_float(row["legacy_course_rating"]),
            slope_rating=row["legacy_slope_rating"],
            ratings=row["ratings_json"],
            stroke_index=row["stroke_index"],
        ),
    )


# ================================================================
# Competitions
# ================================================================

def point_template_from_row(row) -> PointTemplate:
    return PointTemplate(
        id=row["id"],
        name=row["name"],
        points_structure=row["points_structure"],
    )


def competition_from_rows(
    row,
    tee: Optional[Tee] = None,
    category_tees: Optional[List[CategoryTee]] = None,
    point_template: Optional[PointTemplate] = None,
) -> Competition:
    """Assemble a Competition from its row and pre-loaded tee data."""
    return Competition(
        id=row["id"],
        name=row["name"],
        date=row["date"],
        course=course_from_row(row),
        tour_id=row["tour_id"],
        series_id=row["series_id"],
        tee=tee,
        category_tees=category_tees or [],
        points_multiplier=_float(row["points_multiplier"]),
        start_mode=row["start_mode"],
        open_end=row["open_end"],
        is_results_final=bool(row["is_results_final"]),
        point_template=point_template,
    )


def participant_from_row(row) -> Participant:
    """participants row joined with team, tee time, player and enrollment."""
    return Participant(
        id=row["id"],
        team_id=row["team_id"],
        team_name=row["team_name"],
        tee_time_id=row["tee_time_id"],
        tee_order=row["tee_order"],
        position_name=row["position_name"],
        player_id=row["player_id"],
        player_name=row["player_name"],
        gender=row["gender"],
        score=row["score"],
        manual_score_out=row["manual_score_out"],
        manual_score_in=row["manual_score_in"],
        manual_score_total=row["manual_score_total"],
        is_locked=bool(row["is_locked"]),
        locked_at=row["locked_at"],
        is_dq=bool(row["is_dq"]),
        admin_notes=row["admin_notes"],
        handicap_index=_float(row["handicap_index"]),
        category_id=row["category_id"],
        category_name=row["category_name"],
        start_time=row["teetime"],
    )


def stored_result_from_row(row) -> StoredResult:
    return StoredResult(
        participant_id=row["participant_id"],
        position=row["position"],
        points=_float(row["points"]) or 0,
        scoring_type=row["scoring_type"],
    )


# ================================================================
# Tours
# ================================================================

def tour_from_row(row, point_template: Optional[PointTemplate] = None) -> Tour:
    return Tour(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        scoring_mode=row["scoring_mode"],
        point_template=point_template,
    )


def tour_category_from_row(row) -> TourCategory:
    return TourCategory(
        id=row["id"],
        tour_id=row["tour_id"],
        name=row["name"],
        description=row["description"],
        sort_order=row["sort_order"] or 0,
    )


def tour_enrollment_from_row(row) -> TourEnrollment:
    """tour_enrollments row joined with the player and category."""
    return TourEnrollment(
        player_id=row["player_id"],
        player_name=row["player_name"],
        category_id=row["category_id"],
        category_name=row["category_name"],
        player_handicap=_float(row["player_handicap"]),
        playing_handicap=_float(row["playing_handicap"]),
        status=row["status"],
    )
