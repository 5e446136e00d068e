"""Read queries for competitions and everything hanging off them."""

import asyncpg
from pydantic import ValidationError
from typing import List, Optional

from models import CategoryTee, Competition, Participant, PointTemplate, StoredResult, Tee, TourCategory
from database.converters import (
    category_tee_from_row,
    competition_from_rows,
    participant_from_row,
    point_template_from_row,
    stored_result_from_row,
    tee_from_row,
    tour_category_from_row,
)
from database.exceptions import RowConversionError

# Per-gender ratings of a tee as a JSON array
RATINGS_JSON = """COALESCE(
    (SELECT json_agg(json_build_object(
                'gender', ctr.gender,
                'course_rating', ctr.course_rating,
                'slope_rating', ctr.slope_rating))
       FROM course_tee_ratings ctr WHERE ctr.tee_id = ct.id),
    '[]'::json) AS ratings_json"""

COMPETITION_SELECT = """
    SELECT c.*, co.name AS course_name, co.pars, co.stroke_index AS course_stroke_index
    FROM competitions c
    JOIN courses co ON c.course_id = co.id"""


class CompetitionRepositoryDB:
    """Async reads for competitions, participants and stored results."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Private helpers
    # ================================================================

    async def _load_tee(self, conn, tee_id: Optional[int]) -> Optional[Tee]:
        if tee_id is None:
            return None
        row = await conn.fetchrow(
            f"SELECT ct.*, {RATINGS_JSON} FROM course_tees ct WHERE ct.id = $1",
            tee_id,
        )
        return tee_from_row(row) if row else None

    async def _load_category_tees(self, conn, competition_id: int) -> List[CategoryTee]:
        rows = await conn.fetch(
            f"""SELECT cct.category_id, tc.name AS category_name,
                       cct.tee_id, ct.name AS tee_name, ct.color AS tee_color,
                       ct.stroke_index,
                       ct.course_rating AS legacy_course_rating,
                       ct.slope_rating AS legacy_slope_rating,
                       {RATINGS_JSON}
                FROM competition_category_tees cct
                JOIN course_tees ct ON cct.tee_id = ct.id
                LEFT JOIN tour_categories tc ON cct.category_id = tc.id
                WHERE cct.competition_id = $1""",
            competition_id,
        )
        return [category_tee_from_row(r) for r in rows]

    async def _load_point_template(self, conn, template_id: Optional[int]) -> Optional[PointTemplate]:
        if template_id is None:
            return None
        row = await conn.fetchrow(
            "SELECT id, name, points_structure FROM point_templates WHERE id = $1",
            template_id,
        )
        return point_template_from_row(row) if row else None

    async def _assemble(self, conn, row) -> Competition:
        """Build a full Competition from its row plus tee data."""
        try:
            return competition_from_rows(
                row,
                tee=await self._load_tee(conn, row["tee_id"]),
                category_tees=await self._load_category_tees(conn, row["id"]),
                point_template=await self._load_point_template(conn, row["point_template_id"]),
            )
        except ValidationError as e:
            raise RowConversionError(f"Competition {row['id']} has invalid data: {e}") from e

    # ================================================================
    # Read
    # ================================================================

    async def get_competition(self, competition_id: int) -> Optional[Competition]:
        """Get a Competition with course pars, tee and category tees."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(f"{COMPETITION_SELECT} WHERE c.id = $1", competition_id)
            if not row:
                return None
            return await self._assemble(conn, row)

    async def list_by_tour(self, tour_id: int) -> List[Competition]:
        """Competitions of a tour, most recent first."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"{COMPETITION_SELECT} WHERE c.tour_id = $1 ORDER BY c.date DESC",
                tour_id,
            )
            return [await self._assemble(conn, r) for r in rows]

    async def get_participants(self, competition_id: int) -> List[Participant]:
        """Participants in tee time order, with team, player and tour category."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT p.*, tm.name AS team_name, t.teetime,
                          te.category_id, tc.name AS category_name,
                          COALESCE(pp.display_name, pl.name, p.player_names) AS player_name,
                          pl.gender
                   FROM participants p
                   JOIN tee_times t ON p.tee_time_id = t.id
                   JOIN teams tm ON p.team_id = tm.id
                   LEFT JOIN competitions c ON t.competition_id = c.id
                   LEFT JOIN players pl ON p.player_id = pl.id
                   LEFT JOIN player_profiles pp ON pl.id = pp.player_id
                   LEFT JOIN tour_enrollments te
                          ON p.player_id = te.player_id AND c.tour_id = te.tour_id
                   LEFT JOIN tour_categories tc ON te.category_id = tc.id
                   WHERE t.competition_id = $1
                   ORDER BY t.teetime, p.tee_order""",
                competition_id,
            )
        try:
            return [participant_from_row(r) for r in rows]
        except ValidationError as e:
            raise RowConversionError(
                f"Competition {competition_id} has an invalid participant: {e}"
            ) from e

    async def get_stored_results(self, competition_id: int) -> List[StoredResult]:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT participant_id, position, points, scoring_type
                   FROM competition_results WHERE competition_id = $1""",
                competition_id,
            )
            return [stored_result_from_row(r) for r in rows]

    async def get_categories(self, tour_id: int, competition_id: int) -> List[TourCategory]:
        """Tour categories with at least one participant in the competition."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT DISTINCT tc.id, tc.tour_id, tc.name, tc.description, tc.sort_order
                   FROM tour_categories tc
                   JOIN tour_enrollments te ON tc.id = te.category_id
                   JOIN participants p ON te.player_id = p.player_id
                   JOIN tee_times t ON p.tee_time_id = t.id
                   WHERE tc.tour_id = $1 AND t.competition_id = $2
                   ORDER BY tc.sort_order ASC, tc.name ASC""",
                tour_id, competition_id,
            )
            return [tour_category_from_row(r) for r in rows]

    async def count_series_teams(self, series_id: int) -> int:
        async with self._pool.acquire() as conn:
            count = await conn.fetchval(
                "SELECT COUNT(*) FROM series_teams WHERE series_id = $1", series_id
            )
            return count or 0
