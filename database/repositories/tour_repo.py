"""Read queries for tours, their categories and enrollments."""

import asyncpg
from pydantic import ValidationError
from typing import List, Optional

from models import Tour, TourCategory, TourEnrollment
from database.converters import (
    point_template_from_row,
    tour_category_from_row,
    tour_enrollment_from_row,
    tour_from_row,
)
from database.exceptions import RowConversionError


class TourRepositoryDB:
    """Async reads for tours."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_tour(self, tour_id: int) -> Optional[Tour]:
        """Get a Tour with its point template."""
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow("SELECT * FROM tours WHERE id = $1", tour_id)
            if not row:
                return None

            template = None
            if row["point_template_id"] is not None:
                template_row = await conn.fetchrow(
                    "SELECT id, name, points_structure FROM point_templates WHERE id = $1",
                    row["point_template_id"],
                )
                if template_row:
                    template = point_template_from_row(template_row)

        try:
            return tour_from_row(row, template)
        except ValidationError as e:
            raise RowConversionError(f"Tour {tour_id} has invalid data: {e}") from e

    async def get_categories(self, tour_id: int) -> List[TourCategory]:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT * FROM tour_categories WHERE tour_id = $1 ORDER BY sort_order ASC, name ASC",
                tour_id,
            )
            return [tour_category_from_row(r) for r in rows]

    async def get_enrollments(self, tour_id: int) -> List[TourEnrollment]:
        """Active enrollments linked to a player."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT te.player_id, te.category_id, te.playing_handicap, te.status,
                          tc.name AS category_name,
                          p.name AS player_name, p.handicap AS player_handicap
                   FROM tour_enrollments te
                   LEFT JOIN tour_categories tc ON te.category_id = tc.id
                   LEFT JOIN players p ON te.player_id = p.id
                   WHERE te.tour_id = $1 AND te.status = 'active' AND te.player_id IS NOT NULL""",
                tour_id,
            )
        try:
            return [tour_enrollment_from_row(r) for r in rows]
        except ValidationError as e:
            raise RowConversionError(f"Tour {tour_id} has an invalid enrollment: {e}") from e
