from __future__ import annotations

from typing import List, Optional

import asyncpg

from models import Competition, Participant, StoredResult, Tour, TourCategory, TourEnrollment
from database.repositories import CompetitionRepositoryDB, TourRepositoryDB


class DatabaseManager:
    """
    PostgreSQL-backed scoring data source.

    Bundles the read repositories over one pool and exposes the lookups the
    scoring service needs, so it can be passed wherever a ScoringDataSource
    is expected.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        self.competitions = CompetitionRepositoryDB(pool)
        self.tours = TourRepositoryDB(pool)

    # ================================================================
    # Competitions
    # ================================================================

    async def get_competition(self, competition_id: int) -> Optional[Competition]:
        return await self.competitions.get_competition(competition_id)

    async def get_participants(self, competition_id: int) -> List[Participant]:
        return await self.competitions.get_participants(competition_id)

    async def get_stored_results(self, competition_id: int) -> List[StoredResult]:
        return await self.competitions.get_stored_results(competition_id)

    async def get_competition_categories(self, tour_id: int, competition_id: int) -> List[TourCategory]:
        return await self.competitions.get_categories(tour_id, competition_id)

    async def count_series_teams(self, series_id: int) -> int:
        return await self.competitions.count_series_teams(series_id)

    # ================================================================
    # Tours
    # ================================================================

    async def get_tour(self, tour_id: int) -> Optional[Tour]:
        return await self.tours.get_tour(tour_id)

    async def get_tour_competitions(self, tour_id: int) -> List[Competition]:
        return await self.competitions.list_by_tour(tour_id)

    async def get_tour_enrollments(self, tour_id: int) -> List[TourEnrollment]:
        return await self.tours.get_enrollments(tour_id)

    async def get_tour_categories(self, tour_id: int) -> List[TourCategory]:
        return await self.tours.get_categories(tour_id)
