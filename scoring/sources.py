import datetime as dt
from typing import Dict, List, Optional, Protocol

from models import Competition, Participant, StoredResult, Tour, TourCategory, TourEnrollment


class ScoringDataSource(Protocol):
    """Interface for loading scoring snapshots.

    Implementors provide the actual queries (see database.DatabaseManager).
    Any class with matching method signatures satisfies this protocol.
    """

    async def get_competition(self, competition_id: int) -> Optional[Competition]:
        """Competition with course pars, tee and category tees, or None."""
        ...

    async def get_participants(self, competition_id: int) -> List[Participant]:
        """All participants of a competition, in tee time order."""
        ...

    async def get_stored_results(self, competition_id: int) -> List[StoredResult]:
        """Finalized positions and points (gross and net)."""
        ...

    async def get_competition_categories(self, tour_id: int, competition_id: int) -> List[TourCategory]:
        """Tour categories that have at least one participant in the competition."""
        ...

    async def count_series_teams(self, series_id: int) -> int:
        ...

    async def get_tour(self, tour_id: int) -> Optional[Tour]:
        """Tour with its point template, or None."""
        ...

    async def get_tour_competitions(self, tour_id: int) -> List[Competition]:
        """Competitions of a tour, most recent first."""
        ...

    async def get_tour_enrollments(self, tour_id: int) -> List[TourEnrollment]:
        ...

    async def get_tour_categories(self, tour_id: int) -> List[TourCategory]:
        ...


class InMemoryScoringSource:
    """Data source backed by plain dicts. Used in tests and when embedding the engine."""

    def __init__(
        self,
        competitions: Optional[List[Competition]] = None,
        participants: Optional[Dict[int, List[Participant]]] = None,
        tours: Optional[List[Tour]] = None,
        enrollments: Optional[Dict[int, List[TourEnrollment]]] = None,
        categories: Optional[Dict[int, List[TourCategory]]] = None,
        stored_results: Optional[Dict[int, List[StoredResult]]] = None,
        series_teams: Optional[Dict[int, int]] = None,
    ):
        self.competitions = {c.id: c for c in competitions or []}
        self.participants = participants or {}
        self.tours = {t.id: t for t in tours or []}
        self.enrollments = enrollments or {}
        self.categories = categories or {}
        self.stored_results = stored_results or {}
        self.series_teams = series_teams or {}

    async def get_competition(self, competition_id: int) -> Optional[Competition]:
        return self.competitions.get(competition_id)

    async def get_participants(self, competition_id: int) -> List[Participant]:
        return list(self.participants.get(competition_id, []))

    async def get_stored_results(self, competition_id: int) -> List[StoredResult]:
        return list(self.stored_results.get(competition_id, []))

    async def get_competition_categories(self, tour_id: int, competition_id: int) -> List[TourCategory]:
        present = {p.category_id for p in self.participants.get(competition_id, [])}
        categories = await self.get_tour_categories(tour_id)
        return [c for c in categories if c.id in present]

    async def count_series_teams(self, series_id: int) -> int:
        return self.series_teams.get(series_id, 0)

    async def get_tour(self, tour_id: int) -> Optional[Tour]:
        return self.tours.get(tour_id)

    async def get_tour_competitions(self, tour_id: int) -> List[Competition]:
        competitions = [c for c in self.competitions.values() if c.tour_id == tour_id]
        return sorted(competitions, key=lambda c: c.date or dt.date.min, reverse=True)

    async def get_tour_enrollments(self, tour_id: int) -> List[TourEnrollment]:
        return list(self.enrollments.get(tour_id, []))

    async def get_tour_categories(self, tour_id: int) -> List[TourCategory]:
        return sorted(self.categories.get(tour_id, []), key=lambda c: (c.sort_order, c.name))
