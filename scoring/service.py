"""Loads snapshots from a data source and runs the scoring engine over them."""
from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional

from loguru import logger

from models import (
    Competition,
    LeaderboardEntry,
    LeaderboardResponse,
    ScoringType,
    TeamLeaderboardEntry,
    Tour,
    TourStandings,
)
from scoring.exceptions import NotFoundError
from scoring.leaderboard import LeaderboardBuilder
from scoring.settings import ScoringSettings, scoring_settings
from scoring.sources import ScoringDataSource
from scoring.standings import compute_tour_standings
from scoring.teams import build_team_leaderboard


class ScoringService:
    """Read-only scoring queries over a ScoringDataSource."""

    def __init__(self, source: ScoringDataSource, settings: ScoringSettings = scoring_settings):
        self.source = source
        self.settings = settings

    async def _require_competition(self, competition_id: int) -> Competition:
        competition = await self.source.get_competition(competition_id)
        if competition is None:
            raise NotFoundError("Competition not found")
        return competition

    async def _require_tour(self, tour_id: int) -> Tour:
        tour = await self.source.get_tour(tour_id)
        if tour is None:
            raise NotFoundError("Tour not found")
        return tour

    async def _player_handicaps(self, tour_id: int) -> Dict[int, float]:
        enrollments = await self.source.get_tour_enrollments(tour_id)
        return {
            e.player_id: e.handicap_index
            for e in enrollments
            if e.status == "active" and e.handicap_index is not None
        }

    # ================================================================
    # Competition leaderboards
    # ================================================================

    async def get_leaderboard_with_details(
        self,
        competition_id: int,
        now: Optional[dt.datetime] = None,
    ) -> LeaderboardResponse:
        competition = await self._require_competition(competition_id)
        participants = await self.source.get_participants(competition_id)

        options = {}
        if competition.tour_id is not None:
            tour = await self.source.get_tour(competition.tour_id)
            if tour is not None:
                options["scoring_mode"] = tour.scoring_mode
                options["point_template"] = tour.point_template
            options["player_handicaps"] = await self._player_handicaps(competition.tour_id)
            options["categories"] = await self.source.get_competition_categories(
                competition.tour_id, competition_id
            )
            if competition.is_results_final:
                options["stored_results"] = await self.source.get_stored_results(competition_id)

        builder = LeaderboardBuilder(competition, now=now, settings=self.settings, **options)
        response = builder.build(participants)
        logger.info(f"Leaderboard for competition {competition_id}: {len(response.entries)} entries")
        return response

    async def get_leaderboard(
        self,
        competition_id: int,
        now: Optional[dt.datetime] = None,
    ) -> List[LeaderboardEntry]:
        response = await self.get_leaderboard_with_details(competition_id, now=now)
        return response.entries

    async def count_teams(self, competition: Competition, entries: List[LeaderboardEntry]) -> int:
        """Teams in the series when the competition belongs to one, else teams on the leaderboard."""
        if competition.series_id is not None:
            series_teams = await self.source.count_series_teams(competition.series_id)
            if series_teams > 0:
                return series_teams
        return len({e.participant.team_id for e in entries})

    async def get_team_leaderboard(
        self,
        competition_id: int,
        now: Optional[dt.datetime] = None,
    ) -> List[TeamLeaderboardEntry]:
        competition = await self._require_competition(competition_id)
        entries = await self.get_leaderboard(competition_id, now=now)
        number_of_teams = await self.count_teams(competition, entries)

        teams = build_team_leaderboard(entries, number_of_teams, competition.points_multiplier)
        logger.info(f"Team leaderboard for competition {competition_id}: {len(teams)} teams")
        return teams

    # ================================================================
    # Tour standings
    # ================================================================

    async def get_tour_standings(
        self,
        tour_id: int,
        category_id: Optional[int] = None,
        scoring_type: Optional[ScoringType] = None,
        now: Optional[dt.datetime] = None,
    ) -> TourStandings:
        tour = await self._require_tour(tour_id)
        categories = await self.source.get_tour_categories(tour_id)
        competitions = await self.source.get_tour_competitions(tour_id)
        enrollments = await self.source.get_tour_enrollments(tour_id)

        participants = {}
        for competition in competitions:
            participants[competition.id] = await self.source.get_participants(competition.id)

        return compute_tour_standings(
            tour,
            competitions,
            participants,
            enrollments,
            categories,
            category_id=category_id,
            scoring_type=scoring_type,
            today=now.date() if now else None,
            now=now,
            settings=self.settings,
        )
