"""Tour standings: per-competition rankings accumulated into a season table."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from functools import reduce
from typing import Dict, List, Mapping, Optional, Sequence

from loguru import logger

from models import (
    Competition,
    CompetitionStanding,
    LeaderboardEntry,
    Participant,
    PlayerStanding,
    PointTemplateSummary,
    ScoringMode,
    ScoringType,
    Tour,
    TourCategory,
    TourEnrollment,
    TourStandings,
)
from scoring.exceptions import NotFoundError
from scoring.golf_scoring import is_complete_valid_round
from scoring.handicap import calculate_course_handicap
from scoring.leaderboard import LeaderboardBuilder
from scoring.points import calculate_position_points
from scoring.ranking import assign_positions
from scoring.settings import ScoringSettings, scoring_settings


@dataclass(frozen=True)
class RankedResult:
    """A finished player's placing in one competition."""
    competition: Competition
    player_id: int
    player_name: str
    position: int
    points: float
    relative_to_par: int
    net_relative_to_par: Optional[int] = None
    course_handicap: Optional[int] = None


def is_finished(entry: LeaderboardEntry, window_closed: bool = False) -> bool:
    """
    Finished rounds count towards standings.

    Manual totals always count. Hole-by-hole rounds need 18 valid holes and
    a locked scorecard, except after an open-start window has closed.
    """
    participant = entry.participant
    if participant.is_dq:
        return False
    if participant.has_manual_score:
        return True
    if not is_complete_valid_round(participant.score):
        return False
    return window_closed or participant.is_locked


def rank_competition_results(
    competition: Competition,
    participants: Sequence[Participant],
    *,
    scoring_type: ScoringType = ScoringType.GROSS,
    player_handicaps: Optional[Mapping[int, float]] = None,
    number_of_players: int = 0,
    points_structure: Optional[Mapping[str, float]] = None,
    now: Optional[dt.datetime] = None,
    settings: ScoringSettings = scoring_settings,
) -> List[RankedResult]:
    """
    Rank finished players of one competition and award points.

    Players without a linked player record are skipped. Lower score wins,
    ties are listed by name and share a position.
    """
    builder = LeaderboardBuilder(
        competition,
        scoring_mode=ScoringMode.NET if scoring_type == ScoringType.NET else ScoringMode.GROSS,
        player_handicaps=player_handicaps,
        now=now,
        settings=settings,
    )
    finished = [
        entry for entry in (builder.build_entry(p) for p in participants if p.player_id is not None)
        if is_finished(entry, builder.window_closed)
    ]

    def course_handicap(entry: LeaderboardEntry) -> int:
        if entry.course_handicap is not None:
            return entry.course_handicap
        # No handicap on record plays off scratch
        tee = builder.effective_tee(entry.participant)
        return calculate_course_handicap(0, tee.slope_rating, tee.course_rating, builder.total_par)

    scored = []
    for entry in finished:
        handicap = course_handicap(entry) if scoring_type == ScoringType.NET else None
        score = entry.relative_to_par - handicap if handicap is not None else entry.relative_to_par
        scored.append((score, entry.participant.display_name, entry, handicap))

    scored.sort(key=lambda s: (s[0], s[1]))
    positions = assign_positions(scored, lambda s: s[0])

    return [
        RankedResult(
            competition=competition,
            player_id=entry.participant.player_id,
            player_name=name,
            position=position,
            points=calculate_position_points(position, number_of_players, points_structure),
            relative_to_par=entry.relative_to_par,
            net_relative_to_par=score if handicap is not None else None,
            course_handicap=handicap,
        )
        for position, (score, name, entry, handicap) in zip(positions, scored)
    ]


def has_finished_players(
    competition: Competition,
    participants: Sequence[Participant],
    now: Optional[dt.datetime] = None,
) -> bool:
    if not competition.course.pars:
        return False
    builder = LeaderboardBuilder(competition, now=now)
    return any(is_finished(builder.build_entry(p), builder.window_closed) for p in participants)


def _accumulate(
    standings: Dict[int, PlayerStanding],
    result: RankedResult,
    enrollments: Mapping[int, TourEnrollment],
) -> Dict[int, PlayerStanding]:
    current = standings.get(result.player_id)
    if current is None:
        enrollment = enrollments.get(result.player_id)
        current = PlayerStanding(
            player_id=result.player_id,
            player_name=result.player_name,
            handicap_index=enrollment.handicap_index if enrollment else None,
            category_id=enrollment.category_id if enrollment else None,
            category_name=enrollment.category_name if enrollment else None,
        )

    breakdown = CompetitionStanding(
        competition_id=result.competition.id,
        competition_name=result.competition.name,
        competition_date=result.competition.date,
        points=result.points,
        position=result.position,
        score_relative_to_par=result.relative_to_par,
        net_score_relative_to_par=result.net_relative_to_par,
        course_handicap=result.course_handicap,
    )
    updated = current.model_copy(update={
        "total_points": current.total_points + result.points,
        "competitions_played": current.competitions_played + 1,
        "competitions": current.competitions + (breakdown,),
    })
    return {**standings, result.player_id: updated}


def final_ranking(standings: Sequence[PlayerStanding]) -> List[PlayerStanding]:
    """Most points first, then most competitions played, then name; equal (points, played) share a position."""
    ordered = sorted(
        standings,
        key=lambda s: (-s.total_points, -s.competitions_played, s.player_name.casefold()),
    )
    positions = assign_positions(ordered, lambda s: (s.total_points, s.competitions_played))
    return [s.model_copy(update={"position": p}) for p, s in zip(positions, ordered)]


def compute_tour_standings(
    tour: Tour,
    competitions: Sequence[Competition],
    participants_by_competition: Mapping[int, Sequence[Participant]],
    enrollments: Sequence[TourEnrollment],
    categories: Sequence[TourCategory] = (),
    *,
    category_id: Optional[int] = None,
    scoring_type: Optional[ScoringType] = None,
    today: Optional[dt.date] = None,
    now: Optional[dt.datetime] = None,
    settings: ScoringSettings = scoring_settings,
) -> TourStandings:
    """
    Standings for a tour, optionally for one category and scoring type.

    A competition counts once its date has passed or as soon as someone has
    finished, so live tours show up-to-date standings. Default points use the
    number of active enrollments (in the category, when filtering).
    """
    if category_id is not None and not any(c.id == category_id for c in categories):
        raise NotFoundError("Category not found")

    effective_type = scoring_type or (
        ScoringType.NET if tour.scoring_mode == ScoringMode.NET else ScoringType.GROSS
    )
    template = tour.point_template
    summary = PointTemplateSummary(id=template.id, name=template.name) if template else None

    if not competitions:
        return TourStandings(
            tour=tour,
            player_standings=[],
            total_competitions=0,
            scoring_mode=tour.scoring_mode,
            selected_scoring_type=effective_type,
            point_template=summary,
            categories=list(categories),
            selected_category_id=category_id,
        )

    active = [e for e in enrollments if e.status == "active"]
    by_player = {e.player_id: e for e in active}
    handicaps = {e.player_id: e.handicap_index for e in active if e.handicap_index is not None}
    number_of_players = len(
        active if category_id is None else [e for e in active if e.category_id == category_id]
    )
    today = today or dt.date.today()

    results: List[RankedResult] = []
    for competition in competitions:
        participants = participants_by_competition.get(competition.id, [])
        is_past = competition.date is not None and competition.date < today
        if not is_past and not has_finished_players(competition, participants, now):
            logger.debug(f"Tour {tour.id}: skipping competition {competition.id}, nothing finished yet")
            continue

        ranked = rank_competition_results(
            competition,
            participants,
            scoring_type=effective_type,
            player_handicaps=handicaps,
            number_of_players=number_of_players,
            points_structure=template.points_structure if template else None,
            now=now,
            settings=settings,
        )
        if category_id is not None:
            ranked = [
                r for r in ranked
                if r.player_id in by_player and by_player[r.player_id].category_id == category_id
            ]
        results.extend(ranked)

    standings = reduce(lambda acc, r: _accumulate(acc, r, by_player), results, {})
    player_standings = final_ranking(list(standings.values()))

    logger.info(
        f"Tour {tour.id}: {len(player_standings)} players ranked over "
        f"{len(competitions)} competitions ({effective_type.value})"
    )
    return TourStandings(
        tour=tour,
        player_standings=player_standings,
        total_competitions=len(competitions),
        scoring_mode=tour.scoring_mode,
        selected_scoring_type=effective_type,
        point_template=summary,
        categories=list(categories),
        selected_category_id=category_id,
    )
