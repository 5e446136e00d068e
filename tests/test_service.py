import datetime as dt

import pytest

from models import (
    Competition,
    Course,
    Participant,
    ScoringMode,
    ScoringType,
    StoredResult,
    Tour,
    TourCategory,
    TourEnrollment,
)
from scoring.exceptions import MalformedInputError, NotFoundError
from scoring.service import ScoringService
from scoring.sources import InMemoryScoringSource

PARS = [4, 4, 3, 5, 4, 3, 4, 5, 4, 4, 4, 3, 5, 4, 3, 4, 5, 4]
NOW = dt.datetime(2026, 6, 1, 12, 0, tzinfo=dt.timezone.utc)


def _participant(pid, team_id, player_id=None, **kwargs) -> Participant:
    data = {
        "id": pid,
        "team_id": team_id,
        "team_name": f"Team {team_id}",
        "player_id": player_id,
        "player_name": f"Player {pid}",
        "is_locked": True,
    }
    data.update(kwargs)
    return Participant(**data)


@pytest.fixture
def source():
    course = Course(id=1, name="Links", pars=PARS)
    competitions = [
        Competition(id=1, name="Round 1", date=dt.date(2026, 5, 1), course=course, tour_id=1, series_id=7),
        Competition(id=2, name="Friendly", date=dt.date(2026, 5, 2), course=course),
        Competition(id=3, name="Unrated", date=dt.date(2026, 5, 3), course=Course(id=2)),
    ]
    participants = {
        1: [
            _participant(1, 10, 101, score=[5] * 18, category_id=1),
            _participant(2, 10, 102, score=list(PARS), category_id=2),
            _participant(3, 20, 103, score=[4] * 18),
        ],
        2: [_participant(4, 30, score=list(PARS))],
        3: [_participant(5, 40, score=list(PARS))],
    }
    return InMemoryScoringSource(
        competitions=competitions,
        participants=participants,
        tours=[Tour(id=1, name="Summer Tour", scoring_mode=ScoringMode.BOTH)],
        enrollments={1: [
            TourEnrollment(player_id=101, category_id=1, player_handicap=18.0),
            TourEnrollment(player_id=102, category_id=2, player_handicap=4.0, playing_handicap=0.0),
            TourEnrollment(player_id=103, category_id=1, status="inactive", player_handicap=10.0),
        ]},
        categories={1: [
            TourCategory(id=2, tour_id=1, name="Ladies", sort_order=2),
            TourCategory(id=1, tour_id=1, name="Men", sort_order=1),
            TourCategory(id=3, tour_id=1, name="Juniors", sort_order=3),
        ]},
        series_teams={7: 6},
    )


@pytest.fixture
def service(source):
    return ScoringService(source)


# ================================================================
# Leaderboards
# ================================================================

@pytest.mark.asyncio
async def test_leaderboard_uses_tour_settings(service):
    response = await service.get_leaderboard_with_details(1, now=NOW)

    assert response.scoring_mode == ScoringMode.BOTH
    assert response.is_tour_competition
    assert [c.name for c in response.categories] == ["Men", "Ladies"]

    entries = {e.participant.id: e for e in response.entries}
    assert entries[1].course_handicap == 18          # enrollment handicap
    assert entries[1].net_relative_to_par == 0
    assert entries[2].course_handicap == 0           # playing handicap overrides
    assert entries[3].course_handicap is None        # inactive enrollment
    assert entries[1].is_projected


@pytest.mark.asyncio
async def test_leaderboard_for_friendly(service):
    entries = await service.get_leaderboard(2, now=NOW)
    assert len(entries) == 1
    assert entries[0].net_total_shots is None
    assert entries[0].points is None


@pytest.mark.asyncio
async def test_stored_results_loaded_when_final(source, service):
    source.competitions[1] = source.competitions[1].model_copy(update={"is_results_final": True})
    source.stored_results[1] = [StoredResult(participant_id=3, position=1, points=25)]

    entries = {e.participant.id: e for e in await service.get_leaderboard(1, now=NOW)}
    assert (entries[3].position, entries[3].points) == (1, 25)
    assert entries[1].points == 0
    assert entries[3].is_projected is False


@pytest.mark.asyncio
async def test_leaderboard_not_found(service):
    with pytest.raises(NotFoundError, match="Competition not found"):
        await service.get_leaderboard_with_details(99)


@pytest.mark.asyncio
async def test_leaderboard_without_pars(service):
    with pytest.raises(MalformedInputError, match="no pars found"):
        await service.get_leaderboard(3)


# ================================================================
# Team leaderboards
# ================================================================

@pytest.mark.asyncio
async def test_team_leaderboard_uses_series_team_count(service):
    teams = await service.get_team_leaderboard(1, now=NOW)

    # Team 10: +18 and 0; team 20: 0
    assert [t.team_id for t in teams] == [20, 10]
    assert [t.total_relative_score for t in teams] == [0, 18]
    # six teams in the series
    assert [t.team_points for t in teams] == [8, 6]


@pytest.mark.asyncio
async def test_team_leaderboard_counts_teams_without_series(service):
    teams = await service.get_team_leaderboard(2, now=NOW)
    assert teams[0].team_points == 3


@pytest.mark.asyncio
async def test_team_leaderboard_not_found(service):
    with pytest.raises(NotFoundError):
        await service.get_team_leaderboard(42)


# ================================================================
# Tour standings
# ================================================================

@pytest.mark.asyncio
async def test_tour_standings(service):
    standings = await service.get_tour_standings(1, now=NOW)

    assert standings.tour.name == "Summer Tour"
    assert standings.total_competitions == 1
    assert standings.selected_scoring_type == ScoringType.GROSS
    assert [c.name for c in standings.categories] == ["Men", "Ladies", "Juniors"]

    names = [(s.player_id, s.position) for s in standings.player_standings]
    assert names == [(102, 1), (103, 1), (101, 3)]


@pytest.mark.asyncio
async def test_tour_standings_net(service):
    standings = await service.get_tour_standings(1, scoring_type=ScoringType.NET, now=NOW)
    ranked = [(s.player_id, s.position) for s in standings.player_standings]
    # 101 is level after 18 strokes; 103's enrollment is inactive so they play off scratch
    assert ranked == [(101, 1), (102, 1), (103, 1)]


@pytest.mark.asyncio
async def test_tour_standings_category(service):
    standings = await service.get_tour_standings(1, category_id=2, now=NOW)
    (only,) = standings.player_standings
    assert only.player_id == 102
    assert only.total_points == 3       # one active lady: 1 + 2


@pytest.mark.asyncio
async def test_tour_standings_not_found(service):
    with pytest.raises(NotFoundError, match="Tour not found"):
        await service.get_tour_standings(5)
    with pytest.raises(NotFoundError, match="Category not found"):
        await service.get_tour_standings(1, category_id=42)
