"""Pytest fixtures for API tests."""
import datetime as dt

import pytest
from httpx import ASGITransport, AsyncClient

from api.dependencies import get_db
from api.main import app
from models import Competition, Course, Participant, ScoringMode, Tour, TourCategory, TourEnrollment
from scoring.sources import InMemoryScoringSource

PARS = [4, 4, 3, 5, 4, 3, 4, 5, 4, 4, 4, 3, 5, 4, 3, 4, 5, 4]


@pytest.fixture
def memory_source():
    """A finished two-player tour round, a friendly and a course without pars."""
    course = Course(id=1, name="Links", pars=PARS)
    participants = [
        Participant(id=1, team_id=10, team_name="Eagles", player_id=101, player_name="Ann",
                    score=[5] * 18, category_id=1, is_locked=True),
        Participant(id=2, team_id=20, team_name="Hawks", player_id=102, player_name="Bo",
                    score=list(PARS), category_id=1, is_locked=True),
    ]
    return InMemoryScoringSource(
        competitions=[
            Competition(id=1, name="Round 1", date=dt.date(2025, 5, 1), course=course, tour_id=1),
            Competition(id=2, name="Unrated", date=dt.date(2025, 5, 2), course=Course(id=2)),
        ],
        participants={1: participants, 2: [participants[0].model_copy(update={"id": 3})]},
        tours=[Tour(id=1, name="Summer Tour", scoring_mode=ScoringMode.BOTH)],
        enrollments={1: [
            TourEnrollment(player_id=101, player_name="Ann", category_id=1, player_handicap=18.0),
            TourEnrollment(player_id=102, player_name="Bo", category_id=1, player_handicap=2.0),
        ]},
        categories={1: [TourCategory(id=1, tour_id=1, name="Open")]},
    )


@pytest.fixture
async def client(memory_source):
    """Async HTTP client for testing the API (ASGI lifespan doesn't run with httpx)."""
    app.dependency_overrides[get_db] = lambda: memory_source
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
