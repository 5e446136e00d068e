"""Competition leaderboard endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from typing import List

from api.dependencies import get_scoring_service
from models import LeaderboardResponse, TeamLeaderboardEntry
from scoring.exceptions import HandicapRangeError, MalformedInputError, NotFoundError
from scoring.service import ScoringService

router = APIRouter()


@router.get("/{competition_id}/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(
    competition_id: int,
    service: ScoringService = Depends(get_scoring_service),
):
    """Individual leaderboard with tee info and, for tour competitions, points."""
    try:
        return await service.get_leaderboard_with_details(competition_id)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except (MalformedInputError, HandicapRangeError) as e:
        raise HTTPException(400, str(e))


@router.get("/{competition_id}/team-leaderboard", response_model=List[TeamLeaderboardEntry])
async def get_team_leaderboard(
    competition_id: int,
    service: ScoringService = Depends(get_scoring_service),
):
    try:
        return await service.get_team_leaderboard(competition_id)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except (MalformedInputError, HandicapRangeError) as e:
        raise HTTPException(400, str(e))
