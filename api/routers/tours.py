"""Tour standings endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from api.dependencies import get_scoring_service
from models import ScoringType, TourStandings
from scoring.exceptions import HandicapRangeError, MalformedInputError, NotFoundError
from scoring.service import ScoringService

router = APIRouter()


@router.get("/{tour_id}/standings", response_model=TourStandings)
async def get_standings(
    tour_id: int,
    category_id: Optional[int] = Query(None),
    scoring_type: Optional[ScoringType] = Query(None, description="Defaults to the tour's scoring mode"),
    service: ScoringService = Depends(get_scoring_service),
):
    try:
        return await service.get_tour_standings(
            tour_id, category_id=category_id, scoring_type=scoring_type
        )
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except (MalformedInputError, HandicapRangeError) as e:
        raise HTTPException(400, str(e))
