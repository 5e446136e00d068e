from fastapi import Depends, Request

from scoring.service import ScoringService
from scoring.sources import ScoringDataSource


def get_db(request: Request) -> ScoringDataSource:
    """FastAPI dependency that provides the DatabaseManager."""
    return request.app.state.db_manager


def get_scoring_service(source: ScoringDataSource = Depends(get_db)) -> ScoringService:
    return ScoringService(source)
