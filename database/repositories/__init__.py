from .competition_repo import CompetitionRepositoryDB
from .tour_repo import TourRepositoryDB

__all__ = ["CompetitionRepositoryDB", "TourRepositoryDB"]
