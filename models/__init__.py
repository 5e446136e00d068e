from .base import BaseGolfModel, CamelModel
from .course import Course
from .tee import CategoryTee, Tee, TeeRating
from .tour import PointTemplate, ScoringMode, Tour, TourCategory, TourEnrollment
from .participant import Participant
from .competition import Competition, ScoringType, StartMode, StoredResult
from .leaderboard import (
    CategoryTeeInfo,
    LeaderboardEntry,
    LeaderboardResponse,
    TeamLeaderboardEntry,
    TeamStatus,
    TeeInfo,
)
from .standings import CompetitionStanding, PlayerStanding, PointTemplateSummary, TourStandings

__all__ = [
    "BaseGolfModel",
    "CamelModel",
    "Course",
    "CategoryTee",
    "Tee",
    "TeeRating",
    "PointTemplate",
    "ScoringMode",
    "Tour",
    "TourCategory",
    "TourEnrollment",
    "Participant",
    "Competition",
    "ScoringType",
    "StartMode",
    "StoredResult",
    "CategoryTeeInfo",
    "LeaderboardEntry",
    "LeaderboardResponse",
    "TeamLeaderboardEntry",
    "TeamStatus",
    "TeeInfo",
    "CompetitionStanding",
    "PlayerStanding",
    "PointTemplateSummary",
    "TourStandings",
]
