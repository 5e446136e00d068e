from enum import Enum
from pydantic import Field
from typing import List, Optional

from scoring.golf_scoring import has_invalid_hole

from .base import CamelModel
from .participant import Participant
from .tour import ScoringMode, TourCategory


class LeaderboardEntry(CamelModel):
    """One participant's line on a competition leaderboard."""
    participant: Participant
    total_shots: int
    holes_played: int
    relative_to_par: int
    start_time: Optional[str] = None

    # Net fields, only for tours scoring net or both
    net_total_shots: Optional[int] = None
    net_relative_to_par: Optional[int] = None
    course_handicap: Optional[int] = None
    handicap_strokes_per_hole: Optional[List[int]] = None

    is_dnf: bool = Field(False, alias="isDNF")

    # Tour competitions only: stored (final) or projected positions and points
    position: Optional[int] = None
    points: Optional[float] = None
    net_position: Optional[int] = None
    net_points: Optional[float] = None
    is_projected: Optional[bool] = None

    @property
    def has_invalid_round(self) -> bool:
        return has_invalid_hole(self.participant.score)

    @property
    def has_started(self) -> bool:
        return self.holes_played > 0


class TeeInfo(CamelModel):
    """Default tee reported with the leaderboard."""
    id: int
    name: Optional[str] = None
    color: Optional[str] = None
    course_rating: float
    slope_rating: int
    stroke_index: Optional[List[int]] = None


class CategoryTeeInfo(CamelModel):
    category_id: int
    category_name: str
    tee_id: Optional[int] = None
    tee_name: Optional[str] = None
    course_rating: float
    slope_rating: int


class LeaderboardResponse(CamelModel):
    entries: List[LeaderboardEntry]
    competition_id: int
    scoring_mode: Optional[ScoringMode] = None
    is_tour_competition: bool = False
    is_results_final: bool = False
    tee: Optional[TeeInfo] = None
    category_tees: Optional[List[CategoryTeeInfo]] = None
    categories: Optional[List[TourCategory]] = None


class TeamStatus(str, Enum):
    FINISHED = "FINISHED"
    IN_PROGRESS = "IN_PROGRESS"
    NOT_STARTED = "NOT_STARTED"


class TeamLeaderboardEntry(CamelModel):
    team_id: int
    team_name: str
    status: TeamStatus
    start_time: Optional[str] = None
    display_progress: str  # "Starts 09:30", "Thru 14" or "F"
    total_relative_score: Optional[int] = None  # None until started
    total_shots: Optional[int] = None
    team_points: Optional[float] = None
