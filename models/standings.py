import datetime as dt

from pydantic import BaseModel, ConfigDict
from typing import List, Optional, Tuple

from .tour import ScoringMode, Tour, TourCategory
from .competition import ScoringType


class CompetitionStanding(BaseModel):
    """What one competition contributed to a player's tour total."""
    model_config = ConfigDict(frozen=True)

    competition_id: int
    competition_name: Optional[str] = None
    competition_date: Optional[dt.date] = None
    points: float
    position: int
    score_relative_to_par: int
    net_score_relative_to_par: Optional[int] = None
    course_handicap: Optional[int] = None


class PlayerStanding(BaseModel):
    """A player's accumulated tour result."""
    model_config = ConfigDict(frozen=True)

    player_id: int
    player_name: str
    handicap_index: Optional[float] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    total_points: float = 0
    competitions_played: int = 0
    position: int = 0
    competitions: Tuple[CompetitionStanding, ...] = ()


class PointTemplateSummary(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None


class TourStandings(BaseModel):
    tour: Tour
    player_standings: List[PlayerStanding]
    total_competitions: int
    scoring_mode: ScoringMode
    selected_scoring_type: ScoringType
    point_template: Optional[PointTemplateSummary] = None
    categories: List[TourCategory] = []
    selected_category_id: Optional[int] = None
