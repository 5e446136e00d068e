import datetime as dt
from enum import Enum
from pydantic import Field, field_validator
from typing import List, Optional

from .base import BaseGolfModel
from .course import Course
from .tee import CategoryTee, Tee
from .tour import PointTemplate


class StartMode(str, Enum):
    """How players tee off."""
    SCHEDULED = "scheduled"  # fixed tee times
    OPEN = "open"            # play any time inside a window


class Competition(BaseGolfModel):
    """Competition snapshot with everything the leaderboard needs."""
    id: int
    name: Optional[str] = None
    date: Optional[dt.date] = None
    course: Course = Field(default_factory=Course)
    tour_id: Optional[int] = None
    series_id: Optional[int] = None
    tee: Optional[Tee] = None
    category_tees: List[CategoryTee] = Field(default_factory=list)
    points_multiplier: float = Field(1.0, ge=0)
    start_mode: StartMode = StartMode.SCHEDULED
    open_end: Optional[dt.datetime] = None
    is_results_final: bool = False
    point_template: Optional[PointTemplate] = None

    @field_validator('points_multiplier', mode='before')
    @classmethod
    def default_multiplier(cls, v):
        # NULL and 0 both mean "no multiplier"
        return v or 1.0

    @field_validator('start_mode', mode='before')
    @classmethod
    def default_start_mode(cls, v):
        return v or StartMode.SCHEDULED

    @property
    def is_tour_competition(self) -> bool:
        return self.tour_id is not None

    def get_category_tee(self, category_id: Optional[int]) -> Optional[CategoryTee]:
        if category_id is None:
            return None
        for category_tee in self.category_tees:
            if category_tee.category_id == category_id:
                return category_tee
        return None

    def is_open_window_closed(self, now: Optional[dt.datetime] = None) -> bool:
        """True for open-start competitions whose play window has ended."""
        if self.start_mode != StartMode.OPEN or self.open_end is None:
            return False
        now = now or dt.datetime.now(dt.timezone.utc)
        open_end = self.open_end
        if open_end.tzinfo is None and now.tzinfo is not None:
            open_end = open_end.replace(tzinfo=dt.timezone.utc)
        elif open_end.tzinfo is not None and now.tzinfo is None:
            now = now.replace(tzinfo=dt.timezone.utc)
        return open_end < now


class ScoringType(str, Enum):
    GROSS = "gross"
    NET = "net"


class StoredResult(BaseGolfModel):
    """Finalized position/points for one participant, persisted by the caller."""
    participant_id: int
    position: int = Field(..., ge=0)
    points: float = 0
    scoring_type: ScoringType = ScoringType.GROSS
