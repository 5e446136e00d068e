import json

from enum import Enum
from pydantic import Field, field_validator
from typing import Dict, Optional

from .base import BaseGolfModel


class ScoringMode(str, Enum):
    """Which leaderboards a tour publishes."""
    GROSS = "gross"
    NET = "net"
    BOTH = "both"


class PointTemplate(BaseGolfModel):
    """Finishing position -> points, with a "default" entry for positions not listed."""
    id: Optional[int] = None
    name: Optional[str] = None
    points_structure: Dict[str, float] = Field(default_factory=dict)

    @field_validator('points_structure', mode='before')
    @classmethod
    def decode_points_structure(cls, v):
        if isinstance(v, str):
            return json.loads(v)
        return v

    @field_validator('points_structure')
    @classmethod
    def validate_keys(cls, v):
        for key in v:
            if key != "default" and not (key.isdigit() and int(key) > 0):
                raise ValueError(f"Point template key '{key}' must be a position or 'default'")
        return v


class Tour(BaseGolfModel):
    """Tour snapshot."""
    id: int
    name: Optional[str] = None
    description: Optional[str] = None
    scoring_mode: ScoringMode = ScoringMode.GROSS
    point_template: Optional[PointTemplate] = None

    @field_validator('scoring_mode', mode='before')
    @classmethod
    def default_scoring_mode(cls, v):
        return v or ScoringMode.GROSS


class TourCategory(BaseGolfModel):
    id: int
    tour_id: int
    name: str
    description: Optional[str] = None
    sort_order: int = 0


class TourEnrollment(BaseGolfModel):
    """Active enrollment of a player in a tour."""
    player_id: int
    player_name: Optional[str] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    player_handicap: Optional[float] = None
    # Tour-specific override of the player's handicap
    playing_handicap: Optional[float] = None
    status: str = "active"

    @property
    def handicap_index(self) -> Optional[float]:
        if self.playing_handicap is not None:
            return self.playing_handicap
        return self.player_handicap
