import json

from datetime import datetime
from pydantic import Field, field_validator
from typing import List, Optional

from scoring.settings import scoring_settings

from .base import BaseGolfModel


class Participant(BaseGolfModel):
    """A player (or team position) entered in a competition, with their scorecard."""
    id: int
    team_id: int
    team_name: str
    tee_time_id: Optional[int] = None
    tee_order: Optional[int] = None
    position_name: Optional[str] = None
    player_id: Optional[int] = None
    player_name: Optional[str] = None
    gender: Optional[str] = None

    # One entry per hole: 0 = not played, -1 = gave up, >0 = strokes
    score: List[int] = Field(default_factory=lambda: [0] * scoring_settings.holes_per_round)
    manual_score_out: Optional[int] = Field(None, ge=0)
    manual_score_in: Optional[int] = Field(None, ge=0)
    manual_score_total: Optional[int] = Field(None, ge=0)

    is_locked: bool = False
    locked_at: Optional[datetime] = None
    is_dq: bool = False
    admin_notes: Optional[str] = None

    # Handicap captured when the round started; overrides the enrollment handicap
    handicap_index: Optional[float] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    start_time: Optional[str] = None  # tee time, e.g. "09:30"

    @field_validator('score', mode='before')
    @classmethod
    def decode_score(cls, v):
        if isinstance(v, str):
            v = json.loads(v) if v.strip() else None
        if not v:
            return [0] * scoring_settings.holes_per_round
        return v

    @field_validator('score')
    @classmethod
    def validate_score(cls, v):
        if len(v) != scoring_settings.holes_per_round:
            raise ValueError(
                f"Score must have {scoring_settings.holes_per_round} entries, got {len(v)}"
            )
        for hole, strokes in enumerate(v, start=1):
            if strokes < scoring_settings.unreported_hole:
                raise ValueError(f"Score {strokes} for hole {hole} is invalid")
        return v

    @property
    def has_manual_score(self) -> bool:
        return self.manual_score_total is not None

    @property
    def display_name(self) -> str:
        """Player name, else "<team> <position>"."""
        if self.player_name:
            return self.player_name
        return " ".join(part for part in (self.team_name, self.position_name) if part)
