import json

from pydantic import Field, field_validator
from typing import List, Optional

from scoring.handicap import validate_stroke_index
from scoring.settings import scoring_settings

from .base import BaseGolfModel


def _decode_json_list(v):
    """Row columns store arrays as JSON text."""
    if isinstance(v, str):
        return json.loads(v) if v.strip() else []
    return v


class Course(BaseGolfModel):
    """Course snapshot: per-hole pars and the stroke index table."""
    id: Optional[int] = None
    name: Optional[str] = None
    pars: List[int] = Field(default_factory=list)
    stroke_index: Optional[List[int]] = None

    @field_validator('pars', mode='before')
    @classmethod
    def decode_pars(cls, v):
        if v is None:
            return []
        return _decode_json_list(v)

    @field_validator('pars')
    @classmethod
    def validate_pars(cls, v):
        if v and len(v) != scoring_settings.holes_per_round:
            raise ValueError(f"Pars must have {scoring_settings.holes_per_round} values, got {len(v)}")
        for hole, par in enumerate(v, start=1):
            if not 3 <= par <= 6:
                raise ValueError(f"Par {par} for hole {hole} outside range (3-6)")
        return v

    @field_validator('stroke_index', mode='before')
    @classmethod
    def decode_stroke_index(cls, v):
        v = _decode_json_list(v)
        return v or None

    @field_validator('stroke_index')
    @classmethod
    def validate_stroke_index_permutation(cls, v):
        if v is not None and not validate_stroke_index(v):
            raise ValueError("Stroke index must contain each number 1-18 exactly once")
        return v

    @property
    def total_par(self) -> int:
        return sum(self.pars)

    @property
    def front_nine_par(self) -> Optional[int]:
        return sum(self.pars[:9]) if self.pars else None

    @property
    def back_nine_par(self) -> Optional[int]:
        return sum(self.pars[9:18]) if self.pars else None
