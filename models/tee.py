import json

from pydantic import Field, field_validator
from typing import List, Optional, Tuple

from scoring.handicap import validate_stroke_index
from scoring.settings import scoring_settings

from .base import BaseGolfModel


class TeeRating(BaseGolfModel):
    """Course/slope rating pair, optionally for one gender."""
    gender: Optional[str] = None  # "men", "women"
    course_rating: float = Field(..., ge=50.0, le=90.0)
    slope_rating: int = Field(..., ge=55, le=155)


class Tee(BaseGolfModel):
    """Tee box with its ratings."""
    id: Optional[int] = None
    name: Optional[str] = None
    color: Optional[str] = None
    course_rating: Optional[float] = Field(None, ge=50.0, le=90.0)
    slope_rating: Optional[int] = Field(None, ge=55, le=155)
    ratings: List[TeeRating] = Field(default_factory=list)
    # Legacy per-tee table; the course's table applies when unset
    stroke_index: Optional[List[int]] = None

    @field_validator('ratings', mode='before')
    @classmethod
    def decode_ratings(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = json.loads(v)
        # json_group_array over an empty join yields [{"gender": null, ...}]
        return [r for r in v if not isinstance(r, dict) or r.get("course_rating") is not None]

    @field_validator('stroke_index', mode='before')
    @classmethod
    def decode_stroke_index(cls, v):
        if isinstance(v, str):
            v = json.loads(v) if v.strip() else None
        return v or None

    @field_validator('stroke_index')
    @classmethod
    def validate_stroke_index_permutation(cls, v):
        if v is not None and not validate_stroke_index(v):
            raise ValueError("Stroke index must contain each number 1-18 exactly once")
        return v

    def get_rating(self, gender: Optional[str] = None) -> Optional[TeeRating]:
        """Rating for the gender, else the men's rating, else the first one listed."""
        if not self.ratings:
            return None
        if gender:
            for rating in self.ratings:
                if rating.gender and rating.gender.lower() == gender.lower():
                    return rating
        for rating in self.ratings:
            if rating.gender == "men":
                return rating
        return self.ratings[0]

    def resolve_ratings(self, gender: Optional[str] = None) -> Tuple[float, int]:
        """(course_rating, slope_rating) with the standard values as last resort."""
        rating = self.get_rating(gender)
        if rating:
            return rating.course_rating, rating.slope_rating
        return (
            self.course_rating or scoring_settings.standard_course_rating,
            self.slope_rating or scoring_settings.standard_slope_rating,
        )


class CategoryTee(BaseGolfModel):
    """Tee pinned to a tour category for one competition."""
    category_id: int
    category_name: Optional[str] = None
    tee: Tee
