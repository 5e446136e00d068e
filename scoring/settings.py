"""Scoring engine settings.

Formula constants are read once at import time. Override through the
environment with the ``SCORING_`` prefix, e.g. ``SCORING_STANDARD_SLOPE_RATING``.
"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringSettings(BaseSettings):
    """Golf formula constants and engine options."""
    model_config = SettingsConfigDict(env_prefix="SCORING_", case_sensitive=False)

    holes_per_round: int = Field(default=18, description="Holes in a full round")
    standard_slope_rating: int = Field(default=113, description="Slope reference for course handicap")
    standard_course_rating: float = Field(default=72.0, description="Course rating used when a tee has none")

    min_handicap_index: float = Field(default=-10.0)
    max_handicap_index: float = Field(default=54.0)

    # Score marker for a hole the player gave up on
    unreported_hole: int = Field(default=-1)

    log_level: str = Field(default="INFO", description="Minimum level for the stderr log sink")
    log_file: Optional[str] = Field(default=None, description="Daily-rotated DEBUG log, e.g. logs/scoring_{time:YYYY-MM-DD}.log")


scoring_settings = ScoringSettings()
