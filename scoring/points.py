"""
Points awarded for a finishing position.

Default formula:
- 1st place: number of participants + 2
- 2nd place: number of participants
- 3rd and below: number of participants - (position - 1), never below 0
"""
from __future__ import annotations

from typing import Mapping, Optional

from loguru import logger

DEFAULT_KEY = "default"


def calculate_default_points(position: int, number_of_participants: int, multiplier: float = 1) -> float:
    if position <= 0:
        return 0

    if position == 1:
        base = number_of_participants + 2
    elif position == 2:
        base = number_of_participants
    else:
        base = max(0, number_of_participants - (position - 1))

    return base * multiplier


def calculate_template_points(points_structure: Mapping[str, float], position: int) -> float:
    """Look up ``str(position)``, falling back to the "default" entry, else 0."""
    if position <= 0:
        return 0
    key = str(position)
    if key in points_structure:
        return points_structure[key]
    if DEFAULT_KEY in points_structure:
        return points_structure[DEFAULT_KEY]
    logger.warning(f"Point template has no entry for position {position} and no default")
    return 0


def calculate_position_points(
    position: int,
    number_of_participants: int,
    points_structure: Optional[Mapping[str, float]] = None,
) -> float:
    """Template points when a template is configured, else the default formula."""
    if points_structure is not None:
        return calculate_template_points(points_structure, position)
    return calculate_default_points(position, number_of_participants)
