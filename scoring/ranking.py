"""Position assignment with shared positions for ties."""
from __future__ import annotations

from typing import Any, Callable, Iterable, List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def assign_positions(items: Sequence[T], key: Callable[[T], Any]) -> List[int]:
    """
    Positions for a pre-sorted sequence.

    Items with an equal key share a position and the next distinct key
    resumes at its index + 1, e.g. keys (100, 100, 80) -> (1, 1, 3).
    """
    positions: List[int] = []
    previous = None
    for index, item in enumerate(items):
        value = key(item)
        if index == 0 or value != previous:
            current = index + 1
        positions.append(current)
        previous = value
    return positions


def rank(items: Iterable[T], sort_key: Callable[[T], Any], tie_key: Callable[[T], Any]) -> List[Tuple[int, T]]:
    """Sort by ``sort_key`` and pair every item with its tie-aware position."""
    ordered = sorted(items, key=sort_key)
    return list(zip(assign_positions(ordered, tie_key), ordered))
