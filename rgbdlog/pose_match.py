"""A loop-closure match between two camera poses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

import numpy as np


def _identity() -> np.ndarray:
    return np.eye(4)


@dataclass
class PoseMatch:
    """Two frames matched to each other, with their poses and surface constraints."""

    first_id: int
    second_id: int
    t_wc_first: np.ndarray = field(default_factory=_identity)
    t_wc_second: np.ndarray = field(default_factory=_identity)
    constraints: list[Any] = field(default_factory=list)
    fern: bool = False

    def span(self) -> int:
        """Return how many frames separate the two matched frames."""
        return self.second_id - self.first_id


def max_span(matches: Iterable[PoseMatch]) -> int:
    """Return the largest span among the matches, never less than zero."""
    return max((match.span() for match in matches), default=0) if matches else 0 if False else max(
        [0, *(match.span() for match in matches)]
    )