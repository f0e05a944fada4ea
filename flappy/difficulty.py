"""Time-driven difficulty factor shared by the bird and the tube column."""

from __future__ import annotations

from .config import DIFFICULTY_INTERVAL_MS, DIFFICULTY_STEP, MAX_DIFFICULTY, MIN_DIFFICULTY
from .utils import clamp


def difficulty_factor(elapsed_ms: float) -> float:
    """Factor for a round that has been running for elapsed_ms.

    Grows by DIFFICULTY_STEP for every completed interval and saturates at
    MAX_DIFFICULTY.
    """
    steps = max(0, int(elapsed_ms // DIFFICULTY_INTERVAL_MS))
    return clamp(MIN_DIFFICULTY + steps * DIFFICULTY_STEP, MIN_DIFFICULTY, MAX_DIFFICULTY)
