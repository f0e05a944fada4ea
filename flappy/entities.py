"""Simulation entities: the bird, single tubes, and the tube column.

Everything here is integer/float state plus ``pygame.Rect`` boxes; nothing
draws. The shell renders from :class:`flappy.controller.RoundSnapshot`.
"""

from __future__ import annotations

import logging
import random

import pygame

from .config import (
    BASE_SPEED,
    FALL_SPEED_CAP,
    GAP_MARGIN,
    GRAVITY,
    JUMP_POWER,
    MAX_DIFFICULTY,
    MAX_GRAVITY,
    MAX_JUMP_POWER,
    MAX_SPEED,
    MIN_DIFFICULTY,
    MIN_JUMP_POWER,
    POINTS_PER_SPEED_UNIT,
    START_FALL_SPEED,
    PlayfieldConfig,
)
from .utils import clamp

logger = logging.getLogger(__name__)


class Actor:
    """The bird: vertical physics with a difficulty-scaled gravity and jump."""

    def __init__(self, x: float, y: float, width: int, height: int, playfield: PlayfieldConfig) -> None:
        self.width = int(width)
        self.height = int(height)
        self.playfield = playfield
        self.x = float(x)
        self.y = float(y)
        self.dy = START_FALL_SPEED
        self.difficulty = MIN_DIFFICULTY
        self._clamp_position()

    @classmethod
    def centered(cls, width: int, height: int, playfield: PlayfieldConfig) -> "Actor":
        return cls((playfield.width - width) / 2, (playfield.height - height) / 2, width, height, playfield)

    def set_difficulty(self, factor: float) -> None:
        self.difficulty = clamp(factor, MIN_DIFFICULTY, MAX_DIFFICULTY)

    @property
    def gravity_effect(self) -> float:
        return min(GRAVITY * self.difficulty, MAX_GRAVITY)

    @property
    def jump_power(self) -> float:
        return clamp(JUMP_POWER * (0.9 + self.difficulty * 0.1), MIN_JUMP_POWER, MAX_JUMP_POWER)

    def tick(self) -> None:
        # Terminal fall speed grows with difficulty
        if self.dy < FALL_SPEED_CAP * self.difficulty:
            self.dy += self.gravity_effect
        self.y += self.dy
        self._clamp_position()

    def jump(self) -> None:
        # Drop residual fall speed so the impulse is never eaten by it
        if self.dy > 0:
            self.dy = 0.0
        # Chained jumps never climb faster than one full-power jump
        self.dy = max(self.dy - self.jump_power, -MAX_JUMP_POWER)

    def _clamp_position(self) -> None:
        self.x = clamp(self.x, 0.0, max(0.0, float(self.playfield.width - self.width)))
        self.y = clamp(self.y, 0.0, max(0.0, float(self.playfield.height - self.height)))

    def bounding_box(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), self.width, self.height)


class Obstacle:
    """One tube segment scrolling left at dx px per tick."""

    def __init__(self, x: int, y: int, width: int, height: int, dx: float = 0.0) -> None:
        self.x = int(x)
        self.y = int(y)
        self.width = int(width)
        self.height = int(height)
        self.dx = float(dx)

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(self.x, self.y, self.width, max(0, self.height))

    def tick(self) -> None:
        self.x -= int(self.dx)

    def offscreen(self) -> bool:
        return self.x + self.width < 0

    def __repr__(self) -> str:
        return f"Obstacle(x={self.x}, y={self.y}, w={self.width}, h={self.height}, dx={self.dx:.2f})"


class ObstacleColumn:
    """A top/bottom tube pair that is rebuilt at the right edge once passed.

    Two difficulty channels drive it: the time-based factor pushed in through
    :meth:`set_difficulty` (gap size, tube width, speed multiplier) and the
    score-based ``base_speed`` recomputed on every recycle.
    """

    def __init__(self, playfield: PlayfieldConfig, rng: random.Random | None = None) -> None:
        self.playfield = playfield
        self.rng = rng if rng is not None else random.Random()
        self.difficulty = MIN_DIFFICULTY
        self.base_speed = BASE_SPEED
        self.score = 0
        self.gap_size = playfield.default_gap
        self.gap_position = GAP_MARGIN
        self.tubes: list[Obstacle] = []
        self.recycle_pair()

    @property
    def speed(self) -> float:
        return self.base_speed

    @property
    def tube_speed(self) -> float:
        return self.base_speed * self.difficulty

    def set_difficulty(self, factor: float) -> None:
        self.difficulty = clamp(factor, MIN_DIFFICULTY, MAX_DIFFICULTY)
        for tube in self.tubes:
            tube.dx = self.tube_speed

    def compute_gap_size(self) -> int:
        pf = self.playfield
        return max(pf.min_gap, round(pf.default_gap * (1.1 - self.difficulty * 0.05)))

    def compute_tube_width(self) -> int:
        pf = self.playfield
        return min(pf.max_tube_width, round(pf.width / (12 - self.difficulty * 0.5)))

    def recycle_pair(self) -> None:
        """Re-roll the gap and put a fresh pair at the right edge."""
        pf = self.playfield
        gap_size = self.compute_gap_size()
        upper = max(GAP_MARGIN, pf.height - gap_size - GAP_MARGIN)
        gap_position = self.rng.randint(GAP_MARGIN, upper)
        tube_width = self.compute_tube_width()

        top = Obstacle(pf.width, 0, tube_width, gap_position, self.tube_speed)
        bottom_y = gap_position + gap_size
        bottom = Obstacle(pf.width, bottom_y, tube_width, pf.height - bottom_y, self.tube_speed)

        self.gap_size = gap_size
        self.gap_position = gap_position
        self.tubes = [top, bottom]

    def tick(self) -> bool:
        """Advance the tubes; return True if the pair was passed and recycled."""
        for tube in self.tubes:
            tube.tick()
        if self.tubes and self.tubes[0].offscreen():
            self.score += 1
            self.base_speed = clamp(BASE_SPEED + self.score / POINTS_PER_SPEED_UNIT, BASE_SPEED, MAX_SPEED)
            self.recycle_pair()
            logger.debug("pair passed: score=%d speed=%.1f gap=%d@%d",
                         self.score, self.base_speed, self.gap_size, self.gap_position)
            return True
        return False

    def active_obstacles(self) -> list[Obstacle]:
        return list(self.tubes)

    def boxes(self) -> list[pygame.Rect]:
        return [tube.rect for tube in self.tubes]
