"""Round state machine: owns the bird, the tube column, score and high score.

The controller never touches the display or the mixer. A shell drives it with
``start_round``/``jump_pressed``/``tick`` and reacts to the ``on_jump`` and
``on_collision`` callbacks.
"""

from __future__ import annotations

import enum
import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Mapping

import pygame

from .config import BIRD_SIZE, DEFAULT_BIRD, MIN_DIFFICULTY, PlayfieldConfig
from .difficulty import difficulty_factor
from .entities import Actor, Obstacle, ObstacleColumn
from .utils import check_collision

logger = logging.getLogger(__name__)


class RoundState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class RoundSnapshot:
    """Consistent view of the round for renderers, taken between ticks."""

    state: RoundState
    actor_box: pygame.Rect | None
    obstacle_boxes: tuple[pygame.Rect, ...]
    score: int
    high_score: int
    last_score: int
    speed: float
    difficulty: float
    sprite_id: str | None


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class RoundController:
    def __init__(
        self,
        playfield: PlayfieldConfig,
        *,
        sprite_sizes: Mapping[str, tuple[int, int]] | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
        on_jump: Callable[[], None] | None = None,
        on_collision: Callable[[int], None] | None = None,
    ) -> None:
        self.playfield = playfield
        self.sprite_sizes = dict(sprite_sizes or {})
        self.clock = clock or _monotonic_ms
        self.rng = rng if rng is not None else random.Random()
        self.on_jump = on_jump
        self.on_collision = on_collision

        self.state = RoundState.IDLE
        self.actor: Actor | None = None
        self.column: ObstacleColumn | None = None
        self.sprite_id: str | None = None
        self.difficulty = MIN_DIFFICULTY
        self.high_score = 0
        self.last_score = 0
        self._start_ms = 0.0
        self._jump_pending = False

    @property
    def running(self) -> bool:
        return self.state is RoundState.RUNNING

    @property
    def score(self) -> int:
        return self.column.score if self.column is not None else 0

    @property
    def speed(self) -> float:
        return self.column.speed if self.column is not None else 0.0

    @property
    def obstacles(self) -> list[Obstacle]:
        return self.column.active_obstacles() if self.column is not None else []

    def sprite_size(self, sprite_id: str) -> tuple[int, int]:
        return self.sprite_sizes.get(sprite_id, BIRD_SIZE)

    def start_round(self, sprite_id: str = DEFAULT_BIRD) -> None:
        """Idle -> Running with a fresh bird and tube column."""
        if self.running:
            return
        width, height = self.sprite_size(sprite_id)
        self.difficulty = MIN_DIFFICULTY
        self._start_ms = self.clock()
        self._jump_pending = False
        self.sprite_id = sprite_id
        self.actor = Actor.centered(width, height, self.playfield)
        self.column = ObstacleColumn(self.playfield, self.rng)
        self.state = RoundState.RUNNING
        logger.info("round started with %s (%dx%d)", sprite_id, width, height)

    def jump_pressed(self) -> None:
        if self.running:
            self._jump_pending = True

    def tick(self) -> bool:
        """Advance one simulation step. Returns True if the round ended."""
        if not self.running:
            return False
        assert self.actor is not None and self.column is not None

        self.difficulty = difficulty_factor(self.clock() - self._start_ms)
        self.actor.set_difficulty(self.difficulty)
        self.column.set_difficulty(self.difficulty)

        if self._jump_pending:
            self._jump_pending = False
            self.actor.jump()
            if self.on_jump is not None:
                self.on_jump()

        self.actor.tick()
        self.column.tick()

        if check_collision(self.actor.bounding_box(), self.column.boxes()):
            self._end_round()
            return True
        return False

    def _end_round(self) -> None:
        score = self.score
        if score > self.high_score:
            self.high_score = score
        self.last_score = score
        self.state = RoundState.IDLE
        self.actor = None
        self.column = None
        self._jump_pending = False
        logger.info("round over: score=%d high=%d", score, self.high_score)
        if self.on_collision is not None:
            self.on_collision(score)

    def snapshot(self) -> RoundSnapshot:
        return RoundSnapshot(
            state=self.state,
            actor_box=self.actor.bounding_box() if self.actor is not None else None,
            obstacle_boxes=tuple(self.column.boxes()) if self.column is not None else (),
            score=self.score,
            high_score=self.high_score,
            last_score=self.last_score,
            speed=self.speed,
            difficulty=self.difficulty,
            sprite_id=self.sprite_id,
        )
