from __future__ import annotations

"""Game configuration constants for Flappy."""

from dataclasses import dataclass
from pathlib import Path

# Game configuration
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FPS = 60
TICK_MS = 15  # fixed simulation step
MAX_TICKS_PER_FRAME = 5  # catch-up cap after a stall

# Physics (per tick, tuned for TICK_MS)
START_FALL_SPEED = 1.0
GRAVITY = 1.0
MAX_GRAVITY = 1.8
FALL_SPEED_CAP = 4.0  # multiplied by the difficulty factor
JUMP_POWER = 12.0
MIN_JUMP_POWER = 11.0
MAX_JUMP_POWER = 14.0

# Difficulty
DIFFICULTY_INTERVAL_MS = 10_000
DIFFICULTY_STEP = 0.1
MIN_DIFFICULTY = 1.0
MAX_DIFFICULTY = 1.7

# Obstacles
BASE_SPEED = 3.0
MAX_SPEED = 6.5
POINTS_PER_SPEED_UNIT = 10.0  # points needed for +1 px/tick
GAP_MARGIN = 50  # px kept free above and below the gap

# Bird sprites
ASSET_DIR = Path(__file__).resolve().parent.parent / "assets"
AVAILABLE_BIRDS = ("bird.png", "bird2.png")
DEFAULT_BIRD = AVAILABLE_BIRDS[0]
BIRD_SIZE = (34, 24)  # used when the sprite has no image metadata
TUBE_IMAGE = "TubeBody.png"
BACKGROUND_IMAGE = "background.jpg"
JUMP_SOUND = "chirp.wav"
COLLISION_SOUND = "dang.wav"

# Palette
COL_SKY_TOP = (78, 192, 202)
COL_SKY_BOTTOM = (196, 236, 232)
COL_TUBE = (94, 170, 52)
COL_BIRD = (246, 206, 64)
COL_TEXT = (0, 0, 0)
COL_SELECT = (0, 0, 255)


@dataclass(frozen=True)
class PlayfieldConfig:
    """Size of the simulation area, in the renderer's units (pixels)."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"playfield must be positive, got {self.width}x{self.height}")

    @property
    def default_gap(self) -> int:
        return self.height // 3

    @property
    def min_gap(self) -> int:
        return self.height // 4

    @property
    def max_tube_width(self) -> int:
        return self.width // 8

    @classmethod
    def default(cls) -> "PlayfieldConfig":
        return cls(WINDOW_WIDTH, WINDOW_HEIGHT)
