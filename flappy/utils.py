"""Geometry and color utility functions used across the game."""

from __future__ import annotations

from typing import Iterable

import numpy as np
import pygame


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a numeric value into the inclusive range [lo, hi]."""
    return max(lo, min(hi, value))


def check_collision(actor_box: pygame.Rect, obstacle_boxes: Iterable[pygame.Rect]) -> bool:
    """True if actor_box overlaps any of obstacle_boxes.

    Overlap is strict: rectangles that only share an edge do not collide.
    """
    return actor_box.collidelist(list(obstacle_boxes)) != -1


def scale_color(color: tuple[int, int, int], factor: float) -> tuple[int, int, int]:
    """Scale an RGB color by factor, clamped to [0,255]."""
    r, g, b = color
    return (
        int(clamp(r * factor, 0, 255)),
        int(clamp(g * factor, 0, 255)),
        int(clamp(b * factor, 0, 255)),
    )


def gradient_pixels(
    w: int,
    h: int,
    top: tuple[int, int, int],
    bottom: tuple[int, int, int],
) -> np.ndarray:
    """Build a vertical gradient as a (w, h, 3) uint8 array for surfarray.

    Args:
        w, h: Dimensions.
        top, bottom: RGB colors at the first and last row.
    """
    t = np.linspace(0.0, 1.0, h, dtype=np.float32)[:, None]
    rows = np.asarray(top, dtype=np.float32) * (1.0 - t) + np.asarray(bottom, dtype=np.float32) * t
    c = np.clip(rows, 0, 255).astype(np.uint8)
    # surfarray indexes pixels as [x, y]
    return np.repeat(c[None, :, :], w, axis=0)
