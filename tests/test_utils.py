import os

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame

from flappy.utils import check_collision, clamp, gradient_pixels, scale_color


def test_clamp_basic() -> None:
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10


def test_collision_overlap() -> None:
    actor = pygame.Rect(100, 100, 30, 30)
    assert check_collision(actor, [pygame.Rect(100, 90, 20, 50)]) is True


def test_collision_disjoint() -> None:
    actor = pygame.Rect(0, 0, 10, 10)
    assert check_collision(actor, [pygame.Rect(20, 20, 10, 10)]) is False


def test_collision_touching_edges_do_not_count() -> None:
    actor = pygame.Rect(0, 0, 10, 10)
    assert check_collision(actor, [pygame.Rect(10, 0, 10, 10)]) is False
    assert check_collision(actor, [pygame.Rect(0, 10, 10, 10)]) is False
    assert check_collision(actor, []) is False


def test_collision_any_of_many() -> None:
    actor = pygame.Rect(50, 50, 10, 10)
    boxes = [pygame.Rect(0, 0, 5, 5), pygame.Rect(55, 55, 20, 20)]
    assert check_collision(actor, boxes) is True
    assert check_collision(actor, iter(boxes)) is True


def test_scale_color_clamps() -> None:
    assert scale_color((100, 200, 50), 2.0) == (200, 255, 100)
    assert scale_color((100, 200, 50), 0.5) == (50, 100, 25)


def test_gradient_pixels_shape_and_ends() -> None:
    top, bottom = (10, 20, 30), (110, 220, 130)
    px = gradient_pixels(8, 5, top, bottom)
    assert px.shape == (8, 5, 3)
    assert px.dtype == np.uint8
    assert tuple(px[0, 0]) == top
    assert tuple(px[7, 4]) == bottom
    # every column is identical
    assert (px == px[0]).all()
