import os
import random

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from flappy.config import BIRD_SIZE, PlayfieldConfig
from flappy.controller import RoundController, RoundState

PLAYFIELD = PlayfieldConfig(800, 600)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def make_controller(**kwargs) -> RoundController:
    kwargs.setdefault("sprite_sizes", {"bird.png": (30, 30)})
    kwargs.setdefault("clock", FakeClock())
    kwargs.setdefault("rng", random.Random(3))
    return RoundController(PLAYFIELD, **kwargs)


def test_idle_inputs_are_noops() -> None:
    jumps = []
    ctl = make_controller(on_jump=lambda: jumps.append(1))
    ctl.jump_pressed()
    assert ctl.tick() is False
    snap = ctl.snapshot()
    assert snap.state is RoundState.IDLE
    assert snap.actor_box is None
    assert snap.obstacle_boxes == ()
    assert snap.score == 0
    assert jumps == []


def test_invalid_playfield_rejected() -> None:
    with pytest.raises(ValueError):
        PlayfieldConfig(0, 600)


def test_start_round_builds_fresh_round() -> None:
    ctl = make_controller()
    ctl.start_round("bird.png")
    assert ctl.state is RoundState.RUNNING
    assert ctl.actor is not None and ctl.column is not None
    assert ctl.actor.bounding_box().size == (30, 30)
    assert ctl.actor.bounding_box().center == (400, 300)
    assert ctl.difficulty == 1.0
    assert ctl.speed == 3.0
    assert len(ctl.snapshot().obstacle_boxes) == 2


def test_unknown_sprite_uses_default_size() -> None:
    ctl = make_controller()
    ctl.start_round("parrot.png")
    assert ctl.actor.bounding_box().size == BIRD_SIZE


def test_start_while_running_is_ignored() -> None:
    ctl = make_controller()
    ctl.start_round("bird.png")
    actor = ctl.actor
    ctl.start_round("bird.png")
    assert ctl.actor is actor


def test_pending_jump_applied_once_per_tick() -> None:
    jumps = []
    ctl = make_controller(on_jump=lambda: jumps.append(1))
    ctl.start_round("bird.png")
    ctl.jump_pressed()
    ctl.jump_pressed()
    ctl.tick()
    assert jumps == [1]
    # jump of -12 followed by one gravity step
    assert ctl.actor.dy == pytest.approx(-11.0)
    ctl.tick()
    assert jumps == [1]


def test_difficulty_follows_elapsed_time() -> None:
    clock = FakeClock()
    ctl = make_controller(clock=clock)
    clock.now = 5_000.0
    ctl.start_round("bird.png")
    clock.now = 30_000.0
    ctl.tick()
    assert ctl.difficulty == pytest.approx(1.2)
    assert ctl.actor.difficulty == pytest.approx(1.2)
    assert ctl.column.difficulty == pytest.approx(1.2)
    assert ctl.column.tubes[0].dx == pytest.approx(3.6)


def test_actor_stays_in_bounds_while_running() -> None:
    rng = random.Random(9)
    clock = FakeClock()
    ctl = make_controller(clock=clock)
    ctl.start_round("bird.png")
    for i in range(3000):
        if not ctl.running:
            break
        clock.now = i * 15.0
        if rng.random() < 0.08:
            ctl.jump_pressed()
        ctl.tick()
        if ctl.actor is not None:
            box = ctl.actor.bounding_box()
            assert 0 <= box.top and box.bottom <= PLAYFIELD.height
            assert 0 <= box.left and box.right <= PLAYFIELD.width


def test_falling_bird_hits_first_bottom_tube() -> None:
    events = []
    ctl = make_controller(on_collision=events.append)
    ctl.start_round("bird.png")
    actor_box = ctl.snapshot().actor_box
    tube_width = ctl.column.tubes[0].width
    # tubes move 3 px per tick at factor 1.0 and score 0
    expected = next(
        k for k in range(1, 1000)
        if PLAYFIELD.width - 3 * k < actor_box.right and PLAYFIELD.width - 3 * k + tube_width > actor_box.left
    )

    ended_at = None
    for k in range(1, 1001):
        if ctl.tick():
            ended_at = k
            break
        assert ctl.actor.y >= 0

    assert ended_at == expected
    assert ctl.state is RoundState.IDLE
    assert ctl.actor is None and ctl.column is None
    assert events == [0]
    assert ctl.high_score == 0
    for _ in range(1000 - ended_at):
        assert ctl.tick() is False


def _crash_into_top_tube(ctl: RoundController) -> bool:
    actor = ctl.actor
    actor.y = 0.0
    ctl.column.tubes[0].x = int(actor.x) + 10
    return ctl.tick()


def test_high_score_updates_only_when_beaten() -> None:
    ctl = make_controller()
    ctl.start_round("bird.png")
    ctl.column.score = 5
    assert _crash_into_top_tube(ctl) is True
    assert ctl.high_score == 5
    assert ctl.last_score == 5
    assert ctl.score == 0

    ctl.start_round("bird.png")
    ctl.column.score = 3
    assert _crash_into_top_tube(ctl) is True
    assert ctl.high_score == 5
    assert ctl.last_score == 3

    ctl.start_round("bird.png")
    assert ctl.score == 0
    assert ctl.snapshot().high_score == 5
