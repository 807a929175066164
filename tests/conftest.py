"""Shared fixtures: a hand-driven millisecond clock and small boards."""

import pytest

from config import Settings
from domain import Grid
from engine import PlaybackController, PlaybackState


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


SMALL = Settings(
    array_length=6,
    grid_rows=3,
    grid_cols=3,
    start_cell=(0, 0),
    end_cell=(2, 2),
    seed=7,
)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def small_settings():
    return SMALL


@pytest.fixture
def open_grid():
    return Grid(3, 3, (0, 0), (2, 2))


@pytest.fixture
def controller(clock):
    return PlaybackController(SMALL, clock=clock)


def drain(ctl: PlaybackController, clock: FakeClock, limit: int = 10_000) -> int:
    """Advance the clock tick by tick until the controller leaves RUNNING."""
    ticks = 0
    while ctl.state is PlaybackState.RUNNING and ticks < limit:
        clock.advance(ctl.interval_ms)
        ctl.tick()
        ticks += 1
    return ticks
