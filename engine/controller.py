"""
controller.py — Playback Controller
====================================
The PlaybackController is the ONLY object the UI talks to during a run.
It owns the domain state (value list + grid), the active producer and
the timer, and exposes start / pause / reset / speed / edit operations.

State machine:
    IDLE     →  start()            →  RUNNING
    RUNNING  →  pause()            →  PAUSED
    PAUSED   →  start()            →  RUNNING
    IDLE / PAUSED → step()         →  PAUSED     (one manual advance)
    RUNNING  →  (producer done)    →  COMPLETE
    any      →  reset()            →  IDLE
    any      →  set_algorithm_and_view()  →  IDLE

Timing:
  The controller never sleeps.  The host calls tick() from its event
  loop (the browser polls /api/tick); when the pending tick is due one
  advance() runs and the next tick is scheduled `101 − speed` ms later.
  Changing the speed only affects ticks scheduled after the change.

Thread safety:
  Not thread-safe, by contract: ticks are strictly sequential and the
  web server runs single-threaded.
"""

import logging
import random
import time
from dataclasses import replace
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple, Union

import config
from algorithms import DEFAULT_ALGORITHM, AlgoInfo, Category, Segment, Snapshot, StepProducer, View, get_algorithm
from config import Settings
from domain import Grid, random_values
from engine.recorder import Recorder, RunMetrics

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE     = "idle"
    RUNNING  = "running"
    PAUSED   = "paused"
    COMPLETE = "complete"


READY_NARRATION = {
    View.SORTING:     (Segment("Ready to sort."),),
    View.PATHFINDING: (Segment("Ready to find path."),),
}
COMPLETE_NARRATION: Tuple[Segment, ...] = (Segment("Algorithm Complete!", Category.RESOLVED),)


def interval_for_speed(speed: int) -> int:
    """Milliseconds between ticks: speed 1 → 100 ms, speed 100 → 1 ms."""
    return 101 - speed


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        settings    : Defaults for array size, grid geometry, speed, seed.
        on_snapshot : Optional callback(Snapshot) fired on every publish.
                      The UI hooks its re-render here.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None,
        on_snapshot: Optional[Callable[[Snapshot], None]] = None,
    ):
        self.settings:    Settings                         = settings or Settings()
        self.on_snapshot: Optional[Callable[[Snapshot], None]] = on_snapshot
        self._clock:      Callable[[], float]              = clock or _monotonic_ms
        self._rng:        random.Random                    = rng or random.Random(self.settings.seed)

        self._view:       View                  = View.SORTING
        self._algorithm:  str                   = DEFAULT_ALGORITHM[View.SORTING]
        self._state:      PlaybackState         = PlaybackState.IDLE
        self._speed:      int                   = _clamp_speed(self.settings.speed)
        self._producer:   Optional[StepProducer] = None
        self._recorder:   Optional[Recorder]    = None
        self._due_at:     Optional[float]       = None
        self._current:    Optional[Snapshot]    = None
        self._explanation: Tuple[Segment, ...]  = READY_NARRATION[self._view]

        self._values: List[int] = []
        self._grid:   Grid      = self._new_grid()
        self._values = self._new_values()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Begin or resume timed playback.  No-op while running or after completion."""
        if self._state in (PlaybackState.RUNNING, PlaybackState.COMPLETE):
            return
        self._ensure_producer()
        self._set_state(PlaybackState.RUNNING)
        self._schedule(self._clock())

    def pause(self) -> None:
        """Cancel the pending tick; the producer stays at its suspension point."""
        if self._state is not PlaybackState.RUNNING:
            return
        self._due_at = None
        self._set_state(PlaybackState.PAUSED)

    def reset(self) -> None:
        """Drop the producer and regenerate the domain state of the current view."""
        self._discard_producer()
        self._current = None
        self._recorder = None
        if self._view is View.SORTING:
            self._values = self._new_values()
        else:
            self._grid = self._new_grid()
        self._explanation = READY_NARRATION[self._view]
        self._set_state(PlaybackState.IDLE)

    def set_speed(self, speed: int) -> None:
        """1 (slowest) … 100 (fastest).  The pending tick keeps its due time."""
        self._speed = _clamp_speed(speed)

    def set_algorithm_and_view(self, view: Union[View, str], algorithm: str) -> None:
        """Select an algorithm; always ends in a fresh IDLE session for that view."""
        view = View(view)
        info = get_algorithm(algorithm)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algorithm}")
        if info.view is not view:
            raise ValueError(f"Algorithm {algorithm!r} does not belong to the {view.value} view")
        log.debug("Selecting %s / %s", view.value, algorithm)
        self._view = view
        self._algorithm = algorithm
        self.reset()

    # ------------------------------------------------------------------
    # Domain edits (IDLE only)
    # ------------------------------------------------------------------
    def toggle_wall(self, row: int, col: int) -> bool:
        """Flip a wall.  Silently ignored unless IDLE, pathfinding, and not Start/End."""
        if self._state is not PlaybackState.IDLE or self._view is not View.PATHFINDING:
            log.debug("Ignoring wall edit at (%s, %s) while %s in %s view",
                      row, col, self._state.value, self._view.value)
            return False
        return self._grid.toggle_wall(row, col)

    def load_values(self, values: Iterable[int]) -> bool:
        """Replace the array to sort.  Same guard as toggle_wall, for the sorting view."""
        if self._state is not PlaybackState.IDLE or self._view is not View.SORTING:
            log.debug("Ignoring value load while %s in %s view", self._state.value, self._view.value)
            return False
        self._values = [int(v) for v in values]
        return True

    # ------------------------------------------------------------------
    # Advancing
    # ------------------------------------------------------------------
    def step(self) -> bool:
        """One manual advance from IDLE or PAUSED.  Returns True if a snapshot was published."""
        if self._state not in (PlaybackState.IDLE, PlaybackState.PAUSED):
            return False
        self._ensure_producer()
        self._set_state(PlaybackState.PAUSED)
        return self._advance(self._clock())

    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call from the host's event loop.  If running and the pending tick
        is due, advances exactly once.  Returns True if a snapshot was published.
        """
        if self._state is not PlaybackState.RUNNING or self._due_at is None:
            return False
        now = self._clock() if now is None else now
        if now < self._due_at:
            return False
        self._due_at = None
        return self._advance(now)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def view(self) -> View:
        return self._view

    @property
    def algorithm(self) -> AlgoInfo:
        return get_algorithm(self._algorithm)

    @property
    def speed(self) -> int:
        return self._speed

    @property
    def interval_ms(self) -> int:
        return interval_for_speed(self._speed)

    @property
    def current_snapshot(self) -> Optional[Snapshot]:
        return self._current

    @property
    def explanation(self) -> Tuple[Segment, ...]:
        return self._explanation

    @property
    def values(self) -> Tuple[int, ...]:
        return tuple(self._values)

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def path_found(self) -> bool:
        return self._recorder.path_found if self._recorder else False

    @property
    def metrics(self) -> Optional[RunMetrics]:
        return self._recorder.metrics() if self._recorder else None

    @property
    def has_producer(self) -> bool:
        return self._producer is not None

    def ms_until_next_tick(self, now: Optional[float] = None) -> Optional[float]:
        if self._due_at is None:
            return None
        now = self._clock() if now is None else now
        return max(0.0, self._due_at - now)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _ensure_producer(self) -> None:
        if self._producer is not None:
            return
        info = self.algorithm
        domain_state = self._values if self._view is View.SORTING else self._grid
        self._producer = info.producer(domain_state)
        self._recorder = Recorder(info)
        log.debug("Created %s for %s", type(self._producer).__name__, self._view.value)

    def _advance(self, now: float) -> bool:
        result = self._producer.advance()
        if result.done:
            self._complete()
            return False
        self._publish(result.snapshot)
        if self._state is PlaybackState.RUNNING:
            self._schedule(now)
        return True

    def _publish(self, snapshot: Snapshot) -> None:
        self._current = snapshot
        self._explanation = snapshot.explanation
        self._recorder.observe(snapshot)
        if self.on_snapshot:
            self.on_snapshot(snapshot)

    def _complete(self) -> None:
        self._discard_producer()
        self._recorder.mark_complete()
        self._explanation = COMPLETE_NARRATION
        if self._current is not None:
            if self._view is View.SORTING:
                self._values = list(self._current.values)
            self._current = replace(self._current, explanation=COMPLETE_NARRATION)
            if self.on_snapshot:
                self.on_snapshot(self._current)
        self._set_state(PlaybackState.COMPLETE)
        log.info("Run complete: %s, %d steps, path_found=%s",
                 self._algorithm, self._recorder.total_steps, self._recorder.path_found)

    def _schedule(self, now: float) -> None:
        self._due_at = now + self.interval_ms

    def _discard_producer(self) -> None:
        self._producer = None
        self._due_at = None

    def _set_state(self, state: PlaybackState) -> None:
        if state is not self._state:
            log.debug("Playback %s → %s", self._state.value, state.value)
        self._state = state

    def _new_values(self) -> List[int]:
        s = self.settings
        return random_values(s.array_length, s.value_min, s.value_max, rng=self._rng)

    def _new_grid(self) -> Grid:
        s = self.settings
        return Grid(s.grid_rows, s.grid_cols, s.start_cell, s.end_cell)


def _clamp_speed(speed: int) -> int:
    return max(config.SPEED_MIN, min(config.SPEED_MAX, int(speed)))
