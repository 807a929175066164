"""
config.py — Defaults & Settings
================================
Every default the app needs lives here; modules import from this file
instead of repeating literals.

    from config import Settings
    settings = Settings.from_env()

Environment overrides (all optional):
    ALGOVIS_SEED          – int seed for array generation (unset = random)
    ALGOVIS_ARRAY_LENGTH  – number of bars
    ALGOVIS_GRID_ROWS     – grid height
    ALGOVIS_GRID_COLS     – grid width
    ALGOVIS_SPEED         – initial speed, 1..100
    ALGOVIS_LOG_LEVEL     – logging level name
    ALGOVIS_MAX_SESSIONS  – live browser sessions kept before the oldest is dropped
    ALGOVIS_SECRET_KEY    – Flask session key (unset = random per process)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

ARRAY_LENGTH = 40
VALUE_MIN    = 20
VALUE_MAX    = 319

GRID_ROWS  = 20
GRID_COLS  = 35
START_CELL: Tuple[int, int] = (5, 5)
END_CELL:   Tuple[int, int] = (15, 30)

SPEED_MIN     = 1
SPEED_MAX     = 100
DEFAULT_SPEED = 50

MAX_SESSIONS = 256

ENV_PREFIX = "ALGOVIS_"


@dataclass(frozen=True)
class Settings:
    array_length: int                 = ARRAY_LENGTH
    value_min:    int                 = VALUE_MIN
    value_max:    int                 = VALUE_MAX
    grid_rows:    int                 = GRID_ROWS
    grid_cols:    int                 = GRID_COLS
    start_cell:   Tuple[int, int]     = START_CELL
    end_cell:     Tuple[int, int]     = END_CELL
    speed:        int                 = DEFAULT_SPEED
    seed:         Optional[int]       = None
    log_level:    str                 = "INFO"
    secret_key:   Optional[str]       = None
    max_sessions: int                 = MAX_SESSIONS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()
        rows = _int(env, "GRID_ROWS", defaults.grid_rows)
        cols = _int(env, "GRID_COLS", defaults.grid_cols)
        # smaller grids fall back to the corners
        start = START_CELL if START_CELL[0] < rows and START_CELL[1] < cols else (0, 0)
        end   = END_CELL if END_CELL[0] < rows and END_CELL[1] < cols else (rows - 1, cols - 1)
        return cls(
            array_length=_int(env, "ARRAY_LENGTH", defaults.array_length),
            grid_rows=rows,
            grid_cols=cols,
            start_cell=start,
            end_cell=end,
            speed=_int(env, "SPEED", defaults.speed),
            seed=_int(env, "SEED", None),
            log_level=env.get(ENV_PREFIX + "LOG_LEVEL", defaults.log_level).upper(),
            secret_key=env.get(ENV_PREFIX + "SECRET_KEY") or None,
            max_sessions=max(1, _int(env, "MAX_SESSIONS", defaults.max_sessions)),
        )


def _int(env: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None
