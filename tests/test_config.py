"""Tests for defaults and environment overrides."""

import pytest

import config
from config import Settings


class TestSettings:
    def test_defaults(self):
        s = Settings.from_env({})
        assert s.array_length == 40
        assert (s.value_min, s.value_max) == (20, 319)
        assert (s.grid_rows, s.grid_cols) == (20, 35)
        assert s.start_cell == (5, 5)
        assert s.end_cell == (15, 30)
        assert s.speed == config.DEFAULT_SPEED
        assert s.seed is None

    def test_overrides(self):
        s = Settings.from_env({
            "ALGOVIS_ARRAY_LENGTH": "12",
            "ALGOVIS_SEED": "99",
            "ALGOVIS_SPEED": "80",
            "ALGOVIS_LOG_LEVEL": "debug",
        })
        assert (s.array_length, s.seed, s.speed) == (12, 99, 80)
        assert s.log_level == "DEBUG"

    def test_small_grid_moves_endpoints_to_corners(self):
        s = Settings.from_env({"ALGOVIS_GRID_ROWS": "4", "ALGOVIS_GRID_COLS": "4"})
        assert s.start_cell == (0, 0)
        assert s.end_cell == (3, 3)

    def test_blank_value_uses_default(self):
        assert Settings.from_env({"ALGOVIS_SEED": "  "}).seed is None

    def test_bad_integer_names_variable(self):
        with pytest.raises(ValueError, match="ALGOVIS_GRID_ROWS"):
            Settings.from_env({"ALGOVIS_GRID_ROWS": "many"})

    def test_session_cap(self):
        assert Settings.from_env({}).max_sessions == config.MAX_SESSIONS
        assert Settings.from_env({"ALGOVIS_MAX_SESSIONS": "8"}).max_sessions == 8
        assert Settings.from_env({"ALGOVIS_MAX_SESSIONS": "0"}).max_sessions == 1
