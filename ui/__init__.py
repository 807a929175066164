"""
ui/
---
Presentation layer.

    from ui import render_bars, render_grid
    from ui import playback_controls, algorithm_selector, …
"""

from ui.canvas import render_bars, render_grid, CanvasConfig, config_for_theme

from ui.controls import (
    playback_controls,
    view_toggle,
    algorithm_selector,
    pseudocode_viewer,
    explanation_panel,
    analytics_panel,
)

from ui.theme import ThemeSync, is_dark_theme

__all__ = [
    "render_bars",
    "render_grid",
    "CanvasConfig",
    "config_for_theme",
    "playback_controls",
    "view_toggle",
    "algorithm_selector",
    "pseudocode_viewer",
    "explanation_panel",
    "analytics_panel",
    "ThemeSync",
    "is_dark_theme",
]
