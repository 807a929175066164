"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – start/pause/step/reset + speed slider
  • view_toggle         – sorting ↔ pathfinding
  • algorithm_selector  – algorithms of the current view
  • pseudocode_viewer   – with live line highlighting
  • explanation_panel   – coloured narration of the current step
  • analytics_panel     – comparisons, swaps, nodes visited, …

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from html import escape
from typing import List, Optional, Sequence

import config
from algorithms import AlgoInfo, Segment, View
from engine import PlaybackState, RunMetrics


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    state: PlaybackState = PlaybackState.IDLE,
    step_number: Optional[int] = None,
    speed: int = config.DEFAULT_SPEED,
) -> str:
    running = state is PlaybackState.RUNNING
    complete = state is PlaybackState.COMPLETE
    play_icon = "⏸" if running else "▶"
    play_label = "Pause" if running else ("Resume" if state is PlaybackState.PAUSED else "Start")
    step_label = "—" if step_number is None else step_number + 1

    return f"""
    <div class="panel playback-controls" data-state="{state.value}">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-play" title="{play_label}" {'disabled' if complete else ''}>{play_icon}</button>
        <button id="btn-step" title="Single step" {'disabled' if running or complete else ''}>⏭</button>
        <button id="btn-reset" title="Reset">⟲</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{step_label}</span>
        {' <span class="finished-badge">COMPLETE</span>' if complete else ''}
      </div>
      <div class="speed-control">
        <label for="speed-slider">Speed:</label>
        <input type="range" id="speed-slider" min="{config.SPEED_MIN}" max="{config.SPEED_MAX}" value="{speed}">
        <span id="speed-value">{speed}</span>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# View Toggle
# ---------------------------------------------------------------------------
def view_toggle(view: View = View.SORTING) -> str:
    buttons = []
    for v in View:
        active = 'active' if v is view else ''
        buttons.append(f'<button class="tab-btn {active}" data-view="{v.value}">{v.value.capitalize()}</button>')
    return f"""
    <div class="panel view-toggle">
      <div class="tabs">
        {''.join(buttons)}
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = "bubble",
) -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        options.append(
            f'<option value="{algo.key}" data-view="{algo.view.value}" {sel}>'
            f'{algo.label} — {algo.complexity_time}</option>'
        )

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(
    pseudocode_lines: Sequence[str],
    current_line: Optional[int] = None,
) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div class="placeholder">Select an algorithm to view pseudocode</div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(segments: Sequence[Segment] = ()) -> str:
    """Each segment becomes a <span> whose class names its category."""
    spans = "".join(
        f'<span class="seg seg-{s.category.value}">{escape(s.text)}</span>' for s in segments
    )
    return f"""<div class="explanation-text">{spans}</div>"""


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None, view: View = View.SORTING) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Start an algorithm to see metrics.</p>
        </div>
        """

    if view is View.SORTING:
        rows = [
            ("Comparisons", metrics.comparisons),
            ("Swaps", metrics.swaps),
            ("Passes" if metrics.algo_key == "bubble" else "Partitions",
             metrics.passes if metrics.algo_key == "bubble" else metrics.partitions),
        ]
    else:
        path_status = "✅ Found" if metrics.path_found else ("❌ Not Found" if metrics.complete else "…")
        rows = [
            ("Nodes Visited", metrics.nodes_visited),
            ("Distance Updates", metrics.distance_updates),
            ("Path Length", f"{metrics.path_length} steps" if metrics.path_found else "—"),
            ("Path", path_status),
        ]
    rows.append(("Total Steps", metrics.total_steps))
    rows.append(("Wall Time", f"{metrics.wall_time_ms:.2f} ms"))

    body = "".join(f"<tr><td>{label}:</td><td><strong>{value}</strong></td></tr>" for label, value in rows)
    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {metrics.algo_label}</h3>
      <table>
        {body}
      </table>
    </div>
    """
