"""
main.py — Algorithm Visualizer Flask App
==========================================
The web server that powers the visualizer.

Routes:
  GET  /                 – main UI
  GET  /api/state        – current state payload (for polling)
  POST /api/start        – start / resume playback
  POST /api/pause        – pause playback
  POST /api/reset        – fresh array / grid, back to idle
  POST /api/step         – advance exactly one step (idle or paused)
  POST /api/tick         – timer hook; advances if the pending tick is due
  POST /api/speed        – {speed: 1..100}
  POST /api/config       – {view, algorithm}
  POST /api/grid/toggle  – {row, col}; wall edit while idle
  POST /api/theme        – {type: "THEME_CHANGE", theme}

State management:
  Each browser session gets a random id in the Flask session cookie;
  the PlaybackController for that id lives in the in-memory SESSIONS
  store.  The store is least-recently-used: past Settings.max_sessions
  the idlest session is dropped and its browser gets a fresh one.
  The server must run single-threaded (threaded=False): a controller
  is never touched by two requests at once.  shutdown() runs at exit.

Timing:
  The page polls /api/tick.  Every payload carries next_tick_ms, the
  delay until the controller's pending tick is due (null when nothing
  is scheduled), and the page waits that long before polling again.
"""

import atexit
import logging
import secrets
import uuid
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional

from flask import Flask, jsonify, render_template_string, request, session

from algorithms import View, algorithms_for_view
from config import Settings
from engine import PlaybackController, PlaybackState
from ui import (
    ThemeSync,
    algorithm_selector,
    analytics_panel,
    config_for_theme,
    explanation_panel,
    playback_controls,
    pseudocode_viewer,
    render_bars,
    render_grid,
    view_toggle,
)

log = logging.getLogger(__name__)

SETTINGS = Settings.from_env()

app = Flask(__name__)
app.secret_key = SETTINGS.secret_key or secrets.token_hex(32)

# session id → controller, least recently used first
SESSIONS: "OrderedDict[str, PlaybackController]" = OrderedDict()

# millisecond clock handed to new controllers (None = monotonic)
CLOCK: Optional[Callable[[], float]] = None

THEME = ThemeSync()
THEME.init()


def shutdown() -> None:
    """Drop every session and unsubscribe the theme listener."""
    SESSIONS.clear()
    THEME.teardown()
    log.info("Visualizer shut down")


atexit.register(shutdown)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_controller() -> PlaybackController:
    """Controller for this browser session, created on first use."""
    sid = session.get("sid")
    if sid is not None and sid in SESSIONS:
        SESSIONS.move_to_end(sid)
        return SESSIONS[sid]

    sid = uuid.uuid4().hex
    session["sid"] = sid
    SESSIONS[sid] = PlaybackController(SETTINGS, clock=CLOCK)
    while len(SESSIONS) > SETTINGS.max_sessions:
        dropped, _ = SESSIONS.popitem(last=False)
        log.info("Evicted idle session %s", dropped[:8])
    log.info("New session %s (%d active)", sid[:8], len(SESSIONS))
    return SESSIONS[sid]


def state_payload(ctl: PlaybackController) -> Dict[str, Any]:
    """Everything the page needs to redraw itself after any request."""
    snap = ctl.current_snapshot
    canvas_cfg = config_for_theme(THEME.is_dark)
    if ctl.view is View.SORTING:
        svg = render_bars(ctl.values, snap, canvas_cfg)
    else:
        svg = render_grid(ctl.grid, snap, canvas_cfg)
    info = ctl.algorithm
    return {
        "state":        ctl.state.value,
        "view":         ctl.view.value,
        "algorithm":    info.key,
        "speed":        ctl.speed,
        "next_tick_ms": ctl.ms_until_next_tick(),
        "path_found":   ctl.path_found,
        "snapshot":     snap.to_dict() if snap else None,
        "theme":        THEME.theme,
        "svg":          svg,
        "playback":     playback_controls(ctl.state, snap.step_number if snap else None, ctl.speed),
        "pseudocode":   pseudocode_viewer(info.pseudocode, snap.pseudocode_line if snap else None),
        "explanation":  explanation_panel(ctl.explanation),
        "analytics":    analytics_panel(ctl.metrics, ctl.view),
    }


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    ctl = get_controller()
    payload = state_payload(ctl)
    return render_template_string(
        INDEX_TEMPLATE,
        svg=payload["svg"],
        view_toggle=view_toggle(ctl.view),
        algo_selector=algorithm_selector(algorithms_for_view(ctl.view), ctl.algorithm.key),
        playback=payload["playback"],
        analytics=payload["analytics"],
        pseudocode=payload["pseudocode"],
        explanation=payload["explanation"],
    )


# ---------------------------------------------------------------------------
# API: Playback
# ---------------------------------------------------------------------------
@app.route("/api/state")
def api_state():
    return jsonify(state_payload(get_controller()))


@app.route("/api/start", methods=["POST"])
def api_start():
    ctl = get_controller()
    ctl.start()
    return jsonify(state_payload(ctl))


@app.route("/api/pause", methods=["POST"])
def api_pause():
    ctl = get_controller()
    ctl.pause()
    return jsonify(state_payload(ctl))


@app.route("/api/reset", methods=["POST"])
def api_reset():
    ctl = get_controller()
    ctl.reset()
    return jsonify(state_payload(ctl))


@app.route("/api/step", methods=["POST"])
def api_step():
    ctl = get_controller()
    ctl.step()
    return jsonify(state_payload(ctl))


@app.route("/api/tick", methods=["POST"])
def api_tick():
    ctl = get_controller()
    advanced = ctl.tick()
    payload = state_payload(ctl)
    payload["advanced"] = advanced
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Configuration
# ---------------------------------------------------------------------------
@app.route("/api/speed", methods=["POST"])
def api_speed():
    ctl = get_controller()
    try:
        ctl.set_speed(int(_json_body().get("speed")))
    except (TypeError, ValueError):
        return jsonify({"error": "speed must be an integer"}), 400
    return jsonify(state_payload(ctl))


@app.route("/api/config", methods=["POST"])
def api_config():
    ctl = get_controller()
    data = _json_body()
    try:
        ctl.set_algorithm_and_view(data.get("view"), data.get("algorithm"))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    payload = state_payload(ctl)
    payload["algo_selector"] = algorithm_selector(algorithms_for_view(ctl.view), ctl.algorithm.key)
    payload["view_toggle"] = view_toggle(ctl.view)
    return jsonify(payload)


@app.route("/api/grid/toggle", methods=["POST"])
def api_grid_toggle():
    ctl = get_controller()
    data = _json_body()
    try:
        row, col = int(data.get("row")), int(data.get("col"))
    except (TypeError, ValueError):
        return jsonify({"error": "row and col must be integers"}), 400
    toggled = ctl.toggle_wall(row, col)
    payload = state_payload(ctl)
    payload["toggled"] = toggled
    return jsonify(payload)


@app.route("/api/theme", methods=["POST"])
def api_theme():
    applied = THEME.handle_message(_json_body())
    return jsonify({"applied": applied, "theme": THEME.theme, "dark": THEME.is_dark})


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Algorithm Visualizer</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-teal: #06b6d4;
      --accent-emerald: #10b981;
      --accent-amber: #f59e0b;
      --accent-pink: #ec4899;
      --accent-purple: #a855f7;
      --glow-cyan: rgba(14, 165, 233, 0.4);
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 320px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    #main { flex: 1; display: flex; flex-direction: column; }

    #canvas-container {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
      border-bottom: 1px solid var(--border);
    }
    #canvas-svg { max-width: 100%; max-height: 100%; }
    #canvas-svg rect.cell { cursor: pointer; }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr;
      gap: 20px;
      padding: 20px;
      background: var(--bg-dark);
      min-height: 260px;
    }

    #pseudocode-container, #explanation-container {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 20px;
    }
    #pseudocode-container h3, #explanation-container h3 {
      font-size: 14px;
      text-transform: uppercase;
      margin-bottom: 16px;
      color: var(--accent-cyan);
    }

    .code-block {
      background: var(--bg-darker);
      border-radius: 8px;
      padding: 16px;
      font-family: 'JetBrains Mono', monospace;
      font-size: 13px;
      line-height: 1.6;
      white-space: pre;
    }
    .code-line { padding: 4px 12px; border-radius: 6px; }
    .code-line.highlight {
      background: linear-gradient(90deg, rgba(6, 182, 212, 0.15) 0%, transparent 100%);
      border-left: 3px solid var(--accent-cyan);
      box-shadow: 0 0 20px var(--glow-cyan);
    }

    .explanation-text { color: var(--text-secondary); line-height: 1.8; font-size: 15px; }
    .seg-active   { color: var(--accent-amber); font-weight: 700; }
    .seg-resolved { color: var(--accent-emerald); font-weight: 700; }
    .seg-pivot    { color: var(--accent-pink); font-weight: 700; }
    .seg-visited  { color: var(--accent-cyan); font-weight: 700; }
    .seg-path     { color: var(--accent-purple); font-weight: 700; }
    .seg-wall     { color: var(--text-secondary); font-weight: 700; }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 18px;
      margin-bottom: 16px;
    }
    .panel h3 { font-size: 13px; margin-bottom: 14px; text-transform: uppercase; }

    .button-row { display: flex; gap: 8px; margin-bottom: 12px; }
    button {
      background: linear-gradient(135deg, var(--accent-cyan), var(--accent-teal));
      color: #fff;
      border: none;
      padding: 10px 16px;
      border-radius: 8px;
      cursor: pointer;
      font-weight: 600;
    }
    button:disabled { opacity: 0.4; cursor: default; }

    select, input[type="range"] {
      width: 100%;
      padding: 8px;
      margin: 6px 0;
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      color: var(--text-primary);
    }

    .tabs { display: flex; gap: 6px; }
    .tab-btn { flex: 1; background: transparent; }
    .tab-btn.active { background: linear-gradient(135deg, var(--accent-cyan), var(--accent-teal)); }

    .step-info { font-family: 'JetBrains Mono', monospace; color: var(--text-secondary); margin: 10px 0; }
    .finished-badge {
      background: var(--accent-emerald);
      color: #fff;
      padding: 2px 8px;
      border-radius: 6px;
      font-size: 11px;
    }

    table { width: 100%; font-size: 13px; }
    table td:last-child { text-align: right; color: var(--accent-cyan); font-family: 'JetBrains Mono', monospace; }
    .placeholder { color: var(--text-secondary); font-size: 13px; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="view-toggle">{{ view_toggle|safe }}</div>
    <div id="algo-selector-wrap">{{ algo_selector|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>

    <div id="bottom-panel">
      <div id="pseudocode-container">
        <h3>Pseudocode</h3>
        <div id="pseudocode">{{ pseudocode|safe }}</div>
      </div>
      <div id="explanation-container">
        <h3>Step Explanation</h3>
        <div id="explanation">{{ explanation|safe }}</div>
      </div>
    </div>
  </div>

  <script>
    let pollTimer = null;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    function apply(data) {
      if (data.error) { console.warn(data.error); return; }
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.playback) document.getElementById('playback').innerHTML = data.playback;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
      if (data.explanation) document.getElementById('explanation').innerHTML = data.explanation;
      if (data.analytics) document.getElementById('analytics').innerHTML = data.analytics;
      if (data.algo_selector) document.getElementById('algo-selector-wrap').innerHTML = data.algo_selector;
      if (data.view_toggle) document.getElementById('view-toggle').innerHTML = data.view_toggle;
      schedule(data);
    }

    // wait for the controller's pending tick, then poll it
    function schedule(data) {
      clearTimeout(pollTimer);
      if (data.state === 'running' && data.next_tick_ms !== null) {
        pollTimer = setTimeout(async () => apply(await post('/api/tick')), data.next_tick_ms);
      }
    }

    document.addEventListener('click', async (e) => {
      const btn = e.target.closest('button');
      if (btn) {
        if (btn.id === 'btn-play') {
          const running = document.querySelector('.playback-controls').dataset.state === 'running';
          apply(await post(running ? '/api/pause' : '/api/start'));
        } else if (btn.id === 'btn-step') {
          apply(await post('/api/step'));
        } else if (btn.id === 'btn-reset') {
          apply(await post('/api/reset'));
        } else if (btn.dataset.view) {
          const algo = btn.dataset.view === 'sorting' ? 'bubble' : 'dijkstra';
          apply(await post('/api/config', {view: btn.dataset.view, algorithm: algo}));
        }
        return;
      }
      const cell = e.target.closest('rect.cell');
      if (cell) {
        apply(await post('/api/grid/toggle', {row: +cell.dataset.row, col: +cell.dataset.col}));
      }
    });

    document.addEventListener('change', async (e) => {
      if (e.target.id === 'algo-selector') {
        const opt = e.target.selectedOptions[0];
        apply(await post('/api/config', {view: opt.dataset.view, algorithm: opt.value}));
      }
    });

    document.addEventListener('input', async (e) => {
      if (e.target.id === 'speed-slider') {
        document.getElementById('speed-value').textContent = e.target.value;
        await post('/api/speed', {speed: +e.target.value});
      }
    });

    // host page theme changes
    window.addEventListener('message', async (event) => {
      if (event.data && event.data.type === 'THEME_CHANGE' && event.data.theme) {
        document.documentElement.setAttribute('data-theme', event.data.theme);
        const res = await post('/api/theme', event.data);
        if (res.applied) {
          const state = await fetch('/api/state');
          apply(await state.json());
        }
      }
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    configure_logging(SETTINGS.log_level)
    log.info("Algorithm Visualizer on http://localhost:5000")
    app.run(debug=True, host="0.0.0.0", port=5000, threaded=False)
