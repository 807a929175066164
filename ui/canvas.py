"""
canvas.py — SVG Bars & Grid Renderer
=====================================
Pure rendering functions: domain state + Snapshot → SVG string.

The renderers consume:
  • values / grid – the controller's domain state (shown before a run starts)
  • snapshot      – the current Snapshot, which wins over the domain state
  • config        – visual config (canvas size, colors, fonts, …)

And produce an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation.  These functions are stateless — the caller passes in
    everything it needs and gets back a string.
  - Colouring is a simple dict lookup: Category value → hex color, the
    same keys the explanation panel uses for its text segments.
  - Precedence for a bar:  pivot > active > resolved > default.
    Precedence for a cell: start/end > wall > path > current > active > visited.
"""

from typing import Dict, Optional, Sequence

from algorithms import Snapshot
from domain import Cell, Grid


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 420
    bg:     str = "#0d1117"

    # category → fill
    colors: Dict[str, str] = {
        "default":  "#30363d",
        "active":   "#f59e0b",   # amber — compared / swapped / updated
        "resolved": "#10b981",   # emerald — final position
        "pivot":    "#ec4899",   # pink — pivot / current cell
        "visited":  "#0ea5e9",   # cyan
        "path":     "#a855f7",   # purple — final path
        "wall":     "#64748b",   # slate
        "start":    "#22c55e",
        "end":      "#ef4444",
    }

    # bars
    bar_gap:          int = 2
    bar_label_color:  str = "#e6edf3"
    bar_label_size:   int = 9

    # grid
    cell_size:        int = 24
    cell_stroke:      str = "#161b22"
    distance_color:   str = "#0d1117"
    distance_size:    int = 9
    show_distances:   bool = False

    @classmethod
    def light(cls) -> "CanvasConfig":
        cfg = cls()
        cfg.bg = "#f8fafc"
        cfg.colors = dict(cls.colors, default="#cbd5e1", wall="#334155")
        cfg.bar_label_color = "#0f172a"
        cfg.cell_stroke = "#e2e8f0"
        return cfg


CONFIG = CanvasConfig()


def config_for_theme(dark: bool) -> CanvasConfig:
    return CONFIG if dark else CanvasConfig.light()


# ---------------------------------------------------------------------------
# Sorting view
# ---------------------------------------------------------------------------
def render_bars(
    values: Sequence[int],
    snapshot: Optional[Snapshot] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    One vertical bar per value, height proportional to the largest value.

    Args:
        values   : The controller's value list (used when snapshot is None).
        snapshot : Current snapshot of a sorting run.
        config   : Visual config.
    """
    if snapshot is not None:
        values = snapshot.values
    svg_parts = [_svg_open(config.width, config.height, config)]
    if not values:
        svg_parts.append("</svg>")
        return "\n".join(svg_parts)

    n = len(values)
    top = max(values) or 1
    slot = config.width / n
    bar_w = max(1.0, slot - config.bar_gap)
    show_labels = bar_w >= config.bar_label_size * 2

    for i, v in enumerate(values):
        h = (v / top) * (config.height - 20)
        x = i * slot + config.bar_gap / 2
        y = config.height - h
        fill = config.colors[_bar_category(i, snapshot)]
        svg_parts.append(
            f'<rect class="bar" data-index="{i}" x="{x:.1f}" y="{y:.1f}" '
            f'width="{bar_w:.1f}" height="{h:.1f}" fill="{fill}" rx="2"/>'
        )
        if show_labels:
            svg_parts.append(
                f'<text x="{x + bar_w / 2:.1f}" y="{y - 4:.1f}" text-anchor="middle" '
                f'font-size="{config.bar_label_size}" font-family="\'JetBrains Mono\', monospace" '
                f'fill="{config.bar_label_color}">{v}</text>'
            )

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


def _bar_category(index: int, snapshot: Optional[Snapshot]) -> str:
    if snapshot is None:
        return "default"
    hl = snapshot.highlight
    if hl.special == index:
        return "pivot"
    if index in hl.active:
        return "active"
    if index in hl.resolved:
        return "resolved"
    return "default"


# ---------------------------------------------------------------------------
# Pathfinding view
# ---------------------------------------------------------------------------
def render_grid(
    grid: Grid,
    snapshot: Optional[Snapshot] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    One square per cell.  Each <rect> carries data-row / data-col so the
    page can turn a click into a wall toggle.
    """
    cells = snapshot.cells if snapshot is not None and snapshot.cells else grid.freeze()
    size = config.cell_size
    width, height = grid.cols * size, grid.rows * size
    path = set(snapshot.path) if snapshot is not None else set()

    svg_parts = [_svg_open(width, height, config)]
    for row in cells:
        for cell in row:
            fill = config.colors[_cell_category(cell, snapshot, path)]
            x, y = cell.col * size, cell.row * size
            svg_parts.append(
                f'<rect class="cell" data-row="{cell.row}" data-col="{cell.col}" '
                f'x="{x}" y="{y}" width="{size}" height="{size}" '
                f'fill="{fill}" stroke="{config.cell_stroke}" stroke-width="1"/>'
            )
            if config.show_distances and snapshot is not None and cell.position in snapshot.distances:
                svg_parts.append(
                    f'<text x="{x + size / 2}" y="{y + size / 2 + 3}" text-anchor="middle" '
                    f'font-size="{config.distance_size}" fill="{config.distance_color}">'
                    f'{snapshot.distances[cell.position]}</text>'
                )
    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


def _cell_category(cell: Cell, snapshot: Optional[Snapshot], path: set) -> str:
    if cell.is_start:
        return "start"
    if cell.is_end:
        return "end"
    if cell.is_wall:
        return "wall"
    if snapshot is None:
        return "default"
    pos = cell.position
    if pos in path:
        return "path"
    if snapshot.highlight.special == pos:
        return "pivot"
    if pos in snapshot.highlight.active:
        return "active"
    if pos in snapshot.visited:
        return "visited"
    return "default"


def _svg_open(width: float, height: float, config: CanvasConfig) -> str:
    return (
        f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">'
    )
