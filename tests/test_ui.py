"""Tests for the SVG renderers, HTML panels and theme sync."""

from algorithms import Category, Segment, View, get_algorithm
from algorithms.bubble_sort import BubbleSortProducer
from algorithms.dijkstra import DijkstraProducer
from engine import PlaybackState, run_to_completion
from ui import (
    CanvasConfig,
    ThemeSync,
    analytics_panel,
    explanation_panel,
    is_dark_theme,
    playback_controls,
    pseudocode_viewer,
    render_bars,
    render_grid,
)


class TestCanvas:
    def test_one_bar_per_value(self):
        svg = render_bars([30, 60, 90])
        assert svg.count('class="bar"') == 3
        assert svg.startswith("<svg")

    def test_bar_colours_follow_highlight(self):
        snap = run_to_completion(BubbleSortProducer([3, 1, 2]))[1]
        svg = render_bars((), snap)
        active = CanvasConfig.colors["active"]
        assert svg.count(f'fill="{active}"') == 2

    def test_empty_values(self):
        assert 'class="bar"' not in render_bars([])

    def test_grid_cells_and_walls(self, open_grid):
        open_grid.toggle_wall(1, 1)
        svg = render_grid(open_grid)
        assert svg.count('class="cell"') == 9
        assert 'data-row="1" data-col="1"' in svg
        assert svg.count(f'fill="{CanvasConfig.colors["wall"]}"') == 1

    def test_grid_path_colour(self, open_grid):
        last = run_to_completion(DijkstraProducer(open_grid))[-1]
        svg = render_grid(open_grid, last)
        # start and end keep their own colours
        assert svg.count(f'fill="{CanvasConfig.colors["path"]}"') == len(last.path) - 2

    def test_light_palette(self):
        light = CanvasConfig.light()
        assert light.bg != CanvasConfig.bg
        assert CanvasConfig.colors["default"] == "#30363d"


class TestPanels:
    def test_explanation_segments(self):
        html = explanation_panel((Segment("Checking "), Segment("<3>", Category.ACTIVE)))
        assert '<span class="seg seg-active">&lt;3&gt;</span>' in html
        assert "seg-default" in html

    def test_pseudocode_highlight(self):
        lines = get_algorithm("bubble").pseudocode
        html = pseudocode_viewer(lines, 2)
        assert html.count("highlight") == 1
        assert 'data-line="2"' in html
        assert "&gt;" in html

    def test_pseudocode_without_line(self):
        assert "highlight" not in pseudocode_viewer(["a", "b"], None)

    def test_playback_buttons(self):
        assert "Pause" in playback_controls(PlaybackState.RUNNING)
        html = playback_controls(PlaybackState.COMPLETE, 9, 80)
        assert "COMPLETE" in html
        assert 'value="80"' in html

    def test_analytics(self, controller):
        assert "placeholder" in analytics_panel(None)
        controller.step()
        html = analytics_panel(controller.metrics, View.SORTING)
        assert "Comparisons" in html
        assert "Bubble Sort" in html


class TestThemeSync:
    def test_ignores_messages_until_init(self):
        sync = ThemeSync()
        assert not sync.handle_message({"type": "THEME_CHANGE", "theme": "cupcake"})
        sync.init()
        assert sync.handle_message({"type": "THEME_CHANGE", "theme": "cupcake"})
        assert sync.theme == "cupcake"
        assert not sync.is_dark

    def test_teardown_unsubscribes(self):
        sync = ThemeSync(default="light")
        sync.init("dracula")
        assert sync.is_dark
        sync.teardown()
        assert sync.theme == "light"
        assert not sync.handle_message({"type": "THEME_CHANGE", "theme": "night"})

    def test_malformed_messages(self):
        sync = ThemeSync()
        sync.init()
        assert not sync.handle_message({"type": "OTHER", "theme": "dim"})
        assert not sync.handle_message({"type": "THEME_CHANGE"})
        assert not sync.handle_message("THEME_CHANGE")

    def test_dark_theme_names(self):
        assert is_dark_theme("synthwave")
        assert is_dark_theme("my-dark-mode")
        assert not is_dark_theme("cupcake")
        assert not is_dark_theme(None)
