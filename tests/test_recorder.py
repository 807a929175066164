"""Tests for run analytics."""

from algorithms import get_algorithm
from algorithms.bubble_sort import BubbleSortProducer
from algorithms.dijkstra import DijkstraProducer
from engine import Recorder, run_to_completion


class TestRecorder:
    def test_sorting_metrics(self):
        rec = Recorder(get_algorithm("bubble"))
        for snap in run_to_completion(BubbleSortProducer([3, 1, 2])):
            rec.observe(snap)
        rec.mark_complete()
        m = rec.metrics()
        assert m.algo_label == "Bubble Sort"
        assert m.total_steps == 11
        assert (m.comparisons, m.swaps, m.passes) == (3, 2, 2)
        assert m.complete
        assert m.final_values == (1, 2, 3)

    def test_pathfinding_metrics(self, open_grid):
        rec = Recorder(get_algorithm("dijkstra"))
        for snap in run_to_completion(DijkstraProducer(open_grid)):
            rec.observe(snap)
        m = rec.metrics()
        assert rec.path_found and m.path_found
        assert m.path_length == 4
        assert 0 < m.nodes_visited <= 9
        assert not m.complete

    def test_empty_recorder(self):
        m = Recorder().metrics()
        assert m.total_steps == 0
        assert m.to_dict()["final_values"] == []

    def test_run_to_completion_limit(self):
        snaps = run_to_completion(BubbleSortProducer([3, 1, 2]), limit=4)
        assert [s.step_number for s in snaps] == [0, 1, 2, 3]
