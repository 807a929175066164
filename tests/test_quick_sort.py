"""Tests for the quick sort producer."""

import random

from algorithms.quick_sort import QuickSortProducer
from engine import run_to_completion


def _placements(snaps):
    """Indices in the order their pivots were placed."""
    order, seen = [], frozenset()
    for s in snaps:
        if s.pseudocode_line == 4:
            (new,) = s.highlight.resolved - seen
            order.append(new)
            seen = s.highlight.resolved
    return order


class TestQuickSortScenario:
    def test_five_elements(self):
        snaps = run_to_completion(QuickSortProducer([5, 3, 8, 4, 2]))
        assert snaps[-1].values == (2, 3, 4, 5, 8)
        assert snaps[-1].pseudocode_line == 5
        assert snaps[-1].explanation_text == "Sort complete!"

    def test_first_pivot_is_last_element(self):
        first = run_to_completion(QuickSortProducer([5, 3, 8, 4, 2]))[0]
        assert first.pseudocode_line == 0
        assert first.highlight.special == 4
        assert first.highlight.active == frozenset({4})
        assert first.explanation_text == "Chosen pivot: 2"

    def test_left_ranges_before_right(self):
        snaps = run_to_completion(QuickSortProducer([5, 3, 8, 4, 2]))
        assert _placements(snaps) == [0, 3, 2, 1, 4]

    def test_place_clears_special(self):
        snaps = run_to_completion(QuickSortProducer([5, 3, 8, 4, 2]))
        for s in snaps:
            if s.pseudocode_line == 4:
                assert s.highlight.special is None


class TestQuickSortProperties:
    def test_resolved_only_grows(self):
        snaps = run_to_completion(QuickSortProducer([9, 1, 8, 2, 7, 3]))
        for before, after in zip(snaps, snaps[1:]):
            assert before.highlight.resolved <= after.highlight.resolved

    def test_random_inputs_sort(self):
        rng = random.Random(3)
        for _ in range(20):
            values = [rng.randint(0, 50) for _ in range(rng.randint(0, 15))]
            last = run_to_completion(QuickSortProducer(values))[-1]
            assert list(last.values) == sorted(values)
            assert last.highlight.resolved == frozenset(range(len(values)))

    def test_values_are_a_permutation_every_step(self):
        values = [4, 4, 1, 3, 2]
        for s in run_to_completion(QuickSortProducer(values)):
            assert sorted(s.values) == sorted(values)

    def test_empty_input(self):
        snaps = run_to_completion(QuickSortProducer([]))
        assert len(snaps) == 1
        assert snaps[0].values == ()

    def test_counters(self):
        last = run_to_completion(QuickSortProducer([5, 3, 8, 4, 2]))[-1]
        assert last.metrics["partitions"] == 5
        assert last.metrics["comparisons"] == 4 + 3 + 1

    def test_work_list_drains(self):
        p = QuickSortProducer([2, 1, 3])
        assert p.pending_ranges == [(0, 2)]
        run_to_completion(p)
        assert p.pending_ranges == []
