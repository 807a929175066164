"""Tests for Snapshot immutability and serialisation."""

import dataclasses

import pytest

from algorithms import Category, Segment, SnapshotBuilder
from algorithms.snapshot import seg


def _sample():
    sb = SnapshotBuilder(values=[3, 1, 2])
    sb.activate(0, 1)
    sb.resolve([2])
    sb.pseudocode_line = 2
    sb.say("Checking if ", seg(3, Category.ACTIVE), " > ", seg(1, Category.ACTIVE))
    sb.metrics = {"comparisons": 1}
    return sb


class TestSnapshotImmutability:
    def test_fields_cannot_be_reassigned(self):
        snap = _sample().build(0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            snap.step_number = 5

    def test_mappings_are_read_only(self):
        snap = _sample().build(0)
        with pytest.raises(TypeError):
            snap.metrics["comparisons"] = 9

    def test_builder_changes_do_not_leak(self):
        sb = _sample()
        snap = sb.build(0)
        sb.activate(2)
        sb.metrics["comparisons"] = 2
        assert snap.highlight.active == frozenset({0, 1})
        assert snap.metrics["comparisons"] == 1


class TestSnapshotSerialisation:
    def test_to_dict_sorting(self):
        data = _sample().build(4).to_dict()
        assert data["step_number"] == 4
        assert data["values"] == [3, 1, 2]
        assert data["active"] == [0, 1]
        assert data["resolved"] == [2]
        assert data["special"] is None
        assert data["explanation"][1] == {"text": "3", "category": "active"}
        assert data["walls"] == []

    def test_to_dict_cells(self, open_grid):
        open_grid.toggle_wall(1, 1)
        sb = SnapshotBuilder(cells=open_grid.freeze())
        sb.special = (0, 0)
        sb.path = [(0, 1), (0, 0)]
        sb.distances = {(0, 0): 0, (0, 1): 1}
        data = sb.build(0).to_dict()
        assert data["walls"] == [[1, 1]]
        assert data["special"] == [0, 0]
        assert data["path"] == [[0, 1], [0, 0]]
        assert data["distances"] == [[0, 0, 0], [0, 1, 1]]

    def test_explanation_text(self):
        snap = _sample().build(0)
        assert snap.explanation_text == "Checking if 3 > 1"
        assert snap.explanation[0] == Segment("Checking if ")
