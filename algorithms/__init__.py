"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, View, get_algorithm

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, view, producer, pseudocode, …),
        …
    }

Each algorithm belongs to exactly one View.  The controller uses the
view to decide which domain state (value list or grid) to hand the
producer class.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from algorithms.producer    import Advance, StepProducer
from algorithms.snapshot    import Category, Highlight, Segment, Snapshot, SnapshotBuilder
from algorithms.bubble_sort import BubbleSortProducer, PSEUDOCODE as _bubble_pc
from algorithms.quick_sort  import QuickSortProducer,  PSEUDOCODE as _quick_pc
from algorithms.dijkstra    import DijkstraProducer,   PSEUDOCODE as _dij_pc


class View(Enum):
    SORTING     = "sorting"
    PATHFINDING = "pathfinding"


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoInfo:
    key:              str                          # registry key, e.g. "bubble"
    label:            str                          # human label, e.g. "Bubble Sort"
    view:             View
    producer:         Callable[..., StepProducer]  # takes a value list or a Grid
    pseudocode:       List[str]
    complexity_time:  str = ""
    complexity_space: str = ""
    description:      str = ""


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", view=View.SORTING,
        producer=BubbleSortProducer, pseudocode=_bubble_pc,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swaps adjacent out-of-order pairs until a pass makes no swap.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", view=View.SORTING,
        producer=QuickSortProducer, pseudocode=_quick_pc,
        complexity_time="O(n log n) avg", complexity_space="O(log n)",
        description="Partitions around the last element, then sorts each side.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", view=View.PATHFINDING,
        producer=DijkstraProducer, pseudocode=_dij_pc,
        complexity_time="O(V² log V) re-sort per step", complexity_space="O(V)",
        description="Expands the closest unvisited cell until the target is reached.",
    ),
}

DEFAULT_ALGORITHM: Dict[View, str] = {
    View.SORTING:     "bubble",
    View.PATHFINDING: "dijkstra",
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_for_view(view: View) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.view is view]


__all__ = [
    "Advance",
    "AlgoInfo",
    "Category",
    "DEFAULT_ALGORITHM",
    "Highlight",
    "REGISTRY",
    "Segment",
    "Snapshot",
    "SnapshotBuilder",
    "StepProducer",
    "View",
    "get_algorithm",
    "list_algorithms",
    "algorithms_for_view",
]
