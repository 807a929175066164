"""
snapshot.py — Algorithm Snapshot
=================================
Every producer emits Snapshot objects, one per suspension point.
A Snapshot is a frozen-in-time picture of everything the visualizer
needs to render one frame:

    • The working array (sorting) or the grid cells (pathfinding)
    • Which indices / cells are active, resolved, or special (pivot / current)
    • The visited set, the reconstructed path and live distances
    • Which line of pseudocode is executing right now
    • A narrated explanation, split into coloured segments

Design decisions:
  - Snapshot is a frozen dataclass whose fields are all immutable
    (tuples, frozensets, MappingProxyType).  Nothing a consumer does can
    reach back into the producer's working copy.
  - SnapshotBuilder is the mutable scratch-pad producers fill in;
    build() freezes a copy of it.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Hashable, Iterable, List, Mapping, Optional, Tuple

from domain.grid import Cell, Position


# ---------------------------------------------------------------------------
# Narration categories — maps 1-to-1 with the colour palette
# ---------------------------------------------------------------------------
class Category(Enum):
    DEFAULT  = "default"
    ACTIVE   = "active"     # being compared / swapped / updated
    RESOLVED = "resolved"   # in final position
    PIVOT    = "pivot"
    VISITED  = "visited"
    PATH     = "path"
    WALL     = "wall"


@dataclass(frozen=True)
class Segment:
    text:     str
    category: Category = Category.DEFAULT

    def to_dict(self) -> Dict[str, str]:
        return {"text": self.text, "category": self.category.value}


def seg(value: Any, category: Category = Category.DEFAULT) -> Segment:
    """Shorthand used by producers: any value becomes a narration segment."""
    return Segment(str(value), category)


@dataclass(frozen=True)
class Highlight:
    """
    Attributes:
        active   : Indices / cells being touched by the current step.
        resolved : Indices / cells known to be in their final place.
        special  : The pivot (quick sort) or the cell being expanded (pathfinding).
    """

    active:   FrozenSet[Hashable]  = frozenset()
    resolved: FrozenSet[Hashable]  = frozenset()
    special:  Optional[Hashable]   = None


@dataclass(frozen=True)
class Snapshot:
    """
    Attributes:
        step_number     : 0-based index of this snapshot in the run.
        values          : Copy of the working array (sorting only).
        cells           : Frozen copy of the grid rows (pathfinding only).
        highlight       : Active / resolved / special regions.
        pseudocode_line : 0-based pseudocode line, or None when no line applies.
        explanation     : Ordered narration segments.
        visited         : Cells fully processed so far (pathfinding).
        path            : Reconstructed path, End first, Start last (empty until found).
        distances       : Finite tentative distances keyed by cell (pathfinding).
        metrics         : Running counters: comparisons, swaps, nodes_visited, …
    """

    step_number:      int                              = 0
    values:           Tuple[int, ...]                  = ()
    cells:            Tuple[Tuple[Cell, ...], ...]     = ()
    highlight:        Highlight                        = field(default_factory=Highlight)
    pseudocode_line:  Optional[int]                    = None
    explanation:      Tuple[Segment, ...]              = ()
    visited:          FrozenSet[Position]              = frozenset()
    path:             Tuple[Position, ...]             = ()
    distances:        Mapping[Position, int]           = field(default_factory=lambda: MappingProxyType({}))
    metrics:          Mapping[str, int]                = field(default_factory=lambda: MappingProxyType({}))

    @property
    def explanation_text(self) -> str:
        return "".join(s.text for s in self.explanation)

    @property
    def has_path(self) -> bool:
        return bool(self.path)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe form for the web layer.  Cell positions become [row, col] lists."""
        return {
            "step_number":     self.step_number,
            "values":          list(self.values),
            "walls":           [[c.row, c.col] for row in self.cells for c in row if c.is_wall],
            "active":          _sorted_keys(self.highlight.active),
            "resolved":        _sorted_keys(self.highlight.resolved),
            "special":         _key(self.highlight.special),
            "pseudocode_line": self.pseudocode_line,
            "explanation":     [s.to_dict() for s in self.explanation],
            "visited":         _sorted_keys(self.visited),
            "path":            [list(p) for p in self.path],
            "distances":       [[r, c, d] for (r, c), d in sorted(self.distances.items())],
            "metrics":         dict(self.metrics),
        }


def _key(item: Optional[Hashable]) -> Any:
    return list(item) if isinstance(item, tuple) else item


def _sorted_keys(items: Iterable[Hashable]) -> List[Any]:
    return [_key(i) for i in sorted(items)]


# ---------------------------------------------------------------------------
# Builder so producers don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class SnapshotBuilder:
    """
    Mutable scratch-pad that producers use to construct Snapshots.

    Usage inside a producer:
        sb = SnapshotBuilder(values=self._array)
        sb.activate(i, i + 1)
        sb.pseudocode_line = 2
        sb.say("Checking if ", seg(a, Category.ACTIVE), " > ", seg(b, Category.ACTIVE))
        return sb.build(step_number=self._step_no)
    """

    def __init__(
        self,
        values: Iterable[int] = (),
        cells: Tuple[Tuple[Cell, ...], ...] = (),
    ):
        self.values:           Tuple[int, ...]           = tuple(values)
        self.cells:            Tuple[Tuple[Cell, ...], ...] = cells
        self.active:           set                       = set()
        self.resolved:         set                       = set()
        self.special:          Optional[Hashable]        = None
        self.pseudocode_line:  Optional[int]             = None
        self.explanation:      List[Segment]             = []
        self.visited:          set                       = set()
        self.path:             List[Position]            = []
        self.distances:        Dict[Position, int]       = {}
        self.metrics:          Dict[str, int]            = {}

    # -- helpers --
    def activate(self, *items: Hashable) -> "SnapshotBuilder":
        self.active.update(items)
        return self

    def resolve(self, items: Iterable[Hashable]) -> "SnapshotBuilder":
        self.resolved.update(items)
        return self

    def say(self, *parts: Any) -> "SnapshotBuilder":
        """Append narration.  Plain strings become DEFAULT segments."""
        for part in parts:
            self.explanation.append(part if isinstance(part, Segment) else Segment(str(part)))
        return self

    def build(self, step_number: int = 0) -> Snapshot:
        return Snapshot(
            step_number=step_number,
            values=tuple(self.values),
            cells=self.cells,
            highlight=Highlight(
                active=frozenset(self.active),
                resolved=frozenset(self.resolved),
                special=self.special,
            ),
            pseudocode_line=self.pseudocode_line,
            explanation=tuple(self.explanation),
            visited=frozenset(self.visited),
            path=tuple(self.path),
            distances=MappingProxyType(dict(self.distances)),
            metrics=MappingProxyType(dict(self.metrics)),
        )
