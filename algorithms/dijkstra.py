"""
dijkstra.py — Grid Shortest-Path Producer
==========================================
Dijkstra on an unweighted 4-connected grid, every edge weight 1.

Selection keeps one unvisited list, row-major at the start, and
stable-sorts it by tentative distance on every scan before taking the
head.  The list is never rebuilt, so among equally close cells the one
that got its distance first wins.  No heap, so a learner can follow
"pick the closest unvisited cell" literally.

Emits a Snapshot at:
  1. Every scan of the unvisited set          (line 0)
  2. Visiting the closest cell                (line 1, cell is special)
  3. Target reached, path reconstructed       (line 2, path End → Start)
  4. Each unvisited neighbour being checked   (line 3)
  5. Each successful distance update          (line 6, neighbour ACTIVE)

Walls:
  A wall is dropped when the scan selects it: it is never marked
  visited and never expanded.  Relaxation does not look at the wall
  flag, so a wall next to a visited cell still receives a finite
  distance; it just never propagates it.

No path:
  The run ends without a line-2 snapshot when the closest remaining
  cell is at distance ∞ or the unvisited set runs out.
"""

from enum import Enum
from typing import Dict, List, Optional, Set

from algorithms.producer import StepProducer
from algorithms.snapshot import Category, Snapshot, SnapshotBuilder, seg
from domain.grid import Grid, Position, neighbours

INF = float("inf")


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "while unvisited is not empty",        # 0
    "  current = node with min dist",      # 1
    "  if current is target: return path", # 2
    "  for each neighbor of current",      # 3
    "    alt = dist[current] + 1",         # 4
    "    if alt < dist[neighbor]",         # 5
    "      dist[neighbor] = alt",          # 6
]


class Step(Enum):
    SCAN     = "scan"
    SELECT   = "select"
    FOUND    = "found"
    NEIGHBOR = "neighbor"
    RELAX    = "relax"
    DONE     = "done"


class DijkstraProducer(StepProducer):
    key = "dijkstra"

    def __init__(self, grid: Grid):
        super().__init__(Step.SCAN)
        self._rows    = grid.rows
        self._cols    = grid.cols
        self._cells   = grid.freeze()
        self._start:  Position = grid.start
        self._target: Position = grid.end

        self._dist:     Dict[Position, float]              = {}
        self._previous: Dict[Position, Optional[Position]] = {}
        self._visited:  Set[Position]                      = set()
        self._unvisited: List[Position] = [
            (r, c) for r in range(grid.rows) for c in range(grid.cols)
        ]
        self._dist[self._start] = 0

        self._current:   Optional[Position]       = None
        self._neighbour: Optional[Position]       = None
        self._pending:   List[Position]           = []
        self._pending_at: int                     = 0
        self._path:      List[Position]           = []
        self._metrics = {"nodes_visited": 0, "distance_updates": 0, "path_length": 0}
        self._handlers = {
            Step.SCAN:     self._scan,
            Step.SELECT:   self._select,
            Step.FOUND:    self._found,
            Step.NEIGHBOR: self._check_neighbour,
            Step.RELAX:    self._relax,
        }

    @property
    def path_found(self) -> bool:
        return bool(self._path)

    def distance(self, pos: Position) -> float:
        return self._dist.get(pos, INF)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _scan(self) -> Optional[Snapshot]:
        if not self._unvisited:
            self._goto(Step.DONE)
            return None
        self._goto(Step.SELECT)
        sb = self._builder(0)
        sb.say("Checking unvisited nodes...")
        return sb.build(self._step_no)

    def _select(self) -> Optional[Snapshot]:
        closest = self._pop_closest()
        r, c = closest
        if self.distance(closest) == INF:
            self._goto(Step.DONE)
            return None
        if self._cells[r][c].is_wall:
            self._goto(Step.SCAN)
            return None

        self._visited.add(closest)
        self._current = closest
        self._metrics["nodes_visited"] = len(self._visited)
        if closest == self._target:
            self._goto(Step.FOUND)
        else:
            self._pending = list(neighbours(closest, self._rows, self._cols))
            self._pending_at = 0
            self._goto(Step.NEIGHBOR)

        sb = self._builder(1)
        sb.say("Visiting node ", seg(_label(closest), Category.VISITED), " with min distance.")
        return sb.build(self._step_no)

    def _found(self) -> Snapshot:
        path, cur = [], self._target
        while cur is not None:
            path.append(cur)
            cur = self._previous.get(cur)
        self._path = path
        self._metrics["path_length"] = len(path) - 1
        self._goto(Step.DONE)
        sb = self._builder(2)
        sb.say(seg("Target found! Reconstructing path.", Category.PATH))
        return sb.build(self._step_no)

    def _check_neighbour(self) -> Optional[Snapshot]:
        if self._pending_at >= len(self._pending):
            self._goto(Step.SCAN)
            return None
        nbr = self._pending[self._pending_at]
        self._pending_at += 1
        if nbr in self._visited:
            return None
        self._neighbour = nbr
        self._goto(Step.RELAX)
        sb = self._builder(3)
        sb.say("Checking neighbor ", seg(_label(nbr)))
        return sb.build(self._step_no)

    def _relax(self) -> Optional[Snapshot]:
        nbr = self._neighbour
        self._goto(Step.NEIGHBOR)
        alt = self._dist[self._current] + 1
        if alt >= self.distance(nbr):
            return None
        self._dist[nbr] = alt
        self._previous[nbr] = self._current
        self._metrics["distance_updates"] += 1
        sb = self._builder(6)
        sb.activate(nbr)
        sb.say("Updating distance for ", seg(_label(nbr), Category.ACTIVE), f" to {alt}")
        return sb.build(self._step_no)

    # ------------------------------------------------------------------
    def _pop_closest(self) -> Position:
        """Stable sort by distance (∞ ties with ∞), then take the head."""
        self._unvisited.sort(key=self.distance)
        return self._unvisited.pop(0)

    def _builder(self, line: int) -> SnapshotBuilder:
        sb = SnapshotBuilder(cells=self._cells)
        sb.pseudocode_line = line
        sb.special = self._current
        sb.visited = set(self._visited)
        sb.path = list(self._path)
        sb.distances = {pos: int(d) for pos, d in self._dist.items()}
        sb.metrics = dict(self._metrics)
        return sb


def _label(pos: Position) -> str:
    return f"[{pos[0]},{pos[1]}]"
