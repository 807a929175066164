"""
recorder.py — Run Analytics
============================
Folds the snapshots of one run into the numbers the Analytics panel
shows.  The controller feeds it every snapshot it publishes; tests and
offline tools can also drain a producer straight through it.

Usage:
    rec = Recorder(get_algorithm("quick"))
    for snap in run_to_completion(QuickSortProducer(values)):
        rec.observe(snap)
    rec.metrics()      # RunMetrics
"""

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from algorithms import AlgoInfo, Snapshot, StepProducer


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:          str             = ""
    algo_label:        str             = ""
    total_steps:       int             = 0          # snapshots published
    comparisons:       int             = 0          # sorting
    swaps:             int             = 0
    passes:            int             = 0          # bubble sort
    partitions:        int             = 0          # quick sort
    nodes_visited:     int             = 0          # pathfinding
    distance_updates:  int             = 0
    path_length:       int             = 0          # edges on the final path
    path_found:        bool            = False
    complete:          bool            = False
    wall_time_ms:      float           = 0.0        # first to last snapshot
    final_values:      Tuple[int, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["final_values"] = list(self.final_values)
        return data


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Keeps only the latest snapshot and a count; a run never buffers its
    whole history.
    """

    def __init__(self, info: Optional[AlgoInfo] = None):
        self._info:        Optional[AlgoInfo] = info
        self._last:        Optional[Snapshot] = None
        self._count:       int                = 0
        self._path_found:  bool               = False
        self._complete:    bool               = False
        self._first_at:    float              = 0.0
        self._last_at:     float              = 0.0

    def observe(self, snapshot: Snapshot) -> None:
        now = time.monotonic()
        if self._count == 0:
            self._first_at = now
        self._last_at = now
        self._last = snapshot
        self._count += 1
        if snapshot.has_path:
            self._path_found = True

    def mark_complete(self) -> None:
        self._complete = True

    @property
    def path_found(self) -> bool:
        return self._path_found

    @property
    def total_steps(self) -> int:
        return self._count

    def metrics(self) -> RunMetrics:
        info = self._info
        last = self._last
        counters = dict(last.metrics) if last else {}
        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            total_steps=self._count,
            comparisons=counters.get("comparisons", 0),
            swaps=counters.get("swaps", 0),
            passes=counters.get("passes", 0),
            partitions=counters.get("partitions", 0),
            nodes_visited=counters.get("nodes_visited", 0),
            distance_updates=counters.get("distance_updates", 0),
            path_length=counters.get("path_length", 0),
            path_found=self._path_found,
            complete=self._complete,
            wall_time_ms=round((self._last_at - self._first_at) * 1000, 2),
            final_values=last.values if last else (),
        )


# ---------------------------------------------------------------------------
# Drain helper
# ---------------------------------------------------------------------------
def run_to_completion(producer: StepProducer, limit: Optional[int] = None) -> List[Snapshot]:
    """Advance until done (or `limit` snapshots) and return every snapshot in order."""
    snapshots: List[Snapshot] = []
    while limit is None or len(snapshots) < limit:
        result = producer.advance()
        if result.done:
            break
        snapshots.append(result.snapshot)
    return snapshots
