"""
quick_sort.py — Quick Sort Producer
====================================
Lomuto-partition quick sort (pivot = last element of the range).

The recursion is flattened into an explicit LIFO work list of
(low, high) ranges.  After a partition places its pivot at `p`, the
right range is pushed before the left one, so the left half is always
popped (and fully finished) first — the same depth-first, left-to-right
sweep a recursive implementation would show.

Emits a Snapshot at:
  1. Pivot selection                (line 0, pivot is ACTIVE + special)
  2. Each comparison against pivot  (line 1, scan index ACTIVE)
  3. i++                            (line 2, i and j ACTIVE)
  4. swap(array[i], array[j])       (line 3, i and j ACTIVE)
  5. Pivot placement                (line 4, destination becomes RESOLVED)
  6. Sort complete                  (line 5, every bar RESOLVED)
"""

from enum import Enum
from typing import Iterable, List, Optional, Set, Tuple

from algorithms.producer import StepProducer, exchange
from algorithms.snapshot import Category, Snapshot, SnapshotBuilder, seg


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "for each j in low to high",         # 0
    "  if array[j] < pivot",             # 1
    "    i++",                           # 2
    "    swap(array[i], array[j])",      # 3
    "swap(array[i+1], pivot)",           # 4
    "return partition_index",            # 5
]


class Step(Enum):
    NEXT_RANGE = "next_range"
    PIVOT      = "pivot"
    SCAN       = "scan"
    DECIDE     = "decide"
    SWAP       = "swap"
    PLACE      = "place"
    FINISH     = "finish"
    DONE       = "done"


class QuickSortProducer(StepProducer):
    key = "quick"

    def __init__(self, values: Iterable[int]):
        super().__init__(Step.NEXT_RANGE)
        self._array:    List[int]              = list(values)
        self._ranges:   List[Tuple[int, int]]  = [(0, len(self._array) - 1)]
        self._resolved: Set[int]               = set()
        # current partition
        self._low:   int = 0
        self._high:  int = -1
        self._pivot: int = 0
        self._i:     int = -1
        self._j:     int = 0
        self._metrics = {"comparisons": 0, "swaps": 0, "partitions": 0}
        self._handlers = {
            Step.NEXT_RANGE: self._next_range,
            Step.PIVOT:      self._select_pivot,
            Step.SCAN:       self._scan,
            Step.DECIDE:     self._decide,
            Step.SWAP:       self._swap,
            Step.PLACE:      self._place,
            Step.FINISH:     self._finish,
        }

    @property
    def pending_ranges(self) -> List[Tuple[int, int]]:
        """Work list, next range last."""
        return list(self._ranges)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _next_range(self) -> None:
        if not self._ranges:
            self._goto(Step.FINISH)
            return None
        low, high = self._ranges.pop()
        if low > high:
            return None
        self._low, self._high = low, high
        self._pivot = self._array[high]
        self._i = low - 1
        self._j = low
        self._goto(Step.PIVOT)
        return None

    def _select_pivot(self) -> Snapshot:
        self._goto(Step.SCAN)
        sb = self._builder(0, self._high)
        sb.say("Chosen pivot: ", seg(self._pivot, Category.PIVOT))
        return sb.build(self._step_no)

    def _scan(self) -> Optional[Snapshot]:
        j = self._j
        if j >= self._high:
            self._goto(Step.PLACE)
            return None
        self._metrics["comparisons"] += 1
        self._goto(Step.DECIDE)
        sb = self._builder(1, j)
        sb.say(
            "Comparing ",
            seg(self._array[j], Category.ACTIVE),
            " < pivot ",
            seg(self._pivot, Category.PIVOT),
        )
        return sb.build(self._step_no)

    def _decide(self) -> Optional[Snapshot]:
        if self._array[self._j] >= self._pivot:
            self._j += 1
            self._goto(Step.SCAN)
            return None
        self._i += 1
        self._goto(Step.SWAP)
        sb = self._builder(2, self._i, self._j)
        sb.say("Incrementing i to ", seg(self._i))
        return sb.build(self._step_no)

    def _swap(self) -> Snapshot:
        i, j = self._i, self._j
        exchange(self._array, i, j)
        self._metrics["swaps"] += 1
        self._j += 1
        self._goto(Step.SCAN)
        sb = self._builder(3, i, j)
        sb.say(
            "Swapping ",
            seg(self._array[i], Category.ACTIVE),
            " and ",
            seg(self._array[j], Category.ACTIVE),
        )
        return sb.build(self._step_no)

    def _place(self) -> Snapshot:
        p, high = self._i + 1, self._high
        exchange(self._array, p, high)
        self._metrics["swaps"] += 1
        self._metrics["partitions"] += 1
        self._resolved.add(p)
        # right first so the left range is popped next
        self._ranges.append((p + 1, high))
        self._ranges.append((self._low, p - 1))
        self._goto(Step.NEXT_RANGE)
        sb = self._builder(4, p, high, special=False)
        sb.say("Moving pivot to correct position index ", seg(p, Category.RESOLVED))
        return sb.build(self._step_no)

    def _finish(self) -> Snapshot:
        self._goto(Step.DONE)
        sb = SnapshotBuilder(values=self._array)
        sb.pseudocode_line = 5
        sb.resolve(range(len(self._array)))
        sb.metrics = dict(self._metrics)
        sb.say(seg("Sort complete!", Category.RESOLVED))
        return sb.build(self._step_no)

    # ------------------------------------------------------------------
    def _builder(self, line: int, *active: int, special: bool = True) -> SnapshotBuilder:
        sb = SnapshotBuilder(values=self._array)
        sb.pseudocode_line = line
        sb.activate(*active)
        sb.resolve(self._resolved)
        sb.special = self._high if special else None
        sb.metrics = dict(self._metrics)
        return sb
