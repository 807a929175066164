"""
bubble_sort.py — Bubble Sort Producer
======================================
Textbook bubble sort with a shrinking bound, exposed one micro-step
at a time.

Emits a Snapshot at:
  1. Start of the run                      (line 0)
  2. Before every comparison               (line 2, the pair is ACTIVE)
  3. Right after a swap                    (line 3, the pair is ACTIVE)
  4. "swapped = true" on its own frame     (line 4)
  5. End of every pass                     (line 5, trailing k bars RESOLVED)
  6. Array fully sorted                    (no line, every bar RESOLVED)

Stops after the first pass that performs no swap.
"""

from enum import Enum
from typing import Iterable, List, Optional

from algorithms.producer import StepProducer, exchange
from algorithms.snapshot import Category, Snapshot, SnapshotBuilder, seg


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "do swapped = false",                 # 0
    "  for i = 0 to n-1",                 # 1
    "    if array[i] > array[i+1]",       # 2
    "      swap(array[i], array[i+1])",   # 3
    "      swapped = true",               # 4
    "while swapped",                      # 5
]


class Step(Enum):
    START    = "start"
    COMPARE  = "compare"
    DECIDE   = "decide"
    FLAG     = "flag"
    PASS_END = "pass_end"
    FINISH   = "finish"
    DONE     = "done"


class BubbleSortProducer(StepProducer):
    key = "bubble"

    def __init__(self, values: Iterable[int]):
        super().__init__(Step.START)
        self._array:   List[int] = list(values)
        self._n:       int       = len(self._array)   # unsorted prefix length
        self._i:       int       = 0
        self._swapped: bool      = False
        self._metrics            = {"comparisons": 0, "swaps": 0, "passes": 0}
        self._handlers = {
            Step.START:    self._start,
            Step.COMPARE:  self._compare,
            Step.DECIDE:   self._decide,
            Step.FLAG:     self._flag,
            Step.PASS_END: self._pass_end,
            Step.FINISH:   self._finish,
        }

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _start(self) -> Snapshot:
        self._goto(Step.COMPARE)
        sb = self._builder(0)
        sb.say("Starting pass, setting swapped to false.")
        return sb.build(self._step_no)

    def _compare(self) -> Optional[Snapshot]:
        i = self._i
        if i >= self._n - 1:
            self._goto(Step.PASS_END)
            return None
        self._metrics["comparisons"] += 1
        self._goto(Step.DECIDE)
        sb = self._builder(2)
        sb.activate(i, i + 1)
        sb.say(
            "Checking if ",
            seg(self._array[i], Category.ACTIVE),
            " > ",
            seg(self._array[i + 1], Category.ACTIVE),
        )
        return sb.build(self._step_no)

    def _decide(self) -> Optional[Snapshot]:
        i = self._i
        if self._array[i] <= self._array[i + 1]:
            self._i += 1
            self._goto(Step.COMPARE)
            return None
        exchange(self._array, i, i + 1)
        self._swapped = True
        self._metrics["swaps"] += 1
        self._goto(Step.FLAG)
        sb = self._builder(3)
        sb.activate(i, i + 1)
        sb.say(
            "Swapping ",
            seg(self._array[i + 1], Category.ACTIVE),
            " and ",
            seg(self._array[i], Category.ACTIVE),
        )
        return sb.build(self._step_no)

    def _flag(self) -> Snapshot:
        i = self._i
        self._i += 1
        self._goto(Step.COMPARE)
        sb = self._builder(4)
        sb.activate(i, i + 1)
        sb.say("Marking swapped as true.")
        return sb.build(self._step_no)

    def _pass_end(self) -> Snapshot:
        self._n = max(self._n - 1, 0)
        self._metrics["passes"] += 1
        if self._swapped:
            self._swapped = False
            self._i = 0
            self._goto(Step.COMPARE)
        else:
            self._goto(Step.FINISH)
        sb = self._builder(5)
        sb.say("End of pass. Checking if swap occurred.")
        return sb.build(self._step_no)

    def _finish(self) -> Snapshot:
        self._goto(Step.DONE)
        sb = self._builder(None)
        sb.resolve(range(len(self._array)))
        sb.say(seg("Array is fully sorted!", Category.RESOLVED))
        return sb.build(self._step_no)

    # ------------------------------------------------------------------
    def _builder(self, line: Optional[int]) -> SnapshotBuilder:
        sb = SnapshotBuilder(values=self._array)
        sb.pseudocode_line = line
        sb.resolve(range(self._n, len(self._array)))
        sb.metrics = dict(self._metrics)
        return sb
