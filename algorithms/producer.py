"""
producer.py — Step Producer Contract
=====================================
A producer is a resumable computation: each advance() runs the
algorithm up to its next suspension point and hands back one Snapshot,
or reports that the run is over.

    p = BubbleSortProducer([3, 1, 2])
    while True:
        result = p.advance()
        if result.done:
            break
        render(result.snapshot)

Design decisions:
  - No generators.  Every producer is an explicit state machine: `_tag`
    is the program counter (a member of the producer's own Step enum)
    and the loop variables live on `self`.  That keeps the full
    execution state inspectable and lets the controller drop a producer
    at any point without leaving a half-run frame behind.
  - A handler for one tag either returns a Snapshot (a suspension point)
    or None (an internal transition).  advance() keeps dispatching until
    it has a Snapshot or the machine reaches DONE.
  - Producers work on a private copy of the domain state taken in
    __init__.  The caller's list / grid is never touched.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from algorithms.snapshot import Snapshot


@dataclass(frozen=True)
class Advance:
    done:     bool
    snapshot: Optional[Snapshot] = None


FINISHED = Advance(done=True)


class StepProducer:
    """
    Subclasses define:
        key       : Registry key, e.g. "bubble".
        Step      : Enum of program-counter tags.  Must contain DONE.
        _handlers : {tag: bound method} — filled by the subclass __init__.
    """

    key: str = ""

    def __init__(self, initial: Enum):
        self._tag:       Enum                                       = initial
        self._step_no:   int                                        = 0
        self._handlers:  Dict[Enum, Callable[[], Optional[Snapshot]]] = {}

    @property
    def done(self) -> bool:
        return self._tag.name == "DONE"

    @property
    def steps_emitted(self) -> int:
        return self._step_no

    def advance(self) -> Advance:
        while not self.done:
            snapshot = self._handlers[self._tag]()
            if snapshot is not None:
                self._step_no += 1
                return Advance(done=False, snapshot=snapshot)
        return FINISHED

    def _goto(self, tag: Enum) -> None:
        self._tag = tag

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tag={self._tag.name}, steps={self._step_no})"


def exchange(array: List[int], a: int, b: int) -> None:
    """Swap two slots of a producer's private working array."""
    array[a], array[b] = array[b], array[a]
