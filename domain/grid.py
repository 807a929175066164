"""
grid.py — Pathfinding Grid
===========================
Single source of truth for the pathfinding board.  The controller owns
one Grid per session; producers only ever see a frozen copy of it.

Responsibilities:
  1. Geometry + invariants      (bounds, exactly one start / end)
  2. User edits                 (toggle_wall — never on start / end)
  3. Adjacency                  (4-connected neighbours, fixed order)
  4. Freezing                   (immutable rows for producers & snapshots)

Design decisions:
  - Cell is a frozen dataclass.  Editing a wall replaces the Cell object,
    so a frozen copy handed out earlier can never change underneath a run.
  - Neighbour order is up, down, left, right; the shortest-path producer
    relies on it for deterministic step sequences.
"""

from dataclasses import dataclass, replace
from typing import Iterator, List, Tuple

Position = Tuple[int, int]

# up, down, left, right
OFFSETS: Tuple[Position, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True)
class Cell:
    row:      int
    col:      int
    is_wall:  bool = False
    is_start: bool = False
    is_end:   bool = False

    @property
    def position(self) -> Position:
        return (self.row, self.col)


class Grid:
    """
    Attributes:
        rows, cols : Fixed dimensions.
        start, end : Positions of the Start and End cells.  Fixed for the grid's lifetime.
    """

    def __init__(self, rows: int, cols: int, start: Position, end: Position):
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid must be at least 1x1, got {rows}x{cols}")
        if start == end:
            raise ValueError(f"Start and end must differ, both are {start}")
        for name, pos in (("start", start), ("end", end)):
            if not (0 <= pos[0] < rows and 0 <= pos[1] < cols):
                raise ValueError(f"{name} {pos} is outside a {rows}x{cols} grid")

        self.rows:  int      = rows
        self.cols:  int      = cols
        self.start: Position = tuple(start)
        self.end:   Position = tuple(end)
        self._cells: List[List[Cell]] = [
            [
                Cell(r, c, is_start=(r, c) == self.start, is_end=(r, c) == self.end)
                for c in range(cols)
            ]
            for r in range(rows)
        ]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside a {self.rows}x{self.cols} grid")
        return self._cells[row][col]

    def is_wall(self, row: int, col: int) -> bool:
        return self.cell(row, col).is_wall

    def neighbours(self, pos: Position) -> Iterator[Position]:
        return neighbours(pos, self.rows, self.cols)

    @property
    def walls(self) -> List[Position]:
        return [cell.position for row in self._cells for cell in row if cell.is_wall]

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def toggle_wall(self, row: int, col: int) -> bool:
        """Flip the wall flag.  Start / end / out-of-bounds cells are left alone (returns False)."""
        if not self.in_bounds(row, col):
            return False
        cell = self._cells[row][col]
        if cell.is_start or cell.is_end:
            return False
        self._cells[row][col] = replace(cell, is_wall=not cell.is_wall)
        return True

    def set_wall(self, row: int, col: int, wall: bool = True) -> bool:
        if self.in_bounds(row, col) and self._cells[row][col].is_wall != wall:
            return self.toggle_wall(row, col)
        return False

    # ------------------------------------------------------------------
    # Freezing
    # ------------------------------------------------------------------
    def freeze(self) -> Tuple[Tuple[Cell, ...], ...]:
        """Immutable copy of every row.  Later edits do not affect it."""
        return tuple(tuple(row) for row in self._cells)

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols}, start={self.start}, end={self.end}, walls={len(self.walls)})"


def neighbours(pos: Position, rows: int, cols: int) -> Iterator[Position]:
    """In-bounds orthogonal neighbours, up / down / left / right."""
    r, c = pos
    for dr, dc in OFFSETS:
        if 0 <= r + dr < rows and 0 <= c + dc < cols:
            yield (r + dr, c + dc)
