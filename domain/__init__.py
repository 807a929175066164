"""
domain/
-------
Domain state layer.  Public API:

    from domain import Grid, Cell, Position
    from domain import random_values
"""

from domain.grid  import Cell, Grid, Position
from domain.array import random_values

__all__ = [
    "Cell",
    "Grid",
    "Position",
    "random_values",
]
