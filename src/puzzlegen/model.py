"""Puzzle data structures and grid helpers."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

EMPTY = -1

Grid = List[List[int]]
Cell = Tuple[int, int]
Predicate = Callable[[Dict[str, Any]], bool]


def new_grid(n: int, fill: int = EMPTY) -> Grid:
    return [[fill] * n for _ in range(n)]


def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def is_latin_square(grid: Grid) -> bool:
    """True when every row and every column is a permutation of 0..n-1."""
    n = len(grid)
    expected = set(range(n))
    for row in grid:
        if len(row) != n or set(row) != expected:
            return False
    for col in range(n):
        if {grid[row][col] for row in range(n)} != expected:
            return False
    return True


@dataclass(frozen=True)
class Clue:
    row: int
    col: int
    value: int

    @property
    def cell(self) -> Cell:
        return (self.row, self.col)

    def to_dict(self) -> Dict[str, int]:
        return {"row": self.row, "col": self.col, "value": self.value}


@dataclass
class Puzzle:
    """
    A full solution plus the cells revealed to the player.
    `unique` is False only when the clue cap was reached before the
    uniqueness counter certified a single completion.
    """

    solution: Grid
    prefilled: List[Clue] = field(default_factory=list)
    unique: bool = True

    @property
    def size(self) -> int:
        return len(self.solution)

    def fixed_cells(self) -> Dict[Cell, int]:
        return {clue.cell: clue.value for clue in self.prefilled}

    def player_grid(self) -> Grid:
        grid = new_grid(self.size)
        for clue in self.prefilled:
            grid[clue.row][clue.col] = clue.value
        return grid

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "solution": copy_grid(self.solution),
            "prefilled": [clue.to_dict() for clue in self.prefilled],
            "unique": self.unique,
        }


@dataclass
class TargetSum:
    sum: int
    cells: List[int]

    @property
    def cell_count(self) -> int:
        return len(self.cells)

    def to_dict(self) -> Dict[str, Any]:
        return {"sum": self.sum, "cells": list(self.cells), "cellCount": self.cell_count}


@dataclass
class NumberPuzzle:
    grid: List[int]
    targets: List[TargetSum]
    grid_size: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gridSize": self.grid_size,
            "grid": list(self.grid),
            "targets": [t.to_dict() for t in self.targets],
        }


@dataclass
class Constraint:
    """
    A constraint is defined by a scope (the names it touches) and a predicate
    that returns True when the current assignment is consistent.
    Names missing from the assignment never make a constraint fail.
    """

    description: str
    scope: List[str]
    predicate: Predicate

    @classmethod
    def not_alone_together(
        cls, first: str, second: str, guards: Iterable[str], description: Optional[str] = None
    ) -> "Constraint":
        """`first` and `second` may share a side only if a guard shares it too."""
        guards_list = sorted(set(guards))
        desc = description or (
            f"{first} and {second} cannot be left together without "
            f"{' or '.join(guards_list) or 'anyone'}"
        )

        def _predicate(assignment: Dict[str, Any]) -> bool:
            if first not in assignment or second not in assignment:
                return True
            side = assignment[first]
            if assignment[second] != side:
                return True
            return any(assignment.get(guard) == side for guard in guards_list)

        return cls(description=desc, scope=[first, second, *guards_list], predicate=_predicate)

    def involves(self, name: str) -> bool:
        return name in self.scope

    def is_satisfied(self, assignment: Dict[str, Any]) -> bool:
        return self.predicate(assignment)
