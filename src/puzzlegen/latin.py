"""Latin square construction and completion counting by backtracking."""

import random
from typing import Dict, List, Mapping, Optional, Set, Tuple

from .model import EMPTY, Cell, Grid, new_grid
from src.utils.trace import Tracer

FixedCells = Mapping[Cell, int]


def generate_latin_square(
    n: int, rng: Optional[random.Random] = None, tracer: Optional[Tracer] = None
) -> Grid:
    """
    Build a random n x n Latin square over the symbols 0..n-1.

    Cells are filled in row-major order; candidate symbols are shuffled at
    every cell so each call yields a different square. A solution always
    exists, so the search cannot fail for n >= 1.
    """
    if n < 1:
        raise ValueError(f"Grid size must be at least 1, got {n}")
    rng = rng or random.Random()
    tracer = tracer or Tracer(enabled=False)

    grid = new_grid(n)
    _fill(grid, 0, n, rng, tracer)
    return grid


def _fill(grid: Grid, position: int, n: int, rng: random.Random, tracer: Tracer) -> bool:
    if position == n * n:
        tracer.log_solution_found("latin", count=1)
        return True

    row, col = divmod(position, n)
    candidates = list(range(n))
    rng.shuffle(candidates)

    for value in candidates:
        if not _is_legal_placement(grid, row, col, value):
            continue
        grid[row][col] = value
        tracer.log_place("latin", (row, col), value)
        if _fill(grid, position + 1, n, rng, tracer):
            return True
        grid[row][col] = EMPTY

    tracer.log_backtrack("latin", (row, col))
    return False


def _is_legal_placement(grid: Grid, row: int, col: int, value: int) -> bool:
    # Only cells before (row, col) in row-major order are filled.
    if value in grid[row][:col]:
        return False
    return all(grid[r][col] != value for r in range(row))


def count_solutions(
    fixed_cells: FixedCells, n: int, cap: int = 2, tracer: Optional[Tracer] = None
) -> int:
    """
    Count the Latin square completions of `fixed_cells`, stopping at `cap`.

    Values are tried in ascending order and the open cell with the fewest
    remaining candidates is expanded first, so repeated calls on the same
    input visit the same nodes. Returns 0 when the fixed cells already
    repeat a value within a row or column.
    """
    if n < 1:
        raise ValueError(f"Grid size must be at least 1, got {n}")
    if cap < 1:
        raise ValueError(f"Solution cap must be at least 1, got {cap}")
    tracer = tracer or Tracer(enabled=False)

    rows_used: List[Set[int]] = [set() for _ in range(n)]
    cols_used: List[Set[int]] = [set() for _ in range(n)]
    for (row, col), value in fixed_cells.items():
        _check_fixed_cell(row, col, value, n)
        if value in rows_used[row] or value in cols_used[col]:
            tracer.log_uniqueness_check(clues=len(fixed_cells), solutions=0, nodes=0)
            return 0
        rows_used[row].add(value)
        cols_used[col].add(value)

    open_cells = [
        (row, col) for row in range(n) for col in range(n) if (row, col) not in fixed_cells
    ]
    stats = {"nodes": 0}
    found = _count_completions(open_cells, rows_used, cols_used, n, cap, stats)
    tracer.log_uniqueness_check(clues=len(fixed_cells), solutions=found, nodes=stats["nodes"])
    return found


def has_unique_solution(fixed_cells: FixedCells, n: int, tracer: Optional[Tracer] = None) -> bool:
    return count_solutions(fixed_cells, n, cap=2, tracer=tracer) == 1


def _check_fixed_cell(row: int, col: int, value: int, n: int) -> None:
    if not (0 <= row < n and 0 <= col < n):
        raise ValueError(f"Cell ({row}, {col}) is outside a {n}x{n} grid")
    if not 0 <= value < n:
        raise ValueError(f"Value {value} at ({row}, {col}) is outside 0..{n - 1}")


def _count_completions(
    open_cells: List[Cell],
    rows_used: List[Set[int]],
    cols_used: List[Set[int]],
    n: int,
    cap: int,
    stats: Dict[str, int],
) -> int:
    if not open_cells:
        return 1

    cell, candidates = _select_open_cell(open_cells, rows_used, cols_used, n)
    if not candidates:
        return 0

    row, col = cell
    remaining = [c for c in open_cells if c != cell]
    found = 0
    for value in candidates:
        rows_used[row].add(value)
        cols_used[col].add(value)
        stats["nodes"] += 1
        found += _count_completions(remaining, rows_used, cols_used, n, cap - found, stats)
        rows_used[row].discard(value)
        cols_used[col].discard(value)
        if found >= cap:
            break
    return found


def _select_open_cell(
    open_cells: List[Cell], rows_used: List[Set[int]], cols_used: List[Set[int]], n: int
) -> Tuple[Cell, List[int]]:
    # Minimum Remaining Values, ties broken by row-major position.
    best_cell = open_cells[0]
    best_candidates: Optional[List[int]] = None
    for row, col in open_cells:
        candidates = [
            v for v in range(n) if v not in rows_used[row] and v not in cols_used[col]
        ]
        if best_candidates is None or len(candidates) < len(best_candidates):
            best_cell, best_candidates = (row, col), candidates
            if not candidates:
                break
    return best_cell, best_candidates or []
