"""Turn a full Latin square into a playable puzzle by revealing clues."""

import random
from typing import Dict, List, Optional

from .latin import count_solutions, generate_latin_square
from .model import Cell, Clue, Grid, Puzzle, copy_grid, is_latin_square
from src.utils.trace import Tracer


def assemble(
    solution: Grid,
    target_clue_count: int,
    n: int,
    rng: Optional[random.Random] = None,
    tracer: Optional[Tracer] = None,
) -> Puzzle:
    """
    Reveal cells of `solution` in random order until the clues admit exactly
    one completion.

    The first `target_clue_count` cells are revealed at once; after that one
    more cell is revealed per failed uniqueness check. Revealing stops at
    n*n - 2 clues even if uniqueness was never certified, in which case the
    returned puzzle has `unique=False`.
    """
    if len(solution) != n or not is_latin_square(solution):
        raise ValueError(f"Solution must be a {n}x{n} Latin square")
    if target_clue_count < 0:
        raise ValueError(f"Clue count cannot be negative, got {target_clue_count}")
    rng = rng or random.Random()
    tracer = tracer or Tracer(enabled=False)

    clue_cap = max(n * n - 2, 0)
    order: List[Cell] = [(row, col) for row in range(n) for col in range(n)]
    rng.shuffle(order)

    fixed: Dict[Cell, int] = {}
    clues: List[Clue] = []

    def _reveal(cell: Cell) -> None:
        row, col = cell
        clue = Clue(row, col, solution[row][col])
        clues.append(clue)
        fixed[cell] = clue.value
        tracer.log_clue_added(cell, clue.value, clues=len(clues))

    for cell in order[:min(target_clue_count, clue_cap)]:
        _reveal(cell)

    while True:
        if count_solutions(fixed, n, cap=2, tracer=tracer) == 1:
            unique = True
            break
        if len(clues) >= clue_cap:
            tracer.log_fallback(
                "assembler",
                reason=f"Clue cap {clue_cap} reached without a unique solution",
            )
            unique = False
            break
        _reveal(order[len(clues)])

    return Puzzle(solution=copy_grid(solution), prefilled=clues, unique=unique)


def generate_puzzle(
    grid_size: int,
    prefilled_count: int,
    rng: Optional[random.Random] = None,
    tracer: Optional[Tracer] = None,
) -> Puzzle:
    """Generate a fresh Latin square puzzle with at least `prefilled_count` clues."""
    rng = rng or random.Random()
    solution = generate_latin_square(grid_size, rng=rng, tracer=tracer)
    return assemble(solution, prefilled_count, grid_size, rng=rng, tracer=tracer)
