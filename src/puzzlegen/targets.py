"""Target sum selection for the number sum puzzle."""

import random
from typing import List, Optional, Sequence, Set

from .model import NumberPuzzle, TargetSum
from src.utils.trace import Tracer

MIN_TARGET_SUM = 5
MIN_TARGET_CELLS = 2
MAX_TARGET_CELLS = 4
MAX_ATTEMPTS = 200


def generate_targets(
    grid: Sequence[int],
    grid_size: int,
    target_count: int,
    rng: Optional[random.Random] = None,
    tracer: Optional[Tracer] = None,
) -> List[TargetSum]:
    """
    Pick `target_count` groups of 2-4 cells whose sums become the targets.

    Each target draws from cells not used by earlier targets and needs a sum
    of at least 5 that no earlier target has. After 200 rejected draws (or
    when fewer than two unused cells remain) the missing targets are filled
    from any 2-3 cells, so overlapping cells and repeated sums are possible.
    """
    if grid_size < 2:
        raise ValueError(f"Number puzzle grid size must be at least 2, got {grid_size}")
    total = grid_size * grid_size
    if len(grid) != total:
        raise ValueError(f"Expected {total} grid values, got {len(grid)}")
    if target_count < 0:
        raise ValueError(f"Target count cannot be negative, got {target_count}")
    rng = rng or random.Random()
    tracer = tracer or Tracer(enabled=False)

    targets: List[TargetSum] = []
    used: Set[int] = set()
    sums: Set[int] = set()

    for _ in range(target_count):
        for attempt in range(1, MAX_ATTEMPTS + 1):
            available = [i for i in range(total) if i not in used]
            if len(available) < MIN_TARGET_CELLS:
                break
            size = rng.randint(MIN_TARGET_CELLS, min(MAX_TARGET_CELLS, len(available)))
            cells = rng.sample(available, size)
            value = sum(grid[i] for i in cells)
            if value >= MIN_TARGET_SUM and value not in sums:
                targets.append(TargetSum(sum=value, cells=cells))
                used.update(cells)
                sums.add(value)
                tracer.log_target_accepted(value, cells, attempts=attempt)
                break

    missing = target_count - len(targets)
    if missing:
        tracer.log_fallback(
            "targets",
            reason=f"{missing} of {target_count} targets picked without disjoint cells or distinct sums",
        )
    for _ in range(missing):
        target = _fallback_target(grid, total, sums, rng)
        targets.append(target)
        sums.add(target.sum)

    return targets


def _fallback_target(
    grid: Sequence[int], total: int, sums: Set[int], rng: random.Random
) -> TargetSum:
    # Still prefer a fresh sum of at least 5, but take the last draw regardless.
    cells: List[int] = []
    value = 0
    for _ in range(MAX_ATTEMPTS):
        size = min(rng.randint(MIN_TARGET_CELLS, 3), total)
        cells = rng.sample(range(total), size)
        value = sum(grid[i] for i in cells)
        if value >= MIN_TARGET_SUM and value not in sums:
            break
    return TargetSum(sum=value, cells=cells)


def generate_number_puzzle(
    grid_size: int,
    max_cell_value: int,
    target_count: int,
    rng: Optional[random.Random] = None,
    tracer: Optional[Tracer] = None,
) -> NumberPuzzle:
    """Fill a grid with values in 1..max_cell_value and pick its targets."""
    if grid_size < 2:
        raise ValueError(f"Number puzzle grid size must be at least 2, got {grid_size}")
    if max_cell_value < 1:
        raise ValueError(f"Max cell value must be at least 1, got {max_cell_value}")
    rng = rng or random.Random()

    grid = [rng.randint(1, max_cell_value) for _ in range(grid_size * grid_size)]
    targets = generate_targets(grid, grid_size, target_count, rng=rng, tracer=tracer)
    return NumberPuzzle(grid=grid, targets=targets, grid_size=grid_size)
