"""Move and selection checks used while a round is being played."""

from dataclasses import dataclass, field
from typing import List, Sequence

from .model import EMPTY, Grid, Puzzle, TargetSum, is_latin_square

PENDING = "pending"
MATCH = "match"
OVER = "over"


@dataclass
class MoveCheck:
    is_valid: bool
    violations: List[str] = field(default_factory=list)


def validate_move(player_grid: Grid, row: int, col: int, value: int) -> MoveCheck:
    """Report the row/column duplicates `value` would create at (row, col)."""
    n = len(player_grid)
    if not (0 <= row < n and 0 <= col < n):
        raise ValueError(f"Cell ({row}, {col}) is outside a {n}x{n} grid")
    if value == EMPTY:
        return MoveCheck(is_valid=True)

    violations = []
    if any(player_grid[row][c] == value for c in range(n) if c != col):
        violations.append(f"Row {row + 1} cannot have duplicate {value}")
    if any(player_grid[r][col] == value for r in range(n) if r != row):
        violations.append(f"Column {col + 1} cannot have duplicate {value}")
    return MoveCheck(is_valid=not violations, violations=violations)


def is_solved(player_grid: Grid, puzzle: Puzzle) -> bool:
    """
    A filled grid wins when it is a Latin square that keeps every clue.
    It does not have to equal the stored solution.
    """
    if len(player_grid) != puzzle.size:
        return False
    if any(value == EMPTY for row in player_grid for value in row):
        return False
    if not is_latin_square(player_grid):
        return False
    return all(player_grid[clue.row][clue.col] == clue.value for clue in puzzle.prefilled)


def evaluate_selection(grid: Sequence[int], target: TargetSum, selected: Sequence[int]) -> str:
    """Compare the sum of the selected cells against the target."""
    if len(set(selected)) != len(selected):
        raise ValueError("Selected cells must be distinct")
    for index in selected:
        if not 0 <= index < len(grid):
            raise ValueError(f"Cell index {index} is outside the grid")

    total = sum(grid[i] for i in selected)
    if total == target.sum:
        return MATCH
    if total > target.sum:
        return OVER
    return PENDING
