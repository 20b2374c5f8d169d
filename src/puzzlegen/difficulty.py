"""Difficulty tiers for the generated games."""

from dataclasses import dataclass
from typing import Dict, Union

LOGIC_GRID = "logic_grid"
NUMBER_SUM = "number_sum"


@dataclass(frozen=True)
class LogicGridLevel:
    grid_size: int
    prefilled: int


@dataclass(frozen=True)
class NumberSumLevel:
    grid_size: int
    targets: int
    max_value: int


Level = Union[LogicGridLevel, NumberSumLevel]

LEVELS: Dict[str, Dict[str, Level]] = {
    LOGIC_GRID: {
        "easy": LogicGridLevel(grid_size=4, prefilled=6),
        "moderate": LogicGridLevel(grid_size=5, prefilled=6),
        "hard": LogicGridLevel(grid_size=6, prefilled=7),
    },
    NUMBER_SUM: {
        "easy": NumberSumLevel(grid_size=4, targets=5, max_value=9),
        "moderate": NumberSumLevel(grid_size=5, targets=7, max_value=15),
        "hard": NumberSumLevel(grid_size=6, targets=9, max_value=20),
    },
}


def get_level(game: str, difficulty: str) -> Level:
    tiers = LEVELS.get(str(game).lower().strip())
    if tiers is None:
        raise ValueError(f"Unknown game {game!r}; expected one of {', '.join(LEVELS)}")
    level = tiers.get(str(difficulty).lower().strip())
    if level is None:
        raise ValueError(
            f"Unknown difficulty {difficulty!r} for {game}; expected one of {', '.join(tiers)}"
        )
    return level
