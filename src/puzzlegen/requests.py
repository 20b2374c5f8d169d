"""Request parser: turn raw request records into generation requests.

Records come from JSON, JSONL, CSV or Parquet files, so numbers may arrive
as strings, floats or NaN. Missing fields fall back to the difficulty tier.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .difficulty import LOGIC_GRID, NUMBER_SUM, LogicGridLevel, get_level

_GAME_ALIASES = {
    "logic_grid": LOGIC_GRID,
    "logic-grid": LOGIC_GRID,
    "logicgrid": LOGIC_GRID,
    "latin": LOGIC_GRID,
    "number_sum": NUMBER_SUM,
    "number-sum": NUMBER_SUM,
    "numbersum": NUMBER_SUM,
    "number": NUMBER_SUM,
}

_FIELD_ALIASES = {
    "grid_size": ("grid_size", "gridSize", "size"),
    "prefilled": ("prefilled", "prefilledCount", "prefilled_count", "clues"),
    "targets": ("targets", "targetCount", "target_count"),
    "max_value": ("max_value", "maxCellValue", "max_cell_value", "maxNum"),
    "seed": ("seed",),
}


@dataclass(frozen=True)
class GenerationRequest:
    id: str
    game: str
    difficulty: str
    grid_size: int
    prefilled: int = 0
    targets: int = 0
    max_value: int = 0
    seed: Optional[int] = None


def parse_request(record: Dict[str, Any]) -> GenerationRequest:
    raw_game = str(record.get("game") or LOGIC_GRID).lower().strip()
    game = _GAME_ALIASES.get(raw_game)
    if game is None:
        raise ValueError(f"Unknown game {record.get('game')!r}")

    difficulty = str(record.get("difficulty") or "easy").lower().strip()
    level = get_level(game, difficulty)
    request_id = str(record.get("id") or f"{game}-{difficulty}")

    overrides = {name: _lookup_int(record, name) for name in _FIELD_ALIASES}

    if isinstance(level, LogicGridLevel):
        return GenerationRequest(
            id=request_id,
            game=game,
            difficulty=difficulty,
            grid_size=_pick(overrides["grid_size"], level.grid_size),
            prefilled=_pick(overrides["prefilled"], level.prefilled),
            seed=overrides["seed"],
        )

    return GenerationRequest(
        id=request_id,
        game=game,
        difficulty=difficulty,
        grid_size=_pick(overrides["grid_size"], level.grid_size),
        targets=_pick(overrides["targets"], level.targets),
        max_value=_pick(overrides["max_value"], level.max_value),
        seed=overrides["seed"],
    )


def _pick(value: Optional[int], default: int) -> int:
    return default if value is None else value


def _lookup_int(record: Dict[str, Any], name: str) -> Optional[int]:
    for key in _FIELD_ALIASES[name]:
        if key in record:
            value = _coerce_int(record[key], key)
            if value is not None:
                return value
    return None


def _coerce_int(value: Any, key: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Field {key!r} must be an integer, got {value!r}")
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if not value.is_integer():
            raise ValueError(f"Field {key!r} must be an integer, got {value!r}")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            raise ValueError(f"Field {key!r} must be an integer, got {value!r}") from None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Field {key!r} must be an integer, got {value!r}") from None
