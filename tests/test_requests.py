"""Tests for request parsing, difficulty tiers, and request file loading."""

import json

import pytest

from generate import generate_from_request
from src.puzzlegen.difficulty import LogicGridLevel, NumberSumLevel, get_level
from src.puzzlegen.loader import load_requests
from src.puzzlegen.requests import GenerationRequest, parse_request


def test_get_level_is_case_insensitive():
    assert get_level("logic_grid", "Hard") == LogicGridLevel(grid_size=6, prefilled=7)
    assert get_level("NUMBER_SUM", " moderate ") == NumberSumLevel(grid_size=5, targets=7, max_value=15)


def test_get_level_unknown():
    with pytest.raises(ValueError):
        get_level("sudoku", "easy")
    with pytest.raises(ValueError):
        get_level("logic_grid", "extreme")


def test_parse_request_fills_tier_defaults():
    request = parse_request({"id": "a", "game": "number_sum", "difficulty": "hard"})
    assert request == GenerationRequest(
        id="a", game="number_sum", difficulty="hard", grid_size=6, targets=9, max_value=20
    )


def test_parse_request_defaults_to_easy_logic_grid():
    request = parse_request({})
    assert request.game == "logic_grid"
    assert request.difficulty == "easy"
    assert (request.grid_size, request.prefilled) == (4, 6)
    assert request.seed is None


def test_parse_request_overrides_and_aliases():
    request = parse_request(
        {"game": "logic-grid", "gridSize": "5", "prefilledCount": 8.0, "seed": 12}
    )
    assert request.grid_size == 5
    assert request.prefilled == 8
    assert request.seed == 12

    number = parse_request({"game": "number", "maxNum": 12, "targetCount": float("nan")})
    assert number.max_value == 12
    assert number.targets == 5


def test_parse_request_rejects_bad_values():
    with pytest.raises(ValueError):
        parse_request({"game": "crossword"})
    with pytest.raises(ValueError):
        parse_request({"grid_size": "big"})
    with pytest.raises(ValueError):
        parse_request({"grid_size": 4.5})
    with pytest.raises(ValueError):
        parse_request({"prefilled": True})


def test_generate_from_request_is_reproducible():
    record = {"game": "logic_grid", "difficulty": "moderate", "seed": 5}
    first = generate_from_request(record)
    second = generate_from_request(parse_request(record))
    assert first == second
    assert first["size"] == 5
    assert first["unique"] is True


def test_generate_from_request_number_sum():
    puzzle = generate_from_request({"game": "number_sum", "seed": 1})
    assert puzzle["gridSize"] == 4
    assert len(puzzle["targets"]) == 5


def test_generate_from_request_rejects_other_types():
    with pytest.raises(TypeError):
        generate_from_request(["logic_grid"])


def test_load_requests_json_array_and_object(tmp_path):
    array_file = tmp_path / "batch.json"
    array_file.write_text(json.dumps([{"id": "a"}, {"id": "b"}, "skip me"]))
    object_file = tmp_path / "single.json"
    object_file.write_text(json.dumps({"id": "c", "game": "number_sum"}))

    assert [r["id"] for r in load_requests(str(array_file))] == ["a", "b"]
    assert load_requests(str(object_file)) == [{"id": "c", "game": "number_sum"}]


def test_load_requests_json_lines_skips_bad_lines(tmp_path):
    path = tmp_path / "batch.jsonl"
    path.write_text('{"id": "a"}\n\n{broken\n{"id": "b"}\n')
    assert [r["id"] for r in load_requests(str(path))] == ["a", "b"]

    mislabelled = tmp_path / "lines.json"
    mislabelled.write_text('{"id": "x"}\n{"id": "y"}\n')
    assert [r["id"] for r in load_requests(str(mislabelled))] == ["x", "y"]


def test_load_requests_csv(tmp_path):
    path = tmp_path / "batch.csv"
    path.write_text("id, game ,difficulty,gridSize\nr1,number_sum,hard,\nr2,logic_grid,easy,5\n")

    records = load_requests(str(path))

    assert records[0]["game"] == "number_sum"
    assert records[0]["gridSize"] is None
    assert parse_request(records[0]).grid_size == 6
    assert parse_request(records[1]).grid_size == 5


def test_load_requests_parquet(tmp_path):
    pytest.importorskip("pyarrow")
    import pandas as pd

    path = tmp_path / "batch.parquet"
    pd.DataFrame([{"id": "p1", "game": "number_sum", "difficulty": "easy"}]).to_parquet(path)

    records = load_requests(str(path))
    assert records == [{"id": "p1", "game": "number_sum", "difficulty": "easy"}]


def test_load_requests_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_requests(str(tmp_path / "nope.json"))
