"""Tests for target sum selection and number puzzle generation."""

import random

import pytest

from src.puzzlegen.targets import generate_number_puzzle, generate_targets
from src.utils.trace import Tracer


def _assert_consistent(grid, targets):
    for target in targets:
        assert 2 <= len(target.cells) <= 4
        assert len(set(target.cells)) == len(target.cells)
        assert all(0 <= i < len(grid) for i in target.cells)
        assert target.sum == sum(grid[i] for i in target.cells)


@pytest.mark.parametrize("size,max_value,count", [(4, 9, 5), (5, 15, 7), (6, 20, 9)])
def test_target_sums_match_grid(size, max_value, count):
    rng = random.Random(size)
    for _ in range(20):
        puzzle = generate_number_puzzle(size, max_value, count, rng=rng)
        assert len(puzzle.grid) == size * size
        assert all(1 <= v <= max_value for v in puzzle.grid)
        assert len(puzzle.targets) == count
        _assert_consistent(puzzle.grid, puzzle.targets)


def test_easy_tier_targets_within_bounds():
    for seed in range(50):
        puzzle = generate_number_puzzle(4, 9, 5, rng=random.Random(seed))
        assert len(puzzle.targets) == 5
        for target in puzzle.targets:
            assert 5 <= target.sum <= 36
            assert 2 <= target.cell_count <= 4


def test_accepted_targets_are_disjoint_and_distinct():
    rng = random.Random(99)
    checked = 0
    for _ in range(20):
        tracer = Tracer()
        grid = [rng.randint(1, 20) for _ in range(36)]
        targets = generate_targets(grid, 6, 6, rng=rng, tracer=tracer)
        if tracer.summary()["num_fallbacks"]:
            continue
        checked += 1
        cells = [i for t in targets for i in t.cells]
        assert len(cells) == len(set(cells))
        assert len({t.sum for t in targets}) == len(targets)
    assert checked >= 15


def test_fallback_when_no_sum_reaches_minimum():
    tracer = Tracer()
    grid = [1] * 16

    targets = generate_targets(grid, 4, 3, rng=random.Random(0), tracer=tracer)

    assert len(targets) == 3
    _assert_consistent(grid, targets)
    assert all(2 <= t.cell_count <= 3 for t in targets)
    fallbacks = [s for s in tracer.steps if s.action_type == "fallback"]
    assert len(fallbacks) == 1
    assert "3 of 3" in fallbacks[0].reason


def test_zero_targets():
    assert generate_targets([3, 4, 5, 6], 2, 0, rng=random.Random(1)) == []


def test_same_seed_gives_same_puzzle():
    first = generate_number_puzzle(5, 15, 7, rng=random.Random(8))
    second = generate_number_puzzle(5, 15, 7, rng=random.Random(8))
    assert first == second


def test_invalid_arguments():
    with pytest.raises(ValueError):
        generate_number_puzzle(1, 9, 5)
    with pytest.raises(ValueError):
        generate_number_puzzle(4, 0, 5)
    with pytest.raises(ValueError):
        generate_targets([1, 2, 3], 2, 1)
    with pytest.raises(ValueError):
        generate_targets([1, 2, 3, 4], 2, -1)
    with pytest.raises(ValueError):
        generate_targets([5], 1, 1)
    with pytest.raises(ValueError):
        generate_targets([], 0, 1)


def test_number_puzzle_to_dict():
    data = generate_number_puzzle(4, 9, 5, rng=random.Random(2)).to_dict()
    assert data["gridSize"] == 4
    assert len(data["grid"]) == 16
    assert data["targets"][0]["cellCount"] == len(data["targets"][0]["cells"])
