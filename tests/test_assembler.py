"""Tests for revealing clues until a Latin square puzzle is unique."""

import random

import pytest

from src.puzzlegen import assembler
from src.puzzlegen.assembler import assemble, generate_puzzle
from src.puzzlegen.latin import count_solutions, generate_latin_square
from src.utils.trace import Tracer


@pytest.mark.parametrize("n,clues", [(4, 6), (5, 6), (6, 7)])
def test_assemble_terminates_with_matching_clues(n, clues):
    rng = random.Random(n * 100 + clues)
    for _ in range(3):
        tracer = Tracer()
        solution = generate_latin_square(n, rng=rng, tracer=tracer)
        puzzle = assemble(solution, clues, n, rng=rng, tracer=tracer)

        checks = tracer.summary()["action_counts"].get("uniqueness_check", 0)
        assert 1 <= checks <= n * n
        assert clues <= len(puzzle.prefilled) <= n * n - 2
        assert len({clue.cell for clue in puzzle.prefilled}) == len(puzzle.prefilled)
        for clue in puzzle.prefilled:
            assert solution[clue.row][clue.col] == clue.value
        assert puzzle.unique
        assert count_solutions(puzzle.fixed_cells(), n) == 1


def test_generate_puzzle_easy_tier_has_at_least_six_clues_and_is_unique():
    """Clues may exceed the requested six: more are revealed until the puzzle is unique."""
    rng = random.Random(7)
    for _ in range(10):
        puzzle = generate_puzzle(4, 6, rng=rng)
        assert len(puzzle.prefilled) >= 6
        assert count_solutions(puzzle.fixed_cells(), 4) == 1


def test_player_grid_shows_only_clues():
    puzzle = generate_puzzle(4, 6, rng=random.Random(3))
    grid = puzzle.player_grid()
    revealed = [(r, c) for r in range(4) for c in range(4) if grid[r][c] != -1]
    assert sorted(revealed) == sorted(clue.cell for clue in puzzle.prefilled)


def test_fallback_when_cap_reached(monkeypatch):
    monkeypatch.setattr(assembler, "count_solutions", lambda fixed, n, cap=2, tracer=None: 2)
    tracer = Tracer()
    solution = generate_latin_square(4, rng=random.Random(1), tracer=tracer)

    puzzle = assemble(solution, 6, 4, rng=random.Random(1), tracer=tracer)

    assert not puzzle.unique
    assert len(puzzle.prefilled) == 14
    assert tracer.summary()["num_fallbacks"] == 1


def test_target_above_cap_is_clipped():
    solution = generate_latin_square(3, rng=random.Random(5))
    puzzle = assemble(solution, 20, 3, rng=random.Random(5))
    assert len(puzzle.prefilled) == 7


def test_tiny_grids():
    one = generate_puzzle(1, 0, rng=random.Random(0))
    assert one.solution == [[0]]
    assert one.prefilled == []
    assert one.unique

    two = generate_puzzle(2, 0, rng=random.Random(0))
    assert len(two.prefilled) == 1
    assert two.unique


def test_assemble_rejects_bad_input():
    with pytest.raises(ValueError):
        assemble([[0, 0], [1, 1]], 1, 2)
    with pytest.raises(ValueError):
        assemble([[0, 1], [1, 0]], -1, 2)
    with pytest.raises(ValueError):
        assemble([[0, 1], [1, 0]], 1, 3)


def test_puzzle_to_dict():
    puzzle = generate_puzzle(4, 6, rng=random.Random(11))
    data = puzzle.to_dict()
    assert data["size"] == 4
    assert data["unique"] is True
    assert len(data["prefilled"]) == len(puzzle.prefilled)
    assert set(data["prefilled"][0]) == {"row", "col", "value"}
