"""Puzzle generation core: Latin square puzzles, target sums, and crossing rules."""

from .model import Clue, Puzzle, TargetSum, NumberPuzzle
from .latin import generate_latin_square, count_solutions
from .assembler import assemble, generate_puzzle
from .targets import generate_targets, generate_number_puzzle

__all__ = [
    "Clue",
    "Puzzle",
    "TargetSum",
    "NumberPuzzle",
    "generate_latin_square",
    "count_solutions",
    "assemble",
    "generate_puzzle",
    "generate_targets",
    "generate_number_puzzle",
]
