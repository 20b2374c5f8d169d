"""Forbidden-pair rules and a shortest-path solver for river crossing puzzles."""

from collections import deque
from dataclasses import dataclass, field
from itertools import combinations
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from .model import Constraint

START = "start"
FAR = "far"

Assignment = Dict[str, str]


@dataclass(frozen=True)
class ForbiddenPair:
    first: str
    second: str
    guards: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class State:
    far: FrozenSet[str]
    boat: str = START


@dataclass(frozen=True)
class Crossing:
    passengers: Tuple[str, ...]
    to: str

    def describe(self) -> str:
        return f"{' + '.join(self.passengers)} -> {self.to}"


@dataclass
class CrossingPuzzle:
    """
    Characters cross a river in a boat holding 1..capacity of them.
    The boat needs an operator aboard; with no operators anyone may row.
    A forbidden pair without its own guards is guarded by the operators.
    """

    characters: List[str]
    forbidden: List[ForbiddenPair] = field(default_factory=list)
    operators: FrozenSet[str] = frozenset()
    capacity: int = 2

    def __post_init__(self) -> None:
        if len(set(self.characters)) != len(self.characters):
            raise ValueError("Character names must be unique")
        if self.capacity < 1:
            raise ValueError(f"Boat capacity must be at least 1, got {self.capacity}")
        known = set(self.characters)
        unknown = set(self.operators) - known
        for pair in self.forbidden:
            unknown |= {pair.first, pair.second, *pair.guards} - known
        if unknown:
            raise ValueError(f"Unknown characters: {', '.join(sorted(unknown))}")

        self.constraints: List[Constraint] = [
            Constraint.not_alone_together(
                pair.first, pair.second, pair.guards or self.operators
            )
            for pair in self.forbidden
        ]

    def assignment(self, state: State) -> Assignment:
        return {c: FAR if c in state.far else START for c in self.characters}


def violations(puzzle: CrossingPuzzle, assignment: Assignment) -> List[str]:
    return [c.description for c in puzzle.constraints if not c.is_satisfied(assignment)]


def is_safe(puzzle: CrossingPuzzle, assignment: Assignment) -> bool:
    return all(c.is_satisfied(assignment) for c in puzzle.constraints)


def _boat_loads(puzzle: CrossingPuzzle, bank: Iterable[str]) -> List[Tuple[str, ...]]:
    on_bank = sorted(bank)
    loads = []
    for size in range(1, puzzle.capacity + 1):
        for load in combinations(on_bank, size):
            if puzzle.operators and not puzzle.operators.intersection(load):
                continue
            loads.append(load)
    return loads


def apply_crossing(state: State, crossing: Crossing) -> State:
    if crossing.to == FAR:
        return State(far=state.far | set(crossing.passengers), boat=FAR)
    return State(far=state.far - set(crossing.passengers), boat=START)


def legal_moves(puzzle: CrossingPuzzle, state: State) -> List[Tuple[Crossing, State]]:
    """Every boat load from the boat's bank that leaves both banks safe."""
    if state.boat == START:
        bank = [c for c in puzzle.characters if c not in state.far]
        destination = FAR
    else:
        bank = list(state.far)
        destination = START

    moves = []
    for load in _boat_loads(puzzle, bank):
        crossing = Crossing(passengers=load, to=destination)
        next_state = apply_crossing(state, crossing)
        if is_safe(puzzle, puzzle.assignment(next_state)):
            moves.append((crossing, next_state))
    return moves


def solve_crossing(puzzle: CrossingPuzzle) -> Optional[List[Crossing]]:
    """
    Breadth-first search for the shortest sequence of crossings that moves
    everyone to the far bank. Returns None when no sequence exists.
    """
    start = State(far=frozenset())
    goal = frozenset(puzzle.characters)
    if not is_safe(puzzle, puzzle.assignment(start)):
        return None

    parents: Dict[State, Optional[Tuple[State, Crossing]]] = {start: None}
    queue: deque[State] = deque([start])
    while queue:
        state = queue.popleft()
        if state.far == goal:
            return _reconstruct(parents, state)
        for crossing, next_state in legal_moves(puzzle, state):
            if next_state in parents:
                continue
            parents[next_state] = (state, crossing)
            queue.append(next_state)
    return None


def _reconstruct(
    parents: Dict[State, Optional[Tuple[State, Crossing]]], state: State
) -> List[Crossing]:
    path: List[Crossing] = []
    link = parents[state]
    while link is not None:
        previous, crossing = link
        path.append(crossing)
        link = parents[previous]
    path.reverse()
    return path


def farmer_wolf_goat_cabbage() -> CrossingPuzzle:
    return CrossingPuzzle(
        characters=["farmer", "wolf", "goat", "cabbage"],
        forbidden=[ForbiddenPair("wolf", "goat"), ForbiddenPair("goat", "cabbage")],
        operators=frozenset({"farmer"}),
        capacity=2,
    )
