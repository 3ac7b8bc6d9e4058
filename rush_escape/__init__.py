"""Sliding-vehicle escape puzzle solver package.

Exposes public APIs for parsing puzzles, searching them for shortest
escapes and counting how many shortest escapes exist.
"""

from .types import (
    Axis,
    Direction,
    Move,
    Vehicle,
)
from .exceptions import (
    RushEscapeError,
    PuzzleFormatError,
    InvalidMove,
    SearchInvariantError,
)
from .level import Puzzle, parse_puzzle, load_puzzle_from_file, vehicles_from_cells
from .state import BoardState, initial_state_for_puzzle, replay
from .solver import SearchResult, solve

__all__ = [
    "Axis",
    "Direction",
    "Move",
    "Vehicle",
    "RushEscapeError",
    "PuzzleFormatError",
    "InvalidMove",
    "SearchInvariantError",
    "Puzzle",
    "parse_puzzle",
    "load_puzzle_from_file",
    "vehicles_from_cells",
    "BoardState",
    "initial_state_for_puzzle",
    "replay",
    "SearchResult",
    "solve",
]
