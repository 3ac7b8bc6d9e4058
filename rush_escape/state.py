from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .exceptions import InvalidMove, PuzzleFormatError
from .level import Puzzle
from .types import (
    AXIS_DIRECTIONS,
    CELL_COUNT,
    EMPTY,
    ESCAPE_VEHICLE_ID,
    EXIT_CELL,
    GRID_SIZE,
    Direction,
    Move,
    Vehicle,
)


@dataclass(frozen=True, eq=False)
class BoardState:
    """Immutable layout snapshot.

    ``grid`` maps each cell to the id of the vehicle on it, or EMPTY. It is
    derived from ``vehicles`` and is the only thing equality and hashing
    look at; ``move`` and ``depth`` are bookkeeping from the search.
    """

    vehicles: Tuple[Vehicle, ...]
    grid: Tuple[int, ...]
    move: Optional[Move] = None
    depth: int = 0

    @classmethod
    def from_vehicles(cls, vehicles: Sequence[Vehicle]) -> "BoardState":
        grid = [EMPTY] * CELL_COUNT
        for index, vehicle in enumerate(vehicles):
            if vehicle.id != index:
                raise PuzzleFormatError(f"Vehicle at position {index} has id {vehicle.id}")
            for cell in vehicle.cells:
                if not 0 <= cell < CELL_COUNT:
                    raise PuzzleFormatError(f"Vehicle {vehicle.id} cell {cell} is off the board")
                if grid[cell] != EMPTY:
                    raise PuzzleFormatError(
                        f"Vehicles {grid[cell]} and {vehicle.id} both occupy cell {cell}"
                    )
                grid[cell] = vehicle.id
        return cls(vehicles=tuple(vehicles), grid=tuple(grid))

    def key(self) -> Tuple[int, ...]:
        return self.grid

    def escaped(self) -> bool:
        return self.grid[EXIT_CELL] == ESCAPE_VEHICLE_ID

    def vehicle(self, vehicle_id: int) -> Vehicle:
        return self.vehicles[vehicle_id]

    def apply(self, move: Move) -> "BoardState":
        # Unchecked: callers must only pass legal moves.
        old = self.vehicles[move.vehicle_id]
        moved = old.translate(move.direction)
        vehicles = list(self.vehicles)
        vehicles[move.vehicle_id] = moved
        grid = list(self.grid)
        for cell in old.cells:
            grid[cell] = EMPTY
        for cell in moved.cells:
            grid[cell] = moved.id
        return BoardState(
            vehicles=tuple(vehicles),
            grid=tuple(grid),
            move=move,
            depth=self.depth + 1,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return self.grid == other.grid

    def __hash__(self) -> int:
        return hash(self.grid)


def can_move(state: BoardState, vehicle: Vehicle, direction: Direction) -> bool:
    grid = state.grid
    if direction == Direction.NORTH:
        target = vehicle.leading_cell - GRID_SIZE
        return target >= 0 and grid[target] == EMPTY
    if direction == Direction.SOUTH:
        target = vehicle.trailing_cell + GRID_SIZE
        return target < CELL_COUNT and grid[target] == EMPTY
    if direction == Direction.WEST:
        lead = vehicle.leading_cell
        return lead % GRID_SIZE != 0 and grid[lead - 1] == EMPTY
    # EAST
    trail = vehicle.trailing_cell
    return trail % GRID_SIZE != GRID_SIZE - 1 and grid[trail + 1] == EMPTY


def enumerate_moves(state: BoardState) -> List[Move]:
    moves: List[Move] = []
    for vehicle in state.vehicles:
        for direction in AXIS_DIRECTIONS[vehicle.axis]:
            if can_move(state, vehicle, direction):
                moves.append(Move(vehicle.id, direction))
    return moves


def successors(state: BoardState) -> List[Tuple[BoardState, Move]]:
    return [(state.apply(move), move) for move in enumerate_moves(state)]


def is_legal(state: BoardState, move: Move) -> bool:
    if not 0 <= move.vehicle_id < len(state.vehicles):
        return False
    vehicle = state.vehicle(move.vehicle_id)
    if move.direction.axis != vehicle.axis:
        return False
    return can_move(state, vehicle, move.direction)


def replay(state: BoardState, moves: Iterable[Move]) -> BoardState:
    """Play ``moves`` in order from ``state``, rejecting illegal ones."""
    for index, move in enumerate(moves):
        if not is_legal(state, move):
            raise InvalidMove(f"Move {index + 1} ({move}) is not legal here")
        state = state.apply(move)
    return state


def initial_state_for_puzzle(puzzle: Puzzle) -> BoardState:
    return BoardState.from_vehicles(puzzle.vehicles)
