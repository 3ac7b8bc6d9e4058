from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


# Board geometry. Cells are indexed 0..35, row-major.
GRID_SIZE = 6
CELL_COUNT = GRID_SIZE * GRID_SIZE
EXIT_CELL = 17  # row 2, column 5
ESCAPE_VEHICLE_ID = 0
EMPTY = -1


class Axis(Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    @classmethod
    def from_cells(cls, cells: Tuple[int, ...]) -> "Axis":
        # Single-cell pieces have no second cell to compare against.
        if len(cells) < 2:
            return cls.HORIZONTAL
        if (cells[0] - cells[1]) % GRID_SIZE == 0:
            return cls.VERTICAL
        return cls.HORIZONTAL


class Direction(Enum):
    NORTH = "n"
    SOUTH = "s"
    EAST = "e"
    WEST = "w"

    @property
    def char(self) -> str:
        return self.value

    @property
    def offset(self) -> int:
        return _OFFSETS[self]

    @property
    def axis(self) -> Axis:
        if self in (Direction.NORTH, Direction.SOUTH):
            return Axis.VERTICAL
        return Axis.HORIZONTAL

    def reverse(self) -> "Direction":
        return _REVERSE[self]

    @classmethod
    def from_char(cls, ch: str) -> "Direction":
        try:
            return cls(ch.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown direction {ch!r}; expected one of n, s, e, w") from None


_OFFSETS = {
    Direction.NORTH: -GRID_SIZE,
    Direction.SOUTH: GRID_SIZE,
    Direction.EAST: 1,
    Direction.WEST: -1,
}

_REVERSE = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

# Candidate directions per axis, in generation order
AXIS_DIRECTIONS = {
    Axis.VERTICAL: (Direction.NORTH, Direction.SOUTH),
    Axis.HORIZONTAL: (Direction.WEST, Direction.EAST),
}


@dataclass(frozen=True)
class Move:
    vehicle_id: int
    direction: Direction

    def reverse(self) -> "Move":
        return Move(self.vehicle_id, self.direction.reverse())

    def as_tuple(self) -> Tuple[int, str]:
        return (self.vehicle_id, self.direction.char)

    def __str__(self) -> str:
        return f"{self.vehicle_id} {self.direction.char}"


@dataclass(frozen=True)
class Vehicle:
    """One sliding piece. ``cells`` are 0-based and ordered north/west first."""

    id: int
    cells: Tuple[int, ...]
    axis: Axis

    @classmethod
    def from_cells(cls, vehicle_id: int, cells: Tuple[int, ...]) -> "Vehicle":
        cells = tuple(cells)
        return cls(id=vehicle_id, cells=cells, axis=Axis.from_cells(cells))

    @property
    def leading_cell(self) -> int:
        return self.cells[0]

    @property
    def trailing_cell(self) -> int:
        return self.cells[-1]

    def translate(self, direction: Direction) -> "Vehicle":
        # No bounds checking: legality belongs to the move generator.
        delta = direction.offset
        return Vehicle(self.id, tuple(c + delta for c in self.cells), self.axis)
