from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

from .exceptions import PuzzleFormatError
from .types import Axis, CELL_COUNT, ESCAPE_VEHICLE_ID, GRID_SIZE, Vehicle


@dataclass
class Puzzle:
    vehicles: List[Vehicle]

    @property
    def escape_vehicle(self) -> Vehicle:
        return self.vehicles[ESCAPE_VEHICLE_ID]

    def cell_lists(self) -> List[List[int]]:
        """Vehicle cells in the 1-based addressing used by puzzle files."""
        return [[c + 1 for c in v.cells] for v in self.vehicles]


def _check_run(vehicle_id: int, cells: Sequence[int]) -> None:
    # cells are sorted, 0-based
    if len(cells) < 2:
        return
    step = GRID_SIZE if Axis.from_cells(tuple(cells)) == Axis.VERTICAL else 1
    row = cells[0] // GRID_SIZE
    for prev, cur in zip(cells, cells[1:]):
        if cur - prev != step:
            raise PuzzleFormatError(
                f"Vehicle {vehicle_id} cells {[c + 1 for c in cells]} are not a contiguous straight run"
            )
        if step == 1 and cur // GRID_SIZE != row:
            raise PuzzleFormatError(
                f"Vehicle {vehicle_id} cells {[c + 1 for c in cells]} wrap across a row boundary"
            )


def vehicles_from_cells(cell_lists: Iterable[Sequence[int]]) -> List[Vehicle]:
    """Build vehicles from 1-based cell lists, in id order.

    The first list is the escape vehicle. Raises PuzzleFormatError for
    anything the search engine must never see: out-of-range or repeated
    cells, bent or wrapping pieces and overlapping placements.
    """
    vehicles: List[Vehicle] = []
    owner: dict[int, int] = {}
    for vid, raw in enumerate(cell_lists):
        if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
            raise PuzzleFormatError(f"Vehicle {vid} must be a list of cell numbers")
        if len(raw) == 0:
            raise PuzzleFormatError(f"Vehicle {vid} has no cells")
        cells: List[int] = []
        for value in raw:
            if isinstance(value, bool) or not isinstance(value, int):
                raise PuzzleFormatError(f"Vehicle {vid} has non-integer cell {value!r}")
            if not 1 <= value <= CELL_COUNT:
                raise PuzzleFormatError(f"Vehicle {vid} cell {value} outside 1..{CELL_COUNT}")
            cells.append(value - 1)
        if len(set(cells)) != len(cells):
            raise PuzzleFormatError(f"Vehicle {vid} repeats a cell")
        cells.sort()
        _check_run(vid, cells)
        for c in cells:
            if c in owner:
                raise PuzzleFormatError(
                    f"Vehicles {owner[c]} and {vid} both occupy cell {c + 1}"
                )
            owner[c] = vid
        vehicles.append(Vehicle.from_cells(vid, tuple(cells)))

    if not vehicles:
        raise PuzzleFormatError("Puzzle must define at least the escape vehicle")
    return vehicles


def parse_puzzle(text: str) -> Puzzle:
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line and not line.startswith("#")]
    if not lines:
        raise PuzzleFormatError("Empty puzzle content")

    try:
        count = int(lines[0])
    except ValueError:
        raise PuzzleFormatError(f"First line must be the vehicle count, got {lines[0]!r}") from None
    body = lines[1:]
    if count != len(body):
        raise PuzzleFormatError(f"Header declares {count} vehicles but {len(body)} were listed")

    cell_lists: List[List[int]] = []
    for lineno, line in enumerate(body, 2):
        try:
            cell_lists.append([int(tok) for tok in line.split()])
        except ValueError:
            raise PuzzleFormatError(f"Line {lineno}: expected cell numbers, got {line!r}") from None

    return Puzzle(vehicles=vehicles_from_cells(cell_lists))


def puzzle_to_text(puzzle: Puzzle) -> str:
    rows = [str(len(puzzle.vehicles))]
    rows.extend(" ".join(str(c) for c in cells) for cells in puzzle.cell_lists())
    return "\n".join(rows) + "\n"


def load_puzzle_from_file(path: str | Path) -> Puzzle:
    text = Path(path).read_text(encoding="utf-8")
    return parse_puzzle(text)
