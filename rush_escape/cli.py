from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from .exceptions import PuzzleFormatError
from .level import load_puzzle_from_file, parse_puzzle
from .render import grid_to_text, result_to_dict, result_to_text
from .solver import solve
from .state import initial_state_for_puzzle


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Solve 6x6 sliding-vehicle escape puzzles.")
    parser.add_argument("puzzle", type=str, help="Path to puzzle file, or '-' for stdin")
    parser.add_argument("--show-board", action="store_true", help="Print the start and final boards")
    parser.add_argument("--json", action="store_true", help="Emit the result as JSON")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log search progress (-vv for per-layer detail)")
    args = parser.parse_args(argv)

    level = logging.WARNING if args.verbose == 0 else logging.INFO if args.verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.puzzle == "-":
            puzzle = parse_puzzle(sys.stdin.read())
        else:
            puzzle = load_puzzle_from_file(Path(args.puzzle))
    except (OSError, PuzzleFormatError) as e:
        print(f"Cannot load puzzle: {e}", file=sys.stderr)
        return 2

    result = solve(puzzle)

    if args.json:
        print(json.dumps(result_to_dict(result), indent=2))
        return 0 if result.solvable else 1

    if args.show_board:
        print(grid_to_text(initial_state_for_puzzle(puzzle).grid, style="framed"))
        print()
    print(result_to_text(result))
    if args.show_board and result.final_state is not None:
        print()
        print(grid_to_text(result.final_state.grid, style="framed"))
    return 0 if result.solvable else 1


if __name__ == "__main__":
    raise SystemExit(main())
