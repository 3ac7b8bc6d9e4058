"""
text_export.py

Render escape-puzzle boards and solver results as plain text.

Grid layout: six rows of six cells, row-major, matching the 0-based cell
indexing of ``rush_escape``. Each cell shows the id of the vehicle on it,
or '.' when empty. Ids above 9 widen every column so rows stay aligned.

Styles:
- 'plain' (default): bare rows, one space between cells.
- 'framed': the same rows inside a '+', '-', '|' border with the exit
  marked by '>' on the right-hand edge of the exit row.

Plan output follows the classic console format: one "<id> <dir>" line per
move and then the shortest-path count; unsolvable boards produce a single
"No valid path found." line.

Usage:
    from rush_escape import load_puzzle_from_file, solve
    from text_export import grid_to_text, result_to_text

    result = solve(load_puzzle_from_file('data/boards/sample.txt'))
    print(grid_to_text(result.final_state.grid, style='framed'))
    print(result_to_text(result))
"""
from rush_escape.render import (
    DEFAULT_SYMBOLS,
    NO_SOLUTION,
    grid_to_text,
    plan_to_lines,
    result_to_dict,
    result_to_text,
)

__all__ = [
    'DEFAULT_SYMBOLS',
    'NO_SOLUTION',
    'grid_to_text',
    'plan_to_lines',
    'result_to_dict',
    'result_to_text',
]


if __name__ == '__main__':
    import sys
    from rush_escape import load_puzzle_from_file, solve

    path = sys.argv[1] if len(sys.argv) > 1 else 'data/boards/sample.txt'
    print(result_to_text(solve(load_puzzle_from_file(path))))
