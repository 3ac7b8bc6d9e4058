"""Plain-text rendering of boards and solver results."""
from typing import Dict, List, Optional, Sequence

from .solver import SearchResult
from .types import EMPTY, EXIT_CELL, GRID_SIZE

DEFAULT_SYMBOLS: Dict[str, str] = {
    'empty': '.',
    'corner': '+',
    'h_edge': '-',
    'v_edge': '|',
    'exit': '>',
}

NO_SOLUTION = 'No valid path found.'


def grid_to_text(grid: Sequence[int], style: str = 'plain', symbols: Optional[Dict[str, str]] = None) -> str:
    syms = dict(DEFAULT_SYMBOLS)
    if symbols:
        syms.update(symbols)

    width = max((len(str(v)) for v in grid if v != EMPTY), default=1)
    cells = [(syms['empty'] if v == EMPTY else str(v)).rjust(width) for v in grid]
    rows: List[str] = [
        ' '.join(cells[r * GRID_SIZE:(r + 1) * GRID_SIZE]) for r in range(GRID_SIZE)
    ]
    if style != 'framed':
        return '\n'.join(rows)

    inner = len(rows[0])
    border = syms['corner'] + syms['h_edge'] * (inner + 2) + syms['corner']
    exit_row = EXIT_CELL // GRID_SIZE
    out = [border]
    for r, row in enumerate(rows):
        right = syms['exit'] if r == exit_row else syms['v_edge']
        out.append(f"{syms['v_edge']} {row} {right}")
    out.append(border)
    return '\n'.join(out)


def plan_to_lines(result: SearchResult) -> List[str]:
    return [f'{vid} {ch}' for vid, ch in result.as_pairs()]


def result_to_text(result: SearchResult) -> str:
    if not result.solvable:
        return NO_SOLUTION
    lines = plan_to_lines(result)
    lines.append(str(result.path_count))
    return '\n'.join(lines)


def result_to_dict(result: SearchResult) -> dict:
    return {
        'solvable': result.solvable,
        'moves': [list(pair) for pair in result.as_pairs()],
        'path_count': result.path_count,
        'depth': result.depth,
        'explored': result.explored,
        'final_grid': grid_to_text(result.final_state.grid) if result.final_state else None,
    }
