from flask import Flask, request, jsonify
import os
import re

from rush_escape import (
    Direction,
    Move,
    Puzzle,
    RushEscapeError,
    initial_state_for_puzzle,
    load_puzzle_from_file,
    parse_puzzle,
    replay,
    solve,
    vehicles_from_cells,
)
from rush_escape.render import grid_to_text, result_to_dict

app = Flask(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(BASE_DIR, 'data')
app.config['BOARDS_DIR'] = os.environ.get('RUSH_ESCAPE_BOARDS_DIR') or os.path.join(DATA_DIR, 'boards')


def boards_dir() -> str:
    return app.config['BOARDS_DIR']


def _is_safe_board_name(name: str) -> bool:
    # Allow only simple names like "foo.txt", alnum, dash, underscore, dot
    if not isinstance(name, str) or len(name) == 0 or len(name) > 128:
        return False
    return re.fullmatch(r"[A-Za-z0-9_.-]+", name) is not None and name.lower().endswith('.txt')


def list_boards() -> list[str]:
    root = boards_dir()
    if not os.path.isdir(root):
        return []
    return sorted(fn for fn in os.listdir(root) if _is_safe_board_name(fn))


def load_board_named(name: str) -> Puzzle:
    if not _is_safe_board_name(name):
        raise ValueError('invalid_board_name')
    path = os.path.join(boards_dir(), name)
    if not os.path.exists(path):
        raise FileNotFoundError('board_not_found')
    return load_puzzle_from_file(path)


def puzzle_from_body(body: dict) -> Puzzle:
    """Accept {"board": name}, {"text": puzzle text} or {"vehicles": [[cells]...]}."""
    if not isinstance(body, dict):
        raise ValueError('body must be a JSON object')
    if body.get('board'):
        return load_board_named(body['board'])
    if isinstance(body.get('text'), str):
        return parse_puzzle(body['text'])
    if 'vehicles' in body:
        vehicles = body['vehicles']
        if not isinstance(vehicles, list):
            raise ValueError('vehicles must be a list of cell lists')
        return Puzzle(vehicles=vehicles_from_cells(vehicles))
    raise ValueError('expected one of: board, text, vehicles')


def parse_moves(raw) -> list[Move]:
    if not isinstance(raw, list):
        raise ValueError('moves must be a list of [vehicle_id, direction] pairs')
    moves: list[Move] = []
    for item in raw:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f'bad move {item!r}')
        vid, ch = item
        if isinstance(vid, bool) or not isinstance(vid, int) or not isinstance(ch, str):
            raise ValueError(f'bad move {item!r}')
        moves.append(Move(vid, Direction.from_char(ch)))
    return moves


def _error(message: str, status: int = 400):
    return jsonify({'status': 'error', 'message': message}), status


@app.get('/api/boards')
def api_list_boards():
    names = list_boards()
    return jsonify({'boards': names, 'default': names[0] if names else None})


@app.get('/api/boards/<name>')
def api_get_board(name: str):
    try:
        puzzle = load_board_named(name)
    except FileNotFoundError as e:
        return _error(str(e), 404)
    except ValueError as e:
        return _error(str(e))
    return jsonify({
        'name': name,
        'vehicles': puzzle.cell_lists(),
        'grid': grid_to_text(initial_state_for_puzzle(puzzle).grid),
    })


@app.post('/api/solve')
def api_solve():
    try:
        puzzle = puzzle_from_body(request.get_json(force=True, silent=True))
    except FileNotFoundError as e:
        return _error(str(e), 404)
    except ValueError as e:
        return _error(str(e))
    result = solve(puzzle)
    app.logger.info('solve: solvable=%s depth=%s paths=%d explored=%d',
                    result.solvable, result.depth, result.path_count, result.explored)
    payload = {'status': 'ok'}
    payload.update(result_to_dict(result))
    return jsonify(payload)


@app.post('/api/verify')
def api_verify():
    try:
        body = request.get_json(force=True, silent=True)
        puzzle = puzzle_from_body(body)
        moves = parse_moves(body.get('moves'))
        final = replay(initial_state_for_puzzle(puzzle), moves)
    except FileNotFoundError as e:
        return _error(str(e), 404)
    except (ValueError, RushEscapeError) as e:
        return _error(str(e))
    return jsonify({
        'status': 'ok',
        'escaped': final.escaped(),
        'length': len(moves),
        'final_grid': grid_to_text(final.grid),
    })


if __name__ == '__main__':
    app.run(debug=True)
