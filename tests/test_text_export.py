import os

from boards import BLOCKER, BOXED, puzzle, state
from rush_escape.solver import solve
from text_export import NO_SOLUTION, grid_to_text, plan_to_lines, result_to_dict, result_to_text

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def test_plain_grid():
    text = grid_to_text(state(BLOCKER).grid)
    rows = text.split('\n')
    assert len(rows) == 6
    assert rows[1] == '. . . . . 1'
    assert rows[2] == '. . 0 0 . 1'
    assert rows[5] == '. . . . . .'


def test_wide_ids_keep_columns_aligned():
    cells = [[17, 18]] + [[c] for c in range(1, 12)]
    text = grid_to_text(state(cells).grid)
    rows = text.split('\n')
    assert len({len(r) for r in rows}) == 1
    assert rows[1].split() == ['7', '8', '9', '10', '11', '.']


def test_framed_grid_marks_exit():
    text = grid_to_text(state(BLOCKER).grid, style='framed')
    rows = text.split('\n')
    assert len(rows) == 8
    assert rows[0].startswith('+') and rows[0].endswith('+')
    assert rows[3].endswith('>')
    assert all(r.endswith('|') for i, r in enumerate(rows[1:7]) if i != 2)


def test_custom_symbols():
    text = grid_to_text(state(BLOCKER).grid, symbols={'empty': '_'})
    assert '.' not in text and '_' in text


def test_result_text_matches_console_format():
    result = solve(puzzle(BLOCKER))
    assert plan_to_lines(result) == ['0 e', '1 n', '0 e']
    assert result_to_text(result) == '0 e\n1 n\n0 e\n2'


def test_unsolvable_text_and_dict():
    result = solve(puzzle(BOXED))
    assert result_to_text(result) == NO_SOLUTION
    d = result_to_dict(result)
    assert d['solvable'] is False and d['moves'] == [] and d['path_count'] == 0
    assert d['final_grid'] is None


def test_solved_dict():
    d = result_to_dict(solve(puzzle(BLOCKER)))
    assert d['moves'] == [[0, 'e'], [1, 'n'], [0, 'e']]
    assert d['depth'] == 3
    assert d['final_grid'].split('\n')[2] == '. . . . 0 0'


def test_rendering_lives_in_the_package():
    import text_export
    from rush_escape import render

    assert text_export.grid_to_text is render.grid_to_text
    assert text_export.result_to_text is render.result_to_text
    with open(os.path.join(ROOT, 'rush_escape', 'cli.py'), encoding='utf-8') as f:
        assert 'text_export' not in f.read()
