import logging
import os
import random
import unittest

from boards import (
    ALREADY_OUT,
    BLOCKER,
    BOXED,
    ONE_STEP,
    TWO_BLOCKERS,
    TWO_EXITS,
    WRONG_COLUMN,
    brute_force_shortest,
    count_escape_sequences,
    puzzle,
    state,
)
from rush_escape.exceptions import PuzzleFormatError, SearchInvariantError
from rush_escape.level import load_puzzle_from_file
from rush_escape.solver import _Node, reconstruct_path, solve
from rush_escape.state import replay
from rush_escape.types import Direction, Move

SAMPLE_PATH = os.path.join(os.path.dirname(__file__), '..', 'data', 'boards', 'sample.txt')


def random_board(rng):
    """Escape vehicle in the exit row plus up to three random pieces (1-based cells)."""
    col = rng.randrange(4)
    cells = [[13 + col, 14 + col]]
    for _ in range(rng.randint(1, 3)):
        length = rng.choice((2, 3))
        if rng.random() < 0.5:
            row, c = rng.randrange(6), rng.randrange(7 - length)
            cells.append([row * 6 + c + k + 1 for k in range(length)])
        else:
            r, c = rng.randrange(7 - length), rng.randrange(6)
            cells.append([(r + k) * 6 + c + 1 for k in range(length)])
    try:
        puzzle(cells)
    except PuzzleFormatError:
        return None
    return cells


class TestEscapeSolver(unittest.TestCase):
    def test_already_escaped(self):
        result = solve(puzzle(ALREADY_OUT))
        self.assertTrue(result.solvable)
        self.assertEqual(result.plan, [])
        self.assertEqual(result.path_count, 1)
        self.assertEqual(result.depth, 0)

    def test_single_move(self):
        result = solve(puzzle(ONE_STEP))
        self.assertEqual(result.as_pairs(), [(0, 'e')])
        self.assertEqual(result.path_count, 1)

    def test_blocker_moves_out_of_the_way_first(self):
        result = solve(puzzle(BLOCKER))
        # the blocker can leave before or after the first escape move
        self.assertEqual(result.path_count, 2)
        self.assertEqual(result.depth, 3)
        self.assertEqual(result.as_pairs(), [(0, 'e'), (1, 'n'), (0, 'e')])

    def test_two_blockers(self):
        result = solve(puzzle(TWO_BLOCKERS))
        self.assertEqual(result.depth, 6)
        self.assertEqual(result.path_count, 10)

    def test_path_count_matches_brute_force(self):
        for cells in (ALREADY_OUT, ONE_STEP, BLOCKER, TWO_BLOCKERS, TWO_EXITS):
            with self.subTest(cells=cells):
                result = solve(puzzle(cells))
                length, count = brute_force_shortest(state(cells))
                self.assertEqual(result.depth, length)
                self.assertEqual(result.path_count, count)

    def test_counts_every_escaped_layout_at_minimum_depth(self):
        result = solve(puzzle(TWO_EXITS))
        self.assertEqual(result.depth, 5)
        # 3 orderings via the northern exit layout + 3 via the southern one
        self.assertEqual(result.path_count, 6)
        self.assertTrue(replay(state(TWO_EXITS), result.plan).escaped())

    def test_random_small_boards_match_brute_force(self):
        rng = random.Random(2024)
        checked = 0
        for _ in range(200):
            cells = random_board(rng)
            if cells is None:
                continue
            result = solve(puzzle(cells))
            if not result.solvable or result.depth > 5:
                continue
            start = state(cells)
            with self.subTest(cells=cells):
                self.assertEqual(count_escape_sequences(start, result.depth), result.path_count)
                if result.depth:
                    self.assertEqual(count_escape_sequences(start, result.depth - 1), 0)
            checked += 1
            if checked == 25:
                break
        self.assertGreater(checked, 0)

    def test_boxed_in_is_unsolvable(self):
        result = solve(puzzle(BOXED))
        self.assertFalse(result.solvable)
        self.assertIsNone(result.plan)
        self.assertIsNone(result.depth)
        self.assertEqual(result.path_count, 0)
        self.assertEqual(result.explored, 1)
        self.assertEqual(result.as_pairs(), [])

    def test_escape_vehicle_off_the_exit_column_is_unsolvable(self):
        result = solve(puzzle(WRONG_COLUMN))
        self.assertFalse(result.solvable)
        self.assertEqual(result.path_count, 0)
        self.assertGreater(result.explored, 1)

    def test_plan_replays_to_escape(self):
        for cells in (ONE_STEP, BLOCKER, TWO_BLOCKERS):
            with self.subTest(cells=cells):
                result = solve(puzzle(cells))
                final = replay(state(cells), result.plan)
                self.assertTrue(final.escaped())
                self.assertEqual(len(result.plan), result.depth)
                self.assertEqual(final, result.final_state)

    def test_sample_board(self):
        result = solve(load_puzzle_from_file(SAMPLE_PATH))
        self.assertTrue(result.solvable)
        self.assertEqual(len(result.plan), 10)
        self.assertGreaterEqual(result.path_count, 1)
        self.assertTrue(replay(state([[14, 15], [4, 10, 16], [18, 24], [28, 29, 30], [1, 2]]), result.plan).escaped())

    def test_deterministic(self):
        first = solve(puzzle(TWO_BLOCKERS))
        second = solve(puzzle(TWO_BLOCKERS))
        self.assertEqual(first.as_pairs(), second.as_pairs())
        self.assertEqual(first.path_count, second.path_count)
        self.assertEqual(first.explored, second.explored)

    def test_accepts_state_mid_game(self):
        start = state(BLOCKER).apply(Move(1, Direction.NORTH))
        result = solve(start)
        self.assertEqual(result.as_pairs(), [(0, 'e'), (0, 'e')])
        self.assertEqual(result.depth, 2)

    def test_logs_outcome(self):
        with self.assertLogs('rush_escape.solver', level=logging.INFO) as logs:
            solve(puzzle(BOXED))
        self.assertTrue(any('No solution' in line for line in logs.output))


class TestReconstruct(unittest.TestCase):
    def test_follows_predecessor_links(self):
        root = state(BLOCKER)
        a = root.apply(Move(0, Direction.EAST))
        b = a.apply(Move(1, Direction.NORTH))
        nodes = [_Node(root, None, 1), _Node(a, 0, 1), _Node(b, 1, 1)]
        self.assertEqual(reconstruct_path(nodes, 2), [Move(0, Direction.EAST), Move(1, Direction.NORTH)])
        self.assertEqual(reconstruct_path(nodes, 0), [])

    def test_inconsistent_table_is_fatal(self):
        root = state(BLOCKER)
        a = root.apply(Move(0, Direction.EAST))
        b = a.apply(Move(1, Direction.NORTH))
        # b wrongly points straight at root
        nodes = [_Node(root, None, 1), _Node(b, 0, 1)]
        with self.assertRaises(SearchInvariantError):
            reconstruct_path(nodes, 1)

    def test_chain_must_end_at_initial_state(self):
        a = state(BLOCKER).apply(Move(0, Direction.EAST))
        with self.assertRaises(SearchInvariantError):
            reconstruct_path([_Node(a, None, 1)], 0)


if __name__ == "__main__":
    unittest.main()
