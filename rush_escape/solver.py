from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional, Tuple, Union

from .exceptions import SearchInvariantError
from .level import Puzzle
from .state import BoardState, initial_state_for_puzzle, successors
from .types import Move

logger = logging.getLogger(__name__)


@dataclass
class _Node:
    state: BoardState
    parent: Optional[int]
    path_count: int


@dataclass
class SearchResult:
    plan: Optional[List[Move]]
    path_count: int
    depth: Optional[int]
    explored: int
    final_state: Optional[BoardState] = None

    @property
    def solvable(self) -> bool:
        return self.plan is not None

    def as_pairs(self) -> List[Tuple[int, str]]:
        return [move.as_tuple() for move in self.plan or []]


def reconstruct_path(nodes: List[_Node], index: int) -> List[Move]:
    """Follow predecessor links from ``nodes[index]`` back to the root.

    Each link is cross-checked by undoing its move: the layout that gives
    must be the stored predecessor, otherwise the table is corrupt.
    """
    steps: List[Move] = []
    node = nodes[index]
    while node.parent is not None:
        move = node.state.move
        parent = nodes[node.parent]
        if move is None:
            raise SearchInvariantError(f"State at depth {node.state.depth} has a parent but no move")
        if node.state.apply(move.reverse()).key() != parent.state.key():
            raise SearchInvariantError(
                f"Undoing {move} at depth {node.state.depth} does not reach the recorded predecessor"
            )
        steps.append(move)
        node = parent
    if node.state.move is not None:
        raise SearchInvariantError("Predecessor chain ended at a state that is not the initial one")
    steps.reverse()
    return steps


def solve(start: Union[Puzzle, BoardState]) -> SearchResult:
    """Breadth-first search for a shortest escape, counting shortest paths.

    Every distinct layout enters the table once, at its minimum depth. A
    later arrival at the same depth adds its parent's path count; deeper
    arrivals are dropped. The first escaped state popped gives the plan.
    By then its whole previous layer has been expanded, so every escaped
    layout at that depth is already in the table with its final count; the
    shortest-solution count is the sum over all of them.
    """
    if isinstance(start, Puzzle):
        start = initial_state_for_puzzle(start)
    elif start.move is not None or start.depth:
        # Search from this layout as a fresh root.
        start = BoardState(vehicles=start.vehicles, grid=start.grid)

    nodes: List[_Node] = [_Node(state=start, parent=None, path_count=1)]
    index_of: Dict[Tuple[int, ...], int] = {start.key(): 0}
    frontier: Deque[int] = deque([0])
    layer = 0

    while frontier:
        current = frontier.popleft()
        node = nodes[current]
        state = node.state

        if state.depth != layer:
            logger.debug("Layer %d: frontier=%d table=%d", state.depth, len(frontier) + 1, len(nodes))
            layer = state.depth

        if state.escaped():
            plan = reconstruct_path(nodes, current)
            # Entries before ``current`` were popped already and none escaped.
            total = sum(
                other.path_count
                for other in nodes[current:]
                if other.state.depth == state.depth and other.state.escaped()
            )
            logger.info(
                "Solved in %d moves, %d shortest paths, %d layouts explored",
                len(plan), total, len(nodes),
            )
            return SearchResult(
                plan=plan,
                path_count=total,
                depth=state.depth,
                explored=len(nodes),
                final_state=state,
            )

        for child, _move in successors(state):
            key = child.key()
            seen = index_of.get(key)
            if seen is None:
                index_of[key] = len(nodes)
                frontier.append(len(nodes))
                nodes.append(_Node(state=child, parent=current, path_count=node.path_count))
            elif nodes[seen].state.depth == child.depth:
                nodes[seen].path_count += node.path_count

    logger.info("No solution; %d layouts explored", len(nodes))
    return SearchResult(plan=None, path_count=0, depth=None, explored=len(nodes))
