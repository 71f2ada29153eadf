"""Optimal solver — A* over single-step moves.

Every edge costs one move. The heuristic is the Manhattan distance from
the goal piece to its target, which never overestimates (a single move
shifts the goal piece by at most one cell), so the first goal state taken
off the frontier is reached by a shortest move sequence.

Frontier entries are ``(f, seq, node)`` tuples in a binary heap. ``seq``
increases with every push, so among equal ``f`` the node inserted first is
expanded first. Given the fixed enumeration order of
:func:`legal_single_step_moves`, repeated runs return the same moves.
"""

from __future__ import annotations

import heapq
import logging
import threading
import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Callable, Hashable

from backend.engine.gamemoves import Move, legal_single_step_moves
from backend.models.board import BoardState

logger = logging.getLogger(__name__)


class SolveStatus(StrEnum):
    SOLVED = "solved"
    EXHAUSTED = "exhausted"
    BUDGET_EXCEEDED = "budget_exceeded"
    CANCELLED = "cancelled"
    ERROR = "error"


@dataclass(frozen=True)
class SolverConfig:
    """Search limits.

    ``max_states`` caps the number of expanded states. With
    ``merge_interchangeable`` the visited set treats pieces of the same
    shape as interchangeable, which shrinks the search without changing
    the optimal length.
    """

    max_states: int = 1_000_000
    merge_interchangeable: bool = True

    def __post_init__(self) -> None:
        if self.max_states < 1:
            raise ValueError(f"max_states must be positive, got {self.max_states}.")


@dataclass(frozen=True)
class SolveResult:
    status: SolveStatus
    moves: tuple[Move, ...] = ()
    expanded: int = 0
    elapsed: float = 0.0

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED

    def __len__(self) -> int:
        return len(self.moves)


@dataclass(order=True)
class _Node:
    priority: int
    seq: int
    g: int = field(compare=False)
    state: BoardState = field(compare=False)
    moves: tuple[Move, ...] = field(compare=False)


class Solver:
    """Stateless solver — all methods are static."""

    @staticmethod
    def heuristic(state: BoardState) -> int:
        """Manhattan distance from the goal piece to the target cell."""
        d = state.definition
        return state.placement(d.goal_piece_id).distance(d.target)

    @staticmethod
    def solve(
        state: BoardState,
        config: SolverConfig = SolverConfig(),
        cancel: threading.Event | None = None,
    ) -> SolveResult:
        """Search for a shortest move sequence from *state* to the goal.

        Never raises for an unsolvable puzzle: exhaustion, the expansion
        ceiling and cancellation all come back as a non-solved
        :class:`SolveResult`.
        """
        started = time.perf_counter()
        key: Callable[[BoardState], Hashable] = (
            BoardState.layout_key
            if config.merge_interchangeable
            else BoardState.canonical_key
        )

        def _result(status: SolveStatus, moves: tuple[Move, ...] = ()) -> SolveResult:
            return SolveResult(
                status=status,
                moves=moves,
                expanded=expanded,
                elapsed=time.perf_counter() - started,
            )

        logger.info(
            "Solving from %s (max_states=%d, merge_interchangeable=%s)",
            state.canonical_key(),
            config.max_states,
            config.merge_interchangeable,
        )

        expanded = 0
        seq = 0
        # Shortest known path length per state, recorded when generated.
        best: dict[Hashable, int] = {key(state): 0}
        frontier: list[_Node] = [
            _Node(Solver.heuristic(state), seq, 0, state, ())
        ]

        while frontier:
            node = heapq.heappop(frontier)
            if node.g > best.get(key(node.state), node.g):
                continue  # superseded by a shorter path

            if node.state.is_solved():
                result = _result(SolveStatus.SOLVED, node.moves)
                logger.info(
                    "Solved in %d moves (%d states expanded, %.2fs)",
                    len(result.moves),
                    result.expanded,
                    result.elapsed,
                )
                return result

            if cancel is not None and cancel.is_set():
                logger.info("Search cancelled after %d states", expanded)
                return _result(SolveStatus.CANCELLED)

            if expanded >= config.max_states:
                logger.warning(
                    "Gave up after expanding %d states; raise max_states "
                    "if this puzzle is known to be solvable",
                    expanded,
                )
                return _result(SolveStatus.BUDGET_EXCEEDED)
            expanded += 1

            g = node.g + 1
            for move in legal_single_step_moves(node.state):
                child = node.state.moved(move.piece_id, move.placement)
                k = key(child)
                if best.get(k, g + 1) <= g:
                    continue
                best[k] = g
                seq += 1
                heapq.heappush(
                    frontier,
                    _Node(g + Solver.heuristic(child), seq, g, child, node.moves + (move,)),
                )

            if expanded % 50_000 == 0:
                logger.debug(
                    "%d states expanded, frontier %d, depth %d",
                    expanded,
                    len(frontier),
                    node.g,
                )

        logger.error(
            "Search space exhausted after %d states without reaching the "
            "goal; the puzzle definition is unsolvable or mismodelled",
            expanded,
        )
        return _result(SolveStatus.EXHAUSTED)

    @staticmethod
    def hint(state: BoardState, config: SolverConfig = SolverConfig()) -> Move | None:
        """Return the first move of an optimal solution, or ``None``."""
        if state.is_solved():
            return None
        result = Solver.solve(state, config)
        return result.moves[0] if result.solved else None
