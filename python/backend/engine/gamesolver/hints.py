"""Hints that never search on the caller's thread.

Every finished search leaves behind a path of boards, each paired with the
optimal next move. A hint for a board on such a path is a dictionary
lookup. Any other board gets its own background :class:`SolverTask`; the
caller keeps asking until :attr:`HintProvider.searching` goes false.
"""

from __future__ import annotations

import logging
from typing import Hashable

from backend.engine.gamemoves import Move
from backend.engine.gamesolver.solver import SolverConfig
from backend.engine.gamesolver.task import SolverPhase, SolverTask
from backend.models.board import BoardState

logger = logging.getLogger(__name__)


class HintProvider:
    """Next-move lookups backed by the game's background solve.

    Example::

        hints = HintProvider(task, config)
        move = hints.ask(game.state.board)
        if move is None and hints.searching:
            ...  # ask again on a later frame
    """

    def __init__(self, main: SolverTask, config: SolverConfig = SolverConfig()) -> None:
        self._config = config
        self._main = main
        self._pending: list[SolverTask] = [main]
        self._next: dict[Hashable, Move] = {}
        self._search: SolverTask | None = None
        self._waiting_on: SolverTask | None = None

    # -- queries --------------------------------------------------------------

    def ask(self, board: BoardState) -> Move | None:
        """Return the next optimal move from *board* if one is known.

        ``None`` with :attr:`searching` set means a search is under way;
        ``None`` otherwise means no hint exists from here.
        """
        self._waiting_on = None
        if board.is_solved():
            return None

        self._absorb()
        move = self._next.get(board.canonical_key())
        if move is not None:
            return move

        for task in (self._main, self._search):
            if task is None or task.state != board:
                continue
            if task.phase is SolverPhase.SOLVING:
                self._waiting_on = task
            return None

        self._start_search(board)
        return None

    @property
    def searching(self) -> bool:
        """True while the last :meth:`ask` is waiting on a background search."""
        task = self._waiting_on
        return task is not None and task.phase is SolverPhase.SOLVING

    def wait(self, timeout: float | None = None) -> None:
        """Block until the search the last :meth:`ask` started has finished."""
        if self._waiting_on is not None:
            self._waiting_on.wait(timeout)

    # -- lifecycle ------------------------------------------------------------

    def cancel(self) -> None:
        """Stop the hint search, if any. The main task belongs to the caller."""
        if self._search is not None:
            self._search.cancel()

    # -- helpers --------------------------------------------------------------

    def _start_search(self, board: BoardState) -> None:
        self.cancel()
        logger.debug("Searching for a hint from %s", board.canonical_key())
        task = SolverTask(board, self._config)
        task.start()
        self._search = task
        self._waiting_on = task
        self._pending.append(task)

    def _absorb(self) -> None:
        """Index the paths of searches that have finished since the last call."""
        still: list[SolverTask] = []
        for task in self._pending:
            if task.phase is SolverPhase.SOLVING or task.phase is SolverPhase.IDLE:
                still.append(task)
                continue
            result = task.result
            if result is None or not result.solved:
                continue
            state = task.state
            for move in result.moves:
                self._next[state.canonical_key()] = move
                state = state.moved(move.piece_id, move.placement)
        self._pending = still
