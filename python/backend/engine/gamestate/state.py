"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time

from backend.models.board import BoardState


class GameState:
    """Holds the live board, the move counter and the elapsed time.

    ``board`` is only replaced through :meth:`commit`, which the game
    session calls after a relocation has been validated.
    """

    def __init__(self, board: BoardState) -> None:
        self._board = board
        self.moves: int = 0
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    @property
    def board(self) -> BoardState:
        return self._board

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    # -- moves ----------------------------------------------------------------

    def commit(self, board: BoardState, cells: int) -> None:
        """Replace the live board; *cells* is how far the piece travelled."""
        self._board = board
        self.moves += cells

    @property
    def is_solved(self) -> bool:
        return self._board.is_solved()
