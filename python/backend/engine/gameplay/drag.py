"""Pointer drag → grid relocation.

A gesture remembers where the pointer and the piece were on press. Each
pointer update is turned into a whole-cell offset from that anchor,
locked to one axis, clamped to the board and handed to
:meth:`GamePlay.relocate`. Updates that would pass through another piece
are dropped, so the piece stays at its last valid cell. A commit from
anywhere else ends the gesture and later updates are refused.
"""

from __future__ import annotations

import math

from backend.engine.gameplay.game import GamePlay
from backend.models.board import Placement


def snap(delta: float, cell_size: float) -> int:
    """Whole cells covered by a pointer offset, rounding half away from zero."""
    cells = abs(delta) / cell_size
    return int(math.copysign(math.floor(cells + 0.5), delta))


class DragGesture:
    """One press-move-release interaction with a single piece."""

    def __init__(
        self,
        game: GamePlay,
        piece_id: int,
        x: float,
        y: float,
        cell_size: float,
    ) -> None:
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}.")
        self.game = game
        self.piece_id = piece_id
        self.cell_size = cell_size
        self._x0 = x
        self._y0 = y
        self.origin: Placement = game.state.board.placement(piece_id)
        self._seen = game.state.board

    def target(self, x: float, y: float) -> Placement:
        """Grid placement the pointer at (x, y) asks for."""
        dx = x - self._x0
        dy = y - self._y0
        drow = snap(dy, self.cell_size)
        dcol = snap(dx, self.cell_size)

        if drow and dcol:
            if abs(dx) >= abs(dy):
                drow = 0
            else:
                dcol = 0

        d = self.game.definition
        shape = d.piece(self.piece_id).shape
        row = min(max(self.origin.row + drow, 1), d.rows - shape.rows + 1)
        col = min(max(self.origin.col + dcol, 1), d.cols - shape.cols + 1)
        return Placement(row, col)

    def update(self, x: float, y: float) -> bool:
        """Follow the pointer; returns True if the piece is where it asked."""
        if self.stale:
            return False
        ok = self.game.relocate(self.piece_id, self.origin, self.target(x, y))
        self._seen = self.game.state.board
        return ok

    @property
    def stale(self) -> bool:
        """True once the board was changed by something other than this gesture."""
        return self.game.state.board is not self._seen

    @property
    def moved(self) -> bool:
        return self.game.state.board.placement(self.piece_id) != self.origin
