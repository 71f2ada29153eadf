"""Core gameplay logic — validated moves on the live board and the win check."""

from __future__ import annotations

import logging

from backend.engine.gamemoves import Move, validate_relocation
from backend.engine.gamestate import GameState
from backend.models.board import Direction, Placement
from backend.models.puzzle import CLASSIC, PuzzleDefinition

logger = logging.getLogger(__name__)


class GamePlay:
    """Orchestrates a single game session.

    The session owns the one live :class:`BoardState`. Frontends never
    mutate it directly; they request relocations and the session commits
    them only when :func:`validate_relocation` accepts the whole path.
    """

    def __init__(self, definition: PuzzleDefinition = CLASSIC) -> None:
        self.definition = definition
        self.state = GameState(definition.initial_state())

    def reset(self) -> None:
        """Start over from the initial configuration."""
        self.state = GameState(self.definition.initial_state())

    # -- movement -------------------------------------------------------------

    def relocate(
        self, piece_id: int, from_placement: Placement, to_placement: Placement
    ) -> bool:
        """Move *piece_id* to *to_placement* along a straight line.

        The path is checked from *from_placement*, which during a drag is
        where the piece sat when the gesture began. Returns True if the
        move was applied; on False the board is untouched.
        """
        board = self.state.board
        if not validate_relocation(board, piece_id, from_placement, to_placement):
            logger.debug(
                "Rejected relocation of %d from %s to %s",
                piece_id,
                from_placement,
                to_placement,
            )
            return False

        here = board.placement(piece_id)
        if here != to_placement:
            self.state.commit(board.moved(piece_id, to_placement), here.distance(to_placement))
        return True

    def move(self, piece_id: int, direction: Direction) -> bool:
        """Slide *piece_id* one cell in *direction*."""
        here = self.state.board.placement(piece_id)
        return self.relocate(piece_id, here, here.shifted(direction))

    def apply(self, move: Move) -> bool:
        """Apply a solver move to the live board."""
        here = self.state.board.placement(move.piece_id)
        return self.relocate(move.piece_id, here, move.placement)

    # -- queries --------------------------------------------------------------

    def piece_at(self, row: int, col: int) -> int | None:
        return self.state.board.cell_owner(row, col)

    @property
    def is_won(self) -> bool:
        return self.state.is_solved
