"""Move generation and relocation checks.

Everything here composes :meth:`BoardState.is_legal`; no other code tests
bounds or overlap. Illegal requests are answered with ``False`` / ``None``
and never raise.
"""

from __future__ import annotations

from dataclasses import dataclass

from backend.models.board import BoardState, Direction, Placement

# Enumeration order for single steps; the solver's tie-break depends on it.
STEP_ORDER: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


@dataclass(frozen=True)
class Move:
    """Place piece *piece_id* with its top-left at (row, col)."""

    piece_id: int
    row: int
    col: int

    @property
    def placement(self) -> Placement:
        return Placement(self.row, self.col)

    def __str__(self) -> str:
        return f"{self.piece_id}→({self.row},{self.col})"


def legal_single_step_moves(state: BoardState) -> list[Move]:
    """Every one-cell move any piece can make from *state*.

    Pieces are visited in id order, directions in :data:`STEP_ORDER`.
    """
    moves: list[Move] = []
    for pid in state.definition.piece_ids:
        here = state.placement(pid)
        for direction in STEP_ORDER:
            dr, dc = direction.delta
            r, c = here.row + dr, here.col + dc
            if state.is_legal(pid, r, c):
                moves.append(Move(pid, r, c))
    return moves


def validate_relocation(
    state: BoardState,
    piece_id: int,
    from_placement: Placement,
    to_placement: Placement,
) -> bool:
    """Check a straight-line relocation one cell at a time.

    The piece may travel any number of cells along a row or a column, but
    every intermediate placement must be legal, not just the destination.
    A piece can therefore never hop over another piece to reach an empty
    cell on the far side. Diagonal relocations are rejected; callers
    resolve a diagonal drag to its dominant axis first.
    """
    dr = to_placement.row - from_placement.row
    dc = to_placement.col - from_placement.col
    if dr and dc:
        return False

    steps = abs(dr) + abs(dc)
    if steps == 0:
        return state.is_legal(piece_id, from_placement.row, from_placement.col)

    sr = (dr > 0) - (dr < 0)
    sc = (dc > 0) - (dc < 0)
    for step in range(1, steps + 1):
        r = from_placement.row + sr * step
        c = from_placement.col + sc * step
        if not state.is_legal(piece_id, r, c):
            return False
    return True


def apply_move(state: BoardState, move: Move) -> BoardState | None:
    """Return *state* with *move* applied, or ``None`` if it is illegal."""
    here = state.placement(move.piece_id)
    if not validate_relocation(state, move.piece_id, here, move.placement):
        return None
    return state.moved(move.piece_id, move.placement)
