"""Board model for the sliding-block puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from functools import cached_property, lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from backend.models.puzzle import PuzzleDefinition

Cell = tuple[int, int]


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        """Row/column offset of a one-cell step in this direction."""
        return _DELTAS[self]


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


class Shape(StrEnum):
    SMALL = "1x1"
    WIDE = "1x2"
    TALL = "2x1"
    BIG = "2x2"

    @property
    def rows(self) -> int:
        return _SIZES[self][0]

    @property
    def cols(self) -> int:
        return _SIZES[self][1]


_SIZES: dict[Shape, tuple[int, int]] = {
    Shape.SMALL: (1, 1),
    Shape.WIDE: (1, 2),
    Shape.TALL: (2, 1),
    Shape.BIG: (2, 2),
}


@dataclass(frozen=True, order=True)
class Placement:
    """Top-left board cell of a piece, 1-indexed."""

    row: int
    col: int

    def shifted(self, direction: Direction, distance: int = 1) -> Placement:
        dr, dc = direction.delta
        return Placement(self.row + dr * distance, self.col + dc * distance)

    def distance(self, other: Placement) -> int:
        """Manhattan distance in cells."""
        return abs(self.row - other.row) + abs(self.col - other.col)


@dataclass(frozen=True)
class Piece:
    id: int
    shape: Shape
    label: str = ""

    @lru_cache(maxsize=None)
    def footprint(self, row: int, col: int) -> frozenset[Cell]:
        """Cells covered when the top-left corner sits at (row, col)."""
        return frozenset(
            (r, c)
            for r in range(row, row + self.shape.rows)
            for c in range(col, col + self.shape.cols)
        )


@dataclass(frozen=True, eq=False)
class BoardState:
    """One configuration of the puzzle: every piece mapped to a placement.

    States are values. Mutating operations return a fresh ``BoardState``
    and leave the original untouched, so the solver can share them freely
    between search nodes.
    """

    definition: PuzzleDefinition
    placements: dict[int, Placement] = field(repr=False)

    # -- queries --------------------------------------------------------------

    def placement(self, piece_id: int) -> Placement:
        return self.placements[piece_id]

    def occupied_cells(self, piece_id: int) -> frozenset[Cell]:
        """Return the footprint of *piece_id* at its current placement."""
        p = self.placements[piece_id]
        return self.definition.piece(piece_id).footprint(p.row, p.col)

    def cell_owner(self, row: int, col: int) -> int | None:
        return self._occupancy.get((row, col))

    def is_legal(self, piece_id: int, row: int, col: int) -> bool:
        """Check whether *piece_id* may sit with its top-left at (row, col).

        The candidate footprint must lie inside the board and must not
        touch any other piece. The piece's own current cells are ignored,
        so a shifted piece is never blocked by itself.
        """
        d = self.definition
        occupancy = self._occupancy
        for cell in d.piece(piece_id).footprint(row, col):
            r, c = cell
            if not (1 <= r <= d.rows and 1 <= c <= d.cols):
                return False
            owner = occupancy.get(cell)
            if owner is not None and owner != piece_id:
                return False
        return True

    def is_solved(self) -> bool:
        d = self.definition
        return self.placements[d.goal_piece_id] == d.target

    def canonical_key(self) -> tuple[tuple[int, int, int], ...]:
        """``(id, row, col)`` triples ordered by piece id."""
        return tuple(
            (pid, p.row, p.col) for pid, p in sorted(self.placements.items())
        )

    def layout_key(self) -> tuple[tuple[str, tuple[Placement, ...]], ...]:
        """Like :meth:`canonical_key`, but same-shape pieces are interchangeable.

        Two states share a layout key when they differ only by swapping
        pieces of identical shape.
        """
        by_shape: dict[Shape, list[Placement]] = {}
        for pid, p in self.placements.items():
            by_shape.setdefault(self.definition.piece(pid).shape, []).append(p)
        return tuple(
            (shape.value, tuple(sorted(cells)))
            for shape, cells in sorted(by_shape.items())
        )

    def grid(self) -> list[list[int | None]]:
        """Row-major grid of piece ids (``None`` for empty cells), 0-indexed."""
        d = self.definition
        return [
            [self._occupancy.get((r, c)) for c in range(1, d.cols + 1)]
            for r in range(1, d.rows + 1)
        ]

    # -- construction ---------------------------------------------------------

    def moved(self, piece_id: int, placement: Placement) -> BoardState:
        """Return a copy with *piece_id* at *placement*.

        No legality check happens here; callers validate first.
        """
        placements = dict(self.placements)
        placements[piece_id] = placement
        return BoardState(definition=self.definition, placements=placements)

    # -- equality -------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return (
            self.definition == other.definition
            and self.canonical_key() == other.canonical_key()
        )

    def __hash__(self) -> int:
        return hash(self.canonical_key())

    # -- helpers --------------------------------------------------------------

    @cached_property
    def _occupancy(self) -> dict[Cell, int]:
        occupancy: dict[Cell, int] = {}
        for pid in self.placements:
            for cell in self.occupied_cells(pid):
                occupancy[cell] = pid
        return occupancy
