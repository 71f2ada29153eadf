"""Puzzle definitions — the fixed layout a game instance is built from."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from backend.models.board import BoardState, Piece, Placement, Shape


@dataclass(frozen=True)
class PuzzleDefinition:
    """Immutable description of one puzzle: board, pieces, start and goal.

    Validated on construction; a malformed definition raises ``ValueError``
    so a bad layout can never reach the engine.
    """

    pieces: tuple[Piece, ...]
    start: tuple[tuple[int, Placement], ...]
    goal_piece_id: int
    target: Placement
    rows: int = 5
    cols: int = 4

    def __post_init__(self) -> None:
        ids = [p.id for p in self.pieces]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate piece ids in {ids}.")

        start_ids = [pid for pid, _ in self.start]
        if sorted(start_ids) != sorted(ids):
            raise ValueError(
                f"Start placements cover {sorted(start_ids)}, "
                f"expected exactly {sorted(ids)}."
            )

        if self.goal_piece_id not in ids:
            raise ValueError(f"Unknown goal piece {self.goal_piece_id}.")

        goal = self.piece(self.goal_piece_id)
        if not (
            1 <= self.target.row <= self.rows - goal.shape.rows + 1
            and 1 <= self.target.col <= self.cols - goal.shape.cols + 1
        ):
            raise ValueError(
                f"Target {self.target} puts piece {goal.id} off the "
                f"{self.rows}×{self.cols} board."
            )

        seen: dict[tuple[int, int], int] = {}
        for pid, p in self.start:
            for r, c in self.piece(pid).footprint(p.row, p.col):
                if not (1 <= r <= self.rows and 1 <= c <= self.cols):
                    raise ValueError(
                        f"Piece {pid} at {p} leaves the board at ({r}, {c})."
                    )
                if (r, c) in seen:
                    raise ValueError(
                        f"Pieces {seen[(r, c)]} and {pid} overlap at ({r}, {c})."
                    )
                seen[(r, c)] = pid

    # -- queries --------------------------------------------------------------

    def piece(self, piece_id: int) -> Piece:
        return self._by_id[piece_id]

    @property
    def piece_ids(self) -> list[int]:
        return sorted(p.id for p in self.pieces)

    def initial_state(self) -> BoardState:
        return BoardState(definition=self, placements=dict(self.start))

    @cached_property
    def _by_id(self) -> dict[int, Piece]:
        return {p.id: p for p in self.pieces}


# -- the shipped puzzle --------------------------------------------------------

# "Help the panda get down": four bamboo stalks, one leaf, four small
# animals and the panda, which must reach the bottom-centre exit.
CLASSIC = PuzzleDefinition(
    pieces=(
        Piece(1, Shape.TALL, "\U0001f33f"),
        Piece(2, Shape.BIG, "\U0001f43c"),
        Piece(3, Shape.TALL, "\U0001f33f"),
        Piece(4, Shape.TALL, "\U0001f33f"),
        Piece(5, Shape.TALL, "\U0001f33f"),
        Piece(6, Shape.WIDE, "\U0001f343"),
        Piece(7, Shape.SMALL, "\U0001f98b"),
        Piece(8, Shape.SMALL, "\U0001f99c"),
        Piece(9, Shape.SMALL, "\U0001f98e"),
        Piece(10, Shape.SMALL, "\U0001f41b"),
    ),
    start=(
        (1, Placement(1, 1)),
        (2, Placement(1, 2)),
        (3, Placement(1, 4)),
        (4, Placement(3, 1)),
        (5, Placement(3, 4)),
        (6, Placement(3, 2)),
        (7, Placement(4, 2)),
        (8, Placement(4, 3)),
        (9, Placement(5, 1)),
        (10, Placement(5, 4)),
    ),
    goal_piece_id=2,
    target=Placement(4, 2),
)


def initial_state(definition: PuzzleDefinition = CLASSIC) -> BoardState:
    """Return the starting configuration of *definition*."""
    return definition.initial_state()
