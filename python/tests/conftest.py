"""Shared puzzle definitions for the engine tests."""

from __future__ import annotations

import pytest

from backend.models.board import BoardState, Piece, Placement, Shape
from backend.models.puzzle import CLASSIC, PuzzleDefinition

# Five pieces on the standard board, with plenty of free space. Small
# enough for an exhaustive breadth-first search with labelled pieces.
SMALL_PUZZLE = PuzzleDefinition(
    pieces=(
        Piece(1, Shape.BIG),
        Piece(2, Shape.SMALL),
        Piece(3, Shape.SMALL),
        Piece(4, Shape.TALL),
        Piece(5, Shape.WIDE),
    ),
    start=(
        (1, Placement(1, 1)),
        (2, Placement(3, 1)),
        (3, Placement(3, 2)),
        (4, Placement(1, 3)),
        (5, Placement(5, 3)),
    ),
    goal_piece_id=1,
    target=Placement(4, 3),
)

# Every cell filled: nothing can ever move, so the goal is unreachable.
JAMMED_PUZZLE = PuzzleDefinition(
    pieces=(
        Piece(1, Shape.BIG),
        Piece(2, Shape.TALL),
        Piece(3, Shape.TALL),
        Piece(4, Shape.TALL),
        Piece(5, Shape.TALL),
        Piece(6, Shape.TALL),
        Piece(7, Shape.TALL),
        Piece(8, Shape.SMALL),
        Piece(9, Shape.SMALL),
        Piece(10, Shape.SMALL),
        Piece(11, Shape.SMALL),
    ),
    start=(
        (1, Placement(1, 1)),
        (2, Placement(1, 3)),
        (3, Placement(1, 4)),
        (4, Placement(3, 1)),
        (5, Placement(3, 2)),
        (6, Placement(3, 3)),
        (7, Placement(3, 4)),
        (8, Placement(5, 1)),
        (9, Placement(5, 2)),
        (10, Placement(5, 3)),
        (11, Placement(5, 4)),
    ),
    goal_piece_id=1,
    target=Placement(4, 1),
)


@pytest.fixture
def classic() -> BoardState:
    return CLASSIC.initial_state()


@pytest.fixture
def small() -> BoardState:
    return SMALL_PUZZLE.initial_state()


@pytest.fixture
def jammed() -> BoardState:
    return JAMMED_PUZZLE.initial_state()
