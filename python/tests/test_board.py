"""Board model tests — footprints, legality, keys and definition checks."""

from __future__ import annotations

import pytest

from backend.models.board import BoardState, Piece, Placement, Shape
from backend.models.puzzle import CLASSIC, PuzzleDefinition


# -- helpers ------------------------------------------------------------------


def _all_cells(state: BoardState) -> list[tuple[int, int]]:
    d = state.definition
    return [(r, c) for r in range(1, d.rows + 1) for c in range(1, d.cols + 1)]


def _is_valid(state: BoardState) -> bool:
    d = state.definition
    seen: set[tuple[int, int]] = set()
    for pid in d.piece_ids:
        cells = state.occupied_cells(pid)
        if any(not (1 <= r <= d.rows and 1 <= c <= d.cols) for r, c in cells):
            return False
        if seen & cells:
            return False
        seen |= cells
    return True


# -- shapes and footprints ----------------------------------------------------


@pytest.mark.parametrize(
    "shape, rows, cols",
    [
        (Shape.SMALL, 1, 1),
        (Shape.WIDE, 1, 2),
        (Shape.TALL, 2, 1),
        (Shape.BIG, 2, 2),
    ],
    ids=lambda v: str(v),
)
def test_shape_sizes(shape: Shape, rows: int, cols: int) -> None:
    assert (shape.rows, shape.cols) == (rows, cols)


def test_tall_piece_footprint(classic: BoardState) -> None:
    assert classic.occupied_cells(1) == {(1, 1), (2, 1)}


def test_big_piece_footprint(classic: BoardState) -> None:
    assert classic.occupied_cells(2) == {(1, 2), (1, 3), (2, 2), (2, 3)}


def test_initial_layout_leaves_two_holes(classic: BoardState) -> None:
    grid = classic.grid()
    empty = [
        (r, c)
        for r, row in enumerate(grid, 1)
        for c, pid in enumerate(row, 1)
        if pid is None
    ]
    assert empty == [(5, 2), (5, 3)]


# -- legality -----------------------------------------------------------------


def test_is_legal_checks_candidate_cells_only() -> None:
    """A tall piece at (1,1) shifted to (1,2) is judged on (1,2) and (2,2)."""
    definition = PuzzleDefinition(
        pieces=(Piece(1, Shape.TALL), Piece(2, Shape.SMALL)),
        start=((1, Placement(1, 1)), (2, Placement(2, 2))),
        goal_piece_id=1,
        target=Placement(4, 4),
    )
    state = definition.initial_state()
    assert not state.is_legal(1, 1, 2)

    cleared = state.moved(2, Placement(3, 3))
    assert cleared.is_legal(1, 1, 2)


def test_piece_never_blocks_itself(classic: BoardState) -> None:
    assert classic.is_legal(7, 4, 2)


@pytest.mark.parametrize(
    "piece_id, row, col",
    [(1, 0, 1), (3, 1, 5), (5, 5, 4), (2, 4, 4), (6, 3, 4)],
    ids=["above", "right", "below", "big-corner", "wide-edge"],
)
def test_out_of_bounds_is_illegal(
    classic: BoardState, piece_id: int, row: int, col: int
) -> None:
    assert not classic.is_legal(piece_id, row, col)


def test_overlap_is_illegal(classic: BoardState) -> None:
    assert not classic.is_legal(7, 4, 3)
    assert not classic.is_legal(6, 2, 2)


def test_legal_placement_keeps_board_valid(classic: BoardState) -> None:
    for pid in classic.definition.piece_ids:
        for r, c in _all_cells(classic):
            if classic.is_legal(pid, r, c):
                moved = classic.moved(pid, Placement(r, c))
                assert _is_valid(moved), f"piece {pid} at ({r}, {c})"


def test_moved_returns_a_copy(classic: BoardState) -> None:
    moved = classic.moved(7, Placement(5, 2))
    assert classic.placement(7) == Placement(4, 2)
    assert moved.placement(7) == Placement(5, 2)
    assert classic.cell_owner(4, 2) == 7
    assert moved.cell_owner(4, 2) is None


def test_is_solved() -> None:
    state = CLASSIC.initial_state()
    assert not state.is_solved()
    assert state.moved(2, Placement(4, 2)).is_solved()


# -- keys ---------------------------------------------------------------------


def test_canonical_key_ignores_insertion_order(classic: BoardState) -> None:
    reordered = BoardState(
        definition=CLASSIC,
        placements=dict(reversed(list(classic.placements.items()))),
    )
    assert reordered.canonical_key() == classic.canonical_key()
    assert reordered == classic
    assert hash(reordered) == hash(classic)


def test_canonical_key_is_ordered_by_id(classic: BoardState) -> None:
    key = classic.canonical_key()
    assert [pid for pid, _, _ in key] == list(range(1, 11))
    assert key[6] == (7, 4, 2)


def test_canonical_key_differs_on_any_placement(classic: BoardState) -> None:
    assert classic.moved(9, Placement(5, 2)).canonical_key() != classic.canonical_key()


def test_layout_key_merges_same_shape_pieces(classic: BoardState) -> None:
    swapped = classic.moved(7, Placement(4, 3)).moved(8, Placement(4, 2))
    assert swapped.canonical_key() != classic.canonical_key()
    assert swapped.layout_key() == classic.layout_key()


def test_layout_key_separates_different_shapes(classic: BoardState) -> None:
    moved = classic.moved(10, Placement(5, 3))
    assert moved.layout_key() != classic.layout_key()


# -- definition validation ----------------------------------------------------


def test_classic_definition() -> None:
    assert CLASSIC.piece_ids == list(range(1, 11))
    assert CLASSIC.piece(CLASSIC.goal_piece_id).shape is Shape.BIG
    assert CLASSIC.target == Placement(4, 2)
    assert (CLASSIC.rows, CLASSIC.cols) == (5, 4)


@pytest.mark.parametrize(
    "kwargs, match",
    [
        (
            {
                "pieces": (Piece(1, Shape.SMALL), Piece(1, Shape.SMALL)),
                "start": ((1, Placement(1, 1)),),
            },
            "Duplicate",
        ),
        (
            {"start": ()},
            "Start placements",
        ),
        (
            {"goal_piece_id": 9},
            "Unknown goal",
        ),
        (
            {"target": Placement(5, 1)},
            "off the",
        ),
        (
            {"start": ((1, Placement(5, 1)), (2, Placement(1, 1)))},
            "leaves the board",
        ),
        (
            {"start": ((1, Placement(1, 1)), (2, Placement(2, 2)))},
            "overlap",
        ),
    ],
    ids=["duplicate-id", "missing-start", "unknown-goal", "bad-target", "off-board", "overlap"],
)
def test_invalid_definitions_raise(kwargs: dict, match: str) -> None:
    base = {
        "pieces": (Piece(1, Shape.BIG), Piece(2, Shape.SMALL)),
        "start": ((1, Placement(1, 1)), (2, Placement(3, 1))),
        "goal_piece_id": 1,
        "target": Placement(4, 3),
    }
    base.update(kwargs)
    with pytest.raises(ValueError, match=match):
        PuzzleDefinition(**base)
