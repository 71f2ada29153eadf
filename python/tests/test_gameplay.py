"""Game session tests — committed moves, drag gestures and solution replay."""

from __future__ import annotations

import pytest

from backend.engine.gamemoves import Move
from backend.engine.gameplay import DragGesture, GamePlay, SolutionReplay, snap
from backend.engine.gamesolver import Solver
from backend.engine.gamestate import GameState
from backend.models.board import BoardState, Direction, Placement

CELL = 100


# -- session ------------------------------------------------------------------


def test_move_commits_and_counts() -> None:
    game = GamePlay()
    assert game.move(7, Direction.DOWN)
    assert game.state.board.placement(7) == Placement(5, 2)
    assert game.state.moves == 1
    assert game.piece_at(4, 2) is None


def test_rejected_move_leaves_board_untouched() -> None:
    game = GamePlay()
    before = game.state.board
    assert not game.move(9, Direction.DOWN)
    assert not game.move(2, Direction.DOWN)
    assert game.state.board is before
    assert game.state.moves == 0


def test_relocation_counts_cells_travelled() -> None:
    game = GamePlay()
    assert game.move(10, Direction.LEFT)
    assert game.relocate(10, Placement(5, 3), Placement(5, 4))
    assert game.state.moves == 2


def test_reset_restores_initial_layout() -> None:
    game = GamePlay()
    game.move(7, Direction.DOWN)
    game.reset()
    assert game.state.board == game.definition.initial_state()
    assert game.state.moves == 0


def test_is_won_after_goal_reaches_target(small: BoardState) -> None:
    game = GamePlay(small.definition)
    assert not game.is_won
    for move in Solver.solve(small).moves:
        assert game.apply(move)
    assert game.is_won


# -- drag ---------------------------------------------------------------------


@pytest.mark.parametrize(
    "delta, expected",
    [(149, 1), (150, 2), (-150, -2), (-49, 0), (0, 0), (50, 1)],
)
def test_snap_rounds_half_away_from_zero(delta: int, expected: int) -> None:
    assert snap(delta, CELL) == expected


def test_drag_follows_pointer_and_back() -> None:
    game = GamePlay()
    drag = DragGesture(game, 7, 0, 0, CELL)

    assert drag.update(0, 100)
    assert game.state.board.placement(7) == Placement(5, 2)
    assert drag.moved

    assert drag.update(0, 49)
    assert game.state.board.placement(7) == Placement(4, 2)
    assert not drag.moved


def test_drag_locks_to_dominant_axis() -> None:
    game = GamePlay()
    drag = DragGesture(game, 9, 0, 0, CELL)
    assert drag.target(120, -60) == Placement(5, 2)
    assert drag.target(60, -120) == Placement(4, 1)

    assert drag.update(120, -60)
    assert game.state.board.placement(9) == Placement(5, 2)


def test_blocked_drag_keeps_last_valid_cell() -> None:
    game = GamePlay()
    drag = DragGesture(game, 9, 0, 0, CELL)
    assert not drag.update(60, -120)
    assert game.state.board.placement(9) == Placement(5, 1)


def test_drag_is_clamped_to_board() -> None:
    game = GamePlay()
    drag = DragGesture(game, 10, 0, 0, CELL)
    assert drag.target(300, 0) == Placement(5, 4)
    assert drag.update(300, 0)
    assert not drag.moved


def test_drag_cannot_pass_through_pieces() -> None:
    game = GamePlay()
    assert game.move(10, Direction.LEFT)

    drag = DragGesture(game, 9, 0, 0, CELL)
    assert drag.target(300, 0) == Placement(5, 4)
    assert not drag.update(300, 0)
    assert game.state.board.placement(9) == Placement(5, 1)

    assert drag.update(100, 0)
    assert game.state.board.placement(9) == Placement(5, 2)


def test_drag_ends_when_board_changes_elsewhere() -> None:
    game = GamePlay()
    drag = DragGesture(game, 10, 0, 0, CELL)
    assert not drag.stale

    # Keyboard moves mid-gesture: 10 slides away and 8 drops in behind it.
    assert game.move(10, Direction.LEFT)
    assert game.move(10, Direction.LEFT)
    assert game.move(8, Direction.DOWN)
    assert drag.stale

    assert not drag.update(1, 0)
    assert not drag.update(-100, 0)
    assert game.state.board.placement(10) == Placement(5, 2)
    assert game.state.board.placement(8) == Placement(5, 3)


def test_drag_ends_on_reset() -> None:
    game = GamePlay()
    drag = DragGesture(game, 7, 0, 0, CELL)
    assert drag.update(0, 100)
    assert not drag.stale

    game.reset()
    assert drag.stale
    assert not drag.update(0, 100)
    assert game.state.board.placement(7) == Placement(4, 2)


def test_drag_rejects_bad_cell_size() -> None:
    with pytest.raises(ValueError):
        DragGesture(GamePlay(), 7, 0, 0, 0)


# -- replay -------------------------------------------------------------------


def test_replay_reaches_goal(small: BoardState) -> None:
    game = GamePlay(small.definition)
    game.move(2, Direction.DOWN)

    result = Solver.solve(small)
    replay = SolutionReplay(game, result.moves)
    assert game.state.moves == 0
    assert replay.total == len(result)

    played = []
    while not replay.done:
        played.append(replay.step())
    assert tuple(played) == result.moves
    assert replay.step() is None
    assert game.is_won


def test_replay_rejects_foreign_moves() -> None:
    replay = SolutionReplay(GamePlay(), [Move(7, 3, 2)])
    with pytest.raises(RuntimeError):
        replay.step()
    assert replay.position == 0


# -- timing -------------------------------------------------------------------


def test_paused_clock_stands_still(classic: BoardState) -> None:
    state = GameState(classic)
    state.pause()
    frozen = state.elapsed_time
    assert state.elapsed_time == frozen
    state.resume()
    assert state.elapsed_time >= frozen
