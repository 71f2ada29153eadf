"""Rich terminal frontend — the board as a styled table.

Pieces are picked with digit keys (or Tab) and pushed one cell at a time
with the arrow keys. The optimal solution is computed in the background
as soon as the game opens and can be replayed with V.
"""

from __future__ import annotations

import sys
import time

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay, SolutionReplay
from backend.engine.gamesolver import (
    HintProvider,
    SolveResult,
    SolverConfig,
    SolverPhase,
    SolverTask,
)
from backend.models.board import BoardState, Direction, Shape
from frontend.cli.input_handler import get_key, get_key_timeout

console = Console()

_SHAPE_STYLE: dict[Shape, str] = {
    Shape.BIG: "bold black on #f9e2af",
    Shape.TALL: "bold black on #a6e3a1",
    Shape.WIDE: "bold black on #89b4fa",
    Shape.SMALL: "bold black on #f5c2e7",
}

_DIRECTIONS = {d.value: d for d in Direction}

REPLAY_DELAY = 0.15


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _solver_line(task: SolverTask) -> Text:
    line = Text("  Solver: ", style="dim")
    phase = task.phase
    result = task.result
    if phase is SolverPhase.SOLVED and result is not None:
        line.append(f"ready ({len(result)} moves)", style="bold green")
    elif phase is SolverPhase.FAILED:
        reason = result.status.value if result is not None else "error"
        line.append(f"failed ({reason})", style="bold red")
    else:
        line.append(f"{phase.value}…", style="yellow")
    return line


# -- board rendering ----------------------------------------------------------


def _render_board(board: BoardState, selected: int | None = None) -> Table:
    """Return a Rich Table showing every piece on the grid."""
    d = board.definition
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(d.cols):
        table.add_column(width=5, justify="center")

    goal = d.piece(d.goal_piece_id)
    target = goal.footprint(d.target.row, d.target.col)

    for r, row in enumerate(board.grid(), 1):
        cells: list[Text] = []
        for c, pid in enumerate(row, 1):
            if pid is None:
                mark = "▫" if (r, c) in target else "·"
                cells.append(Text(mark, style="dim"))
                continue
            piece = d.piece(pid)
            style = _SHAPE_STYLE[piece.shape]
            if pid == selected:
                style += " reverse"
            cells.append(Text(f"{piece.label}{pid:>2}", style=style))
        table.add_row(*cells)

    return table


# -- screens ------------------------------------------------------------------


def _draw_game(
    game: GamePlay, selected: int, task: SolverTask, status: str = ""
) -> None:
    console.clear()

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")
    stats.append("    Piece: ", style="dim")
    stats.append(str(selected), style="bold cyan")

    controls = Text()
    controls.append("  1-9 0", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("Tab", style="bold cyan")
    controls.append("  select   ", style="dim")
    controls.append("↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  hint   ", style="dim")
    controls.append("V", style="bold cyan")
    controls.append("  solve   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")

    panel = Panel(
        Align.center(_render_board(game.state.board, selected)),
        title="[bold cyan]Help the panda get down[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    console.print(Align.center(_solver_line(task)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _draw_win(game: GamePlay) -> None:
    console.clear()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("THE PANDA IS OUT!", style="bold green")
    congrats.append("  ★\n", style="bold yellow")

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")

    panel = Panel(
        Group(
            Align.center(_render_board(game.state.board)),
            Align.center(congrats),
            Align.center(stats),
        ),
        title="[bold green]Solved[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(
        Align.center(Text("\n  Press R to play again, Q to quit.\n", style="dim"))
    )


# -- solver actions -----------------------------------------------------------


def _replay(game: GamePlay, result: SolveResult) -> str:
    """Animate the cached solution from the initial configuration."""
    replay = SolutionReplay(game, result.moves)
    while (move := replay.step()) is not None:
        console.clear()
        progress = Text()
        progress.append(
            f"  Replaying… move {replay.position}/{replay.total} ",
            style="bold cyan",
        )
        progress.append(f"({move})", style="dim")
        panel = Panel(
            Align.center(_render_board(game.state.board, move.piece_id)),
            title="[bold cyan]Auto-Solve[/bold cyan]",
            border_style="cyan",
            padding=(1, 2),
        )
        console.print()
        console.print(Align.center(panel))
        console.print(Align.center(progress))
        sys.stdout.flush()
        time.sleep(REPLAY_DELAY)
    return f"[bold green]Solved in {replay.total} moves![/bold green]"


def _solve(game: GamePlay, task: SolverTask) -> str:
    phase = task.phase
    if phase is SolverPhase.SOLVING:
        return "[yellow]Still searching — try again in a moment.[/yellow]"
    if phase is SolverPhase.FAILED:
        return "[red]No solution found; the puzzle definition looks broken.[/red]"
    assert task.result is not None
    return _replay(game, task.result)


def _hint(game: GamePlay, hints: HintProvider) -> tuple[str, int | None]:
    board = game.state.board
    if board.is_solved():
        return "[green]Already solved![/green]", None
    move = hints.ask(board)
    if move is None:
        if hints.searching:
            return "[dim]Thinking… the hint arrives when the search ends.[/dim]", None
        return "[yellow]No hint available from here.[/yellow]", None
    game.apply(move)
    return f"[cyan]Hint:[/cyan] moved [bold]{move}[/bold]", move.piece_id


# -- game loop ----------------------------------------------------------------


def _play(game: GamePlay, task: SolverTask, hints: HintProvider) -> bool:
    """Run one game until it is won by hand (True) or the player quits (False)."""
    ids = game.definition.piece_ids
    selected = game.definition.goal_piece_id
    status = ""
    shown_phase = task.phase
    hint_pending = False
    auto_solved = False

    while auto_solved or not game.is_won:
        _draw_game(game, selected, task, status)
        status = ""

        # Redraw when the background solver changes phase or a hint is ready.
        while True:
            key = get_key_timeout(0.5)
            if key is not None or task.phase is not shown_phase:
                shown_phase = task.phase
                break
            if hint_pending and not hints.searching:
                break

        if hint_pending and not hints.searching:
            status, moved = _hint(game, hints)
            selected = moved or selected
            hint_pending = hints.searching

        if key is None:
            continue
        if key in _DIRECTIONS:
            if not game.move(selected, _DIRECTIONS[key]):
                status = "[dim]Blocked.[/dim]"
        elif key.startswith("piece:"):
            pid = int(key.split(":", 1)[1])
            if pid in ids:
                selected = pid
        elif key == "next":
            selected = ids[(ids.index(selected) + 1) % len(ids)]
        elif key == "hint":
            status, moved = _hint(game, hints)
            selected = moved or selected
            hint_pending = hints.searching
        elif key == "solve":
            status = _solve(game, task)
            auto_solved = game.is_won
        elif key == "restart":
            game.reset()
            auto_solved = False
            hint_pending = False
        elif key == "quit":
            return False

    return True


# -- public entry point -------------------------------------------------------


def run(config: SolverConfig = SolverConfig()) -> None:
    """Launch the Rich CLI."""
    game = GamePlay()
    task = SolverTask(game.definition.initial_state(), config)
    task.start()
    hints = HintProvider(task, config)

    try:
        while _play(game, task, hints):
            game.state.pause()
            _draw_win(game)
            while (key := get_key()) not in ("restart", "quit"):
                pass
            if key == "quit":
                break
            game.reset()
    finally:
        hints.cancel()
        task.cancel()
        console.clear()
        console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))


def report(result: SolveResult, board: BoardState) -> None:
    """Print a solver result as a table of moves (used by ``--solve``)."""
    if not result.solved:
        console.print(
            f"[bold red]No solution[/bold red] ({result.status.value}, "
            f"{result.expanded} states expanded)"
        )
        return

    table = Table(
        title=f"Optimal solution — {len(result)} moves",
        title_style="bold cyan",
        box=rich.box.ROUNDED,
        border_style="dim",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Piece", justify="center")
    table.add_column("To", justify="center", style="yellow")
    for i, move in enumerate(result.moves, 1):
        piece = board.definition.piece(move.piece_id)
        table.add_row(
            str(i), f"{piece.label} {piece.id}", f"({move.row}, {move.col})"
        )

    console.print(table)
    console.print(
        f"[dim]{result.expanded} states expanded in {result.elapsed:.2f}s[/dim]"
    )
