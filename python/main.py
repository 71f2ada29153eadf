#!/usr/bin/env python3
"""Klotski — help the panda get down.

Usage::

    python main.py                # interactive menu
    python main.py -f rich        # Rich terminal
    python main.py -f pygame      # Pygame GUI (drag pieces with the mouse)
    python main.py --solve        # print the optimal solution and exit
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamesolver import Solver, SolverConfig  # noqa: E402
from backend.models.puzzle import initial_state  # noqa: E402

logger = logging.getLogger("klotski")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"


_RUNNERS = {
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


def _print_solution(config: SolverConfig) -> bool:
    from frontend.cli.rich.app import report

    state = initial_state()
    result = Solver.solve(state, config)
    report(result, state)
    return result.solved


def _menu_loop(config: SolverConfig) -> None:
    while True:
        print()
        print("  ====================================")
        print("     H E L P   T H E   P A N D A      ")
        print("  ====================================")
        print()
        print("  1.  Play  (Rich Terminal)")
        print("  2.  Play  (Pygame GUI)")
        print("  3.  Print optimal solution")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice in ("1", "2"):
            frontend = Frontend.rich if choice == "1" else Frontend.pygame
            importlib.import_module(_RUNNERS[frontend]).run(config=config)

        elif choice == "3":
            _print_solution(config)

        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    solve: bool = typer.Option(
        False, "--solve",
        help="Print the optimal solution and exit.",
    ),
    max_states: int = typer.Option(
        SolverConfig.max_states, "--max-states",
        min=1,
        help="Give up after expanding this many states.",
    ),
    merge: bool = typer.Option(
        True, "--merge/--no-merge",
        help="Treat same-shape pieces as interchangeable while searching.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log solver progress.",
    ),
) -> None:
    """Klotski — help the panda get down."""
    _configure_logging(verbose)
    config = SolverConfig(max_states=max_states, merge_interchangeable=merge)
    logger.debug("Using %s", config)

    if solve:
        if not _print_solution(config):
            raise typer.Exit(code=1)
        return

    if frontend is None:
        _menu_loop(config)
        return

    importlib.import_module(_RUNNERS[frontend]).run(config=config)


if __name__ == "__main__":
    app()
