"""Runs the solver off the UI thread and caches its outcome."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from enum import StrEnum
from typing import Callable

from backend.engine.gamesolver.solver import (
    SolveResult,
    SolveStatus,
    Solver,
    SolverConfig,
)
from backend.models.board import BoardState

logger = logging.getLogger(__name__)


class SolverPhase(StrEnum):
    IDLE = "idle"
    SOLVING = "solving"
    SOLVED = "solved"
    FAILED = "failed"


class SolverTask:
    """One background search for one game instance.

    Phases run ``idle → solving → solved | failed`` and never go back; a
    failed search is not retried. ``on_done`` fires on the worker thread,
    so GUI frontends should poll :attr:`phase` instead of touching widgets
    from the callback.

    Example::

        task = SolverTask(initial_state())
        task.start()
        ...
        if task.phase is SolverPhase.SOLVED:
            replay(task.result.moves)
    """

    def __init__(
        self,
        state: BoardState,
        config: SolverConfig = SolverConfig(),
        on_done: Callable[[SolveResult], None] | None = None,
    ) -> None:
        # BoardState is immutable, so holding it is a private copy.
        self._state = state
        self._config = config
        self._on_done = on_done
        self._cancel = threading.Event()
        self._lock = threading.Lock()
        self._phase = SolverPhase.IDLE
        self._future: Future[SolveResult] | None = None
        self._result: SolveResult | None = None

    # -- lifecycle ------------------------------------------------------------

    def start(self) -> None:
        with self._lock:
            if self._phase is not SolverPhase.IDLE:
                raise RuntimeError(f"Solver task already {self._phase.value}.")
            self._phase = SolverPhase.SOLVING

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="solver")
        self._future = executor.submit(self._run)
        executor.shutdown(wait=False)
        logger.debug("Solver task started")

    def cancel(self) -> None:
        """Ask an in-flight search to stop at its next expansion."""
        self._cancel.set()

    def wait(self, timeout: float | None = None) -> SolveResult | None:
        """Block until the search finishes; ``None`` on timeout or if never started."""
        if self._future is None:
            return None
        try:
            return self._future.result(timeout=timeout)
        except TimeoutError:
            return None

    # -- queries --------------------------------------------------------------

    @property
    def phase(self) -> SolverPhase:
        return self._phase

    @property
    def result(self) -> SolveResult | None:
        return self._result

    @property
    def state(self) -> BoardState:
        """The board the search started from."""
        return self._state

    # -- helpers --------------------------------------------------------------

    def _run(self) -> SolveResult:
        try:
            result = Solver.solve(self._state, self._config, self._cancel)
        except Exception:
            logger.exception("Solver crashed")
            result = SolveResult(SolveStatus.ERROR)

        with self._lock:
            self._result = result
            self._phase = SolverPhase.SOLVED if result.solved else SolverPhase.FAILED
        logger.debug("Solver task finished: %s", result.status.value)

        if self._on_done is not None:
            self._on_done(result)
        return result
