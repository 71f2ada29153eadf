from backend.engine.gamesolver.solver import (
    SolveResult,
    SolveStatus,
    Solver,
    SolverConfig,
)
from backend.engine.gamesolver.task import SolverPhase, SolverTask
from backend.engine.gamesolver.hints import HintProvider

__all__ = [
    "HintProvider",
    "SolveResult",
    "SolveStatus",
    "Solver",
    "SolverConfig",
    "SolverPhase",
    "SolverTask",
]
