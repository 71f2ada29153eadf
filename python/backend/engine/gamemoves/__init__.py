from backend.engine.gamemoves.moves import (
    STEP_ORDER,
    Move,
    apply_move,
    legal_single_step_moves,
    validate_relocation,
)

__all__ = [
    "STEP_ORDER",
    "Move",
    "apply_move",
    "legal_single_step_moves",
    "validate_relocation",
]
