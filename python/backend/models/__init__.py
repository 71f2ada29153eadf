from backend.models.board import BoardState, Direction, Piece, Placement, Shape
from backend.models.puzzle import CLASSIC, PuzzleDefinition, initial_state

__all__ = [
    "BoardState",
    "CLASSIC",
    "Direction",
    "Piece",
    "Placement",
    "PuzzleDefinition",
    "Shape",
    "initial_state",
]
