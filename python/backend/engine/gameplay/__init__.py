from backend.engine.gameplay.drag import DragGesture, snap
from backend.engine.gameplay.game import GamePlay
from backend.engine.gameplay.replay import SolutionReplay

__all__ = ["DragGesture", "GamePlay", "SolutionReplay", "snap"]
