"""Step-by-step playback of a solved move sequence."""

from __future__ import annotations

from collections.abc import Sequence

from backend.engine.gamemoves import Move
from backend.engine.gameplay.game import GamePlay


class SolutionReplay:
    """Applies solver moves to a game one at a time.

    The game is reset on construction so playback always starts from the
    initial configuration. Pacing is left to the caller.
    """

    def __init__(self, game: GamePlay, moves: Sequence[Move]) -> None:
        self.game = game
        self.moves = tuple(moves)
        self.position = 0
        game.reset()

    @property
    def total(self) -> int:
        return len(self.moves)

    @property
    def done(self) -> bool:
        return self.position >= len(self.moves)

    def step(self) -> Move | None:
        """Apply the next move; ``None`` once playback has finished.

        Raises ``RuntimeError`` if a move is rejected, which means the
        sequence was not produced from this game's initial state.
        """
        if self.done:
            return None
        move = self.moves[self.position]
        if not self.game.apply(move):
            raise RuntimeError(
                f"Replay move {self.position} ({move}) is illegal on the current board."
            )
        self.position += 1
        return move
