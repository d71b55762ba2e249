from __future__ import annotations

from termsnake.game import SnakeGame


class Session:
    """Owns the running game and the high score that outlives it."""

    def __init__(self, game: SnakeGame) -> None:
        self._game = game
        self._high_score = game.state.high_score

    @property
    def game(self) -> SnakeGame:
        return self._game

    @property
    def high_score(self) -> int:
        return max(self._high_score, self._game.state.high_score)

    def restart(self) -> bool:
        """Start over, keeping the high score. Ignored unless the game is over."""
        if not self._game.game_over:
            return False
        self._high_score = max(self._high_score, self._game.state.high_score, self._game.state.score)
        self._game = self._game.fresh(high_score=self._high_score)
        return True
