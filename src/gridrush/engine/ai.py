"""
GridRush - AI Opponent

Heuristic computer player. It only ever picks from the engine's legal
moves; applying the move is left to the caller. Candidate moves are tried
against a fixed cascade and the first rule that yields a move wins:

    1. Win a sub-grid
    2. Take the cell that would win a sub-grid for the opponent
    3. Win a sub-grid that completes a meta-line
    4. Highest positive positional score
    5. Send the opponent into a won sub-grid or one the AI leads
    6. Center cell, then corner cell, then anything

Rule 3 is subsumed by rule 1 in practice (a game-winning move also wins its
sub-grid) and is kept for parity with the full cascade.

``choose_best_move`` is synchronous and deterministic given the engine state
and the injected random source. ``make_move`` adds a cancellable
"thinking" pause in front of it.
"""

import asyncio
import logging
import random
from typing import Sequence

from gridrush.engine.base import CENTER, CORNERS, WIN_PATTERNS, Move, Player, is_line_complete
from gridrush.engine.game import GridRushEngine
from gridrush.engine.validators import validate_delay_ms, validate_player_number

logger = logging.getLogger(__name__)


DEFAULT_THINKING_DELAY_MS = 600


class AIPlayer:
    """Fixed-priority heuristic player bound to one engine."""

    CENTER_CELL_BONUS = 30
    CORNER_CELL_BONUS = 20
    CENTER_GRID_BONUS = 15
    CORNER_GRID_BONUS = 10
    THREAT_BONUS = 25

    def __init__(
        self,
        engine: GridRushEngine,
        player_number: int = Player.PLAYER_2,
        thinking_delay_ms: int | float = DEFAULT_THINKING_DELAY_MS,
        rng: random.Random | None = None,
    ) -> None:
        self.engine = engine
        self.player_number = validate_player_number(player_number)
        self.opponent_number = self.player_number.opponent
        self.thinking_delay_ms = validate_delay_ms(thinking_delay_ms)
        self._rng = rng or random.Random()

    def set_thinking_delay(self, ms: int | float) -> None:
        self.thinking_delay_ms = validate_delay_ms(ms)

    async def make_move(self) -> Move | None:
        """
        Pause for the thinking delay, then pick a move.

        Cancelling the awaiting task during the pause abandons the move.

        Returns:
            The chosen move, or None if there is nothing legal to play
        """
        await asyncio.sleep(self.thinking_delay_ms / 1000)

        moves = self.engine.get_available_moves()
        if not moves:
            return None

        move = self.choose_best_move(moves)
        logger.debug("AI (player %s) chose %s", self.player_number, move)
        return move

    def choose_best_move(self, moves: Sequence[Move]) -> Move | None:
        if not moves:
            return None

        return (
            self.find_winning_move(moves)
            or self.find_blocking_move(moves)
            or self.find_game_winning_move(moves)
            or self.find_strategic_move(moves)
            or self.find_control_move(moves)
            or self.find_best_position_move(moves)
        )

    # -- Cascade rules ---------------------------------------------------

    def find_winning_move(self, moves: Sequence[Move]) -> Move | None:
        for move in moves:
            if self.would_win_sub_grid(move, self.player_number):
                return move
        return None

    def find_blocking_move(self, moves: Sequence[Move]) -> Move | None:
        # Taking the opponent's winning cell blocks it: a sub-grid locks to
        # whoever completes it, so the cell can only be ours afterwards.
        for move in moves:
            if self.would_win_sub_grid(move, self.opponent_number):
                return move
        return None

    def find_game_winning_move(self, moves: Sequence[Move]) -> Move | None:
        for move in moves:
            if not self.would_win_sub_grid(move, self.player_number):
                continue
            winners = list(self.engine.sub_grid_winners)
            winners[move.sub_grid] = self.player_number
            if self.engine.check_game_win_with_winners(winners, self.player_number):
                return move
        return None

    def find_strategic_move(self, moves: Sequence[Move]) -> Move | None:
        """Best-scoring move, if any move scores above zero."""
        best = max(moves, key=self.evaluate_move_strength)
        if self.evaluate_move_strength(best) > 0:
            return best
        return None

    def find_control_move(self, moves: Sequence[Move]) -> Move | None:
        """Random move whose cell sends the opponent somewhere unfavourable."""
        good = [m for m in moves if self._is_favourable_destination(m.cell)]
        if good:
            return self._rng.choice(good)
        return None

    def find_best_position_move(self, moves: Sequence[Move]) -> Move:
        center = [m for m in moves if m.cell == CENTER]
        if center:
            return self._rng.choice(center)
        corners = [m for m in moves if m.cell in CORNERS]
        if corners:
            return self._rng.choice(corners)
        return self._rng.choice(list(moves))

    # -- Scoring helpers -------------------------------------------------

    def _is_favourable_destination(self, grid: int) -> bool:
        if self.engine.sub_grid_winners[grid] is not None:
            return True
        cells = self.engine.board[grid]
        return cells.count(self.player_number) > cells.count(self.opponent_number)

    def would_win_sub_grid(self, move: Move, player: int) -> bool:
        scratch = list(self.engine.board[move.sub_grid])
        scratch[move.cell] = player
        return is_line_complete(scratch, player)

    def evaluate_move_strength(self, move: Move) -> int:
        score = 0
        if move.cell == CENTER:
            score += self.CENTER_CELL_BONUS
        if move.cell in CORNERS:
            score += self.CORNER_CELL_BONUS
        if move.sub_grid == CENTER:
            score += self.CENTER_GRID_BONUS
        if move.sub_grid in CORNERS:
            score += self.CORNER_GRID_BONUS
        score += self.count_threats_created(move, self.player_number) * self.THREAT_BONUS
        return score

    def count_threats_created(self, move: Move, player: int) -> int:
        """Lines in the target sub-grid left with two of ``player``'s marks and one gap."""
        scratch = list(self.engine.board[move.sub_grid])
        scratch[move.cell] = player

        threats = 0
        for pattern in WIN_PATTERNS:
            line = [scratch[i] for i in pattern]
            if line.count(player) == 2 and line.count(Player.EMPTY) == 1:
                threats += 1
        return threats
