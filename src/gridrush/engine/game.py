"""
GridRush - Game Engine

Ultimate Tic-Tac-Toe with a dice-driven movement rule. The board is 9
sub-grids of 9 cells. Each turn is three shots; before each shot the player
rolls a D6 and the roll decides which sub-grids are open:

    1-2 TEE SHOT:  only the active sub-grid
    3-4 APPROACH:  sub-grids edge-adjacent to the active one
    5-6 FINISH:    any sub-grid still open (unwon, not full)

If a roll leaves no legal sub-grid, every open sub-grid becomes legal. The cell
just played becomes the next active sub-grid (or free choice if that
sub-grid is already won or full).

Three in a row inside a sub-grid wins it for good; three won sub-grids in a
row win the game. Unlike the other engine helpers, ``GridRushEngine`` is
stateful: one instance per game session, mutated only through
``make_move``, ``apply_dice_roll`` and ``handle_timeout``.
"""

import logging
from typing import Sequence

from gridrush.engine.base import (
    ADJACENCY,
    BOARD_SIZE,
    SHOTS_PER_TURN,
    GameSnapshot,
    GameStatus,
    Move,
    Player,
    Score,
    is_line_complete,
)
from gridrush.engine.timer import DEFAULT_DURATION, GameTimer
from gridrush.engine.validators import is_valid_dice_roll, is_valid_position

logger = logging.getLogger(__name__)


class GridRushEngine:
    """Owns the board and enforces the rules for one game."""

    def __init__(self, timer: GameTimer | None = None) -> None:
        self.timer = timer
        self.vs_ai = True
        self.reset()

    # -- Lifecycle -------------------------------------------------------

    def reset(self) -> None:
        """Clear all game state back to NOT_STARTED."""
        self.board: list[list[int]] = [
            [Player.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        self.sub_grid_winners: list[int | None] = [None] * BOARD_SIZE

        self.current_player: int = Player.PLAYER_1
        self.active_sub_grid: int | None = None
        self.current_shot = 1
        self.last_dice_roll: int | None = None
        self.move_count = 0

        self.game_status = GameStatus.NOT_STARTED
        self.winner: int | None = None
        self.score = Score()

        if self.timer is not None:
            self.timer.reset()

    def start_game(self, vs_ai: bool = True) -> None:
        """
        Reset and begin a new game, starting the clock if one is attached.

        The clock starts first; if it cannot be scheduled the error
        propagates and the game stays NOT_STARTED.
        """
        self.reset()
        self.vs_ai = vs_ai
        if self.timer is not None:
            self.timer.start()
        self.game_status = GameStatus.ACTIVE
        logger.info("Game started (vs_ai=%s)", vs_ai)

    @property
    def time_remaining(self) -> int:
        if self.timer is None:
            return DEFAULT_DURATION
        return self.timer.time_remaining

    def _finish(self, status: GameStatus, winner: int | None) -> None:
        self.game_status = status
        self.winner = winner
        if self.timer is not None:
            self.timer.pause()
        logger.info("Game over: %s (winner=%s)", status.value, winner)

    # -- Board queries ---------------------------------------------------

    def is_valid_position(self, pos: int) -> bool:
        return is_valid_position(pos)

    def is_cell_available(self, sub_grid: int, cell: int) -> bool:
        """True if the cell is in bounds, empty, and its sub-grid is unwon."""
        if not (is_valid_position(sub_grid) and is_valid_position(cell)):
            return False
        if self.sub_grid_winners[sub_grid] is not None:
            return False
        return self.board[sub_grid][cell] == Player.EMPTY

    def is_sub_grid_full(self, sub_grid: int) -> bool:
        return Player.EMPTY not in self.board[sub_grid]

    def is_sub_grid_open(self, sub_grid: int) -> bool:
        """Unwon and still has an empty cell."""
        return self.sub_grid_winners[sub_grid] is None and not self.is_sub_grid_full(sub_grid)

    def _open_sub_grids(self) -> list[int]:
        return [i for i in range(BOARD_SIZE) if self.is_sub_grid_open(i)]

    def get_adjacent_sub_grids(self, grid_index: int) -> list[int]:
        """Unwon sub-grids sharing an edge with ``grid_index``."""
        if not is_valid_position(grid_index):
            return []
        return [g for g in ADJACENCY[grid_index] if self.sub_grid_winners[g] is None]

    def get_valid_sub_grids(self, dice_roll: int | None) -> list[int]:
        """
        Sub-grids a shot may target for the given roll.

        A TEE SHOT with no active sub-grid yields nothing before the
        fallback, so it ends up as open as a FINISH roll. Sub-grids that
        are full without a winner are never offered.

        Args:
            dice_roll: D6 value, or None if nothing has been rolled

        Returns:
            Sorted sub-grid indices; never empty while any sub-grid is open
        """
        valid: list[int] = []

        if is_valid_dice_roll(dice_roll):
            if dice_roll <= 2:
                if self.active_sub_grid is not None:
                    valid = [self.active_sub_grid]
            elif dice_roll <= 4:
                if self.active_sub_grid is not None:
                    valid = self.get_adjacent_sub_grids(self.active_sub_grid)
            else:
                valid = self._open_sub_grids()

        valid = [g for g in valid if self.is_sub_grid_open(g)]
        if not valid:
            valid = self._open_sub_grids()

        return sorted(set(valid))

    def is_valid_move(self, sub_grid: int, cell: int, dice_roll: int | None) -> bool:
        if self.game_status is not GameStatus.ACTIVE:
            return False
        if not self.is_cell_available(sub_grid, cell):
            return False
        return sub_grid in self.get_valid_sub_grids(dice_roll)

    def get_available_cells(self, sub_grid: int) -> list[int]:
        if not is_valid_position(sub_grid) or self.sub_grid_winners[sub_grid] is not None:
            return []
        return [c for c, v in enumerate(self.board[sub_grid]) if v == Player.EMPTY]

    def get_available_moves(self) -> list[Move]:
        """
        Every legal move for the current roll.

        Returns an empty list before the roll. An empty list after a roll
        while the game is still active should be impossible (a fully decided
        board is a tie) and is logged as an error.
        """
        if self.last_dice_roll is None:
            return []

        moves = [
            Move(sub_grid=grid, cell=cell)
            for grid in self.get_valid_sub_grids(self.last_dice_roll)
            for cell in self.get_available_cells(grid)
        ]

        if not moves and self.game_status is GameStatus.ACTIVE:
            logger.error(
                "No legal moves in an active game (roll=%s, active_sub_grid=%s)",
                self.last_dice_roll, self.active_sub_grid,
            )
        return moves

    # -- Win checks ------------------------------------------------------

    def check_sub_grid_win(self, sub_grid: int, player: int | None = None) -> bool:
        if player is None:
            player = self.current_player
        return is_line_complete(self.board[sub_grid], player)

    def check_game_win(self, player: int | None = None) -> bool:
        if player is None:
            player = self.current_player
        return self.check_game_win_with_winners(self.sub_grid_winners, player)

    @staticmethod
    def check_game_win_with_winners(winners: Sequence[int | None], player: int) -> bool:
        """Meta-board check against an arbitrary (possibly scratch) winners list."""
        return is_line_complete(winners, player)

    def check_game_tie(self) -> bool:
        """No sub-grid left to play: each one is won or full."""
        return not self._open_sub_grids()

    def update_score(self) -> None:
        self.score = Score.from_winners(self.sub_grid_winners)

    def player_cell_count(self, player: int) -> int:
        return sum(row.count(player) for row in self.board)

    @staticmethod
    def opponent_of(player: int) -> int:
        return Player(player).opponent

    # -- Mutations -------------------------------------------------------

    def apply_dice_roll(self, roll: int) -> bool:
        """Record the roll for the current shot."""
        if self.game_status is not GameStatus.ACTIVE or not is_valid_dice_roll(roll):
            return False
        self.last_dice_roll = roll
        return True

    def make_move(self, sub_grid: int, cell: int) -> bool:
        """
        Place the current player's mark.

        Args:
            sub_grid: Target sub-grid (0-8)
            cell: Target cell (0-8)

        Returns:
            True if the move was applied, False (with no state change) if it
            is not legal under the current roll
        """
        if self.last_dice_roll is None or not self.is_valid_move(
            sub_grid, cell, self.last_dice_roll
        ):
            logger.debug(
                "Rejected move (%s, %s) for player %s (roll=%s)",
                sub_grid, cell, self.current_player, self.last_dice_roll,
            )
            return False

        player = self.current_player
        self.board[sub_grid][cell] = player
        self.move_count += 1
        logger.debug("Player %s played (%s, %s)", player, sub_grid, cell)

        if self.check_sub_grid_win(sub_grid, player):
            self.sub_grid_winners[sub_grid] = player
            self.update_score()
            logger.info("Player %s won sub-grid %s", player, sub_grid)

            if self.check_game_win(player):
                self._finish(GameStatus.WON, player)
                return True

        if self.check_game_tie():
            self._finish(GameStatus.TIE, None)
            return True

        self.active_sub_grid = cell if self.is_sub_grid_open(cell) else None

        self.current_shot += 1
        if self.current_shot > SHOTS_PER_TURN:
            self.current_shot = 1
            self.current_player = self.opponent_of(player)
            self.last_dice_roll = None

        return True

    def handle_timeout(self) -> None:
        """
        End the game on the clock.

        The winner is whoever holds more sub-grids, then whoever has more
        marks on the board; otherwise the game is drawn. Does nothing if the
        game is not active.
        """
        if self.game_status is not GameStatus.ACTIVE:
            return

        p1, p2 = self.score.player1, self.score.player2
        if p1 == p2:
            p1 = self.player_cell_count(Player.PLAYER_1)
            p2 = self.player_cell_count(Player.PLAYER_2)

        if p1 > p2:
            winner = Player.PLAYER_1
        elif p2 > p1:
            winner = Player.PLAYER_2
        else:
            winner = None

        self._finish(GameStatus.TIMEOUT, winner)

    # -- Views -----------------------------------------------------------

    def get_state(self) -> GameSnapshot:
        return GameSnapshot(
            board=tuple(tuple(int(v) for v in row) for row in self.board),
            sub_grid_winners=tuple(
                None if w is None else int(w) for w in self.sub_grid_winners
            ),
            current_player=int(self.current_player),
            active_sub_grid=self.active_sub_grid,
            current_shot=self.current_shot,
            last_dice_roll=self.last_dice_roll,
            move_count=self.move_count,
            time_remaining=self.time_remaining,
            game_status=self.game_status,
            winner=None if self.winner is None else int(self.winner),
            score=self.score,
        )
