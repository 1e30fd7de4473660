"""
GridRush - Game Engine Base Classes

This module defines the enums, value types and board geometry shared by the
engine, the hint system and the AI. Value types are frozen dataclasses so they
can be handed to the presentation layer without exposing engine internals.

Board layout (both for cells inside a sub-grid and for sub-grids on the
meta-board):

    0 1 2
    3 4 5
    6 7 8
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Sequence


BOARD_SIZE = 9
SHOTS_PER_TURN = 3

# 3 rows, 3 columns, 2 diagonals
WIN_PATTERNS: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

# Edge-sharing neighbours on the 3x3 grid-of-grids (no diagonals)
ADJACENCY: dict[int, tuple[int, ...]] = {
    0: (1, 3),
    1: (0, 2, 4),
    2: (1, 5),
    3: (0, 4, 6),
    4: (1, 3, 5, 7),
    5: (2, 4, 8),
    6: (3, 7),
    7: (4, 6, 8),
    8: (5, 7),
}

CENTER = 4
CORNERS = frozenset({0, 2, 6, 8})

GRID_NAMES: tuple[str, ...] = (
    "Top-Left", "Top-Center", "Top-Right",
    "Middle-Left", "Center", "Middle-Right",
    "Bottom-Left", "Bottom-Center", "Bottom-Right",
)


class Player(IntEnum):
    """Cell occupant. EMPTY doubles as 'no player'."""
    EMPTY = 0
    PLAYER_1 = 1
    PLAYER_2 = 2

    @property
    def opponent(self) -> "Player":
        """The other player (EMPTY has no opponent)."""
        if self is Player.EMPTY:
            raise ValueError("EMPTY has no opponent.")
        return Player.PLAYER_2 if self is Player.PLAYER_1 else Player.PLAYER_1


class ShotType(Enum):
    """Dice bands controlling which sub-grids are eligible."""
    TEE_SHOT = "tee_shot"    # 1-2: stay in the active sub-grid
    APPROACH = "approach"    # 3-4: move to an adjacent sub-grid
    FINISH = "finish"        # 5-6: jump to any open sub-grid


class GameStatus(Enum):
    """Lifecycle of a single game."""
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    WON = "won"
    TIE = "tie"
    TIMEOUT = "timeout"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.WON, GameStatus.TIE, GameStatus.TIMEOUT)


class HintType(Enum):
    """Kinds of advice the hint system produces."""
    GAME_WIN = "game_win"
    DEFENSE = "defense"
    SUB_GRID_WIN = "sub_grid_win"
    SUB_GRID_SETUP = "sub_grid_setup"
    BLOCK = "block"
    BLOCK_SETUP = "block_setup"
    STRATEGY = "strategy"


class HintPriority(Enum):
    """Urgency of a hint."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Move:
    """
    A single placement on the board.

    Attributes:
        sub_grid: Index of the sub-grid (0-8)
        cell: Index of the cell inside that sub-grid (0-8)
    """
    sub_grid: int
    cell: int

    def __str__(self) -> str:
        return f"({self.sub_grid}, {self.cell})"


@dataclass(frozen=True)
class Hint:
    """
    A transient strategic recommendation.

    Attributes:
        type: What the hint is about
        priority: How urgent it is
        message: Headline shown to the player
        advice: One-line follow-up advice
        probability: Estimated chance (0-100) of acting on it this shot
    """
    type: HintType
    priority: HintPriority
    message: str
    advice: str
    probability: int

    def __post_init__(self) -> None:
        if not (0 <= self.probability <= 100):
            raise ValueError(
                f"Hint probability must be between 0 and 100, got {self.probability}."
            )


@dataclass(frozen=True)
class Score:
    """Sub-grids won per player."""
    player1: int = 0
    player2: int = 0

    def for_player(self, player: int) -> int:
        return self.player1 if player == Player.PLAYER_1 else self.player2

    @classmethod
    def from_winners(cls, winners: Sequence[int | None]) -> "Score":
        """Count sub-grid wins from a winners sequence."""
        return cls(
            player1=sum(1 for w in winners if w == Player.PLAYER_1),
            player2=sum(1 for w in winners if w == Player.PLAYER_2),
        )


@dataclass(frozen=True)
class GameSnapshot:
    """
    Read-only view of the complete game state.

    Attributes:
        board: 9 sub-grids of 9 cells (0 = empty, 1/2 = player)
        sub_grid_winners: Winner of each sub-grid, or None
        current_player: Player whose turn it is (1 or 2)
        active_sub_grid: Constraint inherited from the previous cell, or None
        current_shot: Shot number within the turn (1-3)
        last_dice_roll: Most recent roll for this turn, or None
        move_count: Total marks placed this game
        time_remaining: Seconds left on the game clock
        game_status: Current lifecycle status
        winner: Winning player, or None
        score: Sub-grids won per player
    """
    board: tuple[tuple[int, ...], ...]
    sub_grid_winners: tuple[int | None, ...]
    current_player: int
    active_sub_grid: int | None
    current_shot: int
    last_dice_roll: int | None
    move_count: int
    time_remaining: int
    game_status: GameStatus
    winner: int | None
    score: Score


def is_line_complete(cells: Sequence[int | None], player: int) -> bool:
    """
    Check whether ``player`` holds any of the 8 winning lines.

    Used unchanged for cells within a sub-grid and for the sub-grid winners
    on the meta-board.

    Args:
        cells: 9 values, indexed as in the board layout
        player: Player to test for

    Returns:
        True if three of the player's marks form a row, column or diagonal
    """
    return any(
        cells[a] == player and cells[b] == player and cells[c] == player
        for a, b, c in WIN_PATTERNS
    )
