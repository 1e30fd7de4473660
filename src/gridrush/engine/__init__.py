"""
GridRush Game Engine.

Pure Python game logic with zero UI dependencies.
Handles dice, board rules, the game clock, hints and the AI opponent.
"""

from gridrush.engine.base import (
    GameSnapshot,
    GameStatus,
    Hint,
    HintPriority,
    HintType,
    Move,
    Player,
    Score,
    ShotType,
)
from gridrush.engine.ai import AIPlayer
from gridrush.engine.dice import DiceController
from gridrush.engine.game import GridRushEngine
from gridrush.engine.hints import HintEngine
from gridrush.engine.timer import AsyncioScheduler, GameTimer, TimerState

__all__ = [
    # Data Classes
    "GameSnapshot",
    "Hint",
    "Move",
    "Score",
    "TimerState",
    # Enums
    "GameStatus",
    "HintPriority",
    "HintType",
    "Player",
    "ShotType",
    # Components
    "AIPlayer",
    "AsyncioScheduler",
    "DiceController",
    "GameTimer",
    "GridRushEngine",
    "HintEngine",
]
