"""
GridRush - Session Read Models

Pydantic models that mirror the engine's snapshot types, for handing game
state to a renderer (``model_dump(mode="json")`` gives a plain dict).
"""

from pydantic import BaseModel, Field

from gridrush.engine.base import GameStatus, HintPriority, HintType


class ScoreModel(BaseModel):
    """Mirrors ``Score``."""

    player1: int = 0
    player2: int = 0

    model_config = {"from_attributes": True}


class GameStateModel(BaseModel):
    """Mirrors ``GameSnapshot``."""

    board: list[list[int]]
    sub_grid_winners: list[int | None]
    current_player: int = Field(ge=1, le=2)
    active_sub_grid: int | None = None
    current_shot: int = Field(ge=1, le=3)
    last_dice_roll: int | None = None
    move_count: int = 0
    time_remaining: int = 0
    game_status: GameStatus
    winner: int | None = None
    score: ScoreModel

    model_config = {"from_attributes": True}


class TimerModel(BaseModel):
    """Mirrors ``TimerState``."""

    time_remaining: int
    is_active: bool
    formatted: str
    color: str
    warning: str | None = None

    model_config = {"from_attributes": True}


class HintModel(BaseModel):
    """Mirrors ``Hint``."""

    type: HintType
    priority: HintPriority
    message: str
    advice: str
    probability: int = Field(ge=0, le=100)

    model_config = {"from_attributes": True}


class SessionView(BaseModel):
    """Everything a renderer needs for one frame."""

    state: GameStateModel
    timer: TimerModel
    hint: HintModel | None = None
    valid_sub_grids: list[int] = Field(default_factory=list)
    shot_type: str = ""
    is_ai_acting: bool = False
    is_ai_turn: bool = False
