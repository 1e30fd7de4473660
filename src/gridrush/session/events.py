"""
GridRush - Session Event Definitions

Event types and payloads emitted by a game session to the presentation
layer.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from gridrush.engine.base import GameSnapshot, GameStatus


class SessionEvent(Enum):
    """Events that can occur during a game."""

    GAME_STARTED = auto()
    DICE_ROLLED = auto()
    MOVE_MADE = auto()
    SUB_GRID_WON = auto()
    TURN_ADVANCED = auto()
    GAME_WON = auto()
    GAME_TIED = auto()
    GAME_TIMEOUT = auto()
    TIMER_WARNING = auto()


@dataclass
class EventPayload:
    """Wrapper for session event data."""

    event: SessionEvent
    player: int | None = None
    data: dict[str, Any] = field(default_factory=dict)


_TERMINAL_EVENT_MAP: dict[GameStatus, SessionEvent] = {
    GameStatus.WON: SessionEvent.GAME_WON,
    GameStatus.TIE: SessionEvent.GAME_TIED,
    GameStatus.TIMEOUT: SessionEvent.GAME_TIMEOUT,
}


def classify_move(before: GameSnapshot, after: GameSnapshot) -> list[SessionEvent]:
    """Determine the events produced by one applied move."""
    if after.move_count == before.move_count:
        return []

    events = [SessionEvent.MOVE_MADE]

    if any(
        old is None and new is not None
        for old, new in zip(before.sub_grid_winners, after.sub_grid_winners)
    ):
        events.append(SessionEvent.SUB_GRID_WON)

    if after.game_status != before.game_status and after.game_status in _TERMINAL_EVENT_MAP:
        events.append(_TERMINAL_EVENT_MAP[after.game_status])
    elif after.current_player != before.current_player:
        events.append(SessionEvent.TURN_ADVANCED)

    return events


def newly_won_sub_grids(before: GameSnapshot, after: GameSnapshot) -> list[int]:
    return [
        i for i, (old, new) in enumerate(zip(before.sub_grid_winners, after.sub_grid_winners))
        if old is None and new is not None
    ]
