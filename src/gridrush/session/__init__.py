"""
GridRush Game Sessions.

Coordinates the engine components for a front end and reports what happened
through session events.
"""

from gridrush.session.events import EventPayload, SessionEvent, classify_move
from gridrush.session.manager import GameSession
from gridrush.session.models import (
    GameStateModel,
    HintModel,
    ScoreModel,
    SessionView,
    TimerModel,
)

__all__ = [
    "EventPayload",
    "GameSession",
    "GameStateModel",
    "HintModel",
    "ScoreModel",
    "SessionEvent",
    "SessionView",
    "TimerModel",
    "classify_move",
]
