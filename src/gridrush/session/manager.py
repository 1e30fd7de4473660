"""
GridRush - Game Session Manager

Ties one engine, dice controller, clock, hint engine and AI opponent into a
playable session, the way a front end drives them: roll, place, let the AI
take its three shots, repeat until someone wins or the clock runs out.

All mutation happens on the caller's thread (normally an asyncio event
loop). Human input is refused while the AI is taking its turn, so at most one
move is ever in flight.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Callable

from gridrush.config import Settings, get_settings
from gridrush.engine.ai import AIPlayer
from gridrush.engine.base import SHOTS_PER_TURN, GameStatus, Hint, Move
from gridrush.engine.dice import DiceController
from gridrush.engine.game import GridRushEngine
from gridrush.engine.hints import HintEngine
from gridrush.engine.timer import GameTimer, Scheduler
from gridrush.session.events import (
    EventPayload,
    SessionEvent,
    classify_move,
    newly_won_sub_grids,
)
from gridrush.session.models import GameStateModel, HintModel, SessionView, TimerModel

logger = logging.getLogger(__name__)


class GameSession:
    """One game from start to finish, plus any rematches.

    Every session builds its own components; nothing is shared between
    sessions.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        rng: random.Random | None = None,
        scheduler: Scheduler | None = None,
        on_event: Callable[[EventPayload], None] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        rng = rng or random.Random()

        self.dice = DiceController(rng)
        self.timer = GameTimer(
            duration=self.settings.timer_duration,
            on_timeout=self._on_timeout,
            on_warning=self._on_warning,
            scheduler=scheduler,
        )
        self.engine = GridRushEngine(self.timer)
        self.hints = HintEngine(
            self.engine,
            rng=rng,
            enabled=self.settings.hints_enabled,
            min_moves_before_hints=self.settings.min_moves_before_hints,
        )
        self.ai = AIPlayer(
            self.engine,
            player_number=self.settings.ai_player,
            thinking_delay_ms=self.settings.ai_thinking_delay_ms,
            rng=rng,
        )

        self.is_ai_acting = False
        self.current_hint: Hint | None = None
        self._roll_pending = False
        self._listeners: list[Callable[[EventPayload], None]] = []
        if on_event is not None:
            self._listeners.append(on_event)

    # -- Events ----------------------------------------------------------

    def subscribe(self, callback: Callable[[EventPayload], None]) -> None:
        self._listeners.append(callback)

    def unsubscribe(self, callback: Callable[[EventPayload], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _emit(self, event: SessionEvent, player: int | None = None, **data: Any) -> None:
        payload = EventPayload(event=event, player=player, data=data)
        for callback in list(self._listeners):
            try:
                callback(payload)
            except Exception:
                logger.exception("Error in event listener for %s", event.name)

    # -- State -----------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.engine.game_status is GameStatus.ACTIVE

    @property
    def is_ai_turn(self) -> bool:
        return (
            self.is_active
            and self.engine.vs_ai
            and self.engine.current_player == self.ai.player_number
        )

    @property
    def awaiting_move(self) -> bool:
        """A roll has been made for this shot and no move placed yet."""
        return self._roll_pending

    def get_view(self) -> SessionView:
        roll = self.engine.last_dice_roll
        hint = HintModel.model_validate(self.current_hint) if self.current_hint else None
        return SessionView(
            state=GameStateModel.model_validate(self.engine.get_state()),
            timer=TimerModel.model_validate(self.timer.get_state()),
            hint=hint,
            valid_sub_grids=self.engine.get_valid_sub_grids(roll) if self._roll_pending else [],
            shot_type=self.dice.get_shot_type_name(roll) if self._roll_pending else "",
            is_ai_acting=self.is_ai_acting,
            is_ai_turn=self.is_ai_turn,
        )

    # -- Human actions ---------------------------------------------------

    def start(self, vs_ai: bool = True) -> None:
        """Start a fresh game, discarding any game in progress."""
        self.engine.start_game(vs_ai)
        self.is_ai_acting = False
        self.current_hint = None
        self._roll_pending = False
        self._emit(SessionEvent.GAME_STARTED, player=self.engine.current_player, vs_ai=vs_ai)

    def roll_dice(self) -> int | None:
        """
        Roll for the human player's next shot.

        Returns:
            The roll, or None if rolling is not allowed right now (game not
            active, AI's turn, or a roll is already waiting for a move)
        """
        if not self.is_active or self.is_ai_acting or self.is_ai_turn:
            return None
        if self._roll_pending:
            return None

        roll = self._roll()
        self.current_hint = self.hints.generate_hint(roll)
        return roll

    def select_cell(self, sub_grid: int, cell: int) -> bool:
        """Place the human player's mark for the pending roll."""
        if self.is_ai_acting or self.is_ai_turn or not self._roll_pending:
            return False
        return self._apply_move(sub_grid, cell)

    # -- AI turn ---------------------------------------------------------

    async def play_ai_turn(self) -> list[Move]:
        """
        Let the AI roll and play all of its shots.

        Stops early when the game ends (including by timeout during a
        thinking pause).

        Returns:
            The moves the AI played, in order
        """
        if not self.is_ai_turn or self.is_ai_acting:
            return []

        player = self.ai.player_number
        played: list[Move] = []
        self.is_ai_acting = True
        try:
            for _ in range(SHOTS_PER_TURN):
                if not self.is_active or self.engine.current_player != player:
                    break

                self._roll()
                move = await self.ai.make_move()

                if not self.is_active:
                    break
                if move is None or not self._apply_move(move.sub_grid, move.cell):
                    logger.error("AI could not play a legal move (move=%s)", move)
                    break
                played.append(move)
        finally:
            self.is_ai_acting = False

        return played

    # -- Internals -------------------------------------------------------

    def _roll(self) -> int:
        roll = self.dice.roll()
        self.engine.apply_dice_roll(roll)
        self._roll_pending = True
        self._emit(
            SessionEvent.DICE_ROLLED,
            player=self.engine.current_player,
            roll=roll,
            shot_type=self.dice.get_shot_type_name(roll),
            valid_sub_grids=self.engine.get_valid_sub_grids(roll),
        )
        return roll

    def _apply_move(self, sub_grid: int, cell: int) -> bool:
        before = self.engine.get_state()
        if not self.engine.make_move(sub_grid, cell):
            return False

        self._roll_pending = False
        self.current_hint = None
        after = self.engine.get_state()

        for event in classify_move(before, after):
            if event is SessionEvent.SUB_GRID_WON:
                self._emit(
                    event,
                    player=before.current_player,
                    sub_grids=newly_won_sub_grids(before, after),
                    score=after.score,
                )
            elif event is SessionEvent.TURN_ADVANCED:
                self._emit(event, player=after.current_player)
            elif event in (SessionEvent.GAME_WON, SessionEvent.GAME_TIED):
                self._emit(event, player=after.winner, score=after.score)
            else:
                self._emit(event, player=before.current_player, move=Move(sub_grid, cell))
        return True

    def _on_timeout(self) -> None:
        if not self.is_active:
            return
        self.engine.handle_timeout()
        self._roll_pending = False
        self._emit(
            SessionEvent.GAME_TIMEOUT,
            player=self.engine.winner,
            score=self.engine.score,
        )

    def _on_warning(self, threshold: int, message: str) -> None:
        self._emit(SessionEvent.TIMER_WARNING, threshold=threshold, message=message)
