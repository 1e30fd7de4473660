"""
GridRush - Test Configuration and Fixtures

Common fixtures and board builders for all test modules.
"""

import random
from typing import Callable, Iterable

import pytest

from gridrush.config import Settings
from gridrush.engine.base import Player
from gridrush.engine.game import GridRushEngine


class FakeHandle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Records repeating-call requests; tests call ``fire()`` to tick."""

    def __init__(self) -> None:
        self.calls: list[tuple[float, Callable[[], None], FakeHandle]] = []

    def call_repeating(self, interval: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle()
        self.calls.append((interval, callback, handle))
        return handle

    @property
    def active(self) -> list[tuple[float, Callable[[], None], FakeHandle]]:
        return [c for c in self.calls if not c[2].cancelled]

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            for _, callback, handle in self.active:
                if not handle.cancelled:
                    callback()


# =============================================================================
# SCHEDULING / RANDOMNESS
# =============================================================================

@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible AI and hint choices."""
    return random.Random(1234)


@pytest.fixture
def settings() -> Settings:
    """Settings with no AI pause so async tests run instantly."""
    return Settings(
        timer_duration=300,
        ai_thinking_delay_ms=0,
        ai_player=2,
        hints_enabled=True,
        min_moves_before_hints=9,
    )


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def engine() -> GridRushEngine:
    """An engine with a game in progress and no clock attached."""
    game = GridRushEngine()
    game.start_game(vs_ai=False)
    return game


@pytest.fixture
def set_cells() -> Callable[..., None]:
    """
    Write marks straight onto an engine's board, bypassing the rules.

    Usage: ``set_cells(engine, sub_grid, [cells...], player)``
    """
    def _set(game: GridRushEngine, sub_grid: int, cells: Iterable[int], player: int) -> None:
        for cell in cells:
            game.board[sub_grid][cell] = player
    return _set


@pytest.fixture
def set_winners() -> Callable[..., None]:
    """
    Force sub-grid winners (and the score) on an engine.

    Usage: ``set_winners(engine, {0: 1, 4: 2})``
    """
    def _set(game: GridRushEngine, winners: dict[int, int]) -> None:
        for grid, player in winners.items():
            game.sub_grid_winners[grid] = player
        game.update_score()
    return _set


@pytest.fixture
def all_grids() -> set[int]:
    return set(range(9))


@pytest.fixture
def p1() -> Player:
    return Player.PLAYER_1


@pytest.fixture
def p2() -> Player:
    return Player.PLAYER_2
