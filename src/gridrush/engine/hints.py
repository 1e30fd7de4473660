"""
GridRush - Hint Engine

Rule-based advice for the player about to shoot. Once enough moves have been
played, each call reads the current board and walks a fixed cascade:

    1. Win the game now           (critical)
    2. Stop the opponent's win    (critical)
    3. Claim a sub-grid           (high / medium)
    4. Block an opponent sub-grid (high / medium)
    5. General strategy           (random among applicable tips)

Nothing is carried between calls except ``last_hint`` for display.
"""

import random
from dataclasses import dataclass, field

from gridrush.engine.base import (
    CENTER,
    GRID_NAMES,
    WIN_PATTERNS,
    Hint,
    HintPriority,
    HintType,
    Player,
    is_line_complete,
)
from gridrush.engine.game import GridRushEngine
from gridrush.engine.validators import validate_min_moves


DEFAULT_MIN_MOVES_BEFORE_HINTS = 9


@dataclass(frozen=True)
class SubGridThreat:
    """A sub-grid a player could win, and how many moves it would take."""
    grid: int
    moves: int

    @property
    def urgent(self) -> bool:
        return self.moves == 1


@dataclass
class HintAnalysis:
    """
    Snapshot of the strategic situation for one player.

    Attributes:
        player_score: Sub-grids won by the player
        opponent_score: Sub-grids won by the opponent
        can_win_game: Player can finish a meta-line with one more sub-grid
        opponent_can_win_game: Same for the opponent
        can_win_sub_grid: Sub-grids the player can win in 1-2 moves
        opponent_threats: Sub-grids the opponent can win in 1-2 moves
    """
    player_score: int
    opponent_score: int
    can_win_game: bool = False
    opponent_can_win_game: bool = False
    can_win_sub_grid: list[SubGridThreat] = field(default_factory=list)
    opponent_threats: list[SubGridThreat] = field(default_factory=list)

    @property
    def control_advantage(self) -> int:
        return self.player_score - self.opponent_score


class HintEngine:
    """Produces hints for the current player from the engine's board."""

    def __init__(
        self,
        engine: GridRushEngine,
        rng: random.Random | None = None,
        enabled: bool = True,
        min_moves_before_hints: int = DEFAULT_MIN_MOVES_BEFORE_HINTS,
    ) -> None:
        self.engine = engine
        self.enabled = enabled
        self.min_moves_before_hints = validate_min_moves(min_moves_before_hints)
        self.last_hint: Hint | None = None
        self._rng = rng or random.Random()

    def should_show_hint(self) -> bool:
        return self.enabled and self.engine.move_count >= self.min_moves_before_hints

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def set_min_moves(self, moves: int) -> None:
        self.min_moves_before_hints = validate_min_moves(moves)

    def generate_hint(self, dice_roll: int | None = None) -> Hint | None:
        """
        Build the highest-priority hint for the current player.

        Args:
            dice_roll: The roll for this shot, if already known

        Returns:
            A Hint, or None while hints are disabled or still locked
        """
        if not self.should_show_hint():
            return None

        player = self.engine.current_player
        opponent = self.engine.opponent_of(player)
        analysis = self.analyze_game_state(player, opponent)

        if analysis.can_win_game:
            hint = self._game_win_hint()
        elif analysis.opponent_can_win_game:
            hint = self._defense_hint()
        elif analysis.can_win_sub_grid:
            hint = self._sub_grid_win_hint(analysis.can_win_sub_grid[0], dice_roll)
        elif analysis.opponent_threats:
            hint = self._block_hint(analysis.opponent_threats[0])
        else:
            hint = self._strategy_hint(analysis, dice_roll)

        self.last_hint = hint
        return hint

    # -- Analysis --------------------------------------------------------

    def analyze_game_state(self, player: int, opponent: int) -> HintAnalysis:
        score = self.engine.score
        analysis = HintAnalysis(
            player_score=score.for_player(player),
            opponent_score=score.for_player(opponent),
            can_win_game=self.can_win_game(player),
            opponent_can_win_game=self.can_win_game(opponent),
        )

        for grid, winner in enumerate(self.engine.sub_grid_winners):
            if winner is not None:
                continue
            own = self._moves_to_win(grid, player)
            if own:
                analysis.can_win_sub_grid.append(SubGridThreat(grid, own))
            theirs = self._moves_to_win(grid, opponent)
            if theirs:
                analysis.opponent_threats.append(SubGridThreat(grid, theirs))

        return analysis

    def _moves_to_win(self, grid: int, player: int) -> int | None:
        if self.can_win_sub_grid_in(grid, player, 1):
            return 1
        if self.can_win_sub_grid_in(grid, player, 2):
            return 2
        return None

    def can_win_game(self, player: int) -> bool:
        """True if winning any one open sub-grid would complete a meta-line."""
        winners = list(self.engine.sub_grid_winners)
        for grid in range(len(winners)):
            if not self.engine.is_sub_grid_open(grid):
                continue
            winners[grid] = player
            if self.engine.check_game_win_with_winners(winners, player):
                return True
            winners[grid] = None
        return False

    def can_win_sub_grid_in(self, grid_index: int, player: int, max_moves: int) -> bool:
        """
        Whether ``player`` can win a sub-grid in exactly the given move budget.

        One move means a single empty cell completes a line. Two moves means
        some line holds one of the player's marks and two empty cells.
        """
        cells = self.engine.board[grid_index]

        if max_moves == 1:
            for cell, value in enumerate(cells):
                if value != Player.EMPTY:
                    continue
                scratch = list(cells)
                scratch[cell] = player
                if is_line_complete(scratch, player):
                    return True

        if max_moves == 2:
            for pattern in WIN_PATTERNS:
                line = [cells[i] for i in pattern]
                own = line.count(player)
                empty = line.count(Player.EMPTY)
                if own == 1 and empty == 2:
                    return True

        return False

    def calculate_probability(self, dice_roll: int | None, target_grid: int) -> int:
        """Rough chance (percent) that this roll lets the player reach ``target_grid``."""
        active = self.engine.active_sub_grid
        if not dice_roll or active is None:
            return 50

        if target_grid in self.engine.get_valid_sub_grids(dice_roll):
            return 100
        if dice_roll >= 5:
            return 100
        if dice_roll >= 3:
            return 67 if target_grid in self.engine.get_adjacent_sub_grids(active) else 33
        return 100 if target_grid == active else 33

    # -- Hint builders ---------------------------------------------------

    @staticmethod
    def get_grid_name(grid_index: int) -> str:
        return GRID_NAMES[grid_index]

    def _game_win_hint(self) -> Hint:
        return Hint(
            type=HintType.GAME_WIN,
            priority=HintPriority.CRITICAL,
            message="🏆 ONE MOVE FROM VICTORY! Complete the winning line!",
            advice="Focus on winning the sub-grid that completes your 3-in-a-row!",
            probability=100,
        )

    def _defense_hint(self) -> Hint:
        return Hint(
            type=HintType.DEFENSE,
            priority=HintPriority.CRITICAL,
            message="🚨 OPPONENT THREATENING VICTORY! Block their winning move!",
            advice="Prevent opponent from completing their 3-in-a-row of sub-grids!",
            probability=90,
        )

    def _sub_grid_win_hint(self, threat: SubGridThreat, dice_roll: int | None) -> Hint:
        name = self.get_grid_name(threat.grid)
        probability = self.calculate_probability(dice_roll, threat.grid)
        if threat.urgent:
            return Hint(
                type=HintType.SUB_GRID_WIN,
                priority=HintPriority.HIGH,
                message=f"🏁 One move away from claiming {name}!",
                advice=f"Complete the 3-in-a-row in Grid {threat.grid + 1}",
                probability=probability,
            )
        return Hint(
            type=HintType.SUB_GRID_SETUP,
            priority=HintPriority.MEDIUM,
            message=f"⛳ {name} is within reach!",
            advice=f"Two moves to victory in Grid {threat.grid + 1}",
            probability=probability,
        )

    def _block_hint(self, threat: SubGridThreat) -> Hint:
        name = self.get_grid_name(threat.grid)
        if threat.urgent:
            return Hint(
                type=HintType.BLOCK,
                priority=HintPriority.HIGH,
                message=f"🛡️ Block opponent in {name}!",
                advice=f"Opponent is one move from claiming Grid {threat.grid + 1}",
                probability=75,
            )
        return Hint(
            type=HintType.BLOCK_SETUP,
            priority=HintPriority.MEDIUM,
            message=f"⚠️ Opponent threatening {name}",
            advice=f"Watch Grid {threat.grid + 1} - opponent building threat",
            probability=50,
        )

    def _strategy_hint(self, analysis: HintAnalysis, dice_roll: int | None) -> Hint:
        candidates: list[Hint] = []

        if self.engine.sub_grid_winners[CENTER] is None:
            candidates.append(Hint(
                type=HintType.STRATEGY,
                priority=HintPriority.LOW,
                message="🎯 Center grid gives maximum control",
                advice="Grid 5 (center) offers the most strategic options",
                probability=33,
            ))

        if analysis.control_advantage > 0:
            candidates.append(Hint(
                type=HintType.STRATEGY,
                priority=HintPriority.LOW,
                message=f"🏎️ You're leading {analysis.player_score}-{analysis.opponent_score}!",
                advice="Maintain control and force opponent into bad positions",
                probability=60,
            ))
        elif analysis.control_advantage < 0:
            candidates.append(Hint(
                type=HintType.STRATEGY,
                priority=HintPriority.MEDIUM,
                message=f"⚡ Behind {analysis.opponent_score}-{analysis.player_score} - push hard!",
                advice="Take risks and create multiple threats",
                probability=40,
            ))

        if dice_roll is not None and dice_roll >= 5:
            candidates.append(Hint(
                type=HintType.STRATEGY,
                priority=HintPriority.LOW,
                message="🏁 FINISH roll - jump to best position!",
                advice="Use this freedom to take center or corner grids",
                probability=100,
            ))

        if candidates:
            return self._rng.choice(candidates)

        return Hint(
            type=HintType.STRATEGY,
            priority=HintPriority.LOW,
            message="🏎️ Focus on corner positions for dual threats",
            advice="Corner cells create multiple winning patterns",
            probability=50,
        )

    @staticmethod
    def format_hint(hint: Hint | None) -> str:
        """Render a hint as plain text lines."""
        if hint is None:
            return ""
        return f"{hint.message}\n{hint.advice}\nChance: {hint.probability}%"
