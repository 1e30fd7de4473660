"""
GridRush - Base Classes Tests

Tests for enums, value types, board geometry and validation utilities.
"""

import pytest
from gridrush.engine.base import (
    ADJACENCY,
    GRID_NAMES,
    WIN_PATTERNS,
    GameStatus,
    Hint,
    HintPriority,
    HintType,
    Move,
    Player,
    Score,
    is_line_complete,
)
from gridrush.engine.validators import (
    is_valid_dice_roll,
    is_valid_position,
    validate_delay_ms,
    validate_duration,
    validate_min_moves,
    validate_player_number,
)


class TestPlayer:
    """Tests for Player enum."""

    def test_values(self):
        assert Player.EMPTY == 0
        assert Player.PLAYER_1 == 1
        assert Player.PLAYER_2 == 2

    def test_opponent(self):
        assert Player.PLAYER_1.opponent is Player.PLAYER_2
        assert Player.PLAYER_2.opponent is Player.PLAYER_1

    def test_empty_has_no_opponent(self):
        with pytest.raises(ValueError, match="EMPTY has no opponent"):
            Player.EMPTY.opponent


class TestGameStatus:
    """Tests for GameStatus enum."""

    @pytest.mark.parametrize("status", [GameStatus.WON, GameStatus.TIE, GameStatus.TIMEOUT])
    def test_terminal_states(self, status):
        assert status.is_terminal

    @pytest.mark.parametrize("status", [GameStatus.NOT_STARTED, GameStatus.ACTIVE])
    def test_non_terminal_states(self, status):
        assert not status.is_terminal


class TestGeometry:
    """Tests for win patterns and the sub-grid adjacency table."""

    def test_eight_win_patterns(self):
        assert len(WIN_PATTERNS) == 8
        assert len(set(WIN_PATTERNS)) == 8

    def test_adjacency_is_symmetric(self):
        for grid, neighbours in ADJACENCY.items():
            for other in neighbours:
                assert grid in ADJACENCY[other]

    def test_adjacency_excludes_diagonals(self):
        assert ADJACENCY[4] == (1, 3, 5, 7)
        assert 4 not in ADJACENCY[0]

    def test_corner_has_two_neighbours(self):
        for corner in (0, 2, 6, 8):
            assert len(ADJACENCY[corner]) == 2

    def test_grid_names(self):
        assert GRID_NAMES[0] == "Top-Left"
        assert GRID_NAMES[4] == "Center"
        assert GRID_NAMES[8] == "Bottom-Right"


class TestIsLineComplete:
    """The same check serves cells and sub-grid winners."""

    def test_top_row(self):
        cells = [1, 1, 1, 0, 0, 0, 0, 0, 0]
        assert is_line_complete(cells, 1)
        assert not is_line_complete(cells, 2)

    def test_column(self):
        cells = [0, 2, 0, 0, 2, 0, 0, 2, 0]
        assert is_line_complete(cells, 2)

    def test_anti_diagonal(self):
        cells = [0, 0, 1, 0, 1, 0, 1, 0, 0]
        assert is_line_complete(cells, 1)

    def test_no_line(self):
        cells = [1, 2, 1, 1, 2, 2, 2, 1, 1]
        assert not is_line_complete(cells, 1)
        assert not is_line_complete(cells, 2)

    def test_winners_with_none(self):
        winners = [1, 1, 1, None, None, None, None, None, None]
        assert is_line_complete(winners, 1)

    def test_every_pattern_accepted(self):
        for pattern in WIN_PATTERNS:
            cells = [0] * 9
            for i in pattern:
                cells[i] = 2
            assert is_line_complete(cells, 2)


class TestValueTypes:
    """Tests for Move, Hint and Score."""

    def test_move_is_frozen(self):
        move = Move(sub_grid=4, cell=0)
        with pytest.raises(AttributeError):
            move.cell = 1

    def test_move_equality(self):
        assert Move(1, 2) == Move(sub_grid=1, cell=2)
        assert str(Move(1, 2)) == "(1, 2)"

    def test_hint_probability_range(self):
        with pytest.raises(ValueError, match="between 0 and 100"):
            Hint(HintType.STRATEGY, HintPriority.LOW, "m", "a", probability=101)

    def test_score_from_winners(self):
        score = Score.from_winners([1, 2, 1, None, None, 1, None, None, 2])
        assert score == Score(player1=3, player2=2)

    def test_score_for_player(self):
        score = Score(player1=3, player2=1)
        assert score.for_player(1) == 3
        assert score.for_player(2) == 1


class TestValidators:
    """Tests for validation utilities."""

    @pytest.mark.parametrize("pos", [0, 4, 8])
    def test_valid_positions(self, pos):
        assert is_valid_position(pos)

    @pytest.mark.parametrize("pos", [-1, 9, None, "3", 2.0, True])
    def test_invalid_positions(self, pos):
        assert not is_valid_position(pos)

    def test_dice_rolls(self):
        assert all(is_valid_dice_roll(r) for r in range(1, 7))
        assert not is_valid_dice_roll(0)
        assert not is_valid_dice_roll(7)
        assert not is_valid_dice_roll(None)

    def test_validate_duration(self):
        assert validate_duration(60) == 60
        with pytest.raises(ValueError, match="must be positive"):
            validate_duration(0)
        with pytest.raises(ValueError, match="must be an integer"):
            validate_duration(1.5)

    def test_validate_delay(self):
        assert validate_delay_ms(0) == 0
        with pytest.raises(ValueError, match="cannot be negative"):
            validate_delay_ms(-1)

    def test_validate_min_moves(self):
        assert validate_min_moves(9) == 9
        with pytest.raises(ValueError, match="cannot be negative"):
            validate_min_moves(-3)

    def test_validate_player_number(self):
        assert validate_player_number(2) is Player.PLAYER_2
        with pytest.raises(ValueError, match="Player must be 1 or 2"):
            validate_player_number(3)
        with pytest.raises(ValueError, match="Player must be 1 or 2"):
            validate_player_number(0)
