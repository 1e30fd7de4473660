"""
GridRush - Input Validation Utilities

Two kinds of helpers live here. ``is_*`` predicates answer bounds questions
during play and never raise; invalid moves are reported as ``False`` by the
engine. ``validate_*`` functions guard construction-time configuration and
raise descriptive ValueError exceptions.
"""

from gridrush.engine.base import BOARD_SIZE, Player


def is_valid_position(pos: object) -> bool:
    """True if ``pos`` is an int index into a 3x3 grid (0-8)."""
    return isinstance(pos, int) and not isinstance(pos, bool) and 0 <= pos < BOARD_SIZE


def is_valid_dice_roll(roll: object) -> bool:
    """True if ``roll`` is a D6 face value."""
    return isinstance(roll, int) and not isinstance(roll, bool) and 1 <= roll <= 6


def validate_duration(seconds: int) -> int:
    """
    Validate a countdown duration.

    Args:
        seconds: Duration in whole seconds

    Returns:
        Validated duration

    Raises:
        ValueError: If duration is not a positive integer
    """
    if not isinstance(seconds, int) or isinstance(seconds, bool):
        raise ValueError(f"Duration must be an integer, got {type(seconds).__name__}.")

    if seconds <= 0:
        raise ValueError(f"Duration must be positive, got {seconds}.")

    return seconds


def validate_delay_ms(ms: int | float) -> int | float:
    """
    Validate an artificial delay in milliseconds.

    Raises:
        ValueError: If delay is negative or not a number
    """
    if not isinstance(ms, (int, float)) or isinstance(ms, bool):
        raise ValueError(f"Delay must be a number, got {type(ms).__name__}.")

    if ms < 0:
        raise ValueError(f"Delay cannot be negative, got {ms}.")

    return ms


def validate_min_moves(moves: int) -> int:
    """
    Validate the number of moves before hints unlock.

    Raises:
        ValueError: If moves is negative or not an integer
    """
    if not isinstance(moves, int) or isinstance(moves, bool):
        raise ValueError(f"Move count must be an integer, got {type(moves).__name__}.")

    if moves < 0:
        raise ValueError(f"Move count cannot be negative, got {moves}.")

    return moves


def validate_player_number(player: int) -> Player:
    """
    Validate a seat number.

    Returns:
        The matching Player member

    Raises:
        ValueError: If player is not 1 or 2
    """
    if player not in (Player.PLAYER_1, Player.PLAYER_2) or isinstance(player, bool):
        raise ValueError(f"Player must be 1 or 2, got {player}.")

    return Player(player)
