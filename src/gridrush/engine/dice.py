"""
GridRush - Dice Controller

Rolls the single D6 that decides where the next shot may land, and maps a
roll onto its shot type:

    1-2: TEE SHOT  (stay in the active sub-grid)
    3-4: APPROACH  (move to an adjacent sub-grid)
    5-6: FINISH    (jump to any open sub-grid)
"""

import random

from gridrush.engine.base import ShotType
from gridrush.engine.validators import is_valid_dice_roll


class DiceController:
    """Rolls dice and classifies them. Stores only the last roll."""

    DIE_FACES = 6

    SHOT_NAMES = {
        ShotType.TEE_SHOT: "TEE SHOT",
        ShotType.APPROACH: "APPROACH",
        ShotType.FINISH: "FINISH",
    }

    SHOT_DESCRIPTIONS = {
        ShotType.TEE_SHOT: "Stay in current grid",
        ShotType.APPROACH: "Move to adjacent grid",
        ShotType.FINISH: "Jump to any grid",
    }

    SHOT_EMOJIS = {
        ShotType.TEE_SHOT: "⛳",
        ShotType.APPROACH: "🏁",
        ShotType.FINISH: "🏆",
    }

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self.last_roll: int | None = None

    def roll(self) -> int:
        """Roll a single D6 and remember it."""
        self.last_roll = self._rng.randint(1, self.DIE_FACES)
        return self.last_roll

    def get_shot_type(self, roll: int | None = None) -> ShotType | None:
        """
        Classify a roll into its shot type.

        Args:
            roll: Die value; defaults to the last roll

        Returns:
            The shot type, or None if the roll is missing or out of range
        """
        if roll is None:
            roll = self.last_roll
        if not is_valid_dice_roll(roll):
            return None
        if roll <= 2:
            return ShotType.TEE_SHOT
        if roll <= 4:
            return ShotType.APPROACH
        return ShotType.FINISH

    def get_shot_type_name(self, roll: int | None = None) -> str:
        return self.SHOT_NAMES.get(self.get_shot_type(roll), "")

    def get_shot_type_description(self, roll: int | None = None) -> str:
        return self.SHOT_DESCRIPTIONS.get(self.get_shot_type(roll), "")

    def get_shot_type_emoji(self, roll: int | None = None) -> str:
        return self.SHOT_EMOJIS.get(self.get_shot_type(roll), "")

    def format_result(self, roll: int | None = None) -> str:
        """Format a roll for display, e.g. ``"APPROACH (3)"``."""
        if roll is None:
            roll = self.last_roll
        return f"{self.get_shot_type_name(roll)} ({roll})"
