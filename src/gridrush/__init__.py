"""
GridRush.

Dice-driven Ultimate Tic-Tac-Toe: rules engine, AI opponent, game clock and
hint system.
"""

__version__ = "0.1.0"
