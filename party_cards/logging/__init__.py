"""Game logging module."""

from .formatters import format_cards, format_hands, format_submission
from .game_logger import GameLogger

__all__ = [
    "GameLogger",
    "format_cards",
    "format_hands",
    "format_submission",
]
