"""Game models."""

from .card import CardCatalog, PromptCard
from .game_state import EngineSnapshot, GamePhase, GameState, Submission
from .pack import ActiveDeck, Pack
from .player import Player

__all__ = [
    "ActiveDeck",
    "CardCatalog",
    "EngineSnapshot",
    "GamePhase",
    "GameState",
    "Pack",
    "Player",
    "PromptCard",
    "Submission",
]
