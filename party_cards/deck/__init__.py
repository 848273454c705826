"""Deck loading and pack selection."""

from .combiner import DeckCombiner, combine_packs
from .loader import DeckCollection, DeckLoadError, load_deck_asset, parse_deck_collection

__all__ = [
    "DeckCollection",
    "DeckCombiner",
    "DeckLoadError",
    "combine_packs",
    "load_deck_asset",
    "parse_deck_collection",
]
