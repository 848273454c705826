"""Deck asset loading.

The asset is a JSON document with three collections::

    {
        "white": ["answer", ...],
        "black": [{"text": "prompt _.", "pick": 1}, ...],
        "packs": [{"name": "Base", "white": [0, 1], "black": [0], "official": true}, ...]
    }

Malformed entries are skipped. A missing or unreadable asset raises
DeckLoadError so the caller can report it.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from party_cards.models.card import CardCatalog, PromptCard
from party_cards.models.pack import Pack

logger = logging.getLogger(__name__)


class DeckLoadError(Exception):
    """Raised when the deck asset is missing or not a deck document."""


class DeckCollection(BaseModel, frozen=True):
    """Parsed deck asset: catalog plus the packs that reference it."""

    catalog: CardCatalog = CardCatalog()
    packs: tuple[Pack, ...] = ()


def _parse_answer(entry: Any) -> str | None:
    if isinstance(entry, str):
        return entry
    return None


def _parse_prompt(entry: Any) -> PromptCard | None:
    if not isinstance(entry, dict):
        return None
    try:
        return PromptCard.model_validate(entry)
    except ValidationError:
        return None


def _parse_indices(entry: Any) -> frozenset[int]:
    if not isinstance(entry, list):
        return frozenset()
    # bool is an int subclass; JSON true/false are not indices
    return frozenset(
        i for i in entry if isinstance(i, int) and not isinstance(i, bool) and i >= 0
    )


def _parse_pack(entry: Any) -> Pack | None:
    if not isinstance(entry, dict):
        return None
    name = entry.get("name")
    if not isinstance(name, str):
        return None
    return Pack(
        name=name,
        answer_indices=_parse_indices(entry.get("white")),
        prompt_indices=_parse_indices(entry.get("black")),
        is_official=entry.get("official") is True,
    )


def parse_deck_collection(data: Any) -> DeckCollection:
    """Build a DeckCollection from a decoded deck document.

    Args:
        data: Decoded JSON value.

    Returns:
        DeckCollection with malformed entries omitted.

    Raises:
        DeckLoadError: If data is not a JSON object.
    """
    if not isinstance(data, dict):
        raise DeckLoadError("Deck document must be a JSON object")

    raw_answers = data.get("white") or []
    raw_prompts = data.get("black") or []
    raw_packs = data.get("packs") or []
    if not isinstance(raw_answers, list):
        raw_answers = []
    if not isinstance(raw_prompts, list):
        raw_prompts = []
    if not isinstance(raw_packs, list):
        raw_packs = []

    answers = tuple(_parse_answer(e) for e in raw_answers)
    prompts = tuple(_parse_prompt(e) for e in raw_prompts)
    packs = tuple(p for p in (_parse_pack(e) for e in raw_packs) if p is not None)

    skipped = (
        sum(a is None for a in answers)
        + sum(p is None for p in prompts)
        + (len(raw_packs) - len(packs))
    )
    if skipped:
        logger.warning(f"Skipped {skipped} malformed deck entries")

    logger.info(
        f"Loaded deck: {len(answers)} answers, {len(prompts)} prompts, {len(packs)} packs"
    )
    return DeckCollection(
        catalog=CardCatalog(answers=answers, prompts=prompts),
        packs=packs,
    )


def load_deck_asset(path: Path | str) -> DeckCollection:
    """Load and parse a deck asset file.

    Args:
        path: Path to the JSON asset.

    Returns:
        Parsed DeckCollection.

    Raises:
        DeckLoadError: If the file is missing, unreadable or not valid JSON.
    """
    asset_path = Path(path)
    try:
        with open(asset_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise DeckLoadError(f"Deck asset not found: {asset_path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise DeckLoadError(f"Failed to load deck: {e}") from e

    return parse_deck_collection(data)
