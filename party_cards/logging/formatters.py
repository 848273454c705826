"""Formatters for game log output."""

from party_cards.models.card import PromptCard
from party_cards.models.game_state import Submission
from party_cards.models.player import Player

# Separator between cards of one hand or submission
CARD_SEPARATOR = " | "


def format_cards(cards: list[str] | tuple[str, ...]) -> str:
    """Format a sequence of answer cards to a single string.

    Args:
        cards: Card texts in order.

    Returns:
        Cards joined by CARD_SEPARATOR. Empty string if no cards.
    """
    return CARD_SEPARATOR.join(cards)


def format_hands(hands: list[list[str]]) -> dict[str, str]:
    """Format all players' hands to dict.

    Args:
        hands: List of hands indexed by seat.

    Returns:
        Dict mapping seat (as string) to formatted hand string.
    """
    return {str(i): format_cards(h) for i, h in enumerate(hands)}


def format_prompt(prompt: PromptCard | None) -> dict[str, object] | None:
    """Format a prompt card for the log."""
    if prompt is None:
        return None
    return {"text": prompt.text, "pick": prompt.pick}


def format_submission(submission: Submission) -> dict[str, object]:
    """Format one submission for the log."""
    return {
        "player": submission.player_index,
        "cards": list(submission.cards),
        "custom": submission.is_custom,
    }


def format_scores(players: list[Player]) -> dict[str, int]:
    """Map seat (as string) to score."""
    return {p.id: p.score for p in players}
