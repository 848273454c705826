"""Logging utilities and game state display."""

import logging
import sys

from party_cards.models.game_state import EngineSnapshot, GamePhase


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def describe_snapshot(snapshot: EngineSnapshot) -> str:
    """Render a one-line summary of the published engine state."""
    players = snapshot.players
    if snapshot.phase == GamePhase.GAME_OVER:
        names = ", ".join(p.name for p in snapshot.winners)
        return f"Game over! Winner(s): {names}"
    if snapshot.phase == GamePhase.SHOW_WINNER and snapshot.round_winner is not None:
        winner = players[snapshot.round_winner]
        return f"Round winner: {winner.name} ({winner.score} pts)"
    if snapshot.phase == GamePhase.JUDGING:
        return f"{players[snapshot.judge].name} is judging {len(snapshot.submissions)} submissions"
    if snapshot.phase == GamePhase.ROUND:
        return (
            f"{players[snapshot.active_player].name}: pick {snapshot.pick} "
            f"for \"{snapshot.prompt_text}\""
        )
    return f"[{snapshot.phase.value}]"
