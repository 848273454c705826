"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from party_cards.config import EventLogConfig
from party_cards.models.card import PromptCard
from party_cards.models.game_state import Submission
from party_cards.models.player import Player

from .formatters import format_hands, format_prompt, format_scores, format_submission


class GameLogger:
    """Logger for game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    This allows step-by-step replay of the game.
    """

    def __init__(self, config: EventLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Event log configuration. If None, logging is disabled.
        """
        self.config = config or EventLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def open(self) -> None:
        """Open the log file if logging is enabled."""
        if self._file is None and self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_game_start(
        self,
        players: list[Player],
        hands: list[list[str]],
        deck_name: str,
    ) -> None:
        """Log game start with initial hands.

        Args:
            players: Players in seat order.
            hands: Initial hands indexed by seat.
            deck_name: Name of the active deck.
        """
        self._write({
            "type": "game_start",
            "timestamp": datetime.now().isoformat(),
            "deck": deck_name,
            "players": [{"id": p.id, "name": p.name} for p in players],
            "hands": format_hands(hands),
        })

    def log_round_start(
        self,
        round_num: int,
        prompt: PromptCard | None,
        judge: int,
        first_player: int,
    ) -> None:
        """Log the prompt and seats of a new round."""
        self._write({
            "type": "round_start",
            "round": round_num,
            "prompt": format_prompt(prompt),
            "judge": judge,
            "first_player": first_player,
        })

    def log_submission(self, round_num: int, submission: Submission) -> None:
        """Log one player's submission."""
        self._write({
            "type": "submission",
            "round": round_num,
            **format_submission(submission),
        })

    def log_winner(
        self,
        round_num: int,
        player_index: int,
        players: list[Player],
    ) -> None:
        """Log the judge's pick with the updated scores."""
        self._write({
            "type": "winner",
            "round": round_num,
            "player": player_index,
            "scores": format_scores(players),
        })

    def log_game_over(
        self,
        round_num: int,
        winners: list[int],
        players: list[Player],
    ) -> None:
        """Log game end with results.

        Args:
            round_num: Round in which the game ended.
            winners: Seats at or above the winning score.
            players: Players with final scores.
        """
        self._write({
            "type": "game_over",
            "round": round_num,
            "winners": winners,
            "scores": format_scores(players),
        })
