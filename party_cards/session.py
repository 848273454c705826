"""Wiring of deck selection and round engine for a UI collaborator."""

import logging
import random
from pathlib import Path
from typing import Any, Sequence

from party_cards.config import Config
from party_cards.deck import DeckCollection, DeckCombiner, load_deck_asset
from party_cards.game import JudgingOrder, RoundEngine
from party_cards.logging import GameLogger
from party_cards.models.game_state import GamePhase
from party_cards.utils.logger import setup_logging

logger = logging.getLogger(__name__)


class GameSession:
    """One running app session: pack selection, then games on the chosen deck.

    The session owns the shuffled judging order; the engine keeps
    submissions in the order they were made.
    """

    def __init__(
        self,
        collection: DeckCollection,
        config: Config | None = None,
        game_logger: GameLogger | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config or Config()
        self.rng = rng if rng is not None else random.Random()
        self.combiner = DeckCombiner(
            collection.catalog,
            collection.packs,
            select_all=self.config.deck.select_all_by_default,
        )
        self.game_logger = game_logger
        self.engine = RoundEngine(self.config, game_logger, rng=self.rng)
        self._judging: JudgingOrder | None = None

    @classmethod
    def from_asset(
        cls,
        path: Path | str | None = None,
        config: Config | None = None,
        game_logger: GameLogger | None = None,
    ) -> "GameSession":
        """Load the deck asset and create a session.

        Configures logging from the config. When no game_logger is given,
        one is created from config.event_log and closed by close().

        Args:
            path: Deck asset path (uses config.deck.asset_path if not provided)
            config: Configuration (uses defaults if not provided)
            game_logger: Event logger to use instead of the configured one

        Raises:
            DeckLoadError: If the asset cannot be loaded.
        """
        config = config or Config()
        setup_logging(config.logging.level)
        collection = load_deck_asset(path or config.deck.asset_path)

        if game_logger is None:
            game_logger = GameLogger(config.event_log)
            game_logger.open()
        return cls(collection, config, game_logger)

    def __enter__(self) -> "GameSession":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the event log."""
        if self.game_logger:
            self.game_logger.close()

    @property
    def can_start(self) -> bool:
        return self.combiner.can_continue

    def start_game(self, player_names: Sequence[str]) -> bool:
        """Start a game on the current selection.

        Returns:
            False if no pack is selected (nothing is started).
        """
        if not self.combiner.can_continue:
            logger.warning("Select at least one pack to start")
            return False
        self._judging = None
        self.engine.setup(self.combiner.combined_deck(), player_names)
        return True

    def judging_order(self) -> JudgingOrder | None:
        """Shuffled submissions for the current JUDGING phase.

        The same order is returned until the round ends.
        """
        if self.engine.phase != GamePhase.JUDGING:
            self._judging = None
            return None
        if self._judging is None:
            self._judging = JudgingOrder(self.engine.state.submissions, self.rng)
        return self._judging

    def pick_display_slot(self, display_slot: int) -> None:
        """Pick the winner by its position in the shuffled display."""
        order = self.judging_order()
        index = order.submission_index(display_slot) if order else None
        # An unknown slot is passed through so the engine records the error
        self.engine.pick_winner(display_slot if index is None else index)
        self._judging = None

    def next_round(self) -> None:
        """Continue after the round winner has been shown."""
        if self.engine.phase == GamePhase.SHOW_WINNER:
            self.engine.start_round()
