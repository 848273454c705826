"""Validation of engine operations."""

from dataclasses import dataclass

from party_cards.config import RulesConfig
from party_cards.models.game_state import GamePhase, GameState


@dataclass
class ValidationResult:
    """Result of validating an operation."""

    is_valid: bool
    error_message: str = ""


VALID = ValidationResult(is_valid=True)


def _invalid(message: str) -> ValidationResult:
    return ValidationResult(is_valid=False, error_message=message)


class SubmissionValidator:
    """Checks setup, submissions and winner picks against the rules."""

    def __init__(self, rules: RulesConfig | None = None):
        """Initialize validator.

        Args:
            rules: Rules configuration (uses defaults if not provided)
        """
        self.rules = rules or RulesConfig()

    def validate_setup(self, player_names: list[str]) -> ValidationResult:
        """Check the player count is playable."""
        count = len(player_names)
        if not self.rules.min_players <= count <= self.rules.max_players:
            return _invalid(
                f"Need {self.rules.min_players}-{self.rules.max_players} players, got {count}."
            )
        return VALID

    def _validate_turn(self, state: GameState, player_index: int, player_count: int) -> ValidationResult:
        if state.phase != GamePhase.ROUND:
            return _invalid("Submissions are closed.")
        if not 0 <= player_index < player_count:
            return _invalid("No hand")
        if player_index == state.judge:
            return _invalid("The judge does not submit cards.")
        if any(s.player_index == player_index for s in state.submissions):
            return _invalid("Player already submitted this round.")
        if player_index != state.active_player:
            return _invalid("Not this player's turn.")
        return VALID

    def validate_card_submission(
        self,
        state: GameState,
        player_index: int,
        hand: list[str],
        selected: list[int],
        player_count: int,
    ) -> ValidationResult:
        """Validate submitting cards from a player's hand.

        Args:
            state: Current game state
            player_index: Seat submitting
            hand: That seat's hand
            selected: Hand positions in the order the player picked them
            player_count: Number of players

        Returns:
            ValidationResult
        """
        result = self._validate_turn(state, player_index, player_count)
        if not result.is_valid:
            return result

        if not selected:
            return _invalid("No card selected.")
        if len(set(selected)) != len(selected):
            return _invalid("The same card was selected twice.")
        if any(not 0 <= i < len(hand) for i in selected):
            return _invalid("Selected card is not in hand.")

        # A hand shortened by deck exhaustion may submit everything it has
        pick = state.current_prompt.pick if state.current_prompt else 1
        required = min(pick, len(hand))
        if len(selected) != required:
            return _invalid(f"Select exactly {required} card(s).")

        return VALID

    def validate_custom_submission(
        self,
        state: GameState,
        player_index: int,
        custom_card_uses: int,
        texts: list[str],
        player_count: int,
    ) -> ValidationResult:
        """Validate submitting player-written cards."""
        result = self._validate_turn(state, player_index, player_count)
        if not result.is_valid:
            return result

        if not texts or any(not t.strip() for t in texts):
            return _invalid("Custom card text cannot be empty.")

        pick = state.current_prompt.pick if state.current_prompt else 1
        if len(texts) != pick:
            return _invalid(f"Write exactly {pick} card(s).")

        if custom_card_uses + len(texts) > self.rules.max_custom_per_player:
            return _invalid("Custom card limit exceeded!")

        return VALID

    def validate_winner_pick(
        self,
        state: GameState,
        submission_index: int,
        player_count: int,
    ) -> ValidationResult:
        """Validate the judge's pick against the stored submissions."""
        if state.phase != GamePhase.JUDGING:
            return _invalid("No submissions to judge.")
        if not 0 <= submission_index < len(state.submissions):
            return _invalid("Winner index out of bounds.")
        if not 0 <= state.submissions[submission_index].player_index < player_count:
            return _invalid("Winning submission has no player.")
        return VALID
