"""Round engine: dealing, turn order, judging and scoring."""

from __future__ import annotations

import logging
import random
from typing import Callable, Sequence

from party_cards.config import Config
from party_cards.logging import GameLogger
from party_cards.models.card import PromptCard
from party_cards.models.game_state import EngineSnapshot, GamePhase, GameState, Submission
from party_cards.models.pack import ActiveDeck
from party_cards.models.player import Player

from .validator import SubmissionValidator, ValidationResult

logger = logging.getLogger(__name__)

# Error messages for deck exhaustion
OUT_OF_ANSWERS = "Ran out of answer cards."
OUT_OF_PROMPTS = "Ran out of prompt cards."


class RoundEngine:
    """Turn-by-turn state machine for one game session.

    Mutators never raise on rule violations. They record a message in
    ``state.error`` and leave everything else untouched; the next
    successful operation clears it.
    """

    def __init__(
        self,
        config: Config | None = None,
        game_logger: GameLogger | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize round engine.

        Args:
            config: Configuration (uses defaults if not provided)
            game_logger: GameLogger instance for detailed logging
            rng: Random source for draws (a fresh Random if not provided)
        """
        self.config = config or Config()
        self.rules = self.config.rules
        self.game_logger = game_logger
        self.rng = rng if rng is not None else random.Random()

        self.validator = SubmissionValidator(self.rules)

        self.state = GameState()
        self.deck: ActiveDeck | None = None
        self.players: list[Player] = []
        self.hands: list[list[str]] = []
        self.used_answer_indices: set[int] = set()
        self.used_prompt_indices: set[int] = set()
        self.new_game_requested = False

        self._on_change: Callable[[EngineSnapshot], None] | None = None
        self._on_game_end: Callable[[list[Player]], None] | None = None

    def set_callbacks(
        self,
        on_change: Callable[[EngineSnapshot], None] | None = None,
        on_game_end: Callable[[list[Player]], None] | None = None,
    ) -> None:
        """Set event callbacks.

        Args:
            on_change: Called with a fresh snapshot after every mutator
            on_game_end: Called with the winners when the game ends
        """
        self._on_change = on_change
        self._on_game_end = on_game_end

    # ------------------------------------------------------------------
    # Published state
    # ------------------------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def error(self) -> str | None:
        return self.state.error

    @property
    def current_hand(self) -> list[str]:
        """Hand of the seat that is currently acting."""
        if 0 <= self.state.active_player < len(self.hands):
            return self.hands[self.state.active_player]
        return []

    def snapshot(self) -> EngineSnapshot:
        """Get a read-only copy of the published state."""
        return EngineSnapshot(
            phase=self.state.phase,
            players=tuple(p.model_copy() for p in self.players),
            current_hand=tuple(self.current_hand),
            current_prompt=self.state.current_prompt,
            submissions=tuple(self.state.submissions),
            judge=self.state.judge,
            active_player=self.state.active_player,
            round_winner=self.state.round_winner,
            winners=tuple(self.players[i].model_copy() for i in self.state.winners),
            error=self.state.error,
        )

    def _publish(self) -> None:
        if self._on_change:
            self._on_change(self.snapshot())

    def _reject(self, result: ValidationResult) -> None:
        logger.warning(f"Rejected: {result.error_message}")
        self.state.error = result.error_message
        self._publish()

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------

    def setup(self, deck: ActiveDeck, player_names: Sequence[str]) -> None:
        """Start a new game with fresh players on the given deck.

        Args:
            deck: Active deck to draw from for the whole game
            player_names: One name per seat, seat 0 judges first
        """
        validation = self.validator.validate_setup(list(player_names))
        if not validation.is_valid:
            self._reject(validation)
            return

        self.deck = deck
        self.players = [
            Player(id=str(seat), name=name.strip() or "Player")
            for seat, name in enumerate(player_names)
        ]
        self.new_game_requested = False
        logger.info(f"Game setup: {len(self.players)} players, deck {deck}")
        self._start_game()

    def play_again(self) -> None:
        """Restart with the same players and deck, scores reset to zero."""
        if self.deck is None or not self.players:
            self._reject(ValidationResult(is_valid=False, error_message="No game to restart."))
            return

        for player in self.players:
            player.reset_game_state()
        logger.info("Playing again with the same players")
        self._start_game()

    def new_game(self) -> None:
        """Drop deck and players and return to WAITING."""
        self.deck = None
        self.players = []
        self.hands = []
        self.used_answer_indices.clear()
        self.used_prompt_indices.clear()
        self.state.reset_for_new_game()
        self.new_game_requested = True
        logger.info("New game requested")
        self._publish()

    def on_new_game_handled(self) -> None:
        """Acknowledge a new_game() request."""
        self.new_game_requested = False

    def _start_game(self) -> None:
        self.hands = [[] for _ in self.players]
        self.used_answer_indices.clear()
        self.used_prompt_indices.clear()
        self.state.reset_for_new_game()
        self.state.phase = GamePhase.DEALING

        dealt_all = self._deal_initial_hands()

        if self.game_logger:
            self.game_logger.log_game_start(
                self.players,
                self.hands,
                self.deck.name if self.deck else "",
            )

        self._open_round(None if dealt_all else OUT_OF_ANSWERS)

    def _deal_initial_hands(self) -> bool:
        """Fill every hand. Returns False if the answers ran out."""
        dealt_all = True
        for seat, hand in enumerate(self.hands):
            hand.clear()
            while len(hand) < self.rules.hand_size:
                card = self.draw_answer_card()
                if card is None:
                    dealt_all = False
                    logger.warning(f"Seat {seat} dealt a short hand ({len(hand)} cards)")
                    break
                hand.append(card)

        logger.debug(f"Dealt initial hands to {len(self.hands)} players")
        return dealt_all

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _draw_index(self, total: int, used: set[int]) -> int | None:
        """Pick a uniformly random unused index and mark it used.

        Rejection sampling is cheap while the used set is sparse. After
        draw_attempts collisions the remaining indices are listed and one is
        chosen directly, so None means the catalog really is exhausted.
        """
        if len(used) >= total:
            return None

        for _ in range(self.rules.draw_attempts):
            idx = self.rng.randrange(total)
            if idx not in used:
                used.add(idx)
                return idx

        remaining = [i for i in range(total) if i not in used]
        idx = self.rng.choice(remaining)
        used.add(idx)
        return idx

    def draw_answer_card(self) -> str | None:
        """Draw an answer card not yet dealt this game."""
        if self.deck is None:
            return None
        idx = self._draw_index(len(self.deck.answers), self.used_answer_indices)
        if idx is None:
            return None
        return self.deck.answers[idx]

    def draw_prompt_card(self) -> PromptCard | None:
        """Draw a prompt card not yet used this game."""
        if self.deck is None:
            return None
        idx = self._draw_index(len(self.deck.prompts), self.used_prompt_indices)
        if idx is None:
            return None
        return self.deck.prompts[idx]

    def _refill_hand(self, seat: int) -> bool:
        """Add one card to a hand. Returns False if the deck is exhausted."""
        card = self.draw_answer_card()
        if card is None:
            return False
        self.hands[seat].append(card)
        return True

    # ------------------------------------------------------------------
    # Rounds
    # ------------------------------------------------------------------

    def start_round(self) -> None:
        """Draw a prompt and open submissions for the next round.

        Called after SHOW_WINNER once the result has been shown.
        """
        if self.deck is None or not self.players:
            self._reject(ValidationResult(is_valid=False, error_message="No game in progress."))
            return
        if self.state.phase == GamePhase.GAME_OVER:
            self._reject(ValidationResult(is_valid=False, error_message="Game is over."))
            return

        self._open_round()

    def _open_round(self, error: str | None = None) -> None:
        """Draw a prompt and refill hands.

        Args:
            error: Message left in the error slot if the prompt draw succeeds
        """
        self.state.error = error
        self.state.reset_for_new_round()
        prompt = self.draw_prompt_card()
        if prompt is None:
            self.state.error = OUT_OF_PROMPTS
            self.state.phase = GamePhase.WAITING
            logger.warning("No unused prompt card left, waiting")
            self._publish()
            return

        player_count = len(self.players)
        self.state.current_prompt = prompt
        self.state.round_number += 1
        self.state.phase = GamePhase.ROUND
        self.state.active_player = (self.state.judge + 1) % player_count

        for seat, hand in enumerate(self.hands):
            while len(hand) < self.rules.hand_size:
                if not self._refill_hand(seat):
                    break

        logger.info(
            f"Round {self.state.round_number} started, judge: {self.state.judge}, "
            f"prompt: {prompt}"
        )

        if self.game_logger:
            self.game_logger.log_round_start(
                self.state.round_number,
                prompt,
                self.state.judge,
                self.state.active_player,
            )

        self._publish()

    def submit_card(self, player_index: int, selected_hand_indices: Sequence[int]) -> None:
        """Submit cards from a player's hand.

        Args:
            player_index: Seat submitting
            selected_hand_indices: Hand positions in the order the player
                picked them; the submission keeps this order
        """
        selected = list(selected_hand_indices)
        hand = self.hands[player_index] if 0 <= player_index < len(self.hands) else []
        validation = self.validator.validate_card_submission(
            self.state,
            player_index,
            hand,
            selected,
            len(self.players),
        )
        if not validation.is_valid:
            self._reject(validation)
            return

        cards = [hand[i] for i in selected]
        # Highest position first so earlier removals don't shift later ones
        for idx in sorted(selected, reverse=True):
            del hand[idx]

        self._record_submission(Submission(player_index=player_index, cards=tuple(cards)))

        for _ in cards:
            if not self._refill_hand(player_index):
                break

        self.advance_to_next_player_or_judge()
        self._publish()

    def submit_custom_card(self, player_index: int, texts: Sequence[str]) -> None:
        """Submit player-written cards instead of cards from the hand.

        Counts against the player's custom card allowance; the hand is
        not touched.
        """
        texts = list(texts)
        uses = (
            self.players[player_index].custom_card_uses
            if 0 <= player_index < len(self.players)
            else 0
        )
        validation = self.validator.validate_custom_submission(
            self.state,
            player_index,
            uses,
            texts,
            len(self.players),
        )
        if not validation.is_valid:
            self._reject(validation)
            return

        self.players[player_index].custom_card_uses += len(texts)
        self._record_submission(
            Submission(player_index=player_index, cards=tuple(texts), is_custom=True)
        )
        self.advance_to_next_player_or_judge()
        self._publish()

    def _record_submission(self, submission: Submission) -> None:
        self.state.error = None
        self.state.submissions.append(submission)
        logger.debug(f"Seat {submission.player_index} submitted {len(submission.cards)} card(s)")

        if self.game_logger:
            self.game_logger.log_submission(self.state.round_number, submission)

    def advance_to_next_player_or_judge(self) -> None:
        """Move to the next non-judge seat, or to JUDGING once everyone submitted."""
        player_count = len(self.players)
        if player_count == 0:
            return

        self.state.active_player = (self.state.active_player + 1) % player_count
        if self.state.active_player == self.state.judge:
            self.state.active_player = (self.state.active_player + 1) % player_count

        if len(self.state.submissions) >= player_count - 1:
            self.state.phase = GamePhase.JUDGING
            self.state.active_player = self.state.judge
            logger.info(f"All submissions in, judge {self.state.judge} is picking")

    def pick_winner(self, submission_index: int) -> None:
        """Award the point for a submission and end the round.

        Args:
            submission_index: Index into the stored (unshuffled) submissions
        """
        validation = self.validator.validate_winner_pick(
            self.state,
            submission_index,
            len(self.players),
        )
        if not validation.is_valid:
            self._reject(validation)
            return

        self.state.error = None
        winner = self.state.submissions[submission_index].player_index
        self.players[winner].score += 1
        self.state.round_winner = winner
        logger.info(f"Seat {winner} wins round {self.state.round_number}")

        if self.game_logger:
            self.game_logger.log_winner(self.state.round_number, winner, self.players)

        max_score = max(p.score for p in self.players)
        if max_score >= self.rules.winning_score:
            self.state.winners = [
                seat
                for seat, p in enumerate(self.players)
                if p.score >= self.rules.winning_score
            ]
            self.state.phase = GamePhase.GAME_OVER
            logger.info(f"Game over, winners: {self.state.winners}")

            if self.game_logger:
                self.game_logger.log_game_over(
                    self.state.round_number,
                    self.state.winners,
                    self.players,
                )
            self._publish()
            if self._on_game_end:
                self._on_game_end([self.players[i] for i in self.state.winners])
            return

        self.state.phase = GamePhase.SHOW_WINNER
        self.state.judge = (self.state.judge + 1) % len(self.players)
        self._publish()
