"""Game state models."""

from enum import Enum

from pydantic import BaseModel, Field

from .card import PromptCard
from .player import Player


class GamePhase(str, Enum):
    """Phase of the round state machine."""

    WAITING = "waiting"  # No active prompt
    DEALING = "dealing"  # Transient, initial hand fill
    ROUND = "round"  # Non-judge players submit in turn
    JUDGING = "judging"  # Judge picks a winning submission
    SHOW_WINNER = "show_winner"  # Caller starts the next round
    GAME_OVER = "game_over"  # Terminal, see GameState.winners


class Submission(BaseModel, frozen=True):
    """Cards one player submitted for the current prompt."""

    player_index: int
    cards: tuple[str, ...]
    is_custom: bool = False

    def __str__(self) -> str:
        return " / ".join(self.cards)


class GameState(BaseModel):
    """Overall round state."""

    phase: GamePhase = GamePhase.WAITING

    current_prompt: PromptCard | None = None
    submissions: list[Submission] = Field(default_factory=list)

    judge: int = 0  # Seat of the current judge
    active_player: int = 0  # Seat whose turn it is
    round_number: int = 0

    round_winner: int | None = None  # Set in SHOW_WINNER and GAME_OVER
    winners: list[int] = Field(default_factory=list)  # Set in GAME_OVER

    error: str | None = None  # Latest recoverable error

    def reset_for_new_round(self) -> None:
        """Reset round-scoped state."""
        self.submissions = []
        self.round_winner = None

    def reset_for_new_game(self) -> None:
        """Reset state for a new game."""
        self.phase = GamePhase.WAITING
        self.current_prompt = None
        self.submissions = []
        self.judge = 0
        self.active_player = 0
        self.round_number = 0
        self.round_winner = None
        self.winners = []
        self.error = None

    def __str__(self) -> str:
        parts = [f"Round {self.round_number}", f"[{self.phase.value}]"]
        if self.current_prompt:
            parts.append(f"Prompt: {self.current_prompt}")
        parts.append(f"Judge: {self.judge}, active: {self.active_player}")
        return " ".join(parts)


class EngineSnapshot(BaseModel, frozen=True):
    """Read-only view of everything a UI renders."""

    phase: GamePhase
    players: tuple[Player, ...]
    current_hand: tuple[str, ...]
    current_prompt: PromptCard | None
    submissions: tuple[Submission, ...]
    judge: int
    active_player: int
    round_winner: int | None
    winners: tuple[Player, ...]
    error: str | None

    @property
    def prompt_text(self) -> str:
        """Prompt text, or empty string when no prompt is active."""
        return self.current_prompt.text if self.current_prompt else ""

    @property
    def pick(self) -> int:
        """Number of cards each non-judge submits this round."""
        return self.current_prompt.pick if self.current_prompt else 1
