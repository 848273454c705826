"""Player model."""

from pydantic import BaseModel, Field


class Player(BaseModel):
    """Player state."""

    id: str  # Seat index as string, stable for the whole game
    name: str = "Player"

    score: int = Field(default=0, ge=0)
    custom_card_uses: int = Field(default=0, ge=0)

    def reset_game_state(self) -> None:
        """Reset game-related state (called when playing again)."""
        self.score = 0
        self.custom_card_uses = 0

    def __str__(self) -> str:
        return f"Player{self.id}[{self.name}] ({self.score} pts)"

    def __repr__(self) -> str:
        return (
            f"Player(id={self.id!r}, name={self.name!r}, "
            f"score={self.score}, custom_card_uses={self.custom_card_uses})"
        )
