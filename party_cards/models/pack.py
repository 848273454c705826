"""Pack and active deck models."""

from pydantic import BaseModel

from .card import PromptCard


class Pack(BaseModel, frozen=True):
    """Named subset of the catalog, selectable as a unit."""

    name: str
    answer_indices: frozenset[int] = frozenset()
    prompt_indices: frozenset[int] = frozenset()
    is_official: bool = False

    def __str__(self) -> str:
        return (
            f"{self.name} ({len(self.answer_indices)} answers, "
            f"{len(self.prompt_indices)} prompts)"
        )


class ActiveDeck(BaseModel, frozen=True):
    """Cards of all currently selected packs, in catalog order."""

    answers: tuple[str, ...] = ()
    prompts: tuple[PromptCard, ...] = ()
    name: str = "Selected Decks"
    deck_id: str = "combined"

    def is_empty(self) -> bool:
        """Check if the deck has no cards at all."""
        return not self.answers and not self.prompts

    def __str__(self) -> str:
        return f"{self.name}: {len(self.answers)} answers, {len(self.prompts)} prompts"
