"""Card and catalog models."""

from pydantic import BaseModel, Field


class PromptCard(BaseModel, frozen=True):
    """Prompt ("black") card with the number of answers it asks for."""

    text: str
    pick: int = Field(default=1, ge=1)

    def __str__(self) -> str:
        if self.pick > 1:
            return f"{self.text} [pick {self.pick}]"
        return self.text


class CardCatalog(BaseModel, frozen=True):
    """All answer and prompt cards of a deck asset, in asset order.

    Packs reference cards by their position in these two sequences, so an
    entry that failed to parse is kept as None instead of being removed.
    """

    answers: tuple[str | None, ...] = ()
    prompts: tuple[PromptCard | None, ...] = ()

    def answer_at(self, index: int) -> str | None:
        """Get answer text at index, or None if out of range or malformed."""
        if 0 <= index < len(self.answers):
            return self.answers[index]
        return None

    def prompt_at(self, index: int) -> PromptCard | None:
        """Get prompt card at index, or None if out of range or malformed."""
        if 0 <= index < len(self.prompts):
            return self.prompts[index]
        return None
