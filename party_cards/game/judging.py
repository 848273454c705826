"""Anonymized display order for judging."""

import random
from typing import Sequence

from party_cards.models.game_state import Submission


class JudgingOrder:
    """Shuffled view of a round's submissions.

    The engine keeps submissions in the order they were made, which would
    reveal who wrote what. The judge sees them in a shuffled order and the
    chosen display slot is mapped back to the stored index.
    """

    def __init__(
        self,
        submissions: Sequence[Submission],
        rng: random.Random | None = None,
    ):
        """Shuffle submissions for display.

        Args:
            submissions: Submissions in engine order
            rng: Random source (a fresh Random if not provided)
        """
        rng = rng if rng is not None else random.Random()
        self._order = list(range(len(submissions)))
        rng.shuffle(self._order)
        self._submissions = tuple(submissions)

    def __len__(self) -> int:
        return len(self._order)

    @property
    def display_cards(self) -> list[tuple[str, ...]]:
        """Submitted cards in display order, without player information."""
        return [self._submissions[i].cards for i in self._order]

    def submission_index(self, display_slot: int) -> int | None:
        """Map a display slot to the engine's submission index."""
        if 0 <= display_slot < len(self._order):
            return self._order[display_slot]
        return None
