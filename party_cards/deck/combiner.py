"""Pack selection and active deck computation."""

import logging
from typing import Callable, Iterable

from party_cards.models.card import CardCatalog
from party_cards.models.pack import ActiveDeck, Pack

logger = logging.getLogger(__name__)


def combine_packs(
    catalog: CardCatalog,
    packs: Iterable[Pack],
) -> ActiveDeck:
    """Union the cards of the given packs into one deck.

    Indices are sorted so repeated recomputation gives the same deck.
    Indices outside the catalog (or pointing at malformed entries) are dropped.

    Args:
        catalog: Card catalog the packs reference.
        packs: Selected packs.

    Returns:
        ActiveDeck with answers and prompts in catalog order.
    """
    answer_indices: set[int] = set()
    prompt_indices: set[int] = set()
    for pack in packs:
        answer_indices |= pack.answer_indices
        prompt_indices |= pack.prompt_indices

    answers = [catalog.answer_at(i) for i in sorted(answer_indices)]
    prompts = [catalog.prompt_at(i) for i in sorted(prompt_indices)]

    return ActiveDeck(
        answers=tuple(a for a in answers if a is not None),
        prompts=tuple(p for p in prompts if p is not None),
    )


class DeckCombiner:
    """Tracks which packs are selected and publishes the resulting deck.

    Every selection mutator recomputes the deck in full before returning,
    so combined_deck() always matches the latest selection.
    """

    def __init__(
        self,
        catalog: CardCatalog,
        packs: Iterable[Pack],
        select_all: bool = True,
    ):
        """Initialize combiner.

        Args:
            catalog: Card catalog shared by all packs.
            packs: Available packs; pack id is the position in this sequence.
            select_all: Start with every pack selected.
        """
        self.catalog = catalog
        self.packs: tuple[Pack, ...] = tuple(packs)
        self._selection: frozenset[int] = frozenset()
        self._deck = ActiveDeck()
        self._on_change: Callable[[ActiveDeck], None] | None = None

        if select_all:
            self.select_all()

    def set_callbacks(
        self,
        on_change: Callable[[ActiveDeck], None] | None = None,
    ) -> None:
        """Set event callbacks.

        Args:
            on_change: Called with the new deck after every recomputation
        """
        self._on_change = on_change

    @property
    def selected_pack_ids(self) -> frozenset[int]:
        """Currently selected pack ids."""
        return self._selection

    @property
    def can_continue(self) -> bool:
        """At least one pack must be selected to start a game."""
        return bool(self._selection)

    def combined_deck(self) -> ActiveDeck:
        """Get the deck for the current selection."""
        return self._deck

    def set_selection(self, pack_ids: Iterable[int]) -> ActiveDeck:
        """Replace the selection. Unknown pack ids are ignored."""
        self._selection = frozenset(
            i for i in pack_ids if 0 <= i < len(self.packs)
        )
        return self._recompute()

    def toggle_selection(self, pack_id: int) -> ActiveDeck:
        """Select the pack if unselected, deselect it otherwise."""
        if pack_id in self._selection:
            return self.set_selection(self._selection - {pack_id})
        return self.set_selection(self._selection | {pack_id})

    def select_all(self) -> ActiveDeck:
        """Select every pack."""
        return self.set_selection(range(len(self.packs)))

    def select_none(self) -> ActiveDeck:
        """Deselect every pack."""
        return self.set_selection(())

    def _recompute(self) -> ActiveDeck:
        selected = [self.packs[i] for i in sorted(self._selection)]
        self._deck = combine_packs(self.catalog, selected)
        logger.debug(
            f"Selected {len(selected)}/{len(self.packs)} packs -> {self._deck}"
        )
        if self._on_change:
            self._on_change(self._deck)
        return self._deck
