"""
Card Database Snapshot.

INVARIANT: Every evaluation reads exactly one snapshot for its whole
duration. A snapshot is never modified after construction; refreshing the
card database means building a new snapshot and swapping the reference.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from icebreaker.models.card import Card
from icebreaker.models.card_set import CardSet
from icebreaker.models.mwl import MWLList


@dataclass(frozen=True)
class CardDatabaseSnapshot:
    """
    Read-only view of cards, card sets and the banned/restricted list.

    Attributes:
        cards: All cards keyed by code
        sets: The card set catalog
        mwl: The current banned/restricted list
        version: Incremented every time the process-wide snapshot is replaced
    """

    cards: Mapping[str, Card]
    sets: tuple[CardSet, ...]
    mwl: MWLList
    version: int = 0
    _sets_by_name: dict[str, CardSet] = field(init=False, repr=False, compare=False)
    _cards_by_title: dict[str, Card] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_sets_by_name", {s.name: s for s in self.sets})
        titles: dict[str, Card] = {}
        for card in self.cards.values():
            # First printing wins
            titles.setdefault(card.title, card)
        object.__setattr__(self, "_cards_by_title", titles)

    def find_set(self, name: str) -> CardSet | None:
        """Look up a set by name. Unknown names return None."""
        return self._sets_by_name.get(name)

    def card_by_code(self, code: str) -> Card | None:
        return self.cards.get(code)

    def card_by_title(self, title: str) -> Card | None:
        return self._cards_by_title.get(title)

    def all_cards(self) -> list[Card]:
        return list(self.cards.values())
