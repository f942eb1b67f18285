"""
Banned/Restricted List Models.

The MWL names cards by normalized title. An entry may carry a deck limit
(banned) or a restricted marker. Partial numeric limits are not modelled:
any deck limit means the card is banned.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True, slots=True)
class MWLEntry:
    """Markers for a single title on the list."""

    deck_limit: int | None = None
    is_restricted: bool = False

    @property
    def is_banned(self) -> bool:
        return self.deck_limit is not None


@dataclass(frozen=True, slots=True)
class MWLList:
    """
    The current banned/restricted list.

    Attributes:
        name: List name (e.g., "Standard Ban List 18.09")
        date_start: Date the list became effective
        cards: Entries keyed by normalized card title
    """

    name: str
    date_start: date
    cards: Mapping[str, MWLEntry] = field(default_factory=dict)

    def entry(self, normalizedtitle: str) -> MWLEntry | None:
        return self.cards.get(normalizedtitle)
