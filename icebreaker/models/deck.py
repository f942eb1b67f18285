import datetime
from dataclasses import dataclass, field

from icebreaker.models.card import Card
from icebreaker.models.format_result import DeckStatus


@dataclass(frozen=True, slots=True)
class DeckLine:
    """One entry in a deck list: a card and how many copies."""

    card: Card
    qty: int

    def __post_init__(self) -> None:
        if self.qty < 1:
            raise ValueError(
                f"Deck line for '{self.card.title}' must have qty >= 1, got {self.qty}"
            )


@dataclass(frozen=True)
class Deck:
    """
    A proposed deck. Owned by the caller; the rules engine never mutates it.

    Attributes:
        identity: The identity card (None makes the deck invalid)
        cards: Deck lines excluding the identity
        name: Deck name (if known)
        status: Previously computed status (if any)
        date: Date the cached status was computed
    """

    identity: Card | None
    cards: tuple[DeckLine, ...] = field(default_factory=tuple)
    name: str = ""
    status: DeckStatus | None = None
    date: datetime.date | None = None

    def card_count(self) -> int:
        """Total number of cards (counting quantities, excluding identity)."""
        return sum(line.qty for line in self.cards)

    def all_lines(self) -> tuple[DeckLine, ...]:
        """Identity as a single-copy line followed by the card lines."""
        if self.identity is None:
            return self.cards
        return (DeckLine(card=self.identity, qty=1), *self.cards)
