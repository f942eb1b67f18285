"""
Alliance Cards: influence waived when the rest of the deck qualifies.

Each alliance card has its own condition. The conditions live in a single
table keyed by card code; adding a new alliance card means adding one
predicate and one table entry.
"""

from collections.abc import Callable, Sequence

from icebreaker.config import ALLIANCE_FACTION_THRESHOLD
from icebreaker.models.card import Card
from icebreaker.models.deck import DeckLine

AllianceRule = Callable[[Sequence[DeckLine], DeckLine], bool]


def _count(lines: Sequence[DeckLine], predicate: Callable[[Card], bool]) -> int:
    return sum(line.qty for line in lines if predicate(line.card))


def same_faction_rule(cards: Sequence[DeckLine], line: DeckLine) -> bool:
    """Free with 6 or more copies of same-faction, non-alliance cards."""
    faction = line.card.faction
    count = _count(cards, lambda c: c.faction == faction and not is_alliance_card(c))
    return count >= ALLIANCE_FACTION_THRESHOLD


def few_ice_rule(cards: Sequence[DeckLine], line: DeckLine) -> bool:
    """Free with 15 or fewer ICE."""
    return _count(cards, lambda c: c.type == "ICE") <= 15


def large_deck_rule(cards: Sequence[DeckLine], line: DeckLine) -> bool:
    """Free with 50 or more cards."""
    return sum(deck_line.qty for deck_line in cards) >= 50


def pad_campaign_rule(cards: Sequence[DeckLine], line: DeckLine) -> bool:
    """Free with exactly 3 copies of PAD Campaign."""
    return _count(cards, lambda c: c.title == "PAD Campaign") == 3


def many_assets_rule(cards: Sequence[DeckLine], line: DeckLine) -> bool:
    """Free with 7 or more assets."""
    return _count(cards, lambda c: c.type == "Asset") >= 7


ALLIANCE_FREE_RULES: dict[str, AllianceRule] = {
    "10013": same_faction_rule,  # Heritage Committee
    "10018": few_ice_rule,  # Mumba Temple
    "10019": large_deck_rule,  # Museum of History
    "10029": same_faction_rule,  # Product Recall
    "10038": pad_campaign_rule,  # PAD Factory
    "10067": same_faction_rule,  # Jeeves Model Bioroids
    "10068": same_faction_rule,  # Raman Rai
    "10071": same_faction_rule,  # Salem's Hospitality
    "10072": same_faction_rule,  # Executive Search Firm
    "10076": many_assets_rule,  # Mumbad Virtual Tour
    "10094": same_faction_rule,  # Consulting Visit
    "10109": same_faction_rule,  # Ibrahim Salem
}


def is_alliance_card(card: Card) -> bool:
    return card.code in ALLIANCE_FREE_RULES


def is_alliance_free(cards: Sequence[DeckLine], line: DeckLine) -> bool:
    """
    Check whether an alliance card's influence is waived.

    Args:
        cards: All card lines of the deck (identity excluded)
        line: The line being priced

    Returns:
        True if the card is an alliance card and its condition holds.
        Cards outside the alliance table are never free.
    """
    rule = ALLIANCE_FREE_RULES.get(line.card.code)
    if rule is None:
        return False
    return rule(cards, line)
