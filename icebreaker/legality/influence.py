"""
Influence calculation.

Off-faction cards cost influence per copy. Two kinds of exceptions apply,
in this order:
1. Identity discounts: some identities make the first copy of a category
   of card free.
2. Alliance cards: the whole line is free when its condition holds.
"""

import math
from collections.abc import Callable

from icebreaker.legality.alliance import is_alliance_free
from icebreaker.models.card import Card
from icebreaker.models.deck import Deck, DeckLine

# identity code -> cards whose first copy costs no influence
FIRST_COPY_DISCOUNTS: dict[str, Callable[[Card], bool]] = {
    "03029": lambda card: card.type == "Program",  # The Professor: Keeper of Knowledge
}


def id_inf_limit(identity: Card) -> float:
    """Influence limit of an identity. Draft identities are unbounded."""
    if identity.is_draft_identity:
        return math.inf
    return identity.influencelimit or 0


def _first_copy_discounted(identity: Card, card: Card) -> bool:
    applies = FIRST_COPY_DISCOUNTS.get(identity.code)
    return applies is not None and applies(card)


def line_influence_cost(deck: Deck, line: DeckLine) -> int:
    """
    Influence spent on one deck line.

    Args:
        deck: The deck the line belongs to
        line: The line to price

    Returns:
        Non-negative influence cost. In-faction and zero-cost lines are free.
    """
    identity = deck.identity
    card = line.card

    if identity is not None and card.faction == identity.faction:
        return 0

    base_cost = line.qty * card.factioncost
    if base_cost == 0:
        return 0

    if identity is not None and _first_copy_discounted(identity, card):
        return base_cost - card.factioncost
    if is_alliance_free(deck.cards, line):
        return 0
    return base_cost


def influence_map(deck: Deck) -> dict[str, int]:
    """Influence spent per faction. Factions with no spend are omitted."""
    spent: dict[str, int] = {}
    for line in deck.cards:
        cost = line_influence_cost(deck, line)
        if cost:
            spent[line.card.faction] = spent.get(line.card.faction, 0) + cost
    return spent


def influence_count(deck: Deck) -> int:
    """Total influence spent by the deck."""
    return sum(influence_map(deck).values())
