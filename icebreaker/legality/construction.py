"""
Core deck construction rules.

A deck is valid when:
1. It has an identity
2. It meets the identity's minimum deck size
3. It stays within the identity's influence limit
4. Every card may be included with the identity
5. No card exceeds its copy limit
6. A Corp deck's agenda points fall in the band set by its size
"""

from collections.abc import Mapping

from icebreaker.legality.influence import id_inf_limit, influence_count, line_influence_cost
from icebreaker.models.card import Card
from icebreaker.models.deck import Deck, DeckLine
from icebreaker.models.format_result import Violation, ViolationCategory

# identity code -> faction whose cards it may never include
FORBIDDEN_FACTIONS: dict[str, str] = {
    "03002": "Jinteki",  # Custom Biotics: Engineered for Success
}


def min_deck_size(identity: Card, overrides: Mapping[str, int] | None = None) -> int:
    """Minimum deck size for an identity, optionally overridden by code."""
    if overrides and identity.code in overrides:
        return overrides[identity.code]
    return identity.minimumdecksize or 0


def is_card_allowed(card: Card, identity: Card) -> bool:
    """True if the card may be included in a deck with this identity."""
    if card.is_identity:
        return False
    if card.side != identity.side:
        return False
    if card.type == "Agenda" and not (
        card.faction in ("Neutral", identity.faction) or identity.is_draft_identity
    ):
        return False
    return FORBIDDEN_FACTIONS.get(identity.code) != card.faction


def legal_num_copies(identity: Card, line: DeckLine) -> bool:
    """True if the line does not exceed the card's copy limit."""
    return identity.is_draft_identity or line.qty <= line.card.limited


def agenda_points(deck: Deck) -> int:
    return sum(line.qty * (line.card.agendapoints or 0) for line in deck.cards)


def min_agenda_points(deck: Deck, overrides: Mapping[str, int] | None = None) -> int:
    """
    Lower bound of the agenda point band.

    Two points per five cards above the minimum deck size, plus two.
    Example: a 40-card deck needs 18 or 19 agenda points.
    """
    size = deck.card_count()
    if deck.identity is not None:
        size = max(size, min_deck_size(deck.identity, overrides))
    return 2 + 2 * (size // 5)


def deck_violations(
    deck: Deck,
    min_size_overrides: Mapping[str, int] | None = None,
) -> list[Violation]:
    """
    Check the core construction rules.

    Args:
        deck: The deck to check
        min_size_overrides: Identity code -> minimum deck size replacements

    Returns:
        List of violations. Empty list means the deck is valid.
    """
    identity = deck.identity
    if identity is None:
        return [Violation(ViolationCategory.MISSING_IDENTITY)]

    violations: list[Violation] = []

    if deck.card_count() < min_deck_size(identity, min_size_overrides):
        violations.append(Violation(ViolationCategory.DECK_TOO_SMALL, identity.title))

    if influence_count(deck) > id_inf_limit(identity):
        priciest = max(deck.cards, key=lambda line: line_influence_cost(deck, line))
        violations.append(Violation(ViolationCategory.OVER_INFLUENCE, priciest.card.title))

    for line in deck.cards:
        if not is_card_allowed(line.card, identity):
            violations.append(Violation(ViolationCategory.CARD_NOT_ALLOWED, line.card.title))
        if not legal_num_copies(identity, line):
            violations.append(Violation(ViolationCategory.TOO_MANY_COPIES, line.card.title))

    if identity.side != "Runner":
        lowest = min_agenda_points(deck, min_size_overrides)
        if not lowest <= agenda_points(deck) <= lowest + 1:
            violations.append(Violation(ViolationCategory.AGENDA_POINTS))

    return violations


def is_deck_valid(deck: Deck, min_size_overrides: Mapping[str, int] | None = None) -> bool:
    return not deck_violations(deck, min_size_overrides)
