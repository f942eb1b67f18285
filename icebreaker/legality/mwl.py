"""
Banned/restricted list (MWL) checks.

A card whose normalized title carries a deck limit is banned, whatever the
limit's value. Restricted titles are counted once each, the identity
included, and a deck may hold at most one.
"""

from icebreaker.config import MAX_RESTRICTED_TITLES
from icebreaker.models.card import Card
from icebreaker.models.deck import Deck
from icebreaker.models.format_result import Violation, ViolationCategory
from icebreaker.models.mwl import MWLList


def is_banned(mwl: MWLList, card: Card) -> bool:
    entry = mwl.entry(card.normalizedtitle)
    return entry is not None and entry.is_banned


def is_restricted(mwl: MWLList, card: Card) -> bool:
    entry = mwl.entry(card.normalizedtitle)
    return entry is not None and entry.is_restricted


def restricted_titles(mwl: MWLList, deck: Deck) -> list[str]:
    """Distinct restricted titles in the deck, identity first, in deck order."""
    titles: dict[str, str] = {}
    for line in deck.all_lines():
        card = line.card
        if is_restricted(mwl, card):
            titles.setdefault(card.normalizedtitle, card.title)
    return list(titles.values())


def restricted_card_type_count(mwl: MWLList, deck: Deck) -> int:
    return len(restricted_titles(mwl, deck))


def mwl_violations(mwl: MWLList, deck: Deck) -> list[Violation]:
    """
    Check a deck against the banned/restricted list.

    Returns:
        One violation per banned card, plus one if the deck holds too many
        restricted titles. Empty list means the deck is MWL legal.
    """
    violations = [
        Violation(ViolationCategory.BANNED, line.card.title)
        for line in deck.all_lines()
        if is_banned(mwl, line.card)
    ]

    restricted = restricted_titles(mwl, deck)
    if len(restricted) > MAX_RESTRICTED_TITLES:
        violations.append(
            Violation(ViolationCategory.TOO_MANY_RESTRICTED, restricted[MAX_RESTRICTED_TITLES])
        )

    return violations


def mwl_legal(mwl: MWLList, deck: Deck) -> bool:
    return not mwl_violations(mwl, deck)
