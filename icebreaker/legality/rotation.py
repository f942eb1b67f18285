"""
Rotation: is every card in a released, non-rotated set?

Sets are matched by name. A card whose set is missing from the catalog is
treated as not released: card data and set data may be out of sync, and
that must never crash an evaluation.
"""

from collections.abc import Iterable

from icebreaker.legality.clock import Clock, is_past, system_clock
from icebreaker.models.card import Card
from icebreaker.models.card_set import CardSet
from icebreaker.models.deck import Deck
from icebreaker.models.format_result import Violation, ViolationCategory


def find_set(sets: Iterable[CardSet], name: str) -> CardSet | None:
    return next((card_set for card_set in sets if card_set.name == name), None)


def is_set_released(card_set: CardSet | None, clock: Clock = system_clock) -> bool:
    """True if the set is known, not rotated, and released before today."""
    if card_set is None or card_set.rotated:
        return False
    return is_past(card_set.available, clock)


def is_released(sets: Iterable[CardSet], card: Card, clock: Clock = system_clock) -> bool:
    return is_set_released(find_set(sets, card.setname), clock)


def rotation_violations(
    sets: Iterable[CardSet],
    deck: Deck,
    clock: Clock = system_clock,
) -> list[Violation]:
    """One violation per card (identity included) outside the rotation pool."""
    sets = tuple(sets)
    violations = [
        Violation(ViolationCategory.NOT_RELEASED, line.card.title)
        for line in deck.all_lines()
        if not is_released(sets, line.card, clock)
    ]
    if deck.identity is None:
        violations.insert(0, Violation(ViolationCategory.MISSING_IDENTITY))
    return violations


def only_in_rotation(sets: Iterable[CardSet], deck: Deck, clock: Clock = system_clock) -> bool:
    return not rotation_violations(sets, deck, clock)
