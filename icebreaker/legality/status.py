"""
Deck status aggregation.

Runs every evaluator against one card database snapshot and folds the
per-format verdicts into a single classification.

INVARIANT: An evaluation reads the snapshot reference exactly once. A
snapshot swapped in while a deck is being evaluated is only seen by the
next evaluation.
"""

import logging
from collections.abc import Mapping
from typing import Any

from icebreaker.config import settings
from icebreaker.legality.clock import Clock, system_clock
from icebreaker.legality.construction import deck_violations
from icebreaker.legality.formats import (
    cache_refresh_legal,
    modded_legal,
    newest_cycles,
    onesies_legal,
    sets_in_cycles,
)
from icebreaker.legality.mwl import mwl_violations
from icebreaker.legality.rotation import rotation_violations
from icebreaker.models.card_set import CardSet
from icebreaker.models.deck import Deck
from icebreaker.models.format_result import (
    DeckClassification,
    DeckStatus,
    FormatResult,
    classify,
)
from icebreaker.models.snapshot import CardDatabaseSnapshot
from icebreaker.services.snapshot_store import snapshot_store

logger = logging.getLogger(__name__)

VALID = "valid"
MWL = "mwl"
ROTATION = "rotation"
ONESIES = "onesies"
CACHE_REFRESH = "cache-refresh"
MODDED = "modded"

VALID_DESCRIPTION = "Basic deckbuilding rules"
ROTATION_DESCRIPTION = "Only released cards from sets that have not rotated"


def seasonal_sets(sets: tuple[CardSet, ...], clock: Clock = system_clock) -> list[str]:
    """Sets allowed by the seasonal Cache Refresh variant."""
    cycles = newest_cycles(sets, settings.seasonal_cycles, clock)
    return [*sets_in_cycles(sets, cycles), *settings.seasonal_extra_sets]


def calculate_deck_status(
    deck: Deck,
    snapshot: CardDatabaseSnapshot | None = None,
    clock: Clock = system_clock,
) -> DeckStatus:
    """
    Evaluate a deck against every format.

    Args:
        deck: The deck to evaluate
        snapshot: Card database snapshot. Defaults to the process-wide one.
        clock: Source of today's date for release checks

    Returns:
        DeckStatus keyed by format

    Raises:
        KnownError: If no snapshot was given and none has been loaded
    """
    if snapshot is None:
        snapshot = snapshot_store.current()

    sets = snapshot.sets
    mwl = snapshot.mwl

    results: dict[str, FormatResult] = {
        VALID: FormatResult.from_violations(deck_violations(deck), VALID_DESCRIPTION),
        MWL: FormatResult.from_violations(mwl_violations(mwl, deck), f"Legal under {mwl.name}"),
        ROTATION: FormatResult.from_violations(
            rotation_violations(sets, deck, clock), ROTATION_DESCRIPTION
        ),
        ONESIES: onesies_legal(sets, deck),
        CACHE_REFRESH: cache_refresh_legal(sets, deck, clock),
        settings.seasonal_format_key: cache_refresh_legal(
            sets,
            deck,
            clock,
            extra_sets=seasonal_sets(sets, clock),
            description=settings.seasonal_description,
        ),
        MODDED: modded_legal(sets, deck, clock),
    }

    status = DeckStatus(results)
    logger.debug(
        "Evaluated deck %r against snapshot v%d: %s",
        deck.name,
        snapshot.version,
        status.classification.value,
    )
    return status


def _is_legal(result: Any) -> bool:
    if isinstance(result, Mapping):
        return bool(result.get("legal", False))
    return bool(getattr(result, "legal", False))


def check_deck_status(status: DeckStatus | Mapping[str, Any]) -> DeckClassification:
    """
    Classify a deck from its per-format verdicts.

    Only each verdict's `legal` flag is read, so plain mappings such as
    `{"valid": {"legal": True}, "mwl": {"legal": False}}` are accepted as-is.

    Returns:
        LEGAL if valid, mwl and rotation all pass; CASUAL if only valid
        passes; INVALID otherwise.
    """
    if isinstance(status, DeckStatus):
        return status.classification
    return classify({key: _is_legal(result) for key, result in status.items()})


def trusted_deck_status(
    deck: Deck,
    snapshot: CardDatabaseSnapshot | None = None,
    clock: Clock = system_clock,
) -> DeckStatus:
    """
    Reuse a deck's cached status unless the banned/restricted list is newer.

    The cache is trusted only when the deck was evaluated strictly after
    the current list took effect. Otherwise the status is recomputed.
    """
    if snapshot is None:
        snapshot = snapshot_store.current()

    if deck.status is not None and deck.date is not None and deck.date > snapshot.mwl.date_start:
        return deck.status

    logger.debug("Cached status for deck %r is stale, recomputing", deck.name)
    return calculate_deck_status(deck, snapshot, clock)
