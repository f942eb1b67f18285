"""
Parser for stored deck JSON.

Deck format:
    {
        "name": "Argus Stronghold",
        "identity": "01054",
        "cards": {"01055": 3, "01056": 2},
        "date": "2018-10-01",
        "status": {"valid": {"legal": true, ...}, ...}
    }

`identity` and `cards` refer to card codes. `date` and `status` are the
cached result of an earlier evaluation and are optional.
"""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import ValidationError

from icebreaker.models.card import Card
from icebreaker.models.deck import Deck, DeckLine
from icebreaker.models.failure import FailureKind, KnownError
from icebreaker.models.format_result import DeckStatus
from icebreaker.models.snapshot import CardDatabaseSnapshot

logger = logging.getLogger(__name__)


def _lookup(snapshot: CardDatabaseSnapshot, code: str) -> Card:
    card = snapshot.card_by_code(str(code))
    if card is None:
        raise KnownError(
            kind=FailureKind.NOT_FOUND,
            message=f"Unknown card code: {code}",
        )
    return card


def _cached_status(data: Mapping[str, Any]) -> tuple[date | None, DeckStatus | None]:
    """
    Read the cached evaluation stored with a deck.

    The cache only saves work. One that cannot be read is dropped with a
    warning so the deck is evaluated from scratch.
    """
    if not data.get("status"):
        return None, None
    try:
        evaluated_on = date.fromisoformat(data["date"][:10]) if data.get("date") else None
        status = DeckStatus.model_validate(data["status"])
    except (TypeError, ValueError, ValidationError) as e:
        logger.warning("Discarding unreadable cached status for deck %r: %s", data.get("name"), e)
        return None, None
    return evaluated_on, status


def parse_deck(data: Mapping[str, Any], snapshot: CardDatabaseSnapshot) -> Deck:
    """
    Build a Deck from its stored JSON form.

    A missing identity is allowed; such a deck simply evaluates as invalid.

    Args:
        data: Decoded deck JSON
        snapshot: Snapshot used to resolve card codes

    Returns:
        Deck with resolved cards

    Raises:
        KnownError: If a card code is unknown or a field is malformed
    """
    if not isinstance(data, Mapping):
        raise KnownError(kind=FailureKind.INVALID_INPUT, message="Deck must be a JSON object")

    identity_code = data.get("identity")
    identity = _lookup(snapshot, identity_code) if identity_code else None

    lines: list[DeckLine] = []
    for code, qty in (data.get("cards") or {}).items():
        card = _lookup(snapshot, code)
        try:
            lines.append(DeckLine(card=card, qty=int(qty)))
        except (TypeError, ValueError) as e:
            raise KnownError(
                kind=FailureKind.INVALID_INPUT,
                message=f"Invalid quantity for {card.title}: {qty!r}",
            ) from e

    evaluated_on, status = _cached_status(data)

    return Deck(
        identity=identity,
        cards=tuple(lines),
        name=str(data.get("name", "")),
        status=status,
        date=evaluated_on,
    )
