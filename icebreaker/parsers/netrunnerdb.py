"""
NetrunnerDB data normalizer.

Turns the raw NetrunnerDB API v2 payloads (cards, packs, cycles, mwl) into
a CardDatabaseSnapshot. Codes used by NetrunnerDB ("neutral-corp", "ice")
become the display names the rules engine works with ("Neutral", "ICE").

API docs: https://netrunnerdb.com/api/doc
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from icebreaker.config import DEFAULT_CARD_LIMIT, DEFAULT_PACK_QUANTITY
from icebreaker.models.card import Card
from icebreaker.models.card_set import CardSet
from icebreaker.models.failure import FailureKind, KnownError
from icebreaker.models.mwl import MWLEntry, MWLList
from icebreaker.models.snapshot import CardDatabaseSnapshot

logger = logging.getLogger(__name__)

SIDE_NAMES = {"corp": "Corp", "runner": "Runner"}

FACTION_NAMES = {
    "haas-bioroid": "Haas-Bioroid",
    "jinteki": "Jinteki",
    "nbn": "NBN",
    "weyland-consortium": "Weyland Consortium",
    "neutral-corp": "Neutral",
    "anarch": "Anarch",
    "criminal": "Criminal",
    "shaper": "Shaper",
    "adam": "Adam",
    "apex": "Apex",
    "sunny-lebeau": "Sunny Lebeau",
    "neutral-runner": "Neutral",
}

TYPE_NAMES = {"ice": "ICE"}

EMPTY_MWL = MWLList(name="No ban list", date_start=date.min)


def _display_name(code: str, names: Mapping[str, str]) -> str:
    return names.get(code, code.replace("-", " ").title())


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError as e:
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message=f"Invalid date: {value!r}",
        ) from e


def _data(payload: Mapping[str, Any] | list[Any]) -> list[dict[str, Any]]:
    """Unwrap the `data` envelope NetrunnerDB puts around every list."""
    if isinstance(payload, Mapping):
        return list(payload.get("data", []))
    return list(payload)


def parse_card_sets(
    packs: Iterable[Mapping[str, Any]],
    cycles: Iterable[Mapping[str, Any]],
) -> dict[str, CardSet]:
    """
    Build the set catalog, keyed by pack code.

    A pack that is the only member of its cycle is a big box (core sets,
    deluxe expansions). Rotation is tracked per cycle.
    """
    cycles_by_code = {cycle["code"]: cycle for cycle in cycles}

    catalog: dict[str, CardSet] = {}
    for pack in packs:
        cycle = cycles_by_code.get(pack.get("cycle_code", ""), {})
        catalog[pack["code"]] = CardSet(
            name=pack["name"],
            cycle=cycle.get("name", ""),
            bigbox=cycle.get("size") == 1,
            available=_parse_date(pack.get("date_release")),
            rotated=bool(cycle.get("rotated", False)),
            code=pack["code"],
            position=int(pack.get("position") or 0),
        )
    return catalog


def parse_card(raw: Mapping[str, Any], card_set: CardSet | None) -> Card:
    """
    Normalize a single NetrunnerDB card.

    Raises:
        KnownError: If the card lacks a code or title
    """
    try:
        code = raw["code"]
        title = raw["title"]
    except KeyError as e:
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message=f"Card record is missing {e.args[0]!r}",
            detail=str(dict(raw))[:200],
        ) from e

    limit = raw.get("deck_limit")
    quantity = raw.get("quantity")

    return Card(
        code=code,
        title=title,
        side=_display_name(raw.get("side_code", ""), SIDE_NAMES),
        faction=_display_name(raw.get("faction_code", ""), FACTION_NAMES),
        type=_display_name(raw.get("type_code", ""), TYPE_NAMES),
        factioncost=raw.get("faction_cost") or 0,
        agendapoints=raw.get("agenda_points"),
        limited=limit if limit is not None else DEFAULT_CARD_LIMIT,
        packquantity=quantity if quantity is not None else DEFAULT_PACK_QUANTITY,
        setname=card_set.name if card_set else "",
        rotated=card_set.rotated if card_set else False,
        minimumdecksize=raw.get("minimum_deck_size"),
        influencelimit=raw.get("influence_limit"),
    )


def parse_mwl_entry(raw: Mapping[str, Any]) -> MWLEntry:
    """Accepts both NetrunnerDB (deck_limit) and hyphenated (deck-limit) markers."""
    deck_limit = raw.get("deck_limit", raw.get("deck-limit"))
    restricted = raw.get("is_restricted", raw.get("is-restricted", False))
    return MWLEntry(deck_limit=deck_limit, is_restricted=bool(restricted))


def parse_mwl(lists: Iterable[Mapping[str, Any]], cards: Mapping[str, Card]) -> MWLList:
    """
    Pick the active banned/restricted list and key it by normalized title.

    Falls back to the most recent list when none is marked active, and to
    an empty list when there are none at all.
    """
    lists = list(lists)
    if not lists:
        return EMPTY_MWL

    active = [entry for entry in lists if entry.get("active")]
    chosen = active[0] if active else max(lists, key=lambda entry: entry.get("date_start") or "")

    entries: dict[str, MWLEntry] = {}
    for code, raw_entry in (chosen.get("cards") or {}).items():
        card = cards.get(code)
        if card is None:
            logger.warning("Ban list %r names unknown card code %s", chosen.get("name"), code)
            continue
        entries[card.normalizedtitle] = parse_mwl_entry(raw_entry)

    return MWLList(
        name=chosen.get("name", ""),
        date_start=_parse_date(chosen.get("date_start")) or date.min,
        cards=entries,
    )


def build_snapshot(
    cards: Mapping[str, Any] | list[Any],
    packs: Mapping[str, Any] | list[Any],
    cycles: Mapping[str, Any] | list[Any],
    mwl: Mapping[str, Any] | list[Any],
) -> CardDatabaseSnapshot:
    """
    Normalize raw NetrunnerDB payloads into a snapshot.

    Args:
        cards: /cards response (or its `data` list)
        packs: /packs response
        cycles: /cycles response
        mwl: /mwl response

    Returns:
        CardDatabaseSnapshot (version 0; the store stamps the real version)
    """
    catalog = parse_card_sets(_data(packs), _data(cycles))

    parsed: dict[str, Card] = {}
    for raw in _data(cards):
        card_set = catalog.get(raw.get("pack_code", ""))
        if card_set is None:
            logger.debug("Card %s has unknown pack %s", raw.get("code"), raw.get("pack_code"))
        card = parse_card(raw, card_set)
        parsed[card.code] = card

    return CardDatabaseSnapshot(
        cards=parsed,
        sets=tuple(sorted(catalog.values(), key=lambda s: (s.available or date.max, s.position))),
        mwl=parse_mwl(_data(mwl), parsed),
    )
