import itertools
import json
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

import pytest

from icebreaker.legality.clock import Clock, fixed_clock
from icebreaker.models.card import Card
from icebreaker.models.card_set import CardSet
from icebreaker.models.deck import Deck, DeckLine
from icebreaker.models.mwl import MWLEntry, MWLList
from icebreaker.models.snapshot import CardDatabaseSnapshot
from icebreaker.parsers.netrunnerdb import build_snapshot
from icebreaker.services.snapshot_store import snapshot_store

TODAY = date(2019, 1, 1)

CardFactory = Callable[..., Card]
DeckFactory = Callable[..., Deck]


@pytest.fixture(autouse=True)
def clear_snapshot_store():
    """Start and end every test with no process-wide snapshot loaded."""
    snapshot_store.clear()
    yield
    snapshot_store.clear()


@pytest.fixture
def clock() -> Clock:
    return fixed_clock(TODAY)


@pytest.fixture
def card_sets() -> tuple[CardSet, ...]:
    """
    Set catalog as of TODAY.

    - Newest cycle: Kitara (one pack still unreleased)
    - Second newest: Red Sand
    - Flashpoint is older; Creation and Control has rotated
    """
    return (
        CardSet("Creation and Control", "Creation and Control", True, date(2013, 6, 1), True),
        CardSet("Blood and Water", "Flashpoint", False, date(2017, 2, 1)),
        CardSet("Terminal Directive", "Terminal Directive", True, date(2017, 4, 1)),
        CardSet("Revised Core Set", "Revised Core Set", True, date(2017, 6, 1)),
        CardSet("Station One", "Red Sand", False, date(2017, 12, 1)),
        CardSet("Earth's Scion", "Red Sand", False, date(2018, 2, 1)),
        CardSet("Sovereign Sight", "Kitara", False, date(2018, 8, 1)),
        CardSet("Down the White Nile", "Kitara", False, date(2018, 9, 1)),
        CardSet("Reign and Reverie", "Reign and Reverie", True, date(2018, 12, 1)),
        CardSet("Council of the Crest", "Kitara", False, None),
    )


@pytest.fixture
def make_card() -> CardFactory:
    """Factory for cards with unique codes. Defaults to in-faction HB ICE."""
    counter = itertools.count(1)

    def _make(title: str | None = None, **fields: Any) -> Card:
        n = next(counter)
        values: dict[str, Any] = {
            "code": f"9{n:04d}",
            "title": title or f"Test Card {n}",
            "side": "Corp",
            "faction": "Haas-Bioroid",
            "type": "ICE",
            "factioncost": 1,
            "setname": "Revised Core Set",
        }
        values.update(fields)
        return Card(**values)

    return _make


@pytest.fixture
def make_deck() -> DeckFactory:
    """Factory for decks from (card, qty) pairs."""

    def _make(identity: Card | None, *lines: tuple[Card, int], **fields: Any) -> Deck:
        cards = tuple(DeckLine(card=card, qty=qty) for card, qty in lines)
        return Deck(identity=identity, cards=cards, **fields)

    return _make


@pytest.fixture
def corp_identity(make_card: CardFactory) -> Card:
    return make_card(
        "Haas-Bioroid: Engineering the Future",
        type="Identity",
        factioncost=0,
        limited=1,
        minimumdecksize=40,
        influencelimit=15,
    )


@pytest.fixture
def runner_identity(make_card: CardFactory) -> Card:
    return make_card(
        "Kate \"Mac\" McCaffrey: Digital Tinker",
        side="Runner",
        faction="Shaper",
        type="Identity",
        factioncost=0,
        limited=1,
        minimumdecksize=45,
        influencelimit=15,
    )


@pytest.fixture
def legal_corp_lines(make_card: CardFactory) -> list[tuple[Card, int]]:
    """40 in-faction core set cards carrying exactly 18 agenda points."""
    agendas = [
        (make_card(type="Agenda", factioncost=0, agendapoints=points), 3)
        for points in (1, 2, 3)
    ]
    ice = [(make_card(), 3) for _ in range(10)]
    return [*agendas, *ice, (make_card(), 1)]


@pytest.fixture
def legal_corp_deck(
    make_deck: DeckFactory,
    corp_identity: Card,
    legal_corp_lines: list[tuple[Card, int]],
) -> Deck:
    return make_deck(corp_identity, *legal_corp_lines, name="Core HB")


@pytest.fixture
def mwl() -> MWLList:
    return MWLList(
        name="Standard Ban List 18.09",
        date_start=date(2018, 9, 6),
        cards={
            "banned-card": MWLEntry(deck_limit=0),
            "restricted-one": MWLEntry(is_restricted=True),
            "restricted-two": MWLEntry(is_restricted=True),
        },
    )


@pytest.fixture
def snapshot(
    card_sets: tuple[CardSet, ...],
    mwl: MWLList,
    corp_identity: Card,
    runner_identity: Card,
) -> CardDatabaseSnapshot:
    cards = {card.code: card for card in (corp_identity, runner_identity)}
    return CardDatabaseSnapshot(cards=cards, sets=card_sets, mwl=mwl)


@pytest.fixture
def netrunnerdb_payloads() -> dict[str, dict[str, Any]]:
    """Minimal NetrunnerDB API v2 responses, keyed by endpoint."""
    return {
        "cycles": {
            "data": [
                {"code": "core2", "name": "Revised Core Set", "size": 1, "rotated": False},
                {"code": "genesis", "name": "Genesis", "size": 6, "rotated": True},
                {"code": "kitara", "name": "Kitara", "size": 6, "rotated": False},
            ]
        },
        "packs": {
            "data": [
                {
                    "code": "core2",
                    "cycle_code": "core2",
                    "name": "Revised Core Set",
                    "date_release": "2017-06-01",
                    "position": 1,
                },
                {
                    "code": "wla",
                    "cycle_code": "genesis",
                    "name": "What Lies Ahead",
                    "date_release": "2012-12-14",
                    "position": 1,
                },
                {
                    "code": "ss",
                    "cycle_code": "kitara",
                    "name": "Sovereign Sight",
                    "date_release": "2018-08-01",
                    "position": 1,
                },
            ]
        },
        "cards": {
            "data": [
                {
                    "code": "20055",
                    "title": "Haas-Bioroid: Engineering the Future",
                    "side_code": "corp",
                    "faction_code": "haas-bioroid",
                    "type_code": "identity",
                    "pack_code": "core2",
                    "minimum_deck_size": 40,
                    "influence_limit": 15,
                    "deck_limit": 1,
                    "quantity": 1,
                },
                {
                    "code": "20065",
                    "title": "Enigma",
                    "side_code": "corp",
                    "faction_code": "neutral-corp",
                    "type_code": "ice",
                    "pack_code": "core2",
                    "faction_cost": 0,
                    "deck_limit": 3,
                    "quantity": 3,
                },
                {
                    "code": "02003",
                    "title": "Sweeps Week",
                    "side_code": "corp",
                    "faction_code": "nbn",
                    "type_code": "operation",
                    "pack_code": "wla",
                    "faction_cost": 1,
                    "deck_limit": 3,
                    "quantity": 3,
                },
                {
                    "code": "26050",
                    "title": "Şifr",
                    "side_code": "runner",
                    "faction_code": "shaper",
                    "type_code": "hardware",
                    "pack_code": "ss",
                    "faction_cost": 2,
                    "deck_limit": 3,
                    "quantity": 1,
                },
            ]
        },
        "mwl": {
            "data": [
                {
                    "code": "standard-ban-list-18-08",
                    "name": "Standard Ban List 18.08",
                    "active": False,
                    "date_start": "2018-08-01",
                    "cards": {},
                },
                {
                    "code": "standard-ban-list-18-09",
                    "name": "Standard Ban List 18.09",
                    "active": True,
                    "date_start": "2018-09-06",
                    "cards": {
                        "26050": {"deck_limit": 0},
                        "20065": {"is_restricted": 1},
                    },
                },
            ]
        },
    }


@pytest.fixture
def card_data_dir(tmp_path: Path, netrunnerdb_payloads: dict[str, dict[str, Any]]) -> Path:
    """Data directory holding downloaded NetrunnerDB files."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    for endpoint, payload in netrunnerdb_payloads.items():
        (data_dir / f"{endpoint}.json").write_text(json.dumps(payload), encoding="utf-8")
    return data_dir


@pytest.fixture
def raw_snapshot(netrunnerdb_payloads: dict[str, dict[str, Any]]) -> CardDatabaseSnapshot:
    """Snapshot built from the NetrunnerDB payloads."""
    return build_snapshot(**netrunnerdb_payloads)
