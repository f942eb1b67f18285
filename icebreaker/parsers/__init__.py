from icebreaker.parsers.deck_json import parse_deck
from icebreaker.parsers.netrunnerdb import (
    build_snapshot,
    parse_card,
    parse_card_sets,
    parse_mwl,
)

__all__ = [
    "build_snapshot",
    "parse_card",
    "parse_card_sets",
    "parse_deck",
    "parse_mwl",
]
