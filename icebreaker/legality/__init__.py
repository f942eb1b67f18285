"""
IceBreaker legality rules.

Pure evaluation of a deck against a card database snapshot. Nothing here
mutates the deck or the snapshot.
"""

from icebreaker.legality.alliance import is_alliance_card, is_alliance_free
from icebreaker.legality.clock import Clock, fixed_clock, is_past, system_clock
from icebreaker.legality.construction import (
    deck_violations,
    is_card_allowed,
    is_deck_valid,
    legal_num_copies,
    min_agenda_points,
    min_deck_size,
)
from icebreaker.legality.formats import (
    cache_refresh_legal,
    cards_over_one_core,
    group_restricted_sets,
    modded_legal,
    newest_cycles,
    onesies_legal,
)
from icebreaker.legality.influence import (
    id_inf_limit,
    influence_count,
    influence_map,
    line_influence_cost,
)
from icebreaker.legality.mwl import is_banned, mwl_legal, restricted_card_type_count
from icebreaker.legality.rotation import is_released, only_in_rotation
from icebreaker.legality.status import (
    calculate_deck_status,
    check_deck_status,
    trusted_deck_status,
)

__all__ = [
    "Clock",
    "cache_refresh_legal",
    "calculate_deck_status",
    "cards_over_one_core",
    "check_deck_status",
    "deck_violations",
    "fixed_clock",
    "group_restricted_sets",
    "id_inf_limit",
    "influence_count",
    "influence_map",
    "is_alliance_card",
    "is_alliance_free",
    "is_banned",
    "is_card_allowed",
    "is_deck_valid",
    "is_past",
    "is_released",
    "legal_num_copies",
    "line_influence_cost",
    "min_agenda_points",
    "min_deck_size",
    "modded_legal",
    "mwl_legal",
    "newest_cycles",
    "only_in_rotation",
    "onesies_legal",
    "restricted_card_type_count",
    "system_clock",
    "trusted_deck_status",
]
