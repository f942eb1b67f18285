"""
Alternate Formats: card pools defined by print set.

Each format allows a fixed collection of sets (always including the core
set) and tolerates a limited number of cards from outside it. Cards from
outside the allowed sets are grouped by set, and each group counts as one
offense against the format:

- Modded: core set + newest cycle, no exceptions
- Cache Refresh: core set + newest two cycles + Terminal Directive, one
  big box of your choice, and no card beyond a single box's quantity
- Onesies: core set only, plus exactly one exception of any kind

The identity counts towards its set like any other card.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from icebreaker.config import settings
from icebreaker.legality.clock import Clock, system_clock
from icebreaker.legality.rotation import is_set_released
from icebreaker.models.card_set import CardSet
from icebreaker.models.deck import Deck, DeckLine
from icebreaker.models.format_result import FormatResult, Violation, ViolationCategory

MODDED_DESCRIPTION = "Modded: Revised Core Set and the most recent cycle"
CACHE_REFRESH_DESCRIPTION = (
    "Cache Refresh: Revised Core Set, one big box, Terminal Directive "
    "and the two most recent cycles"
)
ONESIES_DESCRIPTION = (
    "Onesies: Revised Core Set with a single exception, either one big box, "
    "one datapack or one card beyond core quantity"
)


@dataclass(frozen=True, slots=True)
class SetGroup:
    """Deck lines drawn from one set outside the allowed pool."""

    setname: str
    lines: tuple[DeckLine, ...]

    @property
    def example(self) -> str:
        return self.lines[0].card.title


@dataclass(frozen=True, slots=True)
class SetGroups:
    """Restricted set groups split by product type, largest group first."""

    bigboxes: tuple[SetGroup, ...] = ()
    datapacks: tuple[SetGroup, ...] = ()

    def offense_count(self) -> int:
        return len(self.bigboxes) + len(self.datapacks)


def group_restricted_sets(
    sets: Iterable[CardSet],
    allowed_set_names: Iterable[str],
    lines: Sequence[DeckLine],
) -> SetGroups:
    """
    Group lines from outside the allowed sets by their set.

    Groups are ordered by number of lines, descending, with ties broken by
    set name so the result does not depend on deck order. Sets missing from
    the catalog are treated as datapacks.

    Args:
        sets: The card set catalog
        allowed_set_names: Names of sets the format allows
        lines: Deck lines to check (identity included by callers)

    Returns:
        SetGroups with big box and datapack offenders
    """
    allowed = set(allowed_set_names)
    grouped: dict[str, list[DeckLine]] = {}
    for line in lines:
        if line.card.setname not in allowed:
            grouped.setdefault(line.card.setname, []).append(line)

    bigbox_names = {card_set.name for card_set in sets if card_set.bigbox}
    ordered = sorted(grouped.items(), key=lambda item: (-len(item[1]), item[0]))

    bigboxes: list[SetGroup] = []
    datapacks: list[SetGroup] = []
    for setname, members in ordered:
        group = SetGroup(setname=setname, lines=tuple(members))
        if setname in bigbox_names:
            bigboxes.append(group)
        else:
            datapacks.append(group)

    return SetGroups(bigboxes=tuple(bigboxes), datapacks=tuple(datapacks))


def newest_cycles(sets: Iterable[CardSet], count: int, clock: Clock = system_clock) -> list[str]:
    """
    Names of the most recent cycles with a released datapack.

    Cycles are ranked by the release date of their newest released datapack.
    """
    released = [s for s in sets if not s.bigbox and is_set_released(s, clock)]
    released.sort(key=lambda s: s.available or date.min, reverse=True)

    cycles: list[str] = []
    for card_set in released:
        if card_set.cycle not in cycles:
            cycles.append(card_set.cycle)
    return cycles[:count]


def sets_in_cycles(sets: Iterable[CardSet], cycles: Iterable[str]) -> list[str]:
    wanted = set(cycles)
    return [card_set.name for card_set in sets if card_set.cycle in wanted]


def cards_over_one_core(deck: Deck) -> list[DeckLine]:
    """Lines with more copies than a single product box provides."""
    return [line for line in deck.cards if line.qty > line.card.packquantity]


def _group_violations(groups: Iterable[SetGroup], category: ViolationCategory) -> list[Violation]:
    return [Violation(category, group.example) for group in groups]


def _over_core_violations(lines: Iterable[DeckLine]) -> list[Violation]:
    return [Violation(ViolationCategory.OVER_ONE_CORE, line.card.title) for line in lines]


def modded_legal(
    sets: Sequence[CardSet],
    deck: Deck,
    clock: Clock = system_clock,
) -> FormatResult:
    """Core set plus the newest cycle. Any outside card is a violation."""
    core = settings.core_set_name
    cycles = newest_cycles(sets, settings.modded_cycles, clock)
    allowed = [core, *sets_in_cycles(sets, cycles)]

    groups = group_restricted_sets(sets, allowed, deck.all_lines())
    bigboxes = [group for group in groups.bigboxes if group.setname != core]

    violations = _group_violations(bigboxes, ViolationCategory.RESTRICTED_BIGBOX)
    violations += _group_violations(groups.datapacks, ViolationCategory.RESTRICTED_DATAPACK)
    return FormatResult.from_violations(violations, MODDED_DESCRIPTION)


def default_cache_refresh_sets(sets: Sequence[CardSet], clock: Clock = system_clock) -> list[str]:
    cycles = newest_cycles(sets, settings.cache_refresh_cycles, clock)
    return [*sets_in_cycles(sets, cycles), *settings.cache_refresh_extra_sets]


def cache_refresh_legal(
    sets: Sequence[CardSet],
    deck: Deck,
    clock: Clock = system_clock,
    extra_sets: Iterable[str] | None = None,
    description: str = CACHE_REFRESH_DESCRIPTION,
) -> FormatResult:
    """
    Cache Refresh and its seasonal variants.

    Args:
        sets: The card set catalog
        deck: The deck to check
        clock: Source of today's date
        extra_sets: Sets allowed on top of the core set. Defaults to the
            newest two cycles plus Terminal Directive.
        description: Format description for the result

    Returns:
        FormatResult for this Cache Refresh variant
    """
    if extra_sets is None:
        extra_sets = default_cache_refresh_sets(sets, clock)
    allowed = [settings.core_set_name, *extra_sets]

    groups = group_restricted_sets(sets, allowed, deck.all_lines())

    violations = _over_core_violations(cards_over_one_core(deck))
    # One big box is free
    violations += _group_violations(groups.bigboxes[1:], ViolationCategory.RESTRICTED_BIGBOX)
    violations += _group_violations(groups.datapacks, ViolationCategory.RESTRICTED_DATAPACK)
    return FormatResult.from_violations(violations, description)


def onesies_legal(sets: Sequence[CardSet], deck: Deck) -> FormatResult:
    """
    Core set only, with one exception of any kind.

    A single over-quantity card, a single big box or a single datapack is
    tolerated. Two or more offenses in total make the deck illegal, and
    then every offense is reported.
    """
    groups = group_restricted_sets(sets, [settings.core_set_name], deck.all_lines())
    over_core = cards_over_one_core(deck)

    if len(over_core) + groups.offense_count() <= 1:
        return FormatResult(legal=True, description=ONESIES_DESCRIPTION)

    violations = _over_core_violations(over_core)
    violations += _group_violations(groups.bigboxes, ViolationCategory.RESTRICTED_BIGBOX)
    violations += _group_violations(groups.datapacks, ViolationCategory.RESTRICTED_DATAPACK)
    return FormatResult.from_violations(violations, ONESIES_DESCRIPTION)
