"""Card set (product) catalog models."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, slots=True)
class CardSet:
    """
    A releasable product: a big box expansion or a datapack.

    Attributes:
        name: Set name, matches Card.setname
        cycle: Name of the cycle this set belongs to
        bigbox: True for big box products (core sets, deluxes)
        available: Release date, None while unreleased
        rotated: True once the set has rotated out of the card pool
        code: Short set code (e.g., "core2")
        position: Position of the set within its cycle
    """

    name: str
    cycle: str
    bigbox: bool = False
    available: date | None = None
    rotated: bool = False
    code: str = ""
    position: int = 0
