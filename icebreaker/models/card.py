"""
Card Models.

Static card attributes as published by the card database. Cards are
loaded once per snapshot and shared by every evaluation, so they are
frozen and never mutated by the rules engine.
"""

import re
import unicodedata
from dataclasses import dataclass, field

from icebreaker.config import DEFAULT_CARD_LIMIT, DEFAULT_PACK_QUANTITY, DRAFT_SET_NAME


def normalize_title(title: str) -> str:
    """
    Normalize a card title into the key used by the banned/restricted list.

    Accents are stripped, everything is lowercased and runs of
    non-alphanumeric characters collapse to a single hyphen.

    Example: "Şifr" -> "sifr", "Jackson Howard" -> "jackson-howard"
    """
    decomposed = unicodedata.normalize("NFKD", title)
    ascii_title = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return re.sub(r"[^a-z0-9]+", "-", ascii_title.lower()).strip("-")


@dataclass(frozen=True, slots=True)
class Card:
    """
    A card definition from the card database.

    Attributes:
        code: Unique card code (e.g., "01001")
        title: Printed title
        side: "Corp" or "Runner"
        faction: Faction name (e.g., "Jinteki", "Neutral")
        type: Card type (e.g., "Agenda", "ICE", "Program", "Identity")
        factioncost: Influence cost when played out of faction
        agendapoints: Agenda points (agendas only)
        limited: Maximum legal copies in a deck
        packquantity: Copies included in a single product box
        setname: Name of the set this card was printed in
        rotated: Copied from the card's set for display. Rotation checks
            read CardSet.rotated, never this flag.
        normalizedtitle: Key used for banned/restricted list lookups
        minimumdecksize: Minimum deck size (identities only)
        influencelimit: Influence limit (identities only)
    """

    code: str
    title: str
    side: str
    faction: str
    type: str
    factioncost: int = 0
    agendapoints: int | None = None
    limited: int = DEFAULT_CARD_LIMIT
    packquantity: int = DEFAULT_PACK_QUANTITY
    setname: str = ""
    rotated: bool = False
    normalizedtitle: str = field(default="")
    minimumdecksize: int | None = None
    influencelimit: int | None = None

    def __post_init__(self) -> None:
        if not self.normalizedtitle:
            object.__setattr__(self, "normalizedtitle", normalize_title(self.title))

    @property
    def is_identity(self) -> bool:
        return self.type == "Identity"

    @property
    def is_draft_identity(self) -> bool:
        """Draft identities ignore influence and copy limits."""
        return self.setname == DRAFT_SET_NAME
