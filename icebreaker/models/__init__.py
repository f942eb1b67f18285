from icebreaker.models.card import Card, normalize_title
from icebreaker.models.card_set import CardSet
from icebreaker.models.deck import Deck, DeckLine
from icebreaker.models.failure import (
    STANDARD_SUGGESTIONS,
    FailureDetail,
    FailureKind,
    KnownError,
)
from icebreaker.models.format_result import (
    STANDARD_MESSAGES,
    DeckClassification,
    DeckStatus,
    FormatResult,
    Violation,
    ViolationCategory,
    classify,
    render_reasons,
)
from icebreaker.models.mwl import MWLEntry, MWLList
from icebreaker.models.snapshot import CardDatabaseSnapshot

__all__ = [
    "Card",
    "CardDatabaseSnapshot",
    "CardSet",
    "Deck",
    "DeckClassification",
    "DeckLine",
    "DeckStatus",
    "FailureDetail",
    "FailureKind",
    "FormatResult",
    "KnownError",
    "MWLEntry",
    "MWLList",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "Violation",
    "ViolationCategory",
    "classify",
    "normalize_title",
    "render_reasons",
]
