"""
Format Verdict Models.

Every evaluator collects structured Violation records first and renders
them into a FormatResult last. The rendered reason is the stable output
contract: newline-joined, one line per violation, each naming an example
offending card.

INVARIANT: FormatResult.reason is non-empty if and only if the deck is
not legal in that format.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator


class ViolationCategory(str, Enum):
    """Classification of legality violations."""

    # Core construction
    MISSING_IDENTITY = "missing_identity"
    DECK_TOO_SMALL = "deck_too_small"
    OVER_INFLUENCE = "over_influence"
    CARD_NOT_ALLOWED = "card_not_allowed"
    TOO_MANY_COPIES = "too_many_copies"
    AGENDA_POINTS = "agenda_points"

    # Banned/restricted list
    BANNED = "banned"
    TOO_MANY_RESTRICTED = "too_many_restricted"

    # Rotation
    NOT_RELEASED = "not_released"

    # Alternate formats
    OVER_ONE_CORE = "over_one_core"
    RESTRICTED_BIGBOX = "restricted_bigbox"
    RESTRICTED_DATAPACK = "restricted_datapack"


STANDARD_MESSAGES: dict[ViolationCategory, str] = {
    ViolationCategory.MISSING_IDENTITY: "Deck has no identity",
    ViolationCategory.DECK_TOO_SMALL: "Deck is below the identity's minimum size",
    ViolationCategory.OVER_INFLUENCE: "Deck spends more influence than the identity allows",
    ViolationCategory.CARD_NOT_ALLOWED: "Card cannot be included with this identity",
    ViolationCategory.TOO_MANY_COPIES: "Too many copies of a card",
    ViolationCategory.AGENDA_POINTS: "Agenda points outside the allowed range",
    ViolationCategory.BANNED: "Contains a banned card",
    ViolationCategory.TOO_MANY_RESTRICTED: "Contains more than one restricted card",
    ViolationCategory.NOT_RELEASED: "Contains a card that is rotated or not yet released",
    ViolationCategory.OVER_ONE_CORE: "Uses more copies than a single box provides",
    ViolationCategory.RESTRICTED_BIGBOX: "Uses cards from a restricted big box",
    ViolationCategory.RESTRICTED_DATAPACK: "Uses cards from a restricted datapack",
}


@dataclass(frozen=True, slots=True)
class Violation:
    """
    A single legality problem.

    Attributes:
        category: What kind of rule was broken
        example: Title of an offending card (empty for deck-wide problems)
    """

    category: ViolationCategory
    example: str = ""

    def render(self) -> str:
        message = STANDARD_MESSAGES[self.category]
        if self.example:
            return f"{message}: e.g. {self.example}"
        return message


def render_reasons(violations: Iterable[Violation]) -> str:
    """Render violations as a newline-joined reason, skipping empty fragments."""
    fragments = (violation.render() for violation in violations)
    return "\n".join(fragment for fragment in fragments if fragment)


class FormatResult(BaseModel):
    """Verdict for one format."""

    model_config = ConfigDict(frozen=True)

    legal: bool = Field(..., description="True if the deck is legal in this format")
    reason: str = Field(default="", description="Newline-joined violations (empty if legal)")
    description: str = Field(default="", description="Human-readable format description")

    @model_validator(mode="after")
    def _reason_matches_verdict(self) -> "FormatResult":
        if self.legal and self.reason:
            raise ValueError("A legal result must not carry a reason")
        if not self.legal and not self.reason:
            raise ValueError("An illegal result must carry a reason")
        return self

    @classmethod
    def from_violations(
        cls,
        violations: Iterable[Violation],
        description: str,
    ) -> "FormatResult":
        """Build a verdict: legal exactly when there are no violations."""
        reason = render_reasons(violations)
        return cls(legal=not reason, reason=reason, description=description)


class DeckClassification(str, Enum):
    """Overall verdict derived from the per-format results."""

    LEGAL = "legal"
    CASUAL = "casual"
    INVALID = "invalid"


def classify(legal_by_format: Mapping[str, bool]) -> DeckClassification:
    """
    Fold per-format legality into one classification.

    - legal: valid, mwl and rotation all pass
    - casual: only the core construction rules pass
    - invalid: core construction fails

    A format missing from the mapping counts as not legal.
    """
    if not legal_by_format.get("valid", False):
        return DeckClassification.INVALID
    if legal_by_format.get("mwl", False) and legal_by_format.get("rotation", False):
        return DeckClassification.LEGAL
    return DeckClassification.CASUAL


class DeckStatus(RootModel[dict[str, FormatResult]]):
    """Per-format verdicts keyed by format key."""

    model_config = ConfigDict(frozen=True)

    def __getitem__(self, key: str) -> FormatResult:
        return self.root[key]

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def get(self, key: str) -> FormatResult | None:
        return self.root.get(key)

    def is_legal(self, key: str) -> bool:
        """True if the format was evaluated and found legal."""
        result = self.root.get(key)
        return result is not None and result.legal

    @property
    def classification(self) -> DeckClassification:
        return classify({key: result.legal for key, result in self.root.items()})
