"""
Failure Classification.

Legality problems are never errors: evaluators report them as FormatResult
verdicts. Exceptions are reserved for failures around the engine, such as
loading card data, parsing a stored deck, or evaluating before any card
database snapshot has been loaded.

Every exception raised by IceBreaker for such a failure is a KnownError
carrying a FailureKind, so an outer layer can explain it without guessing.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    MISSING_REQUIRED = "missing_required"

    # Resource failures
    NOT_FOUND = "not_found"
    SNAPSHOT_UNAVAILABLE = "snapshot_unavailable"

    # Service failures
    EXTERNAL_API_ERROR = "external_api_error"

    # Unknown
    UNKNOWN = "unknown"


STANDARD_SUGGESTIONS: dict[FailureKind, str] = {
    FailureKind.INVALID_INPUT: "Check the deck or card data format.",
    FailureKind.MISSING_REQUIRED: "Provide all required fields.",
    FailureKind.NOT_FOUND: "Refresh the card database and try again.",
    FailureKind.SNAPSHOT_UNAVAILABLE: (
        "Run `python -m icebreaker.jobs.download_cards` and load the card database first."
    ),
    FailureKind.EXTERNAL_API_ERROR: "NetrunnerDB may be unavailable. Retry later.",
    FailureKind.UNKNOWN: "If this persists, please report the issue.",
}


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="Explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion if suggestion is not None else STANDARD_SUGGESTIONS.get(kind)
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a serializable FailureDetail."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )
