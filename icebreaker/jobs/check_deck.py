"""Evaluate a stored deck against every format.

Usage:
    python -m icebreaker.jobs.check_deck decks/argus.json --data-dir data
"""

import argparse
import json
import logging
from pathlib import Path

from icebreaker.legality.status import check_deck_status, trusted_deck_status
from icebreaker.models.failure import FailureKind, KnownError
from icebreaker.models.format_result import DeckStatus
from icebreaker.parsers.deck_json import parse_deck
from icebreaker.services.card_database import reload_card_database

logger = logging.getLogger(__name__)


def format_status(status: DeckStatus) -> str:
    """Render a status as one line per format, with indented reasons."""
    lines: list[str] = []
    for key in status:
        result = status[key]
        verdict = "legal" if result.legal else "NOT LEGAL"
        lines.append(f"{key}: {verdict}")
        for reason in result.reason.splitlines():
            lines.append(f"    {reason}")
    lines.append(f"Overall: {check_deck_status(status).value}")
    return "\n".join(lines)


def check_deck_file(deck_path: Path, data_dir: Path | None = None) -> DeckStatus:
    """
    Load card data and a deck file, then evaluate the deck.

    Raises:
        FileNotFoundError: If the card data has not been downloaded
        KnownError: If the deck file is missing or malformed
    """
    snapshot = reload_card_database(data_dir)
    try:
        with open(deck_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise KnownError(
            kind=FailureKind.NOT_FOUND,
            message=f"Deck file not found: {deck_path}",
            suggestion="Check the deck file path.",
        ) from e
    except json.JSONDecodeError as e:
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message=f"Deck file {deck_path.name} is not valid JSON",
            detail=str(e),
        ) from e
    deck = parse_deck(data, snapshot)
    return trusted_deck_status(deck, snapshot)


def main() -> None:
    """CLI entrypoint for checking a deck."""
    parser = argparse.ArgumentParser(description="Check Netrunner deck legality")
    parser.add_argument("deck", type=Path, help="Deck JSON file")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding NetrunnerDB data (default: settings.data_dir)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        status = check_deck_file(args.deck, args.data_dir)
    except KnownError as e:
        logger.error("%s (%s)", e.message, e.suggestion)
        raise SystemExit(1) from e
    except FileNotFoundError as e:
        logger.error("%s", e)
        raise SystemExit(1) from e

    print(format_status(status))


if __name__ == "__main__":
    main()
