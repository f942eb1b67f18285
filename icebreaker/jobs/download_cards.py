"""
Download NetrunnerDB card data.

Run this job to refresh the card database used for deck evaluation.
"""

import asyncio
import logging

from icebreaker.models.failure import KnownError
from icebreaker.services.card_database import download_card_database

logger = logging.getLogger(__name__)


async def run_download() -> None:
    """Download the NetrunnerDB card database into the configured data directory."""
    logger.info("Downloading NetrunnerDB card database...")
    path = await download_card_database()
    logger.info("Downloaded card database to %s", path)


def main() -> None:
    """CLI entry point. Exits with status 1 when the download fails."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        asyncio.run(run_download())
    except KnownError as e:
        logger.error("%s (%s)", e.message, e.suggestion)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
