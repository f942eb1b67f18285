"""
Card database service.

Downloads NetrunnerDB card data, loads it into a snapshot and publishes
that snapshot to the process-wide store.
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from icebreaker.config import settings
from icebreaker.models.failure import FailureKind, KnownError
from icebreaker.models.snapshot import CardDatabaseSnapshot
from icebreaker.parsers.netrunnerdb import build_snapshot
from icebreaker.services.snapshot_store import SnapshotStore, snapshot_store

logger = logging.getLogger(__name__)

# NetrunnerDB endpoints, each saved as <name>.json in the data directory
ENDPOINTS = ("cards", "packs", "cycles", "mwl")


async def download_card_database(
    data_dir: Path | None = None,
    base_url: str | None = None,
) -> Path:
    """
    Download the latest NetrunnerDB card data.

    Args:
        data_dir: Where to save the files. Defaults to settings.data_dir
        base_url: API root. Defaults to settings.netrunnerdb_url

    Returns:
        Directory containing the downloaded files.

    Raises:
        KnownError: If NetrunnerDB cannot be reached or returns an error
    """
    data_dir = data_dir or settings.data_dir
    base_url = (base_url or settings.netrunnerdb_url).rstrip("/")
    data_dir.mkdir(parents=True, exist_ok=True)

    async with httpx.AsyncClient(timeout=30.0) as client:
        for endpoint in ENDPOINTS:
            url = f"{base_url}/{endpoint}"
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise KnownError(
                    kind=FailureKind.EXTERNAL_API_ERROR,
                    message=f"Failed to download {endpoint}: HTTP {e.response.status_code}",
                ) from e
            except httpx.RequestError as e:
                raise KnownError(
                    kind=FailureKind.EXTERNAL_API_ERROR,
                    message=f"Failed to download {endpoint}: {e}",
                ) from e

            path = data_dir / f"{endpoint}.json"
            path.write_bytes(response.content)
            logger.debug("Saved %s to %s", url, path)

    return data_dir


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(
            f"Card data not found at {path}. "
            "Run `python -m icebreaker.jobs.download_cards` first."
        )
    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise KnownError(
                kind=FailureKind.INVALID_INPUT,
                message=f"Card data file {path.name} is not valid JSON",
                detail=str(e),
            ) from e


def load_snapshot(data_dir: Path | None = None) -> CardDatabaseSnapshot:
    """
    Load a snapshot from downloaded NetrunnerDB files.

    Args:
        data_dir: Directory holding cards.json, packs.json, cycles.json and
            mwl.json. Defaults to settings.data_dir

    Returns:
        Unversioned CardDatabaseSnapshot

    Raises:
        FileNotFoundError: If a data file doesn't exist
        KnownError: If a data file is malformed
    """
    data_dir = data_dir or settings.data_dir
    payloads = {endpoint: _read_json(data_dir / f"{endpoint}.json") for endpoint in ENDPOINTS}
    return build_snapshot(**payloads)


def reload_card_database(
    data_dir: Path | None = None,
    store: SnapshotStore = snapshot_store,
) -> CardDatabaseSnapshot:
    """
    Load card data from disk and publish it as the current snapshot.

    Evaluations already running keep the snapshot they started with.
    """
    return store.replace(load_snapshot(data_dir))


def get_card_database(store: SnapshotStore = snapshot_store) -> CardDatabaseSnapshot:
    """
    Get the current snapshot, loading it from disk on first use.

    Raises:
        FileNotFoundError: If nothing is loaded and no data files exist
    """
    if not store.is_loaded():
        logger.info("Loading card database from %s", settings.data_dir)
        return reload_card_database(store=store)
    return store.current()
