"""
Process-wide card database snapshot.

The snapshot is loaded once at startup and may be replaced by a reload.
Readers take one reference and keep using it; a replacement never changes
a snapshot an evaluation already holds.
"""

import dataclasses
import logging
from threading import Lock

from icebreaker.models.failure import FailureKind, KnownError
from icebreaker.models.snapshot import CardDatabaseSnapshot

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Holds the current CardDatabaseSnapshot and swaps it atomically."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._snapshot: CardDatabaseSnapshot | None = None

    def current(self) -> CardDatabaseSnapshot:
        """
        The snapshot to evaluate against.

        Raises:
            KnownError: If no snapshot has been loaded yet
        """
        snapshot = self._snapshot
        if snapshot is None:
            raise KnownError(
                kind=FailureKind.SNAPSHOT_UNAVAILABLE,
                message="Card database has not been loaded",
            )
        return snapshot

    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def replace(self, snapshot: CardDatabaseSnapshot) -> CardDatabaseSnapshot:
        """
        Swap in a new snapshot, stamping it with the next version number.

        Returns:
            The snapshot now being served
        """
        with self._lock:
            previous = self._snapshot.version if self._snapshot is not None else 0
            stamped = dataclasses.replace(snapshot, version=previous + 1)
            self._snapshot = stamped

        logger.info(
            "Card database snapshot v%d loaded: %d cards, %d sets, list %r",
            stamped.version,
            len(stamped.cards),
            len(stamped.sets),
            stamped.mwl.name,
        )
        return stamped

    def clear(self) -> None:
        with self._lock:
            self._snapshot = None


snapshot_store = SnapshotStore()
