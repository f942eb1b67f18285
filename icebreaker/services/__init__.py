"""
IceBreaker services.

Card data loading and the process-wide snapshot store.
"""

from icebreaker.services.card_database import (
    download_card_database,
    get_card_database,
    load_snapshot,
    reload_card_database,
)
from icebreaker.services.snapshot_store import SnapshotStore, snapshot_store

__all__ = [
    "SnapshotStore",
    "download_card_database",
    "get_card_database",
    "load_snapshot",
    "reload_card_database",
    "snapshot_store",
]
