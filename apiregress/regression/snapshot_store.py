"""Snapshot store — persists test result collections as JSON arrays."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from apiregress.models.test_result import Snapshot

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Reads and writes a snapshot file (baseline or current run)."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> Snapshot | None:
        """Load the snapshot, or None when the file is missing or unreadable."""
        if not self.path.exists():
            logger.debug("No snapshot at %s", self.path)
            return None
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            logger.warning("Failed to load snapshot from %s: %s", self.path, e)
            return None

        if not isinstance(data, list):
            logger.warning("Failed to load snapshot from %s: expected a JSON array, got %s",
                           self.path, type(data).__name__)
            return None

        snapshot = Snapshot.from_records(data, name=self.path.stem)
        logger.debug("Loaded %d test results from %s", len(snapshot), self.path)
        return snapshot

    def save(self, snapshot: Snapshot) -> None:
        """Persist the snapshot. I/O errors propagate to the caller."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(snapshot.to_records(), f, indent=2)
        logger.info("Saved %d test results to %s", len(snapshot), self.path)


def load_snapshot(path: str | Path) -> Snapshot | None:
    return SnapshotStore(path).load()


def save_snapshot(snapshot: Snapshot, path: str | Path) -> None:
    SnapshotStore(path).save(snapshot)
