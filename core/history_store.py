"""
History Store - the persisted navigation log.

Most-recent-first, unique by url. Appending a url that is already in the
log moves it to the front with the new record's data. No capacity is
enforced here; retention is handled by core.scheduler.
"""

import logging
from typing import List, Optional, Tuple

from pydantic import ValidationError

from core.schemas import NavigationRecord
from core.storage import HISTORY_KEY, JsonKeyValueStore

logger = logging.getLogger("history")


class HistoryStore:
    KEY = HISTORY_KEY

    def __init__(self, storage: JsonKeyValueStore):
        self.storage = storage
        self.records: List[NavigationRecord] = self._load()

    def _load(self) -> List[NavigationRecord]:
        raw = self.storage.get(self.KEY, [])
        if not isinstance(raw, list):
            logger.warning("⚠️ Stored history is not a list, starting empty")
            return []

        records = []
        for item in raw:
            try:
                records.append(NavigationRecord.model_validate(item))
            except ValidationError as e:
                logger.warning(f"⚠️ Dropping malformed history record: {e.error_count()} error(s)")
        return records

    def save(self):
        self.storage.set(self.KEY, [r.model_dump(mode="json") for r in self.records])

    def append(self, record: NavigationRecord) -> None:
        """Remove any record with the same url, then put this one first."""
        self.records = [record] + [r for r in self.records if r.url != record.url]
        self.save()
        logger.debug(f"History +{record.url} ({len(self.records)} entries)")

    def remove(self, record_id: str) -> None:
        """Delete by id. Unknown ids are ignored."""
        remaining = [r for r in self.records if r.id != record_id]
        if len(remaining) == len(self.records):
            return
        self.records = remaining
        self.save()

    def clear(self) -> None:
        self.records = []
        self.save()
        logger.info("🧹 History cleared")

    def list(self) -> Tuple[NavigationRecord, ...]:
        """Read-only snapshot, most recent first."""
        return tuple(r.model_copy() for r in self.records)

    def get(self, record_id: str) -> Optional[NavigationRecord]:
        return next((r.model_copy() for r in self.records if r.id == record_id), None)

    def __len__(self) -> int:
        return len(self.records)
