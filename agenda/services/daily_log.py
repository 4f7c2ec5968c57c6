"""Free-text journal, one entry per day."""
from __future__ import annotations

import json
import logging
from datetime import date
from typing import Optional

from agenda.core.settings import STORE
from agenda.helpers.datetime_utils import to_date_key
from agenda.storage.partition_store import PartitionStore, SqlPartitionStore

logger = logging.getLogger(__name__)


class DailyLogService:
    def __init__(self, store: Optional[PartitionStore] = None, *, prefix: str = STORE.log_prefix):
        self.store = store if store is not None else SqlPartitionStore()
        self.prefix = prefix

    def _key(self, day: str | date) -> str:
        return f"{self.prefix}{to_date_key(day)}"

    def get(self, day: str | date) -> str:
        key = self._key(day)
        raw = self.store.get(key)
        if not raw:
            return ""
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Unreadable journal entry %s: %s", key, exc)
            return ""
        if not isinstance(value, str):
            logger.warning("Journal entry %s is not text", key)
            return ""
        return value

    def save(self, day: str | date, text: str) -> None:
        self.store.set(self._key(day), json.dumps(text or "", ensure_ascii=False))

    def has_entry(self, day: str | date) -> bool:
        return bool(self.get(day).strip())


__all__ = ["DailyLogService"]
