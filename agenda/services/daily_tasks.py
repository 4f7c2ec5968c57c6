# agenda/services/daily_tasks.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional, Set

from agenda.core.errors import DuplicateTaskError, MalformedPartitionError, StoreWriteError
from agenda.core.priorities import Priority, normalize_priority
from agenda.core.settings import STORE, TASKS
from agenda.helpers.datetime_utils import to_date_key
from agenda.models.task_record import TaskRecord, new_task_id
from agenda.services.carry_over import reconcile_day
from agenda.services.history import load_partition, save_partition
from agenda.services.identity import identity_of
from agenda.storage.partition_store import PartitionStore, SqlPartitionStore

logger = logging.getLogger(__name__)


@dataclass
class DayView:
    """What a day looks like after it has been opened."""

    date_key: str
    tasks: List[TaskRecord] = field(default_factory=list)
    synthesized: List[TaskRecord] = field(default_factory=list)
    durable: bool = True
    readable: bool = True

    @property
    def pending(self) -> List[TaskRecord]:
        return [task for task in self.tasks if not task.completed]


class DailyTaskService:
    EVENTS = ("after_create", "after_update", "after_delete", "after_carry_over")

    def __init__(self, store: Optional[PartitionStore] = None, *, prefix: str = STORE.task_prefix):
        self.store = store if store is not None else SqlPartitionStore()
        self.prefix = prefix
        self._listeners: Dict[str, Set[Callable[[str, str], None]]] = {
            event: set() for event in self.EVENTS
        }

    # ---------- events ----------
    def subscribe(self, event: str, callback: Callable[[str, str], None]) -> None:
        if event not in self._listeners:
            raise ValueError(f"Unsupported event: {event}")
        self._listeners[event].add(callback)

    def unsubscribe(self, event: str, callback: Callable[[str, str], None]) -> None:
        if event not in self._listeners:
            return
        self._listeners[event].discard(callback)

    def _emit(self, event: str, date_key: str, task_id: str) -> None:
        for listener in list(self._listeners.get(event, ())):
            try:
                listener(date_key, task_id)
            except Exception:
                logger.exception("Listener for %s failed", event)

    # ---------- validation ----------
    @staticmethod
    def _clean_text(text: str) -> str:
        cleaned = (text or "").strip()
        if not cleaned:
            raise ValueError("Task text cannot be empty")
        if len(cleaned) > TASKS.max_text_length:
            raise ValueError("Task text is too long")
        return cleaned

    @staticmethod
    def _ensure_unique(
        records: List[TaskRecord], text: str, date_key: str, *, skip_id: str | None = None
    ) -> None:
        identity = identity_of(text)
        for record in records:
            if record.id != skip_id and identity_of(record.text) == identity:
                raise DuplicateTaskError(identity, date_key)

    # ---------- reading ----------
    def list_day(self, day: str | date) -> List[TaskRecord]:
        return load_partition(self.store, day, prefix=self.prefix)

    def open_day(self, day: str | date) -> DayView:
        """Bring ``day`` up to date with unfinished earlier tasks and return it.

        Failures never hide the day: an unreadable partition comes back empty
        with ``readable=False``, a failed write comes back with the carried
        tasks and ``durable=False``.
        """

        date_key = to_date_key(day)
        try:
            result = reconcile_day(self.store, date_key, prefix=self.prefix)
        except MalformedPartitionError as exc:
            logger.error("Cannot open %s: %s", date_key, exc)
            return DayView(date_key=date_key, readable=False)
        except StoreWriteError as exc:
            logger.error("Carry-over for %s not saved: %s", date_key, exc)
            unsaved = exc.result
            if unsaved is None:
                raise
            return DayView(
                date_key=date_key,
                tasks=unsaved.records,
                synthesized=unsaved.synthesized,
                durable=False,
            )

        for record in result.synthesized:
            self._emit("after_carry_over", date_key, record.id)
        return DayView(date_key=date_key, tasks=result.records, synthesized=result.synthesized)

    # ---------- CRUD ----------
    def add(self, day: str | date, text: str, priority: Priority | str | None = None) -> TaskRecord:
        date_key = to_date_key(day)
        cleaned = self._clean_text(text)
        records = self.list_day(date_key)
        self._ensure_unique(records, cleaned, date_key)

        task = TaskRecord(
            id=new_task_id(),
            text=cleaned,
            completed=False,
            date=date_key,
            priority=normalize_priority(priority),
        )
        records.append(task)
        save_partition(self.store, date_key, records, prefix=self.prefix)
        logger.debug("Task %s added on %s", task.id, date_key)
        self._emit("after_create", date_key, task.id)
        return task

    def toggle(self, day: str | date, task_id: str) -> Optional[TaskRecord]:
        date_key = to_date_key(day)
        records = self.list_day(date_key)
        for index, record in enumerate(records):
            if record.id == task_id:
                updated = record.model_copy(update={"completed": not record.completed})
                records[index] = updated
                save_partition(self.store, date_key, records, prefix=self.prefix)
                self._emit("after_update", date_key, task_id)
                return updated
        return None

    def update(
        self,
        day: str | date,
        task_id: str,
        *,
        text: Optional[str] = None,
        priority: Priority | str | None = None,
    ) -> Optional[TaskRecord]:
        date_key = to_date_key(day)
        records = self.list_day(date_key)
        for index, record in enumerate(records):
            if record.id != task_id:
                continue
            changes: Dict[str, object] = {}
            if text is not None:
                cleaned = self._clean_text(text)
                self._ensure_unique(records, cleaned, date_key, skip_id=task_id)
                changes["text"] = cleaned
            if priority is not None:
                changes["priority"] = normalize_priority(priority)
            if not changes:
                return record
            updated = record.model_copy(update=changes)
            records[index] = updated
            save_partition(self.store, date_key, records, prefix=self.prefix)
            self._emit("after_update", date_key, task_id)
            return updated
        return None

    def delete(self, day: str | date, task_id: str) -> bool:
        date_key = to_date_key(day)
        records = self.list_day(date_key)
        remaining = [record for record in records if record.id != task_id]
        if len(remaining) == len(records):
            return False
        save_partition(self.store, date_key, remaining, prefix=self.prefix)
        self._emit("after_delete", date_key, task_id)
        return True


__all__ = ["DailyTaskService", "DayView"]
