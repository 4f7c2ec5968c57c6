"""Month overview: which days carry a journal entry or unfinished tasks."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List

from agenda.core.errors import MalformedPartitionError
from agenda.core.settings import STORE
from agenda.helpers.datetime_utils import month_grid
from agenda.services.daily_log import DailyLogService
from agenda.services.history import load_partition
from agenda.storage.partition_store import PartitionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayMarker:
    day: date
    in_month: bool
    has_log: bool
    has_pending_tasks: bool


def _has_pending(store: PartitionStore, day: date, prefix: str) -> bool:
    try:
        records = load_partition(store, day, prefix=prefix)
    except MalformedPartitionError as exc:
        logger.warning("Ignoring in month overview: %s", exc)
        return False
    return any(not record.completed for record in records)


def month_overview(
    store: PartitionStore,
    year: int,
    month: int,
    *,
    task_prefix: str = STORE.task_prefix,
    log_prefix: str = STORE.log_prefix,
) -> List[List[DayMarker]]:
    """Monday-first weeks covering the month; read-only, no carry-over runs."""
    journal = DailyLogService(store, prefix=log_prefix)
    return [
        [
            DayMarker(
                day=day,
                in_month=day.month == month,
                has_log=journal.has_entry(day),
                has_pending_tasks=_has_pending(store, day, task_prefix),
            )
            for day in week
        ]
        for week in month_grid(year, month)
    ]


__all__ = ["DayMarker", "month_overview"]
