"""Reading and writing day partitions, and scanning the whole history."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List

from agenda.core.errors import InvalidDateKeyError, MalformedPartitionError
from agenda.core.settings import STORE
from agenda.helpers.datetime_utils import to_date_key
from agenda.models.task_record import TaskRecord, decode_partition, encode_partition
from agenda.storage.partition_store import PartitionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScannedPartition:
    date_key: str
    records: List[TaskRecord]


def partition_key(day: str | date, *, prefix: str = STORE.task_prefix) -> str:
    return f"{prefix}{to_date_key(day)}"


def load_partition(
    store: PartitionStore, day: str | date, *, prefix: str = STORE.task_prefix
) -> List[TaskRecord]:
    """Return the records of one day; raises :class:`MalformedPartitionError`."""
    key = partition_key(day, prefix=prefix)
    return decode_partition(key, store.get(key))


def save_partition(
    store: PartitionStore,
    day: str | date,
    records: Iterable[TaskRecord],
    *,
    prefix: str = STORE.task_prefix,
) -> None:
    store.set(partition_key(day, prefix=prefix), encode_partition(records))


def scan_history(store: PartitionStore, *, prefix: str = STORE.task_prefix) -> List[ScannedPartition]:
    """Read every task partition in the store, oldest day first.

    Partitions whose key suffix is not a day, or whose value does not decode,
    are logged and skipped so one bad entry never blocks reconciliation.
    """

    scanned: List[ScannedPartition] = []
    for key in store.list_keys(prefix):
        suffix = key[len(prefix) :]
        try:
            date_key = to_date_key(suffix)
            if date_key != suffix:
                raise InvalidDateKeyError(suffix)
            records = decode_partition(key, store.get(key))
        except InvalidDateKeyError as exc:
            logger.warning("Skipping partition %s: %s", key, exc)
            continue
        except MalformedPartitionError as exc:
            logger.warning("Skipping partition: %s", exc)
            continue
        scanned.append(ScannedPartition(date_key=date_key, records=records))

    scanned.sort(key=lambda part: part.date_key)
    logger.debug("Scanned %d partitions under %r", len(scanned), prefix)
    return scanned


__all__ = [
    "ScannedPartition",
    "load_partition",
    "partition_key",
    "save_partition",
    "scan_history",
]
