"""Carrying incomplete tasks forward onto the viewed day."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Sequence

from agenda.core.errors import StoreWriteError
from agenda.core.settings import STORE
from agenda.helpers.datetime_utils import to_date_key
from agenda.models.task_record import TaskRecord, new_task_id
from agenda.services.history import load_partition, save_partition, scan_history
from agenda.services.identity import IdentityIndex, annotate, identity_of, resolve_identities
from agenda.storage.partition_store import PartitionStore

logger = logging.getLogger(__name__)


@dataclass
class CarryOverResult:
    date_key: str
    records: List[TaskRecord] = field(default_factory=list)
    synthesized: List[TaskRecord] = field(default_factory=list)
    written: bool = False


def synthesize_carry_over(
    index: IdentityIndex,
    view_date: str | date,
    current_records: Sequence[TaskRecord],
) -> List[TaskRecord]:
    """Return the new records ``view_date`` needs for unfinished earlier tasks.

    An identity is carried when its most recent sighting is before the viewed
    day, that sighting is not completed, and the viewed day does not hold it
    yet. The annotation always names the origin day.
    """

    view_key = to_date_key(view_date)
    present = {identity_of(record.text) for record in current_records}

    carried: List[TaskRecord] = []
    ordered = sorted(index.latest.items(), key=lambda item: (index.origin[item[0]], item[0]))
    for identity, latest in ordered:
        if latest.completed or latest.source_date >= view_key or identity in present:
            continue
        origin = index.origin[identity]
        carried.append(
            TaskRecord(
                id=new_task_id(),
                text=annotate(identity, origin),
                completed=False,
                date=view_key,
                priority=latest.priority,
            )
        )
        present.add(identity)

    return carried


def merge_carry_over(
    store: PartitionStore,
    view_date: str | date,
    current_records: Sequence[TaskRecord],
    synthesized: Sequence[TaskRecord],
    *,
    prefix: str = STORE.task_prefix,
) -> List[TaskRecord]:
    """Append ``synthesized`` to the viewed partition, writing only on change.

    :class:`~agenda.core.errors.StoreWriteError` propagates to the caller.
    """

    merged = list(current_records) + list(synthesized)
    if not synthesized:
        return merged
    save_partition(store, view_date, merged, prefix=prefix)
    logger.info("Carried %d task(s) onto %s", len(synthesized), to_date_key(view_date))
    return merged


def reconcile_day(
    store: PartitionStore,
    view_date: str | date,
    *,
    prefix: str = STORE.task_prefix,
) -> CarryOverResult:
    """Run scan, resolve, synthesize and merge for ``view_date`` in one pass.

    The viewed partition is read before anything is written; if it does not
    decode, :class:`~agenda.core.errors.MalformedPartitionError` propagates
    and nothing is written over it. A :class:`~agenda.core.errors.StoreWriteError`
    propagates with the unsaved outcome attached as ``result``.
    """

    view_key = to_date_key(view_date)
    current = load_partition(store, view_key, prefix=prefix)
    index = resolve_identities(scan_history(store, prefix=prefix))
    synthesized = synthesize_carry_over(index, view_key, current)
    try:
        merged = merge_carry_over(store, view_key, current, synthesized, prefix=prefix)
    except StoreWriteError as exc:
        exc.result = CarryOverResult(
            date_key=view_key,
            records=list(current) + synthesized,
            synthesized=synthesized,
            written=False,
        )
        raise
    return CarryOverResult(
        date_key=view_key,
        records=merged,
        synthesized=synthesized,
        written=bool(synthesized),
    )


__all__ = [
    "CarryOverResult",
    "merge_carry_over",
    "reconcile_day",
    "synthesize_carry_over",
]
