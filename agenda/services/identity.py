"""Correlating task records across days by their normalized text."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, Optional

from agenda.core.priorities import Priority
from agenda.core.settings import TASKS
from agenda.helpers.datetime_utils import format_ddmm
from agenda.services.history import ScannedPartition

_MARKER = TASKS.annotation_marker.rstrip()
_ANNOTATION_DAY = re.compile(re.escape(_MARKER) + r"\s*(\d{1,2})/(\d{1,2})\)")


def identity_of(text: str) -> str:
    """Cut ``text`` at the first ``" (📅"`` marker and trim what precedes it.

    Everything from the marker on is dropped, so an identity never contains
    the marker and ``identity_of(annotate(identity_of(t), d)) == identity_of(t)``.
    """
    return text.split(_MARKER, 1)[0].strip()


def annotate(identity: str, origin: str | date) -> str:
    return f"{identity}{TASKS.annotation_marker}{format_ddmm(origin)})"


def annotation_date(text: str, *, today: date) -> Optional[date]:
    """Resolve the ``dd/MM`` annotation of ``text`` to a day of ``today``'s year.

    The annotation carries no year, so a task carried across New Year resolves
    to the wrong year.
    """

    match = _ANNOTATION_DAY.search(text)
    if not match:
        return None
    day, month = int(match.group(1)), int(match.group(2))
    try:
        return date(today.year, month, day)
    except ValueError:
        return None


@dataclass(frozen=True)
class LatestState:
    completed: bool
    priority: Priority
    source_date: str


@dataclass
class IdentityIndex:
    origin: Dict[str, str] = field(default_factory=dict)
    latest: Dict[str, LatestState] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.latest)


def resolve_identities(scan: Iterable[ScannedPartition]) -> IdentityIndex:
    """Compute origin day and latest state for every identity in ``scan``.

    Day keys are canonical ``YYYY-MM-DD`` strings, so string comparison is
    calendar comparison. Within one day the first record of an identity wins.
    """

    index = IdentityIndex()
    for part in scan:
        seen_today: set[str] = set()
        for record in part.records:
            identity = identity_of(record.text)
            if not identity or identity in seen_today:
                continue
            seen_today.add(identity)

            origin = index.origin.get(identity)
            if origin is None or part.date_key < origin:
                index.origin[identity] = part.date_key

            latest = index.latest.get(identity)
            if latest is None or part.date_key > latest.source_date:
                index.latest[identity] = LatestState(
                    completed=record.completed,
                    priority=record.priority,
                    source_date=part.date_key,
                )
    return index


__all__ = [
    "IdentityIndex",
    "LatestState",
    "annotate",
    "annotation_date",
    "identity_of",
    "resolve_identities",
]
