"""Dated snapshots of the Agenda database."""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from pathlib import Path
from shutil import copy2
from typing import Optional

logger = logging.getLogger(__name__)


def _snapshot_day(path: Path, prefix: str) -> date | None:
    stem = path.stem
    if not stem.startswith(prefix):
        return None
    try:
        return datetime.strptime(stem[len(prefix) :], "%Y-%m-%d").date()
    except ValueError:
        return None


def ensure_daily_backup(
    db_path: str | Path,
    backup_dir: str | Path,
    *,
    keep_days: int = 7,
    today: Optional[date] = None,
) -> Path | None:
    """Copy the database to ``<stem>_<YYYY-MM-DD><suffix>`` once per day.

    Snapshots older than ``keep_days`` days (counting today) are removed.
    Returns the path of the snapshot created by this call, if any.
    """

    db_file = Path(db_path)
    if not db_file.exists():
        return None

    snapshots = Path(backup_dir)
    snapshots.mkdir(parents=True, exist_ok=True)

    day = today or datetime.now().date()
    prefix = f"{db_file.stem}_"
    destination = snapshots / f"{prefix}{day.isoformat()}{db_file.suffix}"

    created: Path | None = None
    if not destination.exists():
        copy2(db_file, destination)
        created = destination
        logger.info("Database snapshot written to %s", destination)

    if keep_days > 0:
        cutoff = day - timedelta(days=keep_days - 1)
        for candidate in snapshots.glob(f"{prefix}*{db_file.suffix}"):
            snapshot_day = _snapshot_day(candidate, prefix)
            if snapshot_day is None or snapshot_day >= cutoff:
                continue
            try:
                candidate.unlink()
            except OSError as exc:
                logger.warning("Could not remove old snapshot %s: %s", candidate, exc)

    return created


__all__ = ["ensure_daily_backup"]
