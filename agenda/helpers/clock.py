from __future__ import annotations

from datetime import date, datetime, timezone


UTC = timezone.utc


def utc_now() -> datetime:
    return datetime.now(UTC)


def local_today() -> date:
    return datetime.now().astimezone().date()


__all__ = ["UTC", "local_today", "utc_now"]
