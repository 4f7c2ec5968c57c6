"""Shared utilities for parsing and formatting calendar days."""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, Optional

from agenda.core.errors import InvalidDateKeyError

DATE_KEY_FORMAT = "%Y-%m-%d"
ANNOTATION_FORMAT = "%d/%m"


def parse_date_key(value: str | date) -> date:
    """Parse a canonical ``YYYY-MM-DD`` day key.

    Only the zero-padded canonical form is accepted so that string ordering of
    keys matches calendar ordering.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or len(value) != 10:
        raise InvalidDateKeyError(value)
    try:
        return datetime.strptime(value, DATE_KEY_FORMAT).date()
    except ValueError:
        raise InvalidDateKeyError(value) from None


def to_date_key(value: str | date) -> str:
    return parse_date_key(value).strftime(DATE_KEY_FORMAT)


def format_ddmm(value: str | date) -> str:
    return parse_date_key(value).strftime(ANNOTATION_FORMAT)


def parse_date_input(value: str | None) -> Optional[date]:
    """Parse ``DD.MM.YYYY`` or ISO ``YYYY-MM-DD`` user input into a ``date``."""

    if not value:
        return None
    text = value.strip()
    if not text:
        return None

    for fmt in ("%d.%m.%Y", DATE_KEY_FORMAT):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    # dd.mm without year -> current year
    if len(text) == 5 and text[2] == ".":
        try:
            parsed = datetime.strptime(text, "%d.%m").date()
            return parsed.replace(year=date.today().year)
        except ValueError:
            return None
    return None


def month_grid(year: int, month: int) -> List[List[date]]:
    """Return the weeks (Monday first) covering ``year``/``month``."""

    first = date(year, month, 1)
    if month == 12:
        last = date(year + 1, 1, 1) - timedelta(days=1)
    else:
        last = date(year, month + 1, 1) - timedelta(days=1)
    start = first - timedelta(days=first.weekday())
    end = last + timedelta(days=6 - last.weekday())

    weeks: List[List[date]] = []
    current = start
    while current <= end:
        weeks.append([current + timedelta(days=offset) for offset in range(7)])
        current += timedelta(days=7)
    return weeks


__all__ = [
    "ANNOTATION_FORMAT",
    "DATE_KEY_FORMAT",
    "format_ddmm",
    "month_grid",
    "parse_date_input",
    "parse_date_key",
    "to_date_key",
]
