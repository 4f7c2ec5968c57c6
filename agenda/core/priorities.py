"""Utility helpers for task priorities."""
from __future__ import annotations

from enum import Enum
from typing import Dict


class Priority(str, Enum):
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


PRIORITY_META: Dict[Priority, Dict[str, str]] = {
    Priority.HIGH: {"label": "High priority", "short": "High"},
    Priority.NORMAL: {"label": "Normal", "short": "Normal"},
    Priority.LOW: {"label": "Low priority", "short": "Low"},
}

DEFAULT_PRIORITY = Priority.NORMAL


def normalize_priority(value: Priority | str | None) -> Priority:
    """Map external values onto a supported priority; unknown values fall back to normal."""
    if value is None:
        return DEFAULT_PRIORITY
    if isinstance(value, Priority):
        return value
    try:
        return Priority(str(value).strip().lower())
    except ValueError:
        return DEFAULT_PRIORITY


def priority_label(value: Priority, *, short: bool = False) -> str:
    meta = PRIORITY_META.get(value, PRIORITY_META[DEFAULT_PRIORITY])
    return meta["short" if short else "label"]
