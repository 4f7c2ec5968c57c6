"""SQLModel table backing the partitioned key-value store."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field, SQLModel

from agenda.helpers.clock import utc_now


class PartitionEntry(SQLModel, table=True):
    key: str = Field(primary_key=True)
    value: str
    updated_at: datetime = Field(default_factory=utc_now)


__all__ = ["PartitionEntry"]
