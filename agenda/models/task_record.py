# agenda/models/task_record.py
from __future__ import annotations

import json
import uuid
from typing import Any, Iterable, List

from pydantic import ConfigDict
from sqlmodel import Field, SQLModel

from agenda.core.errors import MalformedPartitionError
from agenda.core.priorities import Priority, normalize_priority


def new_task_id() -> str:
    return str(uuid.uuid4())


class TaskRecord(SQLModel):
    """One task as stored inside a day partition (not a table of its own)."""

    # keys written by other clients survive a rewrite of the partition
    model_config = ConfigDict(extra="allow")

    id: str = Field(default_factory=new_task_id)
    text: str
    completed: bool = False
    date: str
    priority: Priority = Priority.NORMAL

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


def decode_partition(key: str, raw: str | None) -> List[TaskRecord]:
    """Decode a stored partition value into task records.

    A missing value is an empty partition; anything that is not a JSON array of
    valid task objects raises :class:`MalformedPartitionError`.
    """

    if raw is None or raw == "":
        return []
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise MalformedPartitionError(key, f"invalid JSON ({exc})") from exc
    if not isinstance(data, list):
        raise MalformedPartitionError(key, f"expected a JSON array, got {type(data).__name__}")

    records: List[TaskRecord] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise MalformedPartitionError(key, f"item {index} is not an object")
        item = {**item, "priority": normalize_priority(item.get("priority"))}
        try:
            records.append(TaskRecord.model_validate(item))
        except ValueError as exc:
            raise MalformedPartitionError(key, f"item {index}: {exc}") from exc
    return records


def encode_partition(records: Iterable[TaskRecord]) -> str:
    return json.dumps([record.to_payload() for record in records], ensure_ascii=False)


__all__ = ["TaskRecord", "decode_partition", "encode_partition", "new_task_id"]
