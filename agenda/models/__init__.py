"""Models exposed by the Agenda application."""
from .partition_entry import PartitionEntry
from .task_record import TaskRecord, decode_partition, encode_partition, new_task_id

__all__ = ["PartitionEntry", "TaskRecord", "decode_partition", "encode_partition", "new_task_id"]
