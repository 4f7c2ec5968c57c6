import json

import pytest

from agenda.core.errors import MalformedPartitionError
from agenda.core.settings import STORE
from agenda.services.history import load_partition, partition_key, scan_history

from fakes import make_task


def test_partition_key_is_prefix_plus_day():
    assert partition_key("2024-05-01") == "agenda_tasks_2024-05-01"


def test_scan_visits_every_partition_in_day_order(store):
    store.put_day("2024-01-03", [make_task("B", "2024-01-03")])
    store.put_day("2024-01-01", [make_task("A", "2024-01-01")])
    store.data["agenda_log_2024-01-01"] = json.dumps("journal")

    scan = scan_history(store)

    assert [part.date_key for part in scan] == ["2024-01-01", "2024-01-03"]
    assert [r.text for r in scan[0].records] == ["A"]


def test_scan_skips_malformed_partitions(store, caplog):
    store.put_day("2024-01-01", [make_task("A", "2024-01-01")])
    store.data[STORE.task_prefix + "2024-01-02"] = "{not json"
    store.data[STORE.task_prefix + "2024-01-03"] = json.dumps({"id": "x"})
    store.data[STORE.task_prefix + "2024-01-04"] = json.dumps([{"id": "x", "completed": False}])

    with caplog.at_level("WARNING"):
        scan = scan_history(store)

    assert [part.date_key for part in scan] == ["2024-01-01"]
    assert "Skipping partition" in caplog.text


def test_scan_skips_keys_without_a_valid_day(store):
    store.put_day("2024-01-01", [make_task("A", "2024-01-01")])
    store.data[STORE.task_prefix + "2024-13-40"] = "[]"
    store.data[STORE.task_prefix + "2024-1-5"] = "[]"
    store.data[STORE.task_prefix + "backup"] = "[]"

    assert [part.date_key for part in scan_history(store)] == ["2024-01-01"]


def test_scan_has_no_side_effects(store):
    store.put_day("2024-01-01", [make_task("A", "2024-01-01")])
    scan_history(store)
    assert store.writes == []


def test_load_partition_missing_day_is_empty(store):
    assert load_partition(store, "2024-02-02") == []


def test_load_partition_raises_on_garbage(store):
    store.data[STORE.task_prefix + "2024-02-02"] = "42"
    with pytest.raises(MalformedPartitionError):
        load_partition(store, "2024-02-02")


def test_unknown_priority_is_read_as_normal(store):
    store.put_day("2024-02-02", [make_task("Call bank", "2024-02-02", priority="urgent")])

    [record] = load_partition(store, "2024-02-02")

    assert record.priority == "normal"
