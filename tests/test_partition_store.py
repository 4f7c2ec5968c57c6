import pytest
from sqlalchemy.exc import OperationalError

from agenda.core.errors import StoreWriteError
from agenda.services.daily_tasks import DailyTaskService
from agenda.storage.partition_store import SqlPartitionStore


def test_get_missing_key_returns_none(session_factory):
    assert SqlPartitionStore(session_factory).get("agenda_tasks_2024-01-01") is None


def test_set_then_get_and_overwrite(session_factory):
    store = SqlPartitionStore(session_factory)
    store.set("agenda_tasks_2024-01-01", "[]")
    store.set("agenda_tasks_2024-01-01", '[{"id": "1"}]')
    assert store.get("agenda_tasks_2024-01-01") == '[{"id": "1"}]'


def test_list_keys_matches_prefix_literally(session_factory):
    store = SqlPartitionStore(session_factory)
    for key in ("agenda_tasks_2024-01-02", "agenda_tasks_2024-01-01", "agendaXtasksX2024-01-03", "agenda_log_2024-01-01"):
        store.set(key, "[]")

    assert store.list_keys("agenda_tasks_") == ["agenda_tasks_2024-01-01", "agenda_tasks_2024-01-02"]


def test_unicode_values_round_trip(session_factory):
    store = SqlPartitionStore(session_factory)
    store.set("agenda_log_2024-01-01", '"Reunión 📅"')
    assert store.get("agenda_log_2024-01-01") == '"Reunión 📅"'


class _RejectingSession:
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def get(self, model, key):
        return None

    def add(self, row):
        pass

    def commit(self):
        raise OperationalError("INSERT", {}, Exception("database or disk is full"))


def test_rejected_write_raises_store_write_error():
    store = SqlPartitionStore(lambda: _RejectingSession())
    with pytest.raises(StoreWriteError) as excinfo:
        store.set("agenda_tasks_2024-01-01", "[]")
    assert excinfo.value.key == "agenda_tasks_2024-01-01"


def test_carry_over_end_to_end_on_sqlite(session_factory):
    service = DailyTaskService(SqlPartitionStore(session_factory))
    service.add("2024-01-01", "Pay rent")

    first = service.open_day("2024-01-05")
    second = service.open_day("2024-01-05")

    assert [t.text for t in first.tasks] == ["Pay rent (📅 01/01)"]
    assert second.synthesized == []
    assert [t.id for t in second.tasks] == [t.id for t in first.tasks]
