import json

from agenda.core.settings import STORE
from agenda.import_local_storage import import_local_storage

from fakes import make_task


def test_imports_task_and_journal_keys_only(store):
    dump = {
        STORE.task_prefix + "2024-01-01": json.dumps([make_task("Pay rent", "2024-01-01")]),
        STORE.log_prefix + "2024-01-01": json.dumps("notes"),
        "agenda_passwords": "secret",
        "agenda_reminders_all": "[]",
        STORE.task_prefix + "someday": "[]",
        STORE.task_prefix + "2024-01-02": "{broken",
    }

    assert import_local_storage(dump, store=store) == 2
    assert sorted(store.data) == [STORE.log_prefix + "2024-01-01", STORE.task_prefix + "2024-01-01"]


def test_existing_keys_are_kept_unless_overwrite(store):
    key = STORE.task_prefix + "2024-01-01"
    store.put_day("2024-01-01", [])
    dump = {key: json.dumps([make_task("Pay rent", "2024-01-01")])}

    assert import_local_storage(dump, store=store) == 0
    assert store.day("2024-01-01") == []

    assert import_local_storage(dump, store=store, overwrite=True) == 1
    assert store.day("2024-01-01")[0]["text"] == "Pay rent"
