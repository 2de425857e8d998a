import json
from dataclasses import replace

from database.db_manager import DatabaseManager
from database.expense_store import MemoryExpenseStore, SqliteExpenseStore
from utils.constants import STORAGE_KEY


def test_load_without_data_is_empty(db):
    assert SqliteExpenseStore(db).load() == []


def test_save_and_load_round_trip(db, scenario):
    store = SqliteExpenseStore(db)
    store.save(scenario)
    assert SqliteExpenseStore(db).load() == scenario


def test_data_survives_reopen(tmp_path, scenario):
    first = DatabaseManager.open(str(tmp_path))
    SqliteExpenseStore(first).save(scenario)
    first.close()

    second = DatabaseManager.open(str(tmp_path))
    try:
        assert SqliteExpenseStore(second).load() == scenario
    finally:
        second.close()


def test_add_update_delete(db, make_expense):
    store = SqliteExpenseStore(db)
    a = make_expense(10, description="a")
    b = make_expense(20, description="b")

    assert store.add(a) == [a]
    assert store.add(b) == [a, b]

    b2 = replace(b, amount=25, description="b2")
    assert store.update(b.id, b2) == [a, b2]
    assert store.delete(a.id) == [b2]
    assert store.load() == [b2]


def test_corrupt_blob_loads_as_empty(db):
    db.set_value(STORAGE_KEY, "{not json")
    assert SqliteExpenseStore(db).load() == []


def test_non_list_blob_loads_as_empty(db):
    db.set_value(STORAGE_KEY, json.dumps({"id": "x"}))
    assert SqliteExpenseStore(db).load() == []


def test_malformed_record_loads_as_empty(db):
    db.set_value(STORAGE_KEY, json.dumps([{"id": "x", "date": "2024-01-01"}]))
    assert SqliteExpenseStore(db).load() == []


def test_legacy_iso_timestamps_are_normalized(db):
    db.set_value(STORAGE_KEY, json.dumps([{
        "id": "expense-1706400000000-0.5",
        "date": "2024-01-28T00:00:00.000Z",
        "amount": 4.5,
        "category": "Food",
        "description": "Coffee",
        "createdAt": "2024-01-28T09:15:00.000Z",
    }]))
    [expense] = SqliteExpenseStore(db).load()
    assert expense.date == "2024-01-28"
    assert expense.created_at == "2024-01-28T09:15:00.000Z"


def test_memory_store_returns_copies(scenario):
    store = MemoryExpenseStore(scenario)
    loaded = store.load()
    loaded.clear()
    assert store.load() == scenario


def test_settings_are_seeded(db):
    assert db.get_setting("date_format") == "MM/DD/YYYY"
    assert db.get_setting("currency_symbol") == "$"
    assert db.get_setting("appearance_mode") == "system"
    assert db.get_setting("missing", "fallback") == "fallback"
