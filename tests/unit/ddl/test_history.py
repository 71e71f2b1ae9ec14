"""Tests for transformation records and the in-memory store."""

import threading

from ddl import simulate
from ddl.history import (
    ExecutionStatus,
    InMemoryTransformationStore,
    TransformationStore,
    build_transformation_record,
    complete_record,
    new_pending_record,
)
from schema import resolve_snapshot_id


def test_pending_record_defaults(shop_schema):
    """New records start pending with the pre-change snapshot id."""
    record = new_pending_record(
        "ALTER TABLE users ADD COLUMN phone varchar",
        user_prompt="Add a phone_number column to the users table",
        schema=shop_schema,
    )
    assert record.execution_status is ExecutionStatus.PENDING
    assert record.schema_before == resolve_snapshot_id(shop_schema)
    assert record.execution_date is None
    assert record.id


def test_completed_record_for_applied_outcome(shop_schema):
    """Applied outcomes mark the record executed with the new snapshot."""
    sql = "ALTER TABLE users ADD COLUMN phone varchar"
    outcome = simulate(shop_schema, sql)
    record = build_transformation_record(
        outcome, generated_sql=sql, schema_before=shop_schema, user_prompt="add phone"
    )
    assert record.execution_status is ExecutionStatus.EXECUTED
    assert record.execution_result == "Added column 'phone' (varchar) to users"
    assert record.affected_tables == ["users"]
    assert record.schema_after == resolve_snapshot_id(outcome.new_schema)
    assert record.schema_after != record.schema_before
    assert record.execution_date is not None


def test_completed_record_for_rejected_outcome(shop_schema):
    """Rejected outcomes mark the record failed with the joined messages."""
    sql = "ALTER TABLE users RENAME COLUMN nickname TO email"
    pending = new_pending_record(sql, schema=shop_schema)
    record = complete_record(pending, simulate(shop_schema, sql))
    assert record.id == pending.id
    assert pending.execution_status is ExecutionStatus.PENDING
    assert record.execution_status is ExecutionStatus.FAILED
    assert record.execution_result == (
        "Column 'nickname' does not exist on table 'users'; "
        "Column 'email' already exists on table 'users'"
    )
    assert record.affected_tables == ["users"]
    assert record.schema_after == record.schema_before


def test_rejected_record_uses_stored_table_casing(shop_schema):
    """Invalid statements name the table as stored, not as typed."""
    sql = "ALTER TABLE USERS ADD COLUMN Email varchar"
    record = build_transformation_record(
        simulate(shop_schema, sql), generated_sql=sql, schema_before=shop_schema
    )
    assert record.execution_status is ExecutionStatus.FAILED
    assert record.affected_tables == ["users"]


def test_rejected_record_for_missing_table_keeps_typed_name(shop_schema):
    """A table that does not exist is reported as typed."""
    sql = "ALTER TABLE Ghosts DROP COLUMN x"
    record = build_transformation_record(
        simulate(shop_schema, sql), generated_sql=sql, schema_before=shop_schema
    )
    assert record.execution_result == "Table 'Ghosts' does not exist"
    assert record.affected_tables == ["Ghosts"]


def test_unsupported_record_has_no_tables(shop_schema):
    """Unsupported statements have no affected tables."""
    sql = "DELETE FROM users"
    record = build_transformation_record(
        simulate(shop_schema, sql), generated_sql=sql, schema_before=shop_schema
    )
    assert record.execution_status is ExecutionStatus.FAILED
    assert record.affected_tables == []


def test_store_is_bounded_and_newest_first():
    """The store keeps the newest records up to its size."""
    store = InMemoryTransformationStore(max_size=2)
    records = [new_pending_record(f"SELECT {i}") for i in range(3)]
    for record in records:
        store.save(record)

    assert len(store) == 2
    assert [r.id for r in store.list_recent()] == [records[2].id, records[1].id]
    assert [r.id for r in store.list_recent(limit=1)] == [records[2].id]
    assert store.list_recent(limit=0) == []
    assert store.get(records[0].id) is None


def test_store_save_replaces_by_id():
    """Saving a record with a known id replaces it in place."""
    store = InMemoryTransformationStore(max_size=5)
    pending = new_pending_record("SELECT 1")
    store.save(pending)
    done = pending.model_copy(update={"execution_status": ExecutionStatus.EXECUTED})
    store.save(done)

    assert len(store) == 1
    assert store.get(pending.id).execution_status is ExecutionStatus.EXECUTED


def test_store_export_json_and_protocol():
    """Exported records are JSON-compatible and the store satisfies the protocol."""
    store = InMemoryTransformationStore(max_size=5)
    store.save(new_pending_record("SELECT 1", user_prompt="hello"))
    exported = store.export_json()
    assert exported[0]["user_prompt"] == "hello"
    assert exported[0]["execution_status"] == "pending"
    assert isinstance(store, TransformationStore)


def test_store_concurrent_saves():
    """Concurrent saves are all retained."""
    store = InMemoryTransformationStore(max_size=100)

    def worker(offset):
        for i in range(10):
            store.save(new_pending_record(f"SELECT {offset + i}"))

    threads = [threading.Thread(target=worker, args=(n * 10,)) for n in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store) == 50
