"""Tests for schema fingerprints."""

from schema import ColumnDef, fingerprint_schema, resolve_snapshot_id


def test_fingerprint_is_stable(shop_schema):
    """Same schema content yields the same fingerprint."""
    first = fingerprint_schema(shop_schema)
    second = fingerprint_schema(shop_schema.model_copy(deep=True))
    assert first == second
    assert len(first) == 16


def test_fingerprint_ignores_table_order(shop_schema):
    """Table order does not change the fingerprint."""
    reordered = shop_schema.model_copy(deep=True)
    reordered.tables.reverse()
    assert fingerprint_schema(reordered) == fingerprint_schema(shop_schema)


def test_fingerprint_changes_with_columns(shop_schema):
    """Adding a column changes the fingerprint."""
    changed = shop_schema.model_copy(deep=True)
    changed.tables[0].columns.append(ColumnDef(name="phone", data_type="varchar"))
    assert fingerprint_schema(changed) != fingerprint_schema(shop_schema)


def test_snapshot_id_prefix(shop_schema):
    """Snapshot ids are prefixed fingerprints."""
    assert resolve_snapshot_id(shop_schema) == f"fp-{fingerprint_schema(shop_schema)}"
