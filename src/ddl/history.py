"""Transformation records and a bounded in-memory store for them.

A record captures one requested transformation: the plain-English prompt, the
SQL that was generated for it, and what the simulation did with it. Storage
beyond process memory belongs to whatever implements ``TransformationStore``.
"""

from __future__ import annotations

import json
import threading
import uuid
from collections import deque
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from ddl.simulator import Applied, Outcome, Rejected
from schema import DatabaseSchema, find_table, resolve_snapshot_id


class ExecutionStatus(str, Enum):
    """Lifecycle of a requested transformation."""

    PENDING = "pending"
    EXECUTED = "executed"
    FAILED = "failed"


class TransformationRecord(BaseModel):
    """Audit record for one requested transformation."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    user_prompt: Optional[str] = None
    generated_sql: str
    execution_status: ExecutionStatus = ExecutionStatus.PENDING
    execution_result: Optional[str] = None
    affected_tables: List[str] = Field(default_factory=list)
    schema_before: Optional[str] = None
    schema_after: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    execution_date: Optional[datetime] = None


def new_pending_record(
    generated_sql: str,
    *,
    user_prompt: Optional[str] = None,
    schema: Optional[DatabaseSchema] = None,
) -> TransformationRecord:
    """Create a pending record for SQL that has not been simulated yet."""
    return TransformationRecord(
        user_prompt=user_prompt,
        generated_sql=generated_sql,
        schema_before=resolve_snapshot_id(schema) if schema is not None else None,
    )


def _rejected_tables(outcome: Rejected, schema: Optional[DatabaseSchema]) -> List[str]:
    if outcome.operation is None:
        return []
    table = find_table(schema, outcome.operation.table) if schema is not None else None
    return [table.name if table is not None else outcome.operation.table]


def complete_record(
    record: TransformationRecord,
    outcome: Outcome,
    *,
    schema: Optional[DatabaseSchema] = None,
) -> TransformationRecord:
    """Return a copy of ``record`` updated with a simulation outcome.

    ``schema`` is the schema the statement was simulated against. When given,
    rejected records name tables with the casing stored in it.
    """
    if isinstance(outcome, Applied):
        update: dict[str, Any] = {
            "execution_status": ExecutionStatus.EXECUTED,
            "execution_result": outcome.description,
            "affected_tables": list(outcome.affected_tables),
            "schema_after": resolve_snapshot_id(outcome.new_schema),
        }
    else:
        update = {
            "execution_status": ExecutionStatus.FAILED,
            "execution_result": "; ".join(outcome.messages),
            "affected_tables": _rejected_tables(outcome, schema),
            "schema_after": record.schema_before,
        }
    update["execution_date"] = datetime.now(timezone.utc)
    return record.model_copy(update=update)


def build_transformation_record(
    outcome: Outcome,
    *,
    generated_sql: str,
    schema_before: DatabaseSchema,
    user_prompt: Optional[str] = None,
) -> TransformationRecord:
    """Build a completed record for a simulation that has already run."""
    pending = new_pending_record(generated_sql, user_prompt=user_prompt, schema=schema_before)
    return complete_record(pending, outcome, schema=schema_before)


@runtime_checkable
class TransformationStore(Protocol):
    """Protocol for persisting transformation records."""

    def save(self, record: TransformationRecord) -> None:
        """Save (upsert) a record by id."""
        ...

    def get(self, record_id: str) -> Optional[TransformationRecord]:
        """Fetch a record by id, or None if unknown."""
        ...

    def list_recent(self, *, limit: Optional[int] = None) -> List[TransformationRecord]:
        """Return records newest-first."""
        ...


class InMemoryTransformationStore:
    """Thread-safe bounded FIFO store of transformation records."""

    def __init__(self, *, max_size: int) -> None:
        """Initialize bounded in-memory retention for recent records."""
        self._max_size = max(1, int(max_size))
        self._items: deque[TransformationRecord] = deque(maxlen=self._max_size)
        self._lock = threading.Lock()

    def save(self, record: TransformationRecord) -> None:
        """Append a record, replacing an earlier copy with the same id."""
        with self._lock:
            for index, existing in enumerate(self._items):
                if existing.id == record.id:
                    self._items[index] = record
                    return
            self._items.append(record)

    def get(self, record_id: str) -> Optional[TransformationRecord]:
        with self._lock:
            for record in self._items:
                if record.id == record_id:
                    return record
        return None

    def list_recent(self, *, limit: Optional[int] = None) -> List[TransformationRecord]:
        """Return newest-first records with an optional limit."""
        with self._lock:
            records = list(self._items)
        if limit is not None:
            records = records[-int(limit) :] if limit > 0 else []
        records.reverse()
        return records

    def export_json(self, *, limit: Optional[int] = None) -> list[dict[str, Any]]:
        """Return newest-first records as JSON-compatible dicts."""
        return [json.loads(record.model_dump_json()) for record in self.list_recent(limit=limit)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
