"""HTTP service exposing the DDL sandbox."""

import logging
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from common.config.settings import get_cors_origins, get_history_buffer_size, get_sql_dialect
from common.errors.error_codes import error_code_for_rejection
from ddl import Applied, Outcome, simulate
from ddl.history import (
    InMemoryTransformationStore,
    TransformationRecord,
    build_transformation_record,
)
from ddl.shortcuts import ShortcutCategory, suggest_shortcuts
from schema import DatabaseSchema, generate_er_diagram, resolve_snapshot_id

logger = logging.getLogger(__name__)

app = FastAPI(title="DDL Sandbox Service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_STORE: Optional[InMemoryTransformationStore] = None


def get_transformation_store() -> InMemoryTransformationStore:
    """Return the process-wide transformation store."""
    global _STORE
    if _STORE is None:
        _STORE = InMemoryTransformationStore(max_size=get_history_buffer_size())
    return _STORE


def reset_transformation_store() -> None:
    """Reset the process-wide transformation store (test helper)."""
    global _STORE
    _STORE = None


class SimulateRequest(BaseModel):
    """Request payload for simulating one generated statement."""

    schema_: DatabaseSchema = Field(..., alias="schema")
    sql: str
    prompt: Optional[str] = None
    dialect: Optional[str] = None

    model_config = {"populate_by_name": True}


class SimulateResponse(BaseModel):
    """Response payload for a simulation."""

    outcome: Outcome
    error_code: Optional[str] = None
    snapshot_before: str
    snapshot_after: str
    record: TransformationRecord


class SchemaRequest(BaseModel):
    """Request payload carrying only a schema."""

    schema_: DatabaseSchema = Field(..., alias="schema")

    model_config = {"populate_by_name": True}


class DiagramResponse(BaseModel):
    """Mermaid diagram for a schema."""

    diagram: str
    snapshot_id: str


@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.post("/simulate", response_model=SimulateResponse)
async def simulate_statement(request: SimulateRequest) -> SimulateResponse:
    """Simulate generated SQL against the posted schema and record the attempt."""
    schema = request.schema_
    outcome = simulate(schema, request.sql, request.dialect or get_sql_dialect())

    record = build_transformation_record(
        outcome,
        generated_sql=request.sql,
        schema_before=schema,
        user_prompt=request.prompt,
    )
    get_transformation_store().save(record)
    logger.info(
        "Stored transformation %s with status %s", record.id, record.execution_status.value
    )

    snapshot_before = resolve_snapshot_id(schema)
    if isinstance(outcome, Applied):
        return SimulateResponse(
            outcome=outcome,
            snapshot_before=snapshot_before,
            snapshot_after=resolve_snapshot_id(outcome.new_schema),
            record=record,
        )
    return SimulateResponse(
        outcome=outcome,
        error_code=error_code_for_rejection(outcome.reason).value,
        snapshot_before=snapshot_before,
        snapshot_after=snapshot_before,
        record=record,
    )


@app.post("/diagram", response_model=DiagramResponse)
async def render_diagram(request: SchemaRequest) -> DiagramResponse:
    """Render the posted schema as a Mermaid ER diagram."""
    return DiagramResponse(
        diagram=generate_er_diagram(request.schema_),
        snapshot_id=resolve_snapshot_id(request.schema_),
    )


@app.post("/shortcuts", response_model=List[ShortcutCategory])
async def shortcuts(request: SchemaRequest) -> List[ShortcutCategory]:
    """Suggest plain-English transformations for the posted schema."""
    return suggest_shortcuts(request.schema_)


@app.get("/transformations")
async def list_transformations(
    limit: Optional[int] = Query(default=None, ge=0),
) -> List[dict[str, Any]]:
    """List recorded transformations, newest first."""
    return get_transformation_store().export_json(limit=limit)


@app.get("/transformations/{record_id}", response_model=TransformationRecord)
async def get_transformation(record_id: str) -> TransformationRecord:
    """Fetch one recorded transformation."""
    record = get_transformation_store().get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Transformation '{record_id}' not found")
    return record
