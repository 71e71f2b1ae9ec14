"""Mock DDL execution: classify, validate, then apply or reject.

``simulate`` is the only entrypoint. It holds no state between calls, never
touches a real database, and reports every failure as a ``Rejected`` value
rather than an exception.
"""

import logging
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ddl.classifier import classify
from ddl.mutator import apply_operation
from ddl.operations import Operation, Unrecognized
from ddl.validator import validate
from schema import DatabaseSchema, find_table, generate_er_diagram

logger = logging.getLogger(__name__)


class SimulationState(str, Enum):
    """Stages a single simulation passes through."""

    IDLE = "idle"
    CLASSIFIED = "classified"
    VALIDATED = "validated"
    APPLIED = "applied"
    REJECTED_UNSUPPORTED = "rejected_unsupported"
    REJECTED_INVALID = "rejected_invalid"


_TRANSITIONS: dict[SimulationState, frozenset[SimulationState]] = {
    SimulationState.IDLE: frozenset({SimulationState.CLASSIFIED}),
    SimulationState.CLASSIFIED: frozenset(
        {
            SimulationState.REJECTED_UNSUPPORTED,
            SimulationState.VALIDATED,
            SimulationState.REJECTED_INVALID,
        }
    ),
    SimulationState.VALIDATED: frozenset({SimulationState.APPLIED}),
    SimulationState.APPLIED: frozenset(),
    SimulationState.REJECTED_UNSUPPORTED: frozenset(),
    SimulationState.REJECTED_INVALID: frozenset(),
}


class RejectionReason(str, Enum):
    """Why a statement was not applied."""

    UNSUPPORTED = "unsupported"
    INVALID = "invalid"


class Applied(BaseModel):
    """Terminal outcome for a statement that was simulated successfully.

    Attributes:
        new_schema: Schema after the change. The caller's schema is untouched.
        description: One-line human-readable change summary.
        operation: The classified operation that was applied.
        diagram: Mermaid ER diagram regenerated from ``new_schema``.
        affected_tables: Tables touched by the operation, as stored in the schema.
    """

    status: Literal["applied"] = "applied"
    new_schema: DatabaseSchema
    description: str
    operation: Operation
    diagram: str
    affected_tables: List[str] = Field(default_factory=list)

    @property
    def state(self) -> SimulationState:
        return SimulationState.APPLIED


class Rejected(BaseModel):
    """Terminal outcome for a statement that was not applied."""

    status: Literal["rejected"] = "rejected"
    reason: RejectionReason
    messages: List[str]
    operation: Optional[Operation] = None

    @property
    def state(self) -> SimulationState:
        if self.reason == RejectionReason.UNSUPPORTED:
            return SimulationState.REJECTED_UNSUPPORTED
        return SimulationState.REJECTED_INVALID


Outcome = Annotated[Union[Applied, Rejected], Field(discriminator="status")]


def _advance(current: SimulationState, target: SimulationState) -> SimulationState:
    if target not in _TRANSITIONS[current]:
        raise RuntimeError(f"Illegal simulation transition {current.value} -> {target.value}")
    logger.debug("Simulation transition %s -> %s", current.value, target.value)
    return target


def simulate(schema: DatabaseSchema, sql: str, dialect: Optional[str] = None) -> Outcome:
    """Simulate one SQL statement against an in-memory schema.

    Args:
        schema: Current schema. It is never modified.
        sql: Untrusted SQL text. It is pattern-matched, never executed.
        dialect: sqlglot dialect used to read ``sql``. Defaults to postgres.

    Returns:
        ``Applied`` with the new schema and description, or ``Rejected`` with
        reason ``unsupported`` (single message) or ``invalid`` (all violations).
    """
    state = SimulationState.IDLE
    classification = classify(sql, dialect)
    state = _advance(state, SimulationState.CLASSIFIED)

    if isinstance(classification, Unrecognized):
        _advance(state, SimulationState.REJECTED_UNSUPPORTED)
        logger.info(
            "Simulation rejected as unsupported (statement_type=%s)",
            classification.statement_type or "unknown",
        )
        return Rejected(reason=RejectionReason.UNSUPPORTED, messages=[classification.reason])

    violations = validate(classification, schema)
    if violations:
        _advance(state, SimulationState.REJECTED_INVALID)
        logger.info(
            "Simulation of %s rejected with %d violation(s)",
            classification.kind,
            len(violations),
        )
        return Rejected(
            reason=RejectionReason.INVALID,
            messages=violations,
            operation=classification,
        )

    state = _advance(state, SimulationState.VALIDATED)
    new_schema, description = apply_operation(classification, schema)
    _advance(state, SimulationState.APPLIED)
    logger.info("Simulation applied: %s", description)

    table = find_table(new_schema, classification.table)
    return Applied(
        new_schema=new_schema,
        description=description,
        operation=classification,
        diagram=generate_er_diagram(new_schema),
        affected_tables=[table.name if table is not None else classification.table],
    )
