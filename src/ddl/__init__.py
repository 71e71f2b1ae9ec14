"""Mock DDL executor: simulate schema-altering SQL against an in-memory schema."""

from ddl.classifier import classify
from ddl.mutator import MutationError, apply_operation
from ddl.operations import (
    AddColumn,
    CreateIndex,
    CreateTable,
    DropColumn,
    Operation,
    RenameColumn,
    Unrecognized,
)
from ddl.simulator import Applied, Outcome, Rejected, RejectionReason, SimulationState, simulate
from ddl.validator import validate

__all__ = [
    "AddColumn",
    "Applied",
    "CreateIndex",
    "CreateTable",
    "DropColumn",
    "MutationError",
    "Operation",
    "Outcome",
    "Rejected",
    "RejectionReason",
    "RenameColumn",
    "SimulationState",
    "Unrecognized",
    "apply_operation",
    "classify",
    "simulate",
    "validate",
]
