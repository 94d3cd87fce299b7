"""Ordering of the relational IR into a migration plan."""

from __future__ import annotations

from schemabase.core.schemas import RelationalIR
from schemabase.plan.types import (
    AddForeignKeyOp,
    CreateEnumOp,
    CreateIndexOp,
    CreateTableOp,
    MigrationPlan,
    Operation,
)


def build_plan(ir: RelationalIR) -> MigrationPlan:
    """Order the IR for a create script.

    Enum types come first, then every table, then foreign keys (so tables that
    reference each other can all be created before any constraint), then
    indexes grouped by table.
    """
    operations: list[Operation] = []
    operations.extend(CreateEnumOp(enum=e) for e in ir.enums)
    operations.extend(CreateTableOp(table=t) for t in ir.tables)
    operations.extend(AddForeignKeyOp(foreign_key=fk) for fk in ir.foreign_keys)
    for table in ir.tables:
        operations.extend(CreateIndexOp(index=i) for i in table.indexes)
    return MigrationPlan(operations=operations)
