"""Migration plan built from the relational IR."""

from schemabase.plan.builder import build_plan
from schemabase.plan.types import MigrationPlan, Operation

__all__ = ["MigrationPlan", "Operation", "build_plan"]
