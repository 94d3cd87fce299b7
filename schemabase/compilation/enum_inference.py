"""Named enum types derived from enum-restricted columns."""

from __future__ import annotations

from collections.abc import Iterable

from schemabase.core.schemas import EnumType, RelationalIR
from schemabase.logger import logger


def enum_type_name(table: str, column: str) -> str:
    return f"{table}_{column}_enum"


def _dedupe(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def infer_enums(ir: RelationalIR) -> list[EnumType]:
    """Derive one enum type per enum column, in table then column order.

    When two columns derive the same name the first one wins.
    """
    enums: list[EnumType] = []
    seen: set[str] = set()
    for table in ir.tables:
        for column in table.columns:
            if not column.type.enum:
                continue
            name = enum_type_name(table.name, column.name)
            if name in seen:
                logger.debug("Skipping duplicate enum type %s", name)
                continue
            seen.add(name)
            enums.append(
                EnumType(
                    name=name,
                    values=_dedupe(column.type.enum),
                    provenance=table.provenance,
                )
            )
    return enums
