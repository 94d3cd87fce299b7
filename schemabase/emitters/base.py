"""SQL emitter protocol and dialect lookup."""

from __future__ import annotations

from typing import Protocol

from schemabase.core.exceptions import EmitError
from schemabase.core.schemas import RelationalIR
from schemabase.emitters.postgres import PostgresEmitter


class SqlEmitter(Protocol):
    dialect: str

    def emit(self, ir: RelationalIR) -> str: ...


def get_emitter(dialect: str) -> SqlEmitter:
    """Return the emitter for a dialect name.

    Raises:
        EmitError: If no emitter exists for the dialect
    """
    emitters: dict[str, SqlEmitter] = {PostgresEmitter.dialect: PostgresEmitter()}
    try:
        return emitters[dialect.lower()]
    except KeyError:
        raise EmitError(
            f"Unsupported dialect '{dialect}' (available: {', '.join(sorted(emitters))})"
        ) from None
