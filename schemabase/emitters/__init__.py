"""SQL emitters for the relational IR."""

from schemabase.emitters.base import SqlEmitter, get_emitter
from schemabase.emitters.postgres import PostgresEmitter

__all__ = ["PostgresEmitter", "SqlEmitter", "get_emitter"]
