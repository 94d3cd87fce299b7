"""Flat operation plan: the relational IR in emission order."""

from __future__ import annotations

import json
from typing import Annotated, Literal, Union

from pydantic import Field

from schemabase.core.schemas import EnumType, ForeignKey, Index, IRModel, Table


class CreateEnumOp(IRModel):
    kind: Literal["CreateEnum"] = "CreateEnum"
    enum: EnumType


class CreateTableOp(IRModel):
    kind: Literal["CreateTable"] = "CreateTable"
    table: Table


class AddForeignKeyOp(IRModel):
    kind: Literal["AddForeignKey"] = "AddForeignKey"
    foreign_key: ForeignKey


class CreateIndexOp(IRModel):
    kind: Literal["CreateIndex"] = "CreateIndex"
    index: Index


Operation = Annotated[
    Union[CreateEnumOp, CreateTableOp, AddForeignKeyOp, CreateIndexOp],
    Field(discriminator="kind"),
]


class MigrationPlan(IRModel):
    operations: tuple[Operation, ...] = ()

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(
            self.model_dump(mode="json", by_alias=True, exclude_none=True),
            indent=indent,
            ensure_ascii=False,
        )
