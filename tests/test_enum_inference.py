"""Tests for enum type inference."""

from schemabase.compilation.enum_inference import infer_enums
from schemabase.core.schemas import Column, ColumnType, Provenance, RelationalIR, Table


def make_table(name, *columns):
    return Table(
        name=name,
        columns=list(columns),
        provenance=Provenance(file=f"{name}.json", pointer="/"),
    )


def enum_column(name, values):
    return Column(
        name=name, type=ColumnType(json_type="string", enum=values), nullable=True
    )


def test_no_enums():
    table = make_table(
        "users", Column(name="id", type=ColumnType(json_type="string"), nullable=False)
    )
    assert infer_enums(RelationalIR(tables=[table])) == []


def test_names_and_order():
    ir = RelationalIR(
        tables=[
            make_table("users", enum_column("role", ["a"]), enum_column("tier", ["b"])),
            make_table("posts", enum_column("state", ["draft", "live"])),
        ]
    )
    enums = infer_enums(ir)
    assert [e.name for e in enums] == [
        "users_role_enum",
        "users_tier_enum",
        "posts_state_enum",
    ]
    assert enums[2].provenance == Provenance(file="posts.json", pointer="/")


def test_values_deduplicated_by_first_occurrence():
    ir = RelationalIR(tables=[make_table("t", enum_column("c", ["b", "a", "b", "c"]))])
    assert infer_enums(ir)[0].values == ("b", "a", "c")


def test_first_occurrence_wins_on_name_collision():
    ir = RelationalIR(
        tables=[
            make_table("users", enum_column("role", ["admin"])),
            make_table("users", enum_column("role", ["other"])),
        ]
    )
    enums = infer_enums(ir)
    assert len(enums) == 1
    assert enums[0].values == ("admin",)


def test_empty_enum_is_skipped():
    ir = RelationalIR(tables=[make_table("t", enum_column("c", []))])
    assert infer_enums(ir) == []
