"""Tests for record declarations and descriptor resolution."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytest

from conftest import Advisor, Blob, Note, Student, Twins, Undeclared
from liteorm.core.enums import ConflictAction, Kind, ParentChangedAction, SqlType
from liteorm.core.errors import (
    DeclarationError,
    MissingForeignKeyError,
    MissingPrimaryKeyError,
    MissingTableDeclarationError,
    MultiplePrimaryKeysError,
    UnknownPropertyError,
    UnsupportedTypeError,
)
from liteorm.core.orm import (
    Char,
    Float32,
    ForeignKeyDescriptor,
    Int8,
    UInt16,
    column,
    foreign_key,
    kind_for_annotation,
    primary_key,
    resolve_table,
    table,
)
from liteorm.core.orm.declarations import (
    METADATA_KEY,
    ColumnDeclaration,
    ForeignKeyDeclaration,
    declaration_of,
)


class TestTableDecorator:
    def test_sets_tablename(self):
        assert Advisor.__tablename__ == "Advisors"

    def test_rejects_empty_name(self):
        with pytest.raises(DeclarationError):
            table("")

    def test_rejects_non_dataclass(self):
        with pytest.raises(DeclarationError):

            @table("Plain")
            class Plain:
                pass


class TestFieldFactories:
    def test_column_attaches_declaration(self):
        f = field(metadata={})
        assert declaration_of(f) is None

        @dataclass
        class Holder:
            name: str | None = column("Name", unique=True)

        declaration = Holder.__dataclass_fields__["name"].metadata[METADATA_KEY]
        assert isinstance(declaration, ColumnDeclaration)
        assert declaration.column_name == "Name"
        assert declaration.unique is True
        assert Holder().name is None

    def test_foreign_key_is_a_column_declaration(self):
        @dataclass
        class Holder:
            parent: int | None = foreign_key("Parents", "ParentID")

        declaration = declaration_of(Holder.__dataclass_fields__["parent"])
        assert isinstance(declaration, ForeignKeyDeclaration)
        assert isinstance(declaration, ColumnDeclaration)
        assert declaration.column_name == "ParentID"
        assert declaration.on_parent_delete == ParentChangedAction.NO_ACTION

    def test_column_default_factory(self):
        @dataclass
        class Holder:
            tags: str = column("Tags", default_factory=lambda: "none")

        assert Holder().tags == "none"


class TestKindForAnnotation:
    @pytest.mark.parametrize(
        "annotation, kind",
        [
            (bool, Kind.BOOLEAN),
            (int, Kind.INT64),
            (float, Kind.FLOAT64),
            (Decimal, Kind.DECIMAL),
            (str, Kind.STRING),
            (datetime, Kind.TIMESTAMP),
            (Int8, Kind.INT8),
            (UInt16, Kind.UINT16),
            (Char, Kind.CHAR),
            (Float32, Kind.FLOAT32),
            (int | None, Kind.INT64),
            (Optional[Char], Kind.CHAR),
            (Int8 | None, Kind.INT8),
        ],
    )
    def test_mapped(self, annotation, kind):
        assert kind_for_annotation(annotation) == kind

    @pytest.mark.parametrize("annotation", [bytes, list[int], int | str, complex])
    def test_unmapped(self, annotation):
        assert kind_for_annotation(annotation) is None


class TestResolveAdvisor:
    def test_table_and_primary_key(self):
        descriptor = resolve_table(Advisor)
        assert descriptor.table_name == "Advisors"
        assert descriptor.record_type is Advisor
        pk = descriptor.primary_key
        assert pk.field_name == "id"
        assert pk.column_name == "AdvisorID"
        assert pk.auto_increment is True
        assert pk.sql_type == SqlType.INTEGER

    def test_columns_in_declaration_order(self):
        descriptor = resolve_table(Advisor)
        assert [c.column_name for c in descriptor.columns] == [
            "FirstName",
            "LastName",
            "RoomNumber",
        ]
        assert descriptor.foreign_keys == ()
        assert descriptor.data_columns == descriptor.columns

    def test_constraints(self):
        first_name, last_name, room_number = resolve_table(Advisor).columns
        assert first_name.not_null is True
        assert first_name.not_null_on_conflict == ConflictAction.FAIL
        assert last_name.not_null is False and last_name.unique is False
        assert room_number.unique is True
        assert room_number.unique_on_conflict == ConflictAction.ABORT
        assert room_number.has_default is True
        assert room_number.default_value == "1124"
        assert last_name.has_default is False

    def test_resolution_is_deterministic(self):
        assert resolve_table(Advisor) == resolve_table(Advisor)


class TestResolveStudent:
    def test_foreign_key_kept_out_of_plain_columns(self):
        descriptor = resolve_table(Student)
        assert "AdvisorID" not in [c.column_name for c in descriptor.columns]
        assert [fk.column_name for fk in descriptor.foreign_keys] == ["AdvisorID"]

    def test_data_columns_include_foreign_key_in_order(self):
        descriptor = resolve_table(Student)
        assert [c.column_name for c in descriptor.data_columns] == [
            "FirstName",
            "LastName",
            "DateOfBirth",
            "GradePointAverage",
            "ZipCode",
            "AdvisorID",
        ]

    def test_foreign_key_descriptor(self):
        (fk,) = resolve_table(Student).foreign_keys
        assert isinstance(fk, ForeignKeyDescriptor)
        assert fk.field_name == "_advisor_id"
        assert fk.parent_table == "Advisors"
        assert fk.not_null is True
        assert fk.on_parent_delete == ParentChangedAction.CASCADE
        assert fk.on_parent_update == ParentChangedAction.NO_ACTION

    def test_kinds_and_sql_types(self):
        by_name = {c.column_name: c for c in resolve_table(Student).data_columns}
        assert by_name["DateOfBirth"].kind == Kind.TIMESTAMP
        assert by_name["DateOfBirth"].sql_type == SqlType.TEXT
        assert by_name["GradePointAverage"].sql_type == SqlType.REAL
        assert by_name["ZipCode"].kind == Kind.INT32
        assert by_name["ZipCode"].sql_type == SqlType.INTEGER

    def test_foreign_key_lookup(self):
        descriptor = resolve_table(Student)
        assert descriptor.foreign_key_for("_advisor_id").column_name == "AdvisorID"
        assert descriptor.first_foreign_key().field_name == "_advisor_id"

    def test_foreign_key_lookup_on_plain_column(self):
        with pytest.raises(MissingForeignKeyError):
            resolve_table(Student).foreign_key_for("first_name")

    def test_foreign_key_lookup_on_unknown_property(self):
        with pytest.raises(UnknownPropertyError):
            resolve_table(Student).foreign_key_for("shoe_size")

    def test_first_foreign_key_when_none_declared(self):
        with pytest.raises(MissingForeignKeyError):
            resolve_table(Advisor).first_foreign_key()


class TestResolveEdgeCases:
    def test_zero_primary_keys_allowed(self):
        descriptor = resolve_table(Note)
        assert descriptor.primary_key is None
        assert [c.field_name for c in descriptor.columns] == ["body"]
        with pytest.raises(MissingPrimaryKeyError):
            descriptor.require_primary_key()

    def test_undeclared_fields_ignored(self):
        assert "scratch" in resolve_table(Note).field_names
        assert "scratch" not in [c.field_name for c in resolve_table(Note).data_columns]

    def test_multiple_primary_keys(self):
        with pytest.raises(MultiplePrimaryKeysError):
            resolve_table(Twins)

    def test_missing_table_declaration(self):
        with pytest.raises(MissingTableDeclarationError):
            resolve_table(Undeclared)

    def test_instance_instead_of_type(self):
        with pytest.raises(DeclarationError):
            resolve_table(Advisor())

    def test_explicit_kind_overrides_annotation(self):
        level = resolve_table(Blob).columns[1]
        assert level.kind == Kind.UINT8

    def test_unmapped_type_resolves_but_has_no_sql_type(self):
        payload = resolve_table(Blob).columns[0]
        assert payload.kind is None
        with pytest.raises(UnsupportedTypeError, match="No SQL datatype mapping found"):
            payload.sql_type
