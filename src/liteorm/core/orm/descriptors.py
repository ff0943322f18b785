"""
Type descriptor resolution.

Turns a declared record type into an immutable ``TableDescriptor``: the
table name, the primary key, the ordinary columns and the foreign keys,
each carrying the column name, the native ``Kind`` and the constraints.
Every statement builder and the materializer work from this value only.

Manifesto:
    Reflection happens in exactly one place. Statement text depends on
    column order, so the resolver preserves field declaration order and
    nothing downstream re-sorts or re-reads class attributes.

    - **Pure:** No I/O, no caching, no mutation of the record type
    - **Deterministic:** Same class in, equal descriptor out
    - **Strict:** Declaration mistakes surface here, before any SQL exists

Architecture:
    ::

        @table("Students") @dataclass class Student
              │
              ▼
        resolve_table(Student)
              │  dataclasses.fields()  → declaration order
              │  get_type_hints(..., include_extras=True) → Kind
              ▼
        TableDescriptor
          ├── table_name     "Students"
          ├── primary_key    StudentID  INTEGER  AUTOINCREMENT
          ├── columns        FirstName, LastName, DateOfBirth, ...
          ├── foreign_keys   AdvisorID → Advisors
          └── data_columns   columns + foreign_keys, declaration order

Examples:
    >>> descriptor = resolve_table(Advisor)
    >>> descriptor.table_name
    'Advisors'
    >>> [c.column_name for c in descriptor.data_columns]
    ['FirstName', 'LastName', 'RoomNumber']

Guardrails:
    ❌ DON'T: Walk ``dataclasses.fields()`` in statement code
    ✅ DO: Iterate ``descriptor.data_columns``

    ❌ DON'T: Memoize descriptors in a module global
    ✅ DO: Keep any cache caller-side and guard it with a lock

Tags:
    reflection, descriptors, schema, dataclasses, liteorm

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import dataclasses
import datetime
import types
from dataclasses import dataclass
from decimal import Decimal
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

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
from liteorm.core.logging import get_logger
from liteorm.core.orm.declarations import (
    ColumnDeclaration,
    ForeignKeyDeclaration,
    PrimaryKeyDeclaration,
    declaration_of,
)

logger = get_logger(__name__)

_PLAIN_KINDS: dict[Any, Kind] = {
    bool: Kind.BOOLEAN,
    int: Kind.INT64,
    float: Kind.FLOAT64,
    Decimal: Kind.DECIMAL,
    str: Kind.STRING,
    datetime.datetime: Kind.TIMESTAMP,
}


def kind_for_annotation(annotation: Any) -> Kind | None:
    """Map a field annotation to its native kind, or ``None`` if unmapped.

    ``Annotated`` metadata wins over the base type; ``Optional`` unwraps.
    """
    origin = get_origin(annotation)
    if origin is Annotated:
        for meta in annotation.__metadata__:
            if isinstance(meta, Kind):
                return meta
        return kind_for_annotation(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return kind_for_annotation(members[0])
        return None
    return _PLAIN_KINDS.get(annotation)


def _type_name(annotation: Any) -> str:
    return getattr(annotation, "__qualname__", None) or repr(annotation)


@dataclass(frozen=True, slots=True, kw_only=True)
class PrimaryKeyDescriptor:
    """Resolved primary-key column."""

    field_name: str
    column_name: str
    kind: Kind | None
    type_name: str
    auto_increment: bool = True

    @property
    def sql_type(self) -> SqlType:
        return _sql_type(self.kind, self.type_name, self.column_name)


@dataclass(frozen=True, slots=True, kw_only=True)
class ColumnDescriptor:
    """Resolved ordinary column with its constraints."""

    field_name: str
    column_name: str
    kind: Kind | None
    type_name: str
    not_null: bool = False
    not_null_on_conflict: ConflictAction = ConflictAction.ABORT
    unique: bool = False
    unique_on_conflict: ConflictAction = ConflictAction.ABORT
    default_value: Any = None

    @property
    def has_default(self) -> bool:
        return self.default_value is not None

    @property
    def sql_type(self) -> SqlType:
        return _sql_type(self.kind, self.type_name, self.column_name)


@dataclass(frozen=True, slots=True, kw_only=True)
class ForeignKeyDescriptor(ColumnDescriptor):
    """Resolved foreign-key column; the parent column shares its name."""

    parent_table: str
    on_parent_update: ParentChangedAction = ParentChangedAction.NO_ACTION
    on_parent_delete: ParentChangedAction = ParentChangedAction.NO_ACTION


def _sql_type(kind: Kind | None, type_name: str, column_name: str) -> SqlType:
    if kind is None:
        raise UnsupportedTypeError(
            f"No SQL datatype mapping found for type {type_name}"
        ).with_context(column=column_name)
    return kind.sql_type


@dataclass(frozen=True, slots=True, kw_only=True)
class TableDescriptor:
    """
    Resolved schema metadata for one record type.

    ``columns`` holds plain columns only and ``foreign_keys`` holds the
    foreign keys only; ``data_columns`` merges both in field declaration
    order and is what INSERT, UPDATE, CREATE TABLE and the materializer
    iterate.
    """

    record_type: type
    table_name: str
    primary_key: PrimaryKeyDescriptor | None
    columns: tuple[ColumnDescriptor, ...]
    foreign_keys: tuple[ForeignKeyDescriptor, ...]
    data_columns: tuple[ColumnDescriptor, ...]
    field_names: tuple[str, ...]

    def require_primary_key(self) -> PrimaryKeyDescriptor:
        """Return the primary key or raise ``MissingPrimaryKeyError``."""
        if self.primary_key is None:
            raise MissingPrimaryKeyError(
                f"No primary key declared on type {self.record_type.__qualname__}"
            ).with_context(record_type=self.record_type.__qualname__, table=self.table_name)
        return self.primary_key

    def foreign_key_for(self, field_name: str) -> ForeignKeyDescriptor:
        """Return the foreign key declared on ``field_name``.

        Raises ``UnknownPropertyError`` when the type has no such field and
        ``MissingForeignKeyError`` when the field is not a foreign key.
        """
        if field_name not in self.field_names:
            raise UnknownPropertyError(
                f"Unable to find property {field_name} for type {self.record_type.__qualname__}"
            ).with_context(record_type=self.record_type.__qualname__, field=field_name)
        for foreign_key in self.foreign_keys:
            if foreign_key.field_name == field_name:
                return foreign_key
        raise MissingForeignKeyError(
            f"No foreign key declared on property {field_name}"
        ).with_context(record_type=self.record_type.__qualname__, field=field_name)

    def first_foreign_key(self) -> ForeignKeyDescriptor:
        """Return the first declared foreign key."""
        if not self.foreign_keys:
            raise MissingForeignKeyError(
                f"No foreign key declared on type {self.record_type.__qualname__}"
            ).with_context(record_type=self.record_type.__qualname__, table=self.table_name)
        return self.foreign_keys[0]


def table_name_of(record_type: type) -> str:
    """Return the declared table name or raise ``MissingTableDeclarationError``."""
    name = getattr(record_type, "__tablename__", None)
    if not name:
        type_name = getattr(record_type, "__qualname__", repr(record_type))
        raise MissingTableDeclarationError(
            f"No table declaration found on type {type_name}"
        ).with_context(record_type=type_name)
    return name


def resolve_table(record_type: type) -> TableDescriptor:
    """Build the ``TableDescriptor`` for a declared record type."""
    if not isinstance(record_type, type):
        raise DeclarationError(
            f"Expected a record type, got {type(record_type).__qualname__} instance"
        )
    table_name = table_name_of(record_type)
    type_name = record_type.__qualname__
    if not dataclasses.is_dataclass(record_type):
        raise DeclarationError(
            f"Record type {type_name} must be a dataclass"
        ).with_context(record_type=type_name, table=table_name)

    try:
        hints = get_type_hints(record_type, include_extras=True)
    except NameError as exc:
        raise DeclarationError(
            f"Cannot resolve field annotations of {type_name}: {exc}", cause=exc
        ).with_context(record_type=type_name, table=table_name) from exc

    primary_keys: list[PrimaryKeyDescriptor] = []
    columns: list[ColumnDescriptor] = []
    foreign_keys: list[ForeignKeyDescriptor] = []
    data_columns: list[ColumnDescriptor] = []
    field_names: list[str] = []

    for field in dataclasses.fields(record_type):
        field_names.append(field.name)
        declaration = declaration_of(field)
        if declaration is None:
            continue

        annotation = hints.get(field.name, field.type)
        kind = declaration.kind or kind_for_annotation(annotation)
        annotation_name = _type_name(annotation)

        if isinstance(declaration, PrimaryKeyDeclaration):
            primary_keys.append(
                PrimaryKeyDescriptor(
                    field_name=field.name,
                    column_name=declaration.column_name,
                    kind=kind,
                    type_name=annotation_name,
                    auto_increment=declaration.auto_increment,
                )
            )
        elif isinstance(declaration, ForeignKeyDeclaration):
            foreign_key = ForeignKeyDescriptor(
                field_name=field.name,
                kind=kind,
                type_name=annotation_name,
                **_column_options(declaration),
                parent_table=declaration.parent_table,
                on_parent_update=declaration.on_parent_update,
                on_parent_delete=declaration.on_parent_delete,
            )
            foreign_keys.append(foreign_key)
            data_columns.append(foreign_key)
        elif isinstance(declaration, ColumnDeclaration):
            plain = ColumnDescriptor(
                field_name=field.name,
                kind=kind,
                type_name=annotation_name,
                **_column_options(declaration),
            )
            columns.append(plain)
            data_columns.append(plain)

    if len(primary_keys) > 1:
        raise MultiplePrimaryKeysError(
            f"Unable to map type {type_name}, multiple primary keys declared: "
            + ", ".join(pk.field_name for pk in primary_keys)
        ).with_context(record_type=type_name, table=table_name)

    descriptor = TableDescriptor(
        record_type=record_type,
        table_name=table_name,
        primary_key=primary_keys[0] if primary_keys else None,
        columns=tuple(columns),
        foreign_keys=tuple(foreign_keys),
        data_columns=tuple(data_columns),
        field_names=tuple(field_names),
    )
    logger.debug(
        "descriptor_resolved",
        record_type=type_name,
        table=table_name,
        columns=len(data_columns),
        foreign_keys=len(foreign_keys),
    )
    return descriptor


def _column_options(declaration: ColumnDeclaration) -> dict[str, Any]:
    return {
        "column_name": declaration.column_name,
        "not_null": declaration.not_null,
        "not_null_on_conflict": declaration.not_null_on_conflict,
        "unique": declaration.unique,
        "unique_on_conflict": declaration.unique_on_conflict,
        "default_value": declaration.default_value,
    }


__all__ = [
    "PrimaryKeyDescriptor",
    "ColumnDescriptor",
    "ForeignKeyDescriptor",
    "TableDescriptor",
    "kind_for_annotation",
    "table_name_of",
    "resolve_table",
]
