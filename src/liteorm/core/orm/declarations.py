"""
Declarative schema markers for record types.

A record type is a dataclass carrying a ``@table`` decorator; its mapped
fields are created with ``primary_key()``, ``column()`` or
``foreign_key()`` instead of a bare default. Each factory returns a
``dataclasses.field`` whose metadata holds an immutable declaration, which
is all the descriptor resolver ever reads.

Examples:
    >>> from dataclasses import dataclass
    >>> from liteorm.core.orm.declarations import column, primary_key, table
    >>> @table("Advisors")
    ... @dataclass
    ... class Advisor:
    ...     id: int | None = primary_key("AdvisorID")
    ...     first_name: str | None = column("FirstName", not_null=True)
    >>> Advisor.__tablename__
    'Advisors'

Narrower native kinds are declared through ``typing.Annotated``; the
aliases below cover every kind that has no plain Python type of its own::

    zip_code: Int32 = column("ZipCode", default=0)
    grade: Char = column("Grade", default="A")

Tags:
    declarations, dataclasses, schema, liteorm
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Annotated, Any, Callable, TypeVar

from liteorm.core.enums import ConflictAction, Kind, ParentChangedAction
from liteorm.core.errors import DeclarationError

T = TypeVar("T", bound=type)

METADATA_KEY = "liteorm"

Int8 = Annotated[int, Kind.INT8]
Int16 = Annotated[int, Kind.INT16]
Int32 = Annotated[int, Kind.INT32]
Int64 = Annotated[int, Kind.INT64]
UInt8 = Annotated[int, Kind.UINT8]
UInt16 = Annotated[int, Kind.UINT16]
UInt32 = Annotated[int, Kind.UINT32]
UInt64 = Annotated[int, Kind.UINT64]
Char = Annotated[str, Kind.CHAR]
Float32 = Annotated[float, Kind.FLOAT32]
Float64 = Annotated[float, Kind.FLOAT64]


@dataclass(frozen=True, slots=True, kw_only=True)
class PrimaryKeyDeclaration:
    """Marks the field holding the table's primary key."""

    column_name: str
    auto_increment: bool = True
    kind: Kind | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ColumnDeclaration:
    """Marks an ordinary column and its constraints."""

    column_name: str
    not_null: bool = False
    not_null_on_conflict: ConflictAction = ConflictAction.ABORT
    unique: bool = False
    unique_on_conflict: ConflictAction = ConflictAction.ABORT
    default_value: Any = None
    kind: Kind | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ForeignKeyDeclaration(ColumnDeclaration):
    """A column that references the same-named column of a parent table."""

    parent_table: str
    on_parent_update: ParentChangedAction = ParentChangedAction.NO_ACTION
    on_parent_delete: ParentChangedAction = ParentChangedAction.NO_ACTION


Declaration = PrimaryKeyDeclaration | ColumnDeclaration


def table(name: str) -> Callable[[T], T]:
    """Class decorator declaring the table a dataclass maps to.

    Apply it above ``@dataclass``. The name is stored as ``__tablename__``.
    """
    if not name:
        raise DeclarationError("Table name must be a non-empty string")

    def decorate(cls: T) -> T:
        if not dataclasses.is_dataclass(cls):
            raise DeclarationError(
                f"@table requires a dataclass, got {cls.__qualname__}"
            ).with_context(record_type=cls.__qualname__, table=name)
        cls.__tablename__ = name
        return cls

    return decorate


def _mapped_field(
    declaration: Declaration,
    default: Any,
    default_factory: Callable[[], Any] | Any,
) -> Any:
    metadata = {METADATA_KEY: declaration}
    if default_factory is not dataclasses.MISSING:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


def primary_key(
    column_name: str,
    *,
    auto_increment: bool = True,
    kind: Kind | None = None,
    default: Any = None,
) -> Any:
    """Declare the primary-key field. Defaults to ``None`` until inserted."""
    declaration = PrimaryKeyDeclaration(
        column_name=column_name, auto_increment=auto_increment, kind=kind
    )
    return _mapped_field(declaration, default, dataclasses.MISSING)


def column(
    column_name: str,
    *,
    not_null: bool = False,
    not_null_on_conflict: ConflictAction = ConflictAction.ABORT,
    unique: bool = False,
    unique_on_conflict: ConflictAction = ConflictAction.ABORT,
    default_value: Any = None,
    kind: Kind | None = None,
    default: Any = None,
    default_factory: Callable[[], Any] | Any = dataclasses.MISSING,
) -> Any:
    """Declare an ordinary column.

    ``default_value`` is the SQL ``DEFAULT`` written into the table
    definition; ``default``/``default_factory`` are the Python-side
    dataclass defaults and never reach the database on their own.
    """
    declaration = ColumnDeclaration(
        column_name=column_name,
        not_null=not_null,
        not_null_on_conflict=not_null_on_conflict,
        unique=unique,
        unique_on_conflict=unique_on_conflict,
        default_value=default_value,
        kind=kind,
    )
    return _mapped_field(declaration, default, default_factory)


def foreign_key(
    parent_table: str,
    parent_column: str,
    *,
    on_parent_update: ParentChangedAction = ParentChangedAction.NO_ACTION,
    on_parent_delete: ParentChangedAction = ParentChangedAction.NO_ACTION,
    not_null: bool = False,
    not_null_on_conflict: ConflictAction = ConflictAction.ABORT,
    unique: bool = False,
    unique_on_conflict: ConflictAction = ConflictAction.ABORT,
    default_value: Any = None,
    kind: Kind | None = None,
    default: Any = None,
) -> Any:
    """Declare a foreign-key column named after the parent's column."""
    declaration = ForeignKeyDeclaration(
        column_name=parent_column,
        parent_table=parent_table,
        on_parent_update=on_parent_update,
        on_parent_delete=on_parent_delete,
        not_null=not_null,
        not_null_on_conflict=not_null_on_conflict,
        unique=unique,
        unique_on_conflict=unique_on_conflict,
        default_value=default_value,
        kind=kind,
    )
    return _mapped_field(declaration, default, dataclasses.MISSING)


def declaration_of(field: dataclasses.Field) -> Declaration | None:
    """Return the mapper declaration attached to a dataclass field, if any."""
    return field.metadata.get(METADATA_KEY)


__all__ = [
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Char",
    "Float32",
    "Float64",
    "PrimaryKeyDeclaration",
    "ColumnDeclaration",
    "ForeignKeyDeclaration",
    "table",
    "primary_key",
    "column",
    "foreign_key",
    "declaration_of",
]
