"""
Statement synthesis for declared record types.

Builds complete, ``;``-terminated SQLite statements from a record type (or
a record instance) using only its ``TableDescriptor`` and the value codec.
Layout is part of the contract: column lists are separated by ``,\\n\\t``
and clauses sit on their own lines, so the same input always yields
byte-identical text.

Manifesto:
    - **Pure:** No executor, no clock, no randomness
    - **Declaration order:** Columns appear exactly as the fields are declared
    - **Whole-record writes:** UPDATE reassigns every column, never a diff
    - **Primary key is the database's:** INSERT never writes it

Architecture:
    ::

        ┌────────────────────────┬──────────────────────────────────────────┐
        │ Builder                │ Output                                   │
        ├────────────────────────┼──────────────────────────────────────────┤
        │ create_table_statement │ CREATE TABLE [IF NOT EXISTS ]T (         │
        │                        │ \\tpk, \\tcolumns..., \\tFOREIGN KEY ...)  │
        │ insert_statement       │ INSERT INTO T (cols) VALUES (literals);  │
        │ insert_all_script      │ BEGIN TRANSACTION; INSERT...; COMMIT;    │
        │ update_statement       │ UPDATE T SET c = v... WHERE pk = v;      │
        │ delete_statement       │ DELETE FROM T WHERE pk = v;              │
        │ delete_by_foreign_key  │ DELETE FROM T WHERE fk = v;              │
        │ select_*               │ SELECT * FROM T[ WHERE ...];             │
        └────────────────────────┴──────────────────────────────────────────┘

Examples:
    >>> print(create_table_statement(Advisor))
    CREATE TABLE Advisors (
    	AdvisorID INTEGER PRIMARY KEY AUTOINCREMENT,
    	FirstName TEXT NOT NULL ON CONFLICT FAIL,
    	LastName TEXT,
    	RoomNumber TEXT UNIQUE ON CONFLICT ABORT DEFAULT (1124)
    );

Guardrails:
    ❌ DON'T: Put double quotes inside STRING values
    ✅ DO: Treat string literals as unescaped text

Tags:
    sql, ddl, dml, statements, sqlite, liteorm

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from liteorm.core.errors import ConversionError
from liteorm.core.orm.codec import to_sql_literal
from liteorm.core.orm.descriptors import (
    ColumnDescriptor,
    ForeignKeyDescriptor,
    PrimaryKeyDescriptor,
    TableDescriptor,
    resolve_table,
)

NEWLINE = "\n"
LIST_SEPARATOR = ",\n\t"

ENABLE_FOREIGN_KEYS = "PRAGMA foreign_keys = ON;"
SQLITE_VERSION = "SELECT sqlite_version();"


# =============================================================================
# Fragments
# =============================================================================


def constraint_clause(column: ColumnDescriptor) -> str:
    """``NOT NULL``/``UNIQUE``/``DEFAULT`` suffix of a column definition."""
    parts = []
    if column.not_null:
        parts.append(f" NOT NULL ON CONFLICT {column.not_null_on_conflict.value}")
    if column.unique:
        parts.append(f" UNIQUE ON CONFLICT {column.unique_on_conflict.value}")
    if column.has_default:
        parts.append(f" DEFAULT ({column.default_value})")
    return "".join(parts)


def primary_key_definition(primary_key: PrimaryKeyDescriptor) -> str:
    definition = f"{primary_key.column_name} {primary_key.sql_type.value} PRIMARY KEY"
    if primary_key.auto_increment:
        definition += " AUTOINCREMENT"
    return definition


def column_definition(column: ColumnDescriptor) -> str:
    return f"{column.column_name} {column.sql_type.value}{constraint_clause(column)}"


def foreign_key_clause(foreign_key: ForeignKeyDescriptor) -> str:
    return (
        f"FOREIGN KEY ({foreign_key.column_name}) "
        f"REFERENCES {foreign_key.parent_table} ({foreign_key.column_name}) "
        f"ON DELETE {foreign_key.on_parent_delete.value} "
        f"ON UPDATE {foreign_key.on_parent_update.value}"
    )


def _literal(
    descriptor: TableDescriptor,
    column: ColumnDescriptor | PrimaryKeyDescriptor,
    value: Any,
) -> str:
    try:
        return to_sql_literal(value, column.kind)
    except ConversionError as exc:
        exc.with_context(
            table=descriptor.table_name,
            column=column.column_name,
            field=column.field_name,
        )
        raise


def _field_literal(
    descriptor: TableDescriptor,
    column: ColumnDescriptor | PrimaryKeyDescriptor,
    record: Any,
) -> str:
    return _literal(descriptor, column, getattr(record, column.field_name))


def _equals(
    descriptor: TableDescriptor,
    column: ColumnDescriptor | PrimaryKeyDescriptor,
    value: Any,
) -> str:
    return f"{column.column_name} = {_literal(descriptor, column, value)}"


# =============================================================================
# DDL
# =============================================================================


def create_table_statement(record_type: type, if_not_exists: bool = False) -> str:
    """CREATE TABLE for ``record_type``: primary key, columns, foreign keys."""
    descriptor = resolve_table(record_type)

    definitions: list[str] = []
    if descriptor.primary_key is not None:
        definitions.append(primary_key_definition(descriptor.primary_key))
    definitions.extend(column_definition(column) for column in descriptor.data_columns)
    definitions.extend(foreign_key_clause(fk) for fk in descriptor.foreign_keys)

    prefix = "CREATE TABLE IF NOT EXISTS " if if_not_exists else "CREATE TABLE "
    return (
        f"{prefix}{descriptor.table_name} ({NEWLINE}\t"
        + LIST_SEPARATOR.join(definitions)
        + f"{NEWLINE});"
    )


# =============================================================================
# DML
# =============================================================================


def _insert(descriptor: TableDescriptor, record: Any) -> str:
    columns = descriptor.data_columns
    names = LIST_SEPARATOR.join(column.column_name for column in columns)
    values = LIST_SEPARATOR.join(
        _field_literal(descriptor, column, record) for column in columns
    )
    return (
        f"INSERT INTO {descriptor.table_name} ({NEWLINE}\t{names}{NEWLINE}"
        f") VALUES ({NEWLINE}\t{values}{NEWLINE});"
    )


def insert_statement(record: Any) -> str:
    """INSERT of every non-primary-key column of ``record``."""
    return _insert(resolve_table(type(record)), record)


def insert_all_script(records: Iterable[Any]) -> str:
    """All INSERTs for ``records`` wrapped in one transaction."""
    descriptors: dict[type, TableDescriptor] = {}
    lines = ["BEGIN TRANSACTION;"]
    for record in records:
        record_type = type(record)
        if record_type not in descriptors:
            descriptors[record_type] = resolve_table(record_type)
        lines.append(_insert(descriptors[record_type], record))
    lines.append("COMMIT;")
    return NEWLINE.join(lines)


def update_statement(record: Any) -> str:
    """UPDATE of every non-primary-key column, keyed on the primary key."""
    descriptor = resolve_table(type(record))
    primary_key = descriptor.require_primary_key()

    assignments = LIST_SEPARATOR.join(
        _equals(descriptor, column, getattr(record, column.field_name))
        for column in descriptor.data_columns
    )
    condition = _equals(descriptor, primary_key, getattr(record, primary_key.field_name))
    return (
        f"UPDATE {descriptor.table_name}{NEWLINE}"
        f"SET{NEWLINE}\t{assignments}{NEWLINE}"
        f"WHERE{NEWLINE}\t{condition};"
    )


def delete_statement(record: Any) -> str:
    """DELETE of ``record`` by its primary key."""
    descriptor = resolve_table(type(record))
    primary_key = descriptor.require_primary_key()
    condition = _equals(descriptor, primary_key, getattr(record, primary_key.field_name))
    return f"DELETE FROM {descriptor.table_name} WHERE {condition};"


def delete_by_foreign_key_statement(record_type: type, field_name: str, value: Any) -> str:
    """DELETE of every row whose foreign key on ``field_name`` equals ``value``."""
    descriptor = resolve_table(record_type)
    foreign_key = descriptor.foreign_key_for(field_name)
    return f"DELETE FROM {descriptor.table_name} WHERE {_equals(descriptor, foreign_key, value)};"


# =============================================================================
# Queries
# =============================================================================


def select_statement(record_type: type, condition: str | None = None) -> str:
    """SELECT every column, optionally filtered by a raw SQL ``condition``."""
    descriptor = resolve_table(record_type)
    query = f"SELECT * FROM {descriptor.table_name}"
    if condition:
        query += f" WHERE {condition}"
    return query + ";"


def select_by_primary_key_statement(record_type: type, value: Any) -> str:
    descriptor = resolve_table(record_type)
    primary_key = descriptor.require_primary_key()
    return select_statement(record_type, _equals(descriptor, primary_key, value))


def select_by_foreign_key_statement(
    record_type: type, value: Any, field_name: str | None = None
) -> str:
    """SELECT rows by foreign key; the first declared one when no field is named."""
    descriptor = resolve_table(record_type)
    if field_name is None:
        foreign_key = descriptor.first_foreign_key()
    else:
        foreign_key = descriptor.foreign_key_for(field_name)
    return select_statement(record_type, _equals(descriptor, foreign_key, value))


__all__ = [
    "ENABLE_FOREIGN_KEYS",
    "SQLITE_VERSION",
    "constraint_clause",
    "primary_key_definition",
    "column_definition",
    "foreign_key_clause",
    "create_table_statement",
    "insert_statement",
    "insert_all_script",
    "update_statement",
    "delete_statement",
    "delete_by_foreign_key_statement",
    "select_statement",
    "select_by_primary_key_statement",
    "select_by_foreign_key_statement",
]
