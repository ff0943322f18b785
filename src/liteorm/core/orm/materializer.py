"""
Record materialization: result rows back into typed records.

A row is a mapping from column name to the raw value the driver returned.
The materializer allocates a fresh record of the target type, leaves every
field at its dataclass default (``None`` when it has none), then converts
and assigns the primary key and every data column from the row.

``__init__`` and ``__post_init__`` are not called: a record read from the
database is rebuilt field by field, the same way for frozen and slotted
dataclasses.

A row that lacks a declared column is rejected with ``MissingColumnError``
instead of silently leaving the field at its default.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any

from liteorm.core.errors import ConversionError, MissingColumnError
from liteorm.core.orm.codec import from_sql_value
from liteorm.core.orm.descriptors import TableDescriptor, resolve_table


def new_record(record_type: type) -> Any:
    """Allocate a record with every field at its default, bypassing ``__init__``."""
    record = record_type.__new__(record_type)
    for field in dataclasses.fields(record_type):
        if field.default is not dataclasses.MISSING:
            value = field.default
        elif field.default_factory is not dataclasses.MISSING:
            value = field.default_factory()
        else:
            value = None
        object.__setattr__(record, field.name, value)
    return record


def materialize(target: type | TableDescriptor, row: Mapping[str, Any]) -> Any:
    """Build one record of ``target`` from ``row``."""
    descriptor = target if isinstance(target, TableDescriptor) else resolve_table(target)
    record = new_record(descriptor.record_type)

    mapped = list(descriptor.data_columns)
    if descriptor.primary_key is not None:
        mapped.append(descriptor.primary_key)

    for column in mapped:
        if column.column_name not in row:
            raise MissingColumnError(
                f"Row has no column {column.column_name} for table {descriptor.table_name}"
            ).with_context(
                table=descriptor.table_name,
                column=column.column_name,
                field=column.field_name,
            )
        try:
            value = from_sql_value(row[column.column_name], column.kind, type_name=column.type_name)
        except ConversionError as exc:
            exc.with_context(
                table=descriptor.table_name,
                column=column.column_name,
                field=column.field_name,
            )
            raise
        object.__setattr__(record, column.field_name, value)

    return record


def materialize_all(target: type | TableDescriptor, rows: Iterable[Mapping[str, Any]]) -> list[Any]:
    """Build one record per row, resolving the descriptor once."""
    descriptor = target if isinstance(target, TableDescriptor) else resolve_table(target)
    return [materialize(descriptor, row) for row in rows]


__all__ = ["new_record", "materialize", "materialize_all"]
