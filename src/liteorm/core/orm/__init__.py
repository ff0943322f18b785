"""Declarative record mapping for SQLite.

Layers, leaf-first::

    declarations.py   @table, primary_key(), column(), foreign_key(), kind aliases
    descriptors.py    resolve_table() -> TableDescriptor
    codec.py          to_sql_literal() / from_sql_value()
    statements.py     CREATE TABLE, INSERT, UPDATE, DELETE, SELECT text
    materializer.py   result rows -> records
"""

from liteorm.core.orm.codec import (
    ZERO_TIMESTAMP,
    format_timestamp,
    from_sql_value,
    parse_timestamp,
    to_sql_literal,
)
from liteorm.core.orm.declarations import (
    Char,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    column,
    foreign_key,
    primary_key,
    table,
)
from liteorm.core.orm.descriptors import (
    ColumnDescriptor,
    ForeignKeyDescriptor,
    PrimaryKeyDescriptor,
    TableDescriptor,
    kind_for_annotation,
    resolve_table,
)
from liteorm.core.orm.materializer import materialize, materialize_all, new_record
from liteorm.core.orm.statements import (
    create_table_statement,
    delete_by_foreign_key_statement,
    delete_statement,
    insert_all_script,
    insert_statement,
    select_by_foreign_key_statement,
    select_by_primary_key_statement,
    select_statement,
    update_statement,
)

__all__ = [
    "ZERO_TIMESTAMP",
    "format_timestamp",
    "from_sql_value",
    "parse_timestamp",
    "to_sql_literal",
    "Char",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "column",
    "foreign_key",
    "primary_key",
    "table",
    "ColumnDescriptor",
    "ForeignKeyDescriptor",
    "PrimaryKeyDescriptor",
    "TableDescriptor",
    "kind_for_annotation",
    "resolve_table",
    "materialize",
    "materialize_all",
    "new_record",
    "create_table_statement",
    "delete_by_foreign_key_statement",
    "delete_statement",
    "insert_all_script",
    "insert_statement",
    "select_by_foreign_key_statement",
    "select_by_primary_key_statement",
    "select_statement",
    "update_statement",
]
