"""
liteorm — a minimal object-relational mapper for SQLite.

Declare a record type once as a dataclass, and liteorm writes the SQL for
it: CREATE TABLE from the declarations, INSERT/UPDATE/DELETE/SELECT text
from record values, and typed records back from result rows.

Layers::

    liteorm.core.orm    declarations, descriptors, codec, statements, materializer
    liteorm.ops         SqliteExecutor, database operations, Dao façade
    liteorm.cli         typer command line

Examples:
    >>> from dataclasses import dataclass
    >>> from liteorm import column, primary_key, table, create_table_statement
    >>> @table("Advisors")
    ... @dataclass
    ... class Advisor:
    ...     id: int | None = primary_key("AdvisorID")
    ...     first_name: str | None = column("FirstName", not_null=True)
    >>> print(create_table_statement(Advisor))
    CREATE TABLE Advisors (
    	AdvisorID INTEGER PRIMARY KEY AUTOINCREMENT,
    	FirstName TEXT NOT NULL ON CONFLICT ABORT
    );
"""

from liteorm.core.enums import ConflictAction, Kind, ParentChangedAction, SqlType
from liteorm.core.errors import LiteOrmError
from liteorm.core.orm import (
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
    create_table_statement,
    delete_statement,
    foreign_key,
    from_sql_value,
    insert_all_script,
    insert_statement,
    materialize,
    primary_key,
    resolve_table,
    select_statement,
    table,
    to_sql_literal,
    update_statement,
)
from liteorm.ops import Dao, OperationResult, SqliteExecutor

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConflictAction",
    "Kind",
    "ParentChangedAction",
    "SqlType",
    "LiteOrmError",
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
    "create_table_statement",
    "delete_statement",
    "foreign_key",
    "from_sql_value",
    "insert_all_script",
    "insert_statement",
    "materialize",
    "primary_key",
    "resolve_table",
    "select_statement",
    "table",
    "to_sql_literal",
    "update_statement",
    "Dao",
    "OperationResult",
    "SqliteExecutor",
]
