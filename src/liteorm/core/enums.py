"""
Shared enums for liteorm.

The values of the SQL-facing enums are the exact tokens written into
statement text, so ``ConflictAction.FAIL.value`` is what appears after
``ON CONFLICT`` and ``ParentChangedAction.NO_ACTION.value`` is what
appears after ``ON DELETE``.

STDLIB ONLY - NO PYDANTIC.
"""

from enum import Enum


class SqlType(str, Enum):
    """SQLite storage class a column is declared with."""

    INTEGER = "INTEGER"
    REAL = "REAL"
    TEXT = "TEXT"


class ConflictAction(str, Enum):
    """
    Resolution the database applies when a column constraint is violated.

    Used for the ``ON CONFLICT`` clause of ``NOT NULL`` and ``UNIQUE``
    constraints. ``ABORT`` is SQLite's own default.
    """

    ROLLBACK = "ROLLBACK"
    ABORT = "ABORT"
    FAIL = "FAIL"
    IGNORE = "IGNORE"
    REPLACE = "REPLACE"


class ParentChangedAction(str, Enum):
    """Action taken on child rows when the referenced parent row changes."""

    NO_ACTION = "NO ACTION"
    RESTRICT = "RESTRICT"
    SET_NULL = "SET NULL"
    SET_DEFAULT = "SET DEFAULT"
    CASCADE = "CASCADE"


class Kind(str, Enum):
    """
    Native value kinds a record field can hold.

    This is a closed set: the codec has one conversion per kind in each
    direction, and a field whose annotation maps to none of these has no
    kind at all.
    """

    # Signed integers
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"

    # Unsigned integers
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"

    # Integer-backed scalars
    BOOLEAN = "boolean"
    CHAR = "char"

    # Floating and fixed point
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    DECIMAL = "decimal"

    # Text-backed scalars
    STRING = "string"
    TIMESTAMP = "timestamp"

    @property
    def sql_type(self) -> SqlType:
        """Storage class this kind is declared with."""
        if self in _REAL_KINDS:
            return SqlType.REAL
        if self in _TEXT_KINDS:
            return SqlType.TEXT
        return SqlType.INTEGER


_REAL_KINDS = frozenset({Kind.FLOAT32, Kind.FLOAT64, Kind.DECIMAL})
_TEXT_KINDS = frozenset({Kind.STRING, Kind.TIMESTAMP})


__all__ = [
    "SqlType",
    "ConflictAction",
    "ParentChangedAction",
    "Kind",
]
