"""
Structured error types for liteorm.

Every failure the mapper can detect on its own is a deterministic function
of its input: a record type declared wrongly, a value that cannot be
converted, or a property that does not exist. Each of those conditions has
its own exception type so callers can catch exactly what they expect, and
every error carries structured context (table, column, field, statement)
for logging.

Manifesto:
    - **Typed Error Hierarchy:** One branch per failure domain
    - **Rich Context:** Errors carry the table/column/field they concern
    - **Error Chaining:** Driver and parser exceptions are kept as ``cause``
    - **No Retries:** Nothing here is transient; callers fix the input

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                        LiteOrmError                              │
        │                  (category, context, cause)                      │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  DeclarationError          ConversionError                      │
        │  (DECLARATION)             (CONVERSION)                         │
        │       │                        │                                 │
        │  MissingTableDeclaration   MalformedTimestampError              │
        │  MultiplePrimaryKeys       UnsupportedTypeError                 │
        │  MissingPrimaryKey                                              │
        │                                                                  │
        │  RecordLookupError         ExecutorError                        │
        │  (LOOKUP)                  (DATABASE)                           │
        │       │                                                          │
        │  UnknownPropertyError                                           │
        │  MissingForeignKeyError                                         │
        │  MissingColumnError                                             │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> error = MissingTableDeclarationError("No table declared on Advisor")
    >>> error.category
    <ErrorCategory.DECLARATION: 'DECLARATION'>

    >>> error = ConversionError("bad value").with_context(column="ZipCode")
    >>> error.context.column
    'ZipCode'

Guardrails:
    ❌ DON'T: Raise bare ValueError/TypeError from mapper code
    ✅ DO: Raise the LiteOrmError subclass naming the condition

    ❌ DON'T: Swallow sqlite3 exceptions
    ✅ DO: Wrap them in ExecutorError with cause= and the statement

Tags:
    error-handling, exception-hierarchy, error-context, liteorm

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Error categories for classification and reporting.

    Attributes:
        DECLARATION: Record type declared incorrectly
        CONVERSION: Value cannot cross the native/SQL boundary
        LOOKUP: Named property, column or key does not exist
        DATABASE: Failure reported by the database executor
        INTERNAL: Bugs, unexpected state
    """

    DECLARATION = "DECLARATION"
    CONVERSION = "CONVERSION"
    LOOKUP = "LOOKUP"
    DATABASE = "DATABASE"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only the fields relevant to a failure are set; ``to_dict()`` drops the
    rest so log lines stay short.

    Examples:
        >>> ctx = ErrorContext(table="Advisors", column="FirstName")
        >>> ctx.to_dict()
        {'table': 'Advisors', 'column': 'FirstName'}

    Attributes:
        record_type: Qualified name of the record class involved
        table: Table name
        column: Column name
        field: Python attribute name on the record class
        statement: SQL text that was being built or executed
        metadata: Additional key-value pairs
    """

    record_type: str | None = None
    table: str | None = None
    column: str | None = None
    field: str | None = None
    statement: str | None = None

    metadata: dict[str, Any] = dataclasses.field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["record_type", "table", "column", "field", "statement"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class LiteOrmError(Exception):
    """
    Base exception for all liteorm errors.

    Subclasses set ``default_category``; everything else is per-instance.

    Examples:
        >>> error = LiteOrmError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> try:
        ...     int("x")
        ... except ValueError as e:
        ...     error = ConversionError("not an integer", cause=e)
        >>> error.cause
        ValueError("invalid literal for int() with base 10: 'x'")

        >>> LiteOrmError("Test", category=ErrorCategory.LOOKUP).to_dict()["category"]
        'LOOKUP'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> LiteOrmError:
        """
        Add context to this error (fluent API).

        Usage:
            raise MissingColumnError("Row has no column").with_context(
                table="Advisors", column="FirstName"
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# DECLARATION ERRORS
# =============================================================================


class DeclarationError(LiteOrmError):
    """
    A record type is missing a required declaration or declares too much.

    Raised while a type's descriptor is being resolved, before any SQL is
    produced. Never retryable: the class definition has to change.
    """

    default_category = ErrorCategory.DECLARATION


class MissingTableDeclarationError(DeclarationError):
    """The record type carries no ``@table`` declaration."""


class MultiplePrimaryKeysError(DeclarationError):
    """More than one field is declared as primary key."""


class MissingPrimaryKeyError(DeclarationError):
    """The operation needs a primary key but the type declares none."""


# =============================================================================
# CONVERSION ERRORS
# =============================================================================


class ConversionError(LiteOrmError):
    """A value cannot be converted between native and SQL form."""

    default_category = ErrorCategory.CONVERSION


class MalformedTimestampError(ConversionError):
    """Timestamp text is not in ``yyyy-MM-dd HH:mm:ss:fff`` form."""


class UnsupportedTypeError(ConversionError):
    """The native type has no SQL mapping."""


# =============================================================================
# LOOKUP ERRORS
# =============================================================================


class RecordLookupError(LiteOrmError):
    """A requested property or column does not exist or lacks a declaration."""

    default_category = ErrorCategory.LOOKUP


class UnknownPropertyError(RecordLookupError):
    """The record type has no field with the requested name."""


class MissingForeignKeyError(RecordLookupError):
    """The requested field exists but is not declared as a foreign key."""


class MissingColumnError(RecordLookupError):
    """A result row lacks a column the record type declares."""


# =============================================================================
# EXECUTOR ERRORS
# =============================================================================


class ExecutorError(LiteOrmError):
    """
    Failure reported by the database executor.

    Constraint violations, syntax rejections and I/O failures all land
    here with the driver exception chained as ``cause``. The mapper itself
    never raises this; only executor adapters do.
    """

    default_category = ErrorCategory.DATABASE


def categorize_error(error: Exception) -> ErrorCategory:
    """Return the category of any exception (INTERNAL for foreign ones)."""
    if isinstance(error, LiteOrmError):
        return error.category
    return ErrorCategory.INTERNAL


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "LiteOrmError",
    "DeclarationError",
    "MissingTableDeclarationError",
    "MultiplePrimaryKeysError",
    "MissingPrimaryKeyError",
    "ConversionError",
    "MalformedTimestampError",
    "UnsupportedTypeError",
    "RecordLookupError",
    "UnknownPropertyError",
    "MissingForeignKeyError",
    "MissingColumnError",
    "ExecutorError",
    "categorize_error",
]
