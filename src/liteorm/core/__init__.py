"""liteorm core -- errors, enums, logging, settings and the executor protocol.

Architecture::

    errors.py       Structured error hierarchy (LiteOrmError and subclasses)
    enums.py        SqlType, ConflictAction, ParentChangedAction, Kind
    protocols.py    Executor protocol (what runs synthesized SQL)
    logging.py      structlog configuration helpers
    settings.py     pydantic-settings configuration
    orm/            Declarations, descriptors, codec, statements, materializer
"""

from liteorm.core.enums import ConflictAction, Kind, ParentChangedAction, SqlType
from liteorm.core.errors import (
    ConversionError,
    DeclarationError,
    ErrorCategory,
    ErrorContext,
    ExecutorError,
    LiteOrmError,
    MalformedTimestampError,
    MissingColumnError,
    MissingForeignKeyError,
    MissingPrimaryKeyError,
    MissingTableDeclarationError,
    MultiplePrimaryKeysError,
    RecordLookupError,
    UnknownPropertyError,
    UnsupportedTypeError,
)
from liteorm.core.protocols import Executor

__all__ = [
    "ConflictAction",
    "Kind",
    "ParentChangedAction",
    "SqlType",
    "ConversionError",
    "DeclarationError",
    "ErrorCategory",
    "ErrorContext",
    "ExecutorError",
    "LiteOrmError",
    "MalformedTimestampError",
    "MissingColumnError",
    "MissingForeignKeyError",
    "MissingPrimaryKeyError",
    "MissingTableDeclarationError",
    "MultiplePrimaryKeysError",
    "RecordLookupError",
    "UnknownPropertyError",
    "UnsupportedTypeError",
    "Executor",
]
