"""
Database operations over an :class:`~liteorm.core.protocols.Executor`.

Each function synthesizes one statement with :mod:`liteorm.core.orm`,
hands it to the executor, and, on read paths, materializes the rows. No
function opens or closes connections; the caller owns the executor.

Foreign-key actions (``CASCADE``, ``RESTRICT``...) only take effect once
``enable_foreign_keys`` has run on the connection.

Examples:
    >>> with SqliteExecutor(":memory:") as executor:
    ...     enable_foreign_keys(executor)
    ...     create_table(executor, Advisor)
    ...     advisor = Advisor(first_name="Jeb", last_name="Arange", room_number="5565")
    ...     insert(executor, advisor)
    ...     advisor.id
    1
    1

Tags:
    database, crud, sqlite, executor, liteorm
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from liteorm.core.logging import get_logger
from liteorm.core.orm.descriptors import resolve_table
from liteorm.core.orm.materializer import materialize_all
from liteorm.core.orm.statements import (
    ENABLE_FOREIGN_KEYS,
    SQLITE_VERSION,
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
from liteorm.core.protocols import Executor

logger = get_logger(__name__)

R = TypeVar("R")


def sqlite_version(executor: Executor) -> str:
    """Return the SQLite library version, e.g. ``"3.45.1"``."""
    return executor.scalar(SQLITE_VERSION)


def enable_foreign_keys(executor: Executor) -> None:
    """Turn on foreign-key enforcement for this connection."""
    executor.execute(ENABLE_FOREIGN_KEYS)


def create_table(executor: Executor, record_type: type, if_not_exists: bool = False) -> None:
    """Create the table for ``record_type``."""
    executor.execute(create_table_statement(record_type, if_not_exists))
    logger.debug("table_created", table=record_type.__tablename__, if_not_exists=if_not_exists)


def get_all(executor: Executor, record_type: type[R], condition: str | None = None) -> list[R]:
    """Return every record, optionally filtered by a raw SQL ``condition``.

    ``condition`` is the WHERE body, e.g. ``"LastName = \\"Smith\\" AND ZipCode = 66790"``.
    """
    rows = executor.query(select_statement(record_type, condition))
    logger.debug("rows_fetched", table=record_type.__tablename__, rows=len(rows))
    return materialize_all(record_type, rows)


def get(executor: Executor, record_type: type[R], primary_key_value: Any) -> R | None:
    """Return the record with the given primary key, or ``None``."""
    rows = executor.query(select_by_primary_key_statement(record_type, primary_key_value))
    records = materialize_all(record_type, rows[:1])
    return records[0] if records else None


def get_by_foreign_key(
    executor: Executor,
    record_type: type[R],
    foreign_key_value: Any,
    field_name: str | None = None,
) -> list[R]:
    """Return the records whose foreign key equals ``foreign_key_value``.

    Without ``field_name`` the first declared foreign key is used.
    """
    statement = select_by_foreign_key_statement(record_type, foreign_key_value, field_name)
    return materialize_all(record_type, executor.query(statement))


def insert(executor: Executor, record: Any) -> int:
    """Insert ``record``; return rows affected.

    When one row was inserted and the type declares a primary key, the
    database-assigned id is written back into the record.
    """
    descriptor = resolve_table(type(record))
    rows = executor.execute(insert_statement(record))
    if rows == 1 and descriptor.primary_key is not None:
        object.__setattr__(record, descriptor.primary_key.field_name, executor.last_insert_id)
    logger.debug("statement_executed", kind="INSERT", table=descriptor.table_name, rows=rows)
    return rows


def insert_all(executor: Executor, records: Sequence[Any] | None) -> int:
    """Insert ``records`` in a single transaction; return rows affected.

    Primary keys are not written back.
    """
    if not records:
        return 0
    rows = executor.execute_script(insert_all_script(records))
    logger.debug("statement_executed", kind="INSERT_ALL", records=len(records), rows=rows)
    return rows


def update(executor: Executor, record: Any) -> int:
    """Rewrite every column of ``record``; return rows affected."""
    rows = executor.execute(update_statement(record))
    logger.debug("statement_executed", kind="UPDATE", table=type(record).__tablename__, rows=rows)
    return rows


def delete(executor: Executor, record: Any) -> int:
    """Delete ``record`` by primary key; return rows affected."""
    rows = executor.execute(delete_statement(record))
    logger.debug("statement_executed", kind="DELETE", table=type(record).__tablename__, rows=rows)
    return rows


def delete_by_foreign_key(
    executor: Executor, record_type: type, field_name: str, foreign_key_value: Any
) -> int:
    """Delete every record whose ``field_name`` foreign key matches; return rows affected."""
    statement = delete_by_foreign_key_statement(record_type, field_name, foreign_key_value)
    rows = executor.execute(statement)
    logger.debug(
        "statement_executed", kind="DELETE", table=record_type.__tablename__, field=field_name, rows=rows
    )
    return rows


__all__ = [
    "sqlite_version",
    "enable_foreign_keys",
    "create_table",
    "get_all",
    "get",
    "get_by_foreign_key",
    "insert",
    "insert_all",
    "update",
    "delete",
    "delete_by_foreign_key",
]
