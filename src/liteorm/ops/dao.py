"""
CRUD façade for one record type.

``Dao`` is the entry point for callers who want a database-backed store
without handling connections or exceptions. Every method opens a fresh
connection to the configured SQLite file, runs one operation from
:mod:`liteorm.ops.database`, closes the connection, and reports the outcome
as an :class:`~liteorm.ops.result.OperationResult`.

Manifesto:
    - **Never raises:** failures become ``success=False`` with the error text
    - **Connection per call:** no handle outlives a method call
    - **Same SQL:** delegates to ``liteorm.ops.database``, never builds text itself

Architecture:
    ::

        Dao(Advisor).add(advisor)
            │
            ├── SqliteExecutor(database)          opened per call
            ├── PRAGMA foreign_keys = ON;         when enforce_foreign_keys
            ├── database.insert(executor, advisor)
            └── OperationResult(success, data=rows, message="1 records updated")

Examples:
    >>> dao = Dao(Advisor, database="school.db")
    >>> result = dao.add(Advisor(first_name="Jeb", last_name="Arange", room_number="5565"))
    >>> result.success, result.message
    (True, '1 records updated')
    >>> dao.get(1).data.first_name
    'Jeb'

Guardrails:
    ❌ DON'T: Point a Dao at ``:memory:``; every call would see a new empty database
    ✅ DO: Use a file path, or ``liteorm.ops.database`` with your own executor

Tags:
    dao, crud, facade, operation-result, liteorm
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Generic, TypeVar

from liteorm.core.errors import LiteOrmError
from liteorm.core.logging import LogContext, get_logger
from liteorm.core.settings import LiteOrmSettings, get_settings
from liteorm.ops import database
from liteorm.ops.result import OperationResult, start_timer
from liteorm.ops.sqlite_conn import SqliteExecutor

R = TypeVar("R")

logger = get_logger(__name__)


class Dao(Generic[R]):
    """Data access object handling add/get/update/delete for ``record_type``.

    Args:
        record_type: An ``@table`` dataclass.
        database: SQLite file path; defaults to ``settings.database_path``.
        settings: Settings to read; defaults to :func:`get_settings`.
    """

    def __init__(
        self,
        record_type: type[R],
        database: str | None = None,
        settings: LiteOrmSettings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self.record_type = record_type
        self.database = database or self._settings.database_path

    def __repr__(self) -> str:
        return f"Dao({self.record_type.__name__}, database={self.database!r})"

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def add(self, record: R | None) -> OperationResult[int]:
        """Insert ``record``; its primary key is filled in on success."""
        if record is None:
            return self._refused("add", "Cannot add null record")
        return self._write("add", lambda executor: database.insert(executor, record))

    def add_all(self, records: Sequence[R] | None) -> OperationResult[int]:
        """Insert ``records`` in one transaction; succeeds only if every row landed."""
        if records is None:
            return self._refused("add_all", "Cannot add null list")
        return self._write(
            "add_all",
            lambda executor: database.insert_all(executor, records),
            expected=len(records),
        )

    def update(self, record: R) -> OperationResult[int]:
        """Rewrite every column of ``record`` by primary key."""
        return self._write("update", lambda executor: database.update(executor, record))

    def delete(self, record: R | None) -> OperationResult[int]:
        if record is None:
            return self._refused("delete", "Cannot delete null record")
        return self._write("delete", lambda executor: database.delete(executor, record))

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def get(self, primary_key_value: Any) -> OperationResult[R]:
        """Fetch one record; a missing row is a success with ``data=None``."""
        return self._read(
            "get", lambda executor: database.get(executor, self.record_type, primary_key_value)
        )

    def get_all(self, condition: str | None = None) -> OperationResult[list[R]]:
        """Fetch every record, optionally filtered by a raw SQL ``condition``."""
        return self._read(
            "get_all", lambda executor: database.get_all(executor, self.record_type, condition)
        )

    # ------------------------------------------------------------------ #
    # Plumbing
    # ------------------------------------------------------------------ #

    def _connect(self) -> SqliteExecutor:
        executor = SqliteExecutor(self.database)
        if self._settings.enforce_foreign_keys:
            database.enable_foreign_keys(executor)
        return executor

    def _run(self, action: str, operation: Callable[[SqliteExecutor], Any]) -> Any:
        # Statement logs from liteorm.ops.database carry the Dao action.
        with LogContext(action=action), self._connect() as executor:
            return operation(executor)

    def _write(
        self,
        action: str,
        operation: Callable[[SqliteExecutor], int],
        expected: int | None = None,
    ) -> OperationResult[int]:
        timer = start_timer()
        try:
            rows = self._run(action, operation)
        except Exception as exc:
            return self._failed(action, exc, timer.elapsed_ms)

        message = f"{rows} records updated"
        succeeded = rows == expected if expected is not None else rows > 0
        if not succeeded:
            logger.warning(
                "dao_rows_unchanged", action=action, table=self._table_name, rows=rows
            )
            return OperationResult.unchanged(rows, message=message, elapsed_ms=timer.elapsed_ms)
        return OperationResult.ok(rows, message=message, elapsed_ms=timer.elapsed_ms)

    def _read(self, action: str, operation: Callable[[SqliteExecutor], Any]) -> OperationResult:
        timer = start_timer()
        try:
            data = self._run(action, operation)
        except Exception as exc:
            return self._failed(action, exc, timer.elapsed_ms)
        return OperationResult.ok(data, elapsed_ms=timer.elapsed_ms)

    def _failed(self, action: str, exc: Exception, elapsed_ms: float) -> OperationResult:
        if isinstance(exc, LiteOrmError):
            logger.warning(
                "dao_operation_failed",
                action=action,
                table=self._table_name,
                **exc.to_dict(),
            )
        else:
            logger.exception("dao_operation_crashed", action=action, table=self._table_name)
        return OperationResult.from_exception(exc, elapsed_ms=elapsed_ms)

    def _refused(self, action: str, message: str) -> OperationResult[int]:
        logger.warning("dao_operation_refused", action=action, table=self._table_name, reason=message)
        return OperationResult.fail("INVALID_ARGUMENT", message)

    @property
    def _table_name(self) -> str:
        return getattr(self.record_type, "__tablename__", self.record_type.__name__)


__all__ = ["Dao"]
