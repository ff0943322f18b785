"""SQLite executor adapter.

Wraps a raw :class:`sqlite3.Connection` to satisfy the
:class:`~liteorm.core.protocols.Executor` protocol.

The connection runs in autocommit mode (``isolation_level=None``): single
statements commit on their own and scripts such as the batch insert bring
their own ``BEGIN TRANSACTION;``/``COMMIT;``. If a script fails part-way,
the open transaction is rolled back before the error propagates.

Double-quoted string literals are switched on explicitly for DML, since
SQLite builds made with ``SQLITE_DQS=0`` would otherwise read ``"text"``
as an identifier.

Usage::

    from liteorm.ops.sqlite_conn import SqliteExecutor

    with SqliteExecutor(":memory:") as executor:
        executor.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, name TEXT);")
        executor.execute('INSERT INTO t (name) VALUES ("a");')
        executor.last_insert_id     # 1
        executor.query("SELECT * FROM t;")  # [{'id': 1, 'name': 'a'}]
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from liteorm.core.errors import ErrorContext, ExecutorError


class SqliteExecutor:
    """Adapter: ``sqlite3.Connection`` → ``Executor`` protocol.

    Every ``sqlite3.Error`` leaves as :class:`ExecutorError` with the driver
    exception as ``cause`` and the failing statement in the context.
    """

    def __init__(self, path: str = ":memory:") -> None:
        self._path = path
        self._conn = sqlite3.connect(path, isolation_level=None, check_same_thread=False)
        # String literals are rendered in double quotes.
        self._conn.setconfig(sqlite3.SQLITE_DBCONFIG_DQS_DML, True)

    @contextmanager
    def _translate(self, sql: str) -> Iterator[None]:
        try:
            yield
        except sqlite3.Error as exc:
            raise ExecutorError(
                str(exc), context=ErrorContext(statement=sql), cause=exc
            ) from exc

    # -- Executor protocol -------------------------------------------------

    def execute(self, sql: str) -> int:
        with self._translate(sql):
            cursor = self._conn.execute(sql)
        return max(cursor.rowcount, 0)

    def execute_script(self, sql: str) -> int:
        before = self._conn.total_changes
        try:
            with self._translate(sql):
                self._conn.executescript(sql)
        except ExecutorError:
            if self._conn.in_transaction:
                self._conn.rollback()
            raise
        return self._conn.total_changes - before

    def query(self, sql: str) -> list[dict[str, Any]]:
        with self._translate(sql):
            cursor = self._conn.execute(sql)
            names = [column[0] for column in cursor.description or ()]
            return [dict(zip(names, row)) for row in cursor.fetchall()]

    def scalar(self, sql: str) -> Any:
        with self._translate(sql):
            row = self._conn.execute(sql).fetchone()
        return row[0] if row else None

    @property
    def last_insert_id(self) -> int:
        return self.scalar("SELECT last_insert_rowid();")

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> SqliteExecutor:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"SqliteExecutor({self._path!r})"
