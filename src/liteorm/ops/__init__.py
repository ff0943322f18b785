"""liteorm ops -- running synthesized SQL against SQLite.

Architecture::

    sqlite_conn.py   SqliteExecutor (sqlite3 adapter for the Executor protocol)
    database.py      create/get/insert/update/delete over any Executor
    result.py        OperationResult envelope
    dao.py           Dao: connection-per-call CRUD façade returning OperationResult
"""

from liteorm.ops.dao import Dao
from liteorm.ops.result import OperationError, OperationResult
from liteorm.ops.sqlite_conn import SqliteExecutor

__all__ = ["Dao", "OperationError", "OperationResult", "SqliteExecutor"]
