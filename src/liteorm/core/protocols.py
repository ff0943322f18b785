"""
Canonical protocol definitions for liteorm.

The mapper produces SQL text and consumes result rows; it never talks to a
database itself. Whatever runs the text is an ``Executor``, defined here
once so the database operations, the CRUD façade and the tests all agree
on its shape.

Architecture:
    ::

        Executor Protocol:
        ┌────────────────────────────────────────────────────────┐
        │ execute(sql)        → rows affected by one statement   │
        │ execute_script(sql) → rows changed by a whole script   │
        │ query(sql)          → list of {column: value} rows     │
        │ scalar(sql)         → first column of the first row    │
        │ last_insert_id      → rowid of the latest INSERT       │
        │ close()             → release the handle               │
        └────────────────────────────────────────────────────────┘

        Implementations:
        ┌────────────────────────────────────────────────────────┐
        │ SqliteExecutor (liteorm.ops.sqlite_conn) → sqlite3      │
        │ any test double with the same methods                  │
        └────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Pass bound parameters; statements arrive fully rendered
    ✅ DO: Return rows keyed by column name exactly as declared

    ❌ DON'T: Leak driver exceptions from an implementation
    ✅ DO: Re-raise them as ExecutorError with the driver error as cause

Tags:
    protocol, executor, database, liteorm, contracts

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Executor(Protocol):
    """
    Minimal synchronous interface for running synthesized SQL.

    Rows returned by ``query`` map column names (case-sensitive, as the
    table declares them) to raw scalars: ``None``, ``int``, ``float`` or
    ``str``.
    """

    def execute(self, sql: str) -> int:
        """Run one statement; return the number of rows it changed."""
        ...

    def execute_script(self, sql: str) -> int:
        """Run a multi-statement script; return the total rows changed."""
        ...

    def query(self, sql: str) -> list[dict[str, Any]]:
        """Run a SELECT and return every row."""
        ...

    def scalar(self, sql: str) -> Any:
        """Run a SELECT and return the first column of the first row."""
        ...

    @property
    def last_insert_id(self) -> int:
        """Row id assigned by the most recent successful INSERT."""
        ...

    def close(self) -> None:
        """Release the underlying database handle."""
        ...


__all__ = ["Executor"]
