"""
CLI utility helpers — record-type loading, executors and output.
"""

from __future__ import annotations

import importlib
import json
from dataclasses import asdict
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from liteorm.core.errors import LiteOrmError
from liteorm.core.settings import get_settings
from liteorm.ops.result import OperationResult
from liteorm.ops.sqlite_conn import SqliteExecutor

console = Console()
err_console = Console(stderr=True)


# ── Record types ─────────────────────────────────────────────────────────


def load_record_type(target: str) -> type:
    """Import ``module:Class`` and return the class."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        fail(f"Expected MODULE:CLASS, got {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        fail(f"Cannot import {module_name}: {exc}")
    record_type = getattr(module, attr, None)
    if not isinstance(record_type, type):
        fail(f"{module_name} has no class {attr}")
    return record_type


# ── Connection helper ────────────────────────────────────────────────────


def get_executor(database: str | None = None) -> SqliteExecutor:
    """Open an executor on ``database`` (defaults to the configured path)."""
    settings = get_settings()
    return SqliteExecutor(database or settings.database_path)


# ── Output helpers ───────────────────────────────────────────────────────


def fail(message: str, code: str = "ERROR") -> NoReturn:
    """Print ``message`` to stderr and exit with status 1."""
    err_console.print(f"[bold red]Error[/bold red] ({code}): {escape(message)}")
    raise typer.Exit(code=1)


def fail_on(exc: LiteOrmError) -> NoReturn:
    fail(exc.message, exc.category.value)


def output_result(result: OperationResult, *, as_json: bool = False, title: str = "") -> None:
    """Render an ``OperationResult`` holding a list of records."""
    if not result.success:
        if as_json:
            console.print_json(json.dumps(result.to_dict(), default=str))
            raise typer.Exit(code=1)
        err = result.error
        fail(result.message, err.code if err else "ERROR")

    rows = [asdict(record) for record in result.data or []]

    if as_json:
        console.print_json(json.dumps(rows, default=str))
        return

    if not rows:
        console.print("[dim]No rows.[/dim]")
        return

    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for name in rows[0]:
        table.add_column(name, overflow="fold")
    for row in rows:
        table.add_row(*[_cell(value) for value in row.values()])
    console.print(table)


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


__all__ = [
    "console",
    "err_console",
    "load_record_type",
    "get_executor",
    "fail",
    "fail_on",
    "output_result",
]
