"""
Root Typer application for the liteorm CLI.

Logging is configured from :class:`~liteorm.core.settings.LiteOrmSettings`
before any sub-command runs.
"""

from __future__ import annotations

import typer
from typer import Typer

from liteorm.core.logging import configure_logging
from liteorm.core.settings import get_settings

app = Typer(
    name="liteorm",
    help="liteorm — map dataclass records onto SQLite tables.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("liteorm")
        except PackageNotFoundError:
            from liteorm import __version__ as v
        typer.echo(f"liteorm {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """liteorm CLI — print schemas, create tables, inspect databases."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)


# ── Sub-command registration ─────────────────────────────────────────────

from liteorm.cli.db import app as db_app  # noqa: E402
from liteorm.cli.schema import app as schema_app  # noqa: E402

app.add_typer(schema_app, name="schema", help="Table definitions for record types.")
app.add_typer(db_app, name="db", help="Database inspection.")
