"""
CLI: ``liteorm db`` — database inspection commands.
"""

from __future__ import annotations

import typer

from liteorm.cli.utils import console, fail_on, get_executor, load_record_type, output_result
from liteorm.core.errors import LiteOrmError
from liteorm.core.settings import get_settings
from liteorm.ops import database

app = typer.Typer(no_args_is_help=True)


@app.command()
def version(
    database_path: str | None = typer.Option(None, "--database", "-d", help="Database path"),
) -> None:
    """Print the SQLite library version."""
    with get_executor(database_path) as executor:
        try:
            console.print(database.sqlite_version(executor))
        except LiteOrmError as exc:
            fail_on(exc)


@app.command()
def rows(
    target: str = typer.Argument(..., help="Record type as MODULE:CLASS"),
    where: str | None = typer.Option(None, "--where", "-w", help="Raw SQL condition"),
    database_path: str | None = typer.Option(None, "--database", "-d", help="Database path"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """List the records stored for a record type."""
    from liteorm.ops.dao import Dao

    record_type = load_record_type(target)
    dao = Dao(record_type, database=database_path, settings=get_settings())
    output_result(
        dao.get_all(where),
        as_json=json_out,
        title=getattr(record_type, "__tablename__", target),
    )
