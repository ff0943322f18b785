"""
CLI: ``liteorm schema`` — table definitions for record types.
"""

from __future__ import annotations

import typer

from liteorm.cli.utils import console, fail_on, get_executor, load_record_type
from liteorm.core.errors import LiteOrmError
from liteorm.core.settings import get_settings
from liteorm.ops import database

app = typer.Typer(no_args_is_help=True)


@app.command()
def show(
    target: str = typer.Argument(..., help="Record type as MODULE:CLASS"),
    if_not_exists: bool = typer.Option(False, "--if-not-exists", help="Add IF NOT EXISTS"),
) -> None:
    """Print the CREATE TABLE statement for a record type."""
    from liteorm.core.orm.statements import create_table_statement

    record_type = load_record_type(target)
    try:
        statement = create_table_statement(record_type, if_not_exists)
    except LiteOrmError as exc:
        fail_on(exc)
    typer.echo(statement)


@app.command()
def create(
    targets: list[str] = typer.Argument(..., help="Record types as MODULE:CLASS, parents first"),
    database_path: str | None = typer.Option(None, "--database", "-d", help="Database path"),
) -> None:
    """Create the tables for one or more record types (IF NOT EXISTS)."""
    record_types = [load_record_type(target) for target in targets]

    with get_executor(database_path) as executor:
        if get_settings().enforce_foreign_keys:
            database.enable_foreign_keys(executor)
        for record_type in record_types:
            try:
                database.create_table(executor, record_type, if_not_exists=True)
            except LiteOrmError as exc:
                fail_on(exc)
            console.print(f"[green]✓[/green] {record_type.__tablename__}")
