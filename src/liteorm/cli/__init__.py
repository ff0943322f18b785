"""liteorm command line (typer).

Entry point: ``liteorm = liteorm.cli.app:app``.
"""
