"""
Shared pytest fixtures for liteorm tests.

This module provides:
- The ``Advisor``/``Student`` record types used across the suite
- In-memory executors with and without the school schema
- Settings pointed at a per-test database file

Usage:
    Record types are imported directly (``from conftest import Advisor``);
    fixtures are injected by name.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime

import pytest

from liteorm.core import settings as settings_module
from liteorm.core.enums import ConflictAction, Kind, ParentChangedAction
from liteorm.core.orm import Int32, column, foreign_key, primary_key, table
from liteorm.core.settings import LiteOrmSettings
from liteorm.ops import database
from liteorm.ops.sqlite_conn import SqliteExecutor


# =============================================================================
# Record types
# =============================================================================


@table("Advisors")
@dataclass
class Advisor:
    id: int | None = primary_key("AdvisorID")
    first_name: str | None = column(
        "FirstName", not_null=True, not_null_on_conflict=ConflictAction.FAIL
    )
    last_name: str | None = column("LastName")
    room_number: str | None = column("RoomNumber", unique=True, default_value="1124")


@table("Students")
@dataclass
class Student:
    id: int | None = primary_key("StudentID", auto_increment=True)
    first_name: str | None = column("FirstName")
    last_name: str | None = column("LastName")
    dob: datetime | None = column("DateOfBirth")
    gpa: float | None = column("GradePointAverage")
    zip_code: Int32 | None = column("ZipCode")
    _advisor_id: int | None = foreign_key(
        "Advisors",
        "AdvisorID",
        not_null=True,
        on_parent_delete=ParentChangedAction.CASCADE,
    )

    def set_advisor_id(self, advisor_id: int) -> None:
        self._advisor_id = advisor_id


def make_student(advisor_id: int, first_name: str = "Eddie", **overrides) -> Student:
    values = dict(
        first_name=first_name,
        last_name="Que",
        dob=datetime(2012, 5, 10),
        gpa=2.9,
        zip_code=66790,
    )
    values.update(overrides)
    student = Student(**values)
    student.set_advisor_id(advisor_id)
    return student


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop cached settings and LITEORM_* variables between tests."""
    monkeypatch.setattr(settings_module, "_settings", None)
    for name in (
        "LITEORM_DATABASE_PATH",
        "LITEORM_ENFORCE_FOREIGN_KEYS",
        "LITEORM_LOG_LEVEL",
        "LITEORM_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Executors
# =============================================================================


@pytest.fixture
def executor() -> Iterator[SqliteExecutor]:
    """Empty in-memory database with foreign keys enforced."""
    with SqliteExecutor(":memory:") as ex:
        database.enable_foreign_keys(ex)
        yield ex


@pytest.fixture
def school(executor: SqliteExecutor) -> SqliteExecutor:
    """In-memory database holding the Advisors and Students tables."""
    database.create_table(executor, Advisor)
    database.create_table(executor, Student)
    return executor


@pytest.fixture
def db_settings(tmp_path) -> LiteOrmSettings:
    """Settings pointed at a fresh database file under ``tmp_path``."""
    return LiteOrmSettings(database_path=str(tmp_path / "school.db"))


# =============================================================================
# Edge-case record types
# =============================================================================


@table("Notes")
@dataclass
class Note:
    body: str | None = column("Body")
    scratch: str = "not mapped"


@table("Twins")
@dataclass
class Twins:
    left: int | None = primary_key("LeftID")
    right: int | None = primary_key("RightID")


@dataclass
class Undeclared:
    id: int | None = primary_key("ID")


@table("Blobs")
@dataclass
class Blob:
    id: int | None = primary_key("BlobID")
    payload: bytes | None = column("Payload")
    level: int | None = column("Level", kind=Kind.UINT8)
