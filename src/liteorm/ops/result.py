"""
Outcome envelope for the CRUD façade.

``Dao`` methods never raise; they hand back an :class:`OperationResult`
instead. A result always has a ``success`` flag and a human-readable
``message``; ``data`` carries the payload (a row count for writes, records
for reads) and ``error`` is filled only when an exception was caught.

Three ways a call can end::

    rows written as asked   OperationResult.ok(1, message="1 records updated")
    nothing changed         OperationResult.unchanged(0, ...)   error is None
    exception caught        OperationResult.fail(...)           error is set
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from liteorm.core.errors import ErrorCategory, LiteOrmError, categorize_error

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class OperationError:
    """What went wrong, in a form that survives JSON.

    Attributes:
        code: ``INVALID_ARGUMENT`` for refused input, otherwise the
            :class:`ErrorCategory` value of the caught error.
        message: The error text, identical to the result's message.
        category: Category of the caught error, when there was one.
        details: The error context (table, column, statement ...).
    """

    code: str
    message: str
    category: ErrorCategory | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: Exception) -> OperationError:
        category = categorize_error(exc)
        if isinstance(exc, LiteOrmError):
            return cls(category.value, exc.message, category, exc.context.to_dict())
        return cls(category.value, str(exc), category)


@dataclass
class OperationResult(Generic[T]):
    """Success flag, message and payload of one façade call."""

    success: bool
    data: T | None = None
    message: str = ""
    error: OperationError | None = None
    elapsed_ms: float = 0.0

    @classmethod
    def ok(cls, data: T, *, message: str = "", elapsed_ms: float = 0.0) -> OperationResult[T]:
        return cls(True, data, message, None, elapsed_ms)

    @classmethod
    def unchanged(cls, data: T, *, message: str, elapsed_ms: float = 0.0) -> OperationResult[T]:
        """The statement ran, but did not change what was asked for."""
        return cls(False, data, message, None, elapsed_ms)

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        *,
        category: ErrorCategory | None = None,
        details: dict[str, Any] | None = None,
        elapsed_ms: float = 0.0,
    ) -> OperationResult[T]:
        error = OperationError(code, message, category, dict(details or {}))
        return cls(False, None, message, error, elapsed_ms)

    @classmethod
    def from_exception(cls, exc: Exception, *, elapsed_ms: float = 0.0) -> OperationResult[T]:
        error = OperationError.from_exception(exc)
        return cls(False, None, error.message, error, elapsed_ms)

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for JSON output; empty parts are left out."""
        out: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        if self.error is not None:
            error: dict[str, Any] = {"code": self.error.code, "message": self.error.message}
            if self.error.category is not None:
                error["category"] = self.error.category.value
            if self.error.details:
                error["details"] = self.error.details
            out["error"] = error
        if self.elapsed_ms:
            out["elapsed_ms"] = round(self.elapsed_ms, 2)
        return out


class Stopwatch:
    """Milliseconds since construction."""

    __slots__ = ("_started",)

    def __init__(self) -> None:
        self._started = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return 1000 * (time.perf_counter() - self._started)


def start_timer() -> Stopwatch:
    return Stopwatch()


__all__ = ["OperationError", "OperationResult", "Stopwatch", "start_timer"]
