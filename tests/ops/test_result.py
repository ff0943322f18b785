"""Tests for liteorm.ops.result."""

from liteorm.core.errors import ErrorCategory, ErrorContext, MissingPrimaryKeyError
from liteorm.ops.result import OperationError, OperationResult, start_timer


class TestOperationResult:
    def test_ok(self):
        result = OperationResult.ok(3, message="3 records updated", elapsed_ms=1.5)
        assert result.success is True
        assert result.data == 3
        assert result.message == "3 records updated"
        assert result.error is None

    def test_fail(self):
        result = OperationResult.fail(
            "LOOKUP", "no such column", category=ErrorCategory.LOOKUP, details={"column": "X"}
        )
        assert result.success is False
        assert result.data is None
        assert result.message == "no such column"
        assert result.error == OperationError(
            code="LOOKUP", message="no such column", category=ErrorCategory.LOOKUP, details={"column": "X"}
        )

    def test_unchanged_keeps_data_without_error(self):
        result = OperationResult.unchanged(0, message="0 records updated")
        assert result.success is False
        assert result.data == 0
        assert result.error is None
        assert result.to_dict() == {"success": False, "message": "0 records updated", "data": 0}

    def test_from_liteorm_error(self):
        exc = MissingPrimaryKeyError("Notes has no primary key", context=ErrorContext(table="Notes"))
        result = OperationResult.from_exception(exc)
        assert result.success is False
        assert result.message == "Notes has no primary key"
        assert result.error.code == exc.category.value
        assert result.error.category == exc.category
        assert result.error.details["table"] == "Notes"

    def test_from_foreign_exception(self):
        result = OperationResult.from_exception(RuntimeError("boom"))
        assert result.message == "boom"
        assert result.error.code == "INTERNAL"
        assert result.error.category == ErrorCategory.INTERNAL

    def test_to_dict_success(self):
        assert OperationResult.ok([1, 2]).to_dict() == {"success": True, "message": "", "data": [1, 2]}

    def test_to_dict_failure(self):
        data = OperationResult.fail(
            "DATABASE", "locked", category=ErrorCategory.DATABASE, details={"table": "Advisors"}, elapsed_ms=2.5
        ).to_dict()
        assert data == {
            "success": False,
            "message": "locked",
            "error": {
                "code": "DATABASE",
                "message": "locked",
                "category": "DATABASE",
                "details": {"table": "Advisors"},
            },
            "elapsed_ms": 2.5,
        }


def test_timer_measures_forward():
    timer = start_timer()
    first = timer.elapsed_ms
    assert first >= 0
    assert timer.elapsed_ms >= first
