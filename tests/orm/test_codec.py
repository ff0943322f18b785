"""Tests for the value codec (native values <-> SQL literals/raw values)."""

from datetime import datetime
from decimal import Decimal

import pytest

from liteorm.core.enums import Kind
from liteorm.core.errors import (
    ConversionError,
    MalformedTimestampError,
    UnsupportedTypeError,
)
from liteorm.core.orm.codec import (
    ZERO_TIMESTAMP,
    format_timestamp,
    from_sql_value,
    parse_timestamp,
    to_sql_literal,
)


class TestTimestamps:
    def test_format(self):
        assert format_timestamp(datetime(2021, 8, 17, 13, 27, 11, 668_000)) == "2021-08-17 13:27:11:668"

    def test_format_truncates_to_milliseconds(self):
        assert format_timestamp(datetime(2012, 5, 10, 0, 0, 0, 999_999)) == "2012-05-10 00:00:00:999"

    def test_parse(self):
        assert parse_timestamp("2021-08-17 13:27:11:668") == datetime(2021, 8, 17, 13, 27, 11, 668_000)

    def test_empty_string_is_zero_timestamp(self):
        assert parse_timestamp("") == ZERO_TIMESTAMP == datetime.min

    @pytest.mark.parametrize(
        "text",
        [
            "2021-08-17 13:27:11",
            "2021-08-17T13:27:11:668",
            "2021-08-17 13:27:11.668",
            "garbage",
            "2021-13-17 13:27:11:668",
        ],
    )
    def test_malformed(self, text):
        with pytest.raises(MalformedTimestampError):
            parse_timestamp(text)


class TestToSqlLiteral:
    def test_none_is_null_for_every_kind(self):
        for kind in Kind:
            assert to_sql_literal(None, kind) == "null"
        assert to_sql_literal(None, None) == "null"

    @pytest.mark.parametrize(
        "value, kind, literal",
        [
            (66790, Kind.INT32, "66790"),
            (-9, Kind.INT8, "-9"),
            (137, Kind.UINT8, "137"),
            (2**63 - 1, Kind.INT64, "9223372036854775807"),
            (True, Kind.BOOLEAN, "1"),
            (False, Kind.BOOLEAN, "0"),
            ("C", Kind.CHAR, "67"),
            (2.9, Kind.FLOAT64, "2.9"),
            (0.1, Kind.FLOAT32, "0.1"),
            (Decimal("2.267892892304813"), Kind.DECIMAL, "2.267892892304813"),
            ("Eddie", Kind.STRING, '"Eddie"'),
            ("", Kind.STRING, '""'),
            (datetime(2012, 5, 10), Kind.TIMESTAMP, '"2012-05-10 00:00:00:000"'),
        ],
    )
    def test_literals(self, value, kind, literal):
        assert to_sql_literal(value, kind) == literal

    def test_unmapped_kind_falls_back_to_quoted_text(self):
        assert to_sql_literal(b"ab", None) == "\"b'ab'\""

    def test_string_is_not_escaped(self):
        assert to_sql_literal('say "hi"', Kind.STRING) == '"say "hi""'

    @pytest.mark.parametrize(
        "value, kind",
        [(128, Kind.INT8), (-1, Kind.UINT8), (2**32, Kind.UINT32), (2**64, Kind.UINT64)],
    )
    def test_integer_out_of_range(self, value, kind):
        with pytest.raises(ConversionError):
            to_sql_literal(value, kind)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_floats_rejected(self, value):
        with pytest.raises(ConversionError):
            to_sql_literal(value, Kind.FLOAT64)

    def test_char_must_be_single_character(self):
        with pytest.raises(ConversionError):
            to_sql_literal("CD", Kind.CHAR)

    def test_timestamp_requires_datetime(self):
        with pytest.raises(ConversionError):
            to_sql_literal("2012-05-10", Kind.TIMESTAMP)


class TestFromSqlValue:
    """Raw values as SQLite hands them back, converted to native kinds."""

    def test_none_stays_none(self):
        for kind in Kind:
            assert from_sql_value(None, kind) is None
        assert from_sql_value(None, None) is None

    @pytest.mark.parametrize("raw, expected", [(1, True), ("1", True), (0, False), ("0", False)])
    def test_boolean(self, raw, expected):
        assert from_sql_value(raw, Kind.BOOLEAN) is expected

    @pytest.mark.parametrize("raw", ["C", 0x43, "67"])
    def test_char(self, raw):
        assert from_sql_value(raw, Kind.CHAR) == "C"

    def test_char_low_code_point_from_integer(self):
        assert from_sql_value(9, Kind.CHAR) == "\t"

    def test_char_single_digit_text_is_the_digit(self):
        assert from_sql_value("9", Kind.CHAR) == "9"

    @pytest.mark.parametrize("raw", ["CD", "6x", "-67"])
    def test_char_rejects_other_text(self, raw):
        with pytest.raises(ConversionError):
            from_sql_value(raw, Kind.CHAR)

    def test_string_from_number(self):
        assert from_sql_value(123.456, Kind.STRING) == "123.456"

    def test_timestamp(self):
        assert from_sql_value("2021-08-17 13:27:11:668", Kind.TIMESTAMP) == datetime(
            2021, 8, 17, 13, 27, 11, 668_000
        )

    def test_timestamp_from_empty_text(self):
        assert from_sql_value("", Kind.TIMESTAMP) == ZERO_TIMESTAMP

    def test_timestamp_from_number_rejected(self):
        with pytest.raises(MalformedTimestampError):
            from_sql_value(20210817, Kind.TIMESTAMP)

    @pytest.mark.parametrize("raw", [0x89, "137"])
    def test_uint8(self, raw):
        assert from_sql_value(raw, Kind.UINT8) == 0x89

    @pytest.mark.parametrize("raw", [-9, "-9"])
    def test_int8(self, raw):
        assert from_sql_value(raw, Kind.INT8) == -9

    def test_int8_out_of_range(self):
        with pytest.raises(ConversionError):
            from_sql_value(300, Kind.INT8)

    def test_unsigned_rejects_negative(self):
        with pytest.raises(ConversionError):
            from_sql_value(-1, Kind.UINT16)

    def test_integer_from_text_rejected_when_not_numeric(self):
        with pytest.raises(ConversionError):
            from_sql_value("abc", Kind.INT32)

    def test_decimal_from_float_keeps_fifteen_digits(self):
        assert from_sql_value(2.267892892304813, Kind.DECIMAL) == Decimal("2.26789289230481")

    def test_decimal_from_text_is_exact(self):
        assert from_sql_value("2.267892892304813", Kind.DECIMAL) == Decimal("2.267892892304813")

    def test_float64(self):
        assert from_sql_value(2.9, Kind.FLOAT64) == 2.9
        assert from_sql_value("2.9", Kind.FLOAT64) == 2.9

    def test_float32_is_single_precision(self):
        value = from_sql_value(2.267892892304813, Kind.FLOAT32)
        assert value == pytest.approx(2.2678928, rel=1e-6)
        assert value != 2.267892892304813

    def test_unmapped_kind(self):
        with pytest.raises(UnsupportedTypeError, match="bytes"):
            from_sql_value(b"x", None, type_name="bytes")


class TestWriteThenRead:
    @pytest.mark.parametrize(
        "value, kind",
        [
            (-128, Kind.INT8),
            (2**64 - 1, Kind.UINT64),
            (True, Kind.BOOLEAN),
            (2.9, Kind.FLOAT64),
            (Decimal("12.50"), Kind.DECIMAL),
            ("Que", Kind.STRING),
            ("C", Kind.CHAR),
            ("\u00e9", Kind.CHAR),
            (datetime(2021, 8, 17, 13, 27, 11, 668_000), Kind.TIMESTAMP),
        ],
    )
    def test_value_survives(self, value, kind):
        literal = to_sql_literal(value, kind)
        raw = literal[1:-1] if literal.startswith('"') else literal
        assert from_sql_value(raw, kind) == value

    @pytest.mark.parametrize("value", [2.267892892304813, -0.1, 3.4e38])
    def test_float32_survives_within_precision(self, value):
        literal = to_sql_literal(value, Kind.FLOAT32)
        assert from_sql_value(literal, Kind.FLOAT32) == pytest.approx(value, rel=1e-6)
