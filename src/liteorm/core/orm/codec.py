"""
Value codec: native field values to SQL literals and back.

Write direction (``to_sql_literal``) renders the exact text a value takes
inside a statement. Read direction (``from_sql_value``) turns the raw
scalar a driver hands back (``None``, ``int``, ``float`` or ``str``) into
the field's native kind. There is one converter per ``Kind`` in each
direction, selected from a table rather than an open-ended switch.

Architecture:
    ::

        ┌──────────────┬──────────────────────────┬──────────────────────────┐
        │ Kind         │ to_sql_literal           │ from_sql_value           │
        ├──────────────┼──────────────────────────┼──────────────────────────┤
        │ INT*/UINT*   │ 42                       │ int, range-checked       │
        │ BOOLEAN      │ 1 / 0                    │ uint8 → != 0             │
        │ CHAR         │ 67  (code point)         │ "C" / 67 / "67" → "C"    │
        │ FLOAT32      │ 2.2678928 (shortest f32) │ via Decimal → float32    │
        │ FLOAT64      │ 2.9                      │ via Decimal → float      │
        │ DECIMAL      │ 2.267892892304813        │ Decimal (15 sig. digits  │
        │              │                          │ when the raw is a float) │
        │ STRING       │ "text"  (not escaped)    │ str(raw)                 │
        │ TIMESTAMP    │ "2012-05-10 00:00:00:000"│ parsed; "" → datetime.min│
        │ None (kind)  │ "str(value)"             │ UnsupportedTypeError     │
        └──────────────┴──────────────────────────┴──────────────────────────┘

    ``None`` values are ``null`` in the write direction and stay ``None``
    in the read direction, for every kind.

Examples:
    >>> to_sql_literal(True, Kind.BOOLEAN)
    '1'
    >>> to_sql_literal(datetime(2012, 5, 10), Kind.TIMESTAMP)
    '"2012-05-10 00:00:00:000"'
    >>> from_sql_value("0", Kind.BOOLEAN)
    False
    >>> from_sql_value(0x43, Kind.CHAR)
    'C'

Guardrails:
    ❌ DON'T: Rely on string literals being escaped
    ✅ DO: Keep double quotes out of STRING values; they are embedded as-is

    ❌ DON'T: Expect FLOAT32 or DECIMAL-from-float reads to be exact
    ✅ DO: Compare them with a tolerance

Tags:
    codec, conversion, sql-literal, sqlite, liteorm

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import math
import re
import struct
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from liteorm.core.enums import Kind
from liteorm.core.errors import (
    ConversionError,
    MalformedTimestampError,
    UnsupportedTypeError,
)

TIMESTAMP_FORMAT = "yyyy-MM-dd HH:mm:ss:fff"
ZERO_TIMESTAMP = datetime.min

_TIMESTAMP_PATTERN = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2}) ([0-9]{2}):([0-9]{2}):([0-9]{2}):([0-9]{3})"
)

_INTEGER_RANGES: dict[Kind, tuple[int, int]] = {
    Kind.INT8: (-(2**7), 2**7 - 1),
    Kind.INT16: (-(2**15), 2**15 - 1),
    Kind.INT32: (-(2**31), 2**31 - 1),
    Kind.INT64: (-(2**63), 2**63 - 1),
    Kind.UINT8: (0, 2**8 - 1),
    Kind.UINT16: (0, 2**16 - 1),
    Kind.UINT32: (0, 2**32 - 1),
    Kind.UINT64: (0, 2**64 - 1),
}

_UNSIGNED = frozenset({Kind.UINT8, Kind.UINT16, Kind.UINT32, Kind.UINT64})

# Significant digits kept when a binary float becomes a Decimal.
_DECIMAL_FROM_FLOAT_DIGITS = 15


# =============================================================================
# Timestamps
# =============================================================================


def format_timestamp(value: datetime) -> str:
    """Render ``value`` as ``yyyy-MM-dd HH:mm:ss:fff`` (no quotes, no zone)."""
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}:"
        f"{value.microsecond // 1000:03d}"
    )


def parse_timestamp(text: str) -> datetime:
    """Parse ``yyyy-MM-dd HH:mm:ss:fff``; an empty string is ``ZERO_TIMESTAMP``."""
    if text == "":
        return ZERO_TIMESTAMP
    match = _TIMESTAMP_PATTERN.fullmatch(text)
    if match is None:
        raise MalformedTimestampError(
            f"Timestamp {text!r} does not match format {TIMESTAMP_FORMAT}"
        )
    year, month, day, hour, minute, second, millis = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day, hour, minute, second, millis * 1000)
    except ValueError as exc:
        raise MalformedTimestampError(
            f"Timestamp {text!r} is not a valid date/time: {exc}", cause=exc
        ) from exc


# =============================================================================
# Numeric helpers
# =============================================================================


def _integral(value: Any) -> int:
    if isinstance(value, int):
        return int(value)
    if isinstance(value, (float, Decimal)):
        return round(value)
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"{type(value).__qualname__} is not convertible to an integer")


def _narrow_integer(value: Any, kind: Kind) -> int:
    try:
        number = _integral(value)
    except (TypeError, ValueError, OverflowError, ArithmeticError) as exc:
        raise ConversionError(
            f"Cannot convert {value!r} to {kind.value}", cause=exc
        ) from exc
    # Unsigned kinds go through uint64 first, signed through int64.
    wide = Kind.UINT64 if kind in _UNSIGNED else Kind.INT64
    for bound_kind in (wide, kind):
        low, high = _INTEGER_RANGES[bound_kind]
        if not low <= number <= high:
            raise ConversionError(
                f"Value {number} is outside the range of {bound_kind.value}"
            )
    return number


def _to_decimal(value: Any) -> Decimal:
    try:
        if isinstance(value, Decimal):
            return value
        if isinstance(value, float):
            return Decimal(repr(value))
        if isinstance(value, int):
            return Decimal(int(value))
        if isinstance(value, str):
            return Decimal(value.strip())
    except (InvalidOperation, ValueError) as exc:
        raise ConversionError(f"Cannot convert {value!r} to a number", cause=exc) from exc
    raise ConversionError(f"Cannot convert {type(value).__qualname__} to a number")


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError as exc:
        raise ConversionError(f"Value {value!r} is outside the range of float32", cause=exc) from exc


def _finite(value: float | Decimal, kind: Kind) -> None:
    finite = value.is_finite() if isinstance(value, Decimal) else math.isfinite(value)
    if not finite:
        raise ConversionError(f"Non-finite value {value!r} has no {kind.value} SQL literal")


def _float32_literal(value: float) -> str:
    """Shortest decimal text that reads back as the same float32."""
    for digits in range(1, 10):
        text = f"{value:.{digits}g}"
        if _to_float32(float(text)) == value:
            return text
    return repr(value)


# =============================================================================
# Write direction
# =============================================================================


def _write_integer(value: Any, kind: Kind) -> str:
    return str(_narrow_integer(value, kind))


def _write_boolean(value: Any, kind: Kind) -> str:
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        flag = value.strip().lower() == "true"
    elif isinstance(value, bool):
        flag = value
    else:
        flag = _narrow_integer(value, Kind.INT64) != 0
    return "1" if flag else "0"


def _write_char(value: Any, kind: Kind) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise ConversionError(f"CHAR value must be exactly one character, got {value!r}")
        return str(ord(value))
    code_point = _narrow_integer(value, Kind.UINT32)
    if code_point > 0x10FFFF:
        raise ConversionError(f"Code point {code_point} is outside the Unicode range")
    return str(code_point)


def _write_float32(value: Any, kind: Kind) -> str:
    number = float(_to_decimal(value))
    _finite(number, kind)
    return _float32_literal(_to_float32(number))


def _write_float64(value: Any, kind: Kind) -> str:
    number = float(_to_decimal(value))
    _finite(number, kind)
    return repr(number)


def _write_decimal(value: Any, kind: Kind) -> str:
    number = _to_decimal(value)
    _finite(number, kind)
    return format(number, "f")


def _write_string(value: Any, kind: Kind) -> str:
    return f'"{value}"'


def _write_timestamp(value: Any, kind: Kind) -> str:
    if not isinstance(value, datetime):
        raise ConversionError(
            f"TIMESTAMP value must be a datetime, got {type(value).__qualname__}"
        )
    return f'"{format_timestamp(value)}"'


_WRITERS: dict[Kind, Callable[[Any, Kind], str]] = {
    Kind.INT8: _write_integer,
    Kind.INT16: _write_integer,
    Kind.INT32: _write_integer,
    Kind.INT64: _write_integer,
    Kind.UINT8: _write_integer,
    Kind.UINT16: _write_integer,
    Kind.UINT32: _write_integer,
    Kind.UINT64: _write_integer,
    Kind.BOOLEAN: _write_boolean,
    Kind.CHAR: _write_char,
    Kind.FLOAT32: _write_float32,
    Kind.FLOAT64: _write_float64,
    Kind.DECIMAL: _write_decimal,
    Kind.STRING: _write_string,
    Kind.TIMESTAMP: _write_timestamp,
}


def to_sql_literal(value: Any, kind: Kind | None) -> str:
    """Render ``value`` as the SQL literal for a column of ``kind``.

    A ``kind`` of ``None`` (a field whose type has no mapping) falls back to
    the stringified value in double quotes.
    """
    if value is None:
        return "null"
    if kind is None:
        return f'"{value}"'
    return _WRITERS[kind](value, kind)


# =============================================================================
# Read direction
# =============================================================================


def _read_integer(raw: Any, kind: Kind) -> int:
    return _narrow_integer(raw, kind)


def _read_boolean(raw: Any, kind: Kind) -> bool:
    return _narrow_integer(raw, Kind.UINT8) != 0


def _read_char(raw: Any, kind: Kind) -> str:
    """Text of one character is the character; numbers are code points.

    A digit string of two or more characters is the code point written by
    ``_write_char``. A single digit stays the digit, so code points 0-9
    only survive when the driver hands them back as ``int``.
    """
    if isinstance(raw, str):
        if len(raw) == 1:
            return raw
        if not (raw.isascii() and raw.isdigit()):
            raise ConversionError(f"CHAR value must be one character or a code point, got {raw!r}")
    code_point = _narrow_integer(raw, Kind.UINT32)
    try:
        return chr(code_point)
    except (ValueError, OverflowError) as exc:
        raise ConversionError(f"Code point {code_point} is outside the Unicode range", cause=exc) from exc


def _read_float32(raw: Any, kind: Kind) -> float:
    return _to_float32(float(_to_decimal(raw)))


def _read_float64(raw: Any, kind: Kind) -> float:
    return float(_to_decimal(raw))


def _read_decimal(raw: Any, kind: Kind) -> Decimal:
    if isinstance(raw, float):
        return _to_decimal(format(raw, f".{_DECIMAL_FROM_FLOAT_DIGITS}g"))
    return _to_decimal(raw)


def _read_string(raw: Any, kind: Kind) -> str:
    return str(raw)


def _read_timestamp(raw: Any, kind: Kind) -> datetime:
    if not isinstance(raw, str):
        raise MalformedTimestampError(
            f"Timestamp must be stored as text, got {type(raw).__qualname__}"
        )
    return parse_timestamp(raw)


_READERS: dict[Kind, Callable[[Any, Kind], Any]] = {
    Kind.INT8: _read_integer,
    Kind.INT16: _read_integer,
    Kind.INT32: _read_integer,
    Kind.INT64: _read_integer,
    Kind.UINT8: _read_integer,
    Kind.UINT16: _read_integer,
    Kind.UINT32: _read_integer,
    Kind.UINT64: _read_integer,
    Kind.BOOLEAN: _read_boolean,
    Kind.CHAR: _read_char,
    Kind.FLOAT32: _read_float32,
    Kind.FLOAT64: _read_float64,
    Kind.DECIMAL: _read_decimal,
    Kind.STRING: _read_string,
    Kind.TIMESTAMP: _read_timestamp,
}


def from_sql_value(raw: Any, kind: Kind | None, *, type_name: str | None = None) -> Any:
    """Convert a raw driver value into the native value for ``kind``.

    ``type_name`` only improves the message of the ``UnsupportedTypeError``
    raised when ``kind`` is ``None``.
    """
    if raw is None:
        return None
    if kind is None:
        raise UnsupportedTypeError(
            f"No SQL datatype mapping found for type {type_name or 'unknown'}"
        )
    return _READERS[kind](raw, kind)


__all__ = [
    "TIMESTAMP_FORMAT",
    "ZERO_TIMESTAMP",
    "format_timestamp",
    "parse_timestamp",
    "to_sql_literal",
    "from_sql_value",
]
