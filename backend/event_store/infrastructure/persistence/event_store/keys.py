"""Aggregate key extraction.

The table has no notion of the aggregate's key type: an id comes back as
``Decimal``, ``str``, ``bytes`` or ``bool`` depending on how it was written.
Every supported key kind has an explicit converter below, and anything
outside that table is rejected with ``UnsupportedKeyTypeError``.
"""

import struct
from collections.abc import Callable, Mapping
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from io import BytesIO
from typing import Any
from uuid import UUID

from ....domain.shared import DeserializationError, UnsupportedKeyTypeError

AGGREGATE_ID = "aggregateId"
AGGREGATE_VERSION = "aggregateVersion"


class KeyKind(str, Enum):
    """Primitive kinds an aggregate key may have."""

    BOOLEAN = "boolean"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    SINGLE = "single"
    DOUBLE = "double"
    DECIMAL = "decimal"
    CHAR = "char"
    BYTES = "bytes"
    STRING = "string"
    DATETIME = "datetime"
    UUID = "uuid"
    STREAM = "stream"


_INTEGER_RANGES: dict[KeyKind, tuple[int, int]] = {
    KeyKind.INT8: (-(2**7), 2**7 - 1),
    KeyKind.INT16: (-(2**15), 2**15 - 1),
    KeyKind.INT32: (-(2**31), 2**31 - 1),
    KeyKind.INT64: (-(2**63), 2**63 - 1),
    KeyKind.UINT8: (0, 2**8 - 1),
    KeyKind.UINT16: (0, 2**16 - 1),
    KeyKind.UINT32: (0, 2**32 - 1),
    KeyKind.UINT64: (0, 2**64 - 1),
}

_PYTHON_TYPES: dict[type, KeyKind] = {
    bool: KeyKind.BOOLEAN,
    int: KeyKind.INT64,
    float: KeyKind.DOUBLE,
    Decimal: KeyKind.DECIMAL,
    str: KeyKind.STRING,
    bytes: KeyKind.BYTES,
    datetime: KeyKind.DATETIME,
    UUID: KeyKind.UUID,
    BytesIO: KeyKind.STREAM,
}


class _NotRepresentable(Exception):
    pass


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _to_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise _NotRepresentable


def _integer(kind: KeyKind) -> Callable[[Any], int]:
    low, high = _INTEGER_RANGES[kind]

    def convert(value: Any) -> int:
        if not _is_number(value):
            raise _NotRepresentable
        if isinstance(value, float) and not value.is_integer():
            raise _NotRepresentable
        if isinstance(value, Decimal) and value != value.to_integral_value():
            raise _NotRepresentable
        try:
            number = int(value)
        except (OverflowError, ValueError):
            raise _NotRepresentable from None
        if not low <= number <= high:
            raise _NotRepresentable
        return number

    return convert


def _to_single(value: Any) -> float:
    if not _is_number(value):
        raise _NotRepresentable
    try:
        return struct.unpack("<f", struct.pack("<f", float(value)))[0]
    except (OverflowError, struct.error):
        raise _NotRepresentable from None


def _to_double(value: Any) -> float:
    if not _is_number(value):
        raise _NotRepresentable
    return float(value)


def _to_decimal(value: Any) -> Decimal:
    if not _is_number(value):
        raise _NotRepresentable
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def _to_char(value: Any) -> str:
    if isinstance(value, str) and len(value) == 1:
        return value
    raise _NotRepresentable


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise _NotRepresentable


def _to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if _is_number(value):
        return str(value)
    raise _NotRepresentable


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            raise _NotRepresentable from None
    raise _NotRepresentable


def _to_uuid(value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value)
        except ValueError:
            raise _NotRepresentable from None
    raise _NotRepresentable


def _to_stream(value: Any) -> BytesIO:
    return BytesIO(_to_bytes(value))


_CONVERTERS: dict[KeyKind, Callable[[Any], Any]] = {
    KeyKind.BOOLEAN: _to_boolean,
    KeyKind.INT8: _integer(KeyKind.INT8),
    KeyKind.INT16: _integer(KeyKind.INT16),
    KeyKind.INT32: _integer(KeyKind.INT32),
    KeyKind.INT64: _integer(KeyKind.INT64),
    KeyKind.UINT8: _integer(KeyKind.UINT8),
    KeyKind.UINT16: _integer(KeyKind.UINT16),
    KeyKind.UINT32: _integer(KeyKind.UINT32),
    KeyKind.UINT64: _integer(KeyKind.UINT64),
    KeyKind.SINGLE: _to_single,
    KeyKind.DOUBLE: _to_double,
    KeyKind.DECIMAL: _to_decimal,
    KeyKind.CHAR: _to_char,
    KeyKind.BYTES: _to_bytes,
    KeyKind.STRING: _to_string,
    KeyKind.DATETIME: _to_datetime,
    KeyKind.UUID: _to_uuid,
    KeyKind.STREAM: _to_stream,
}


def key_kind_for(key_type: Any) -> KeyKind:
    """Resolve the key kind for a Python type (or pass a ``KeyKind`` through)."""
    if isinstance(key_type, KeyKind):
        return key_type
    kind = _PYTHON_TYPES.get(key_type) if isinstance(key_type, type) else None
    if kind is None:
        name = getattr(key_type, "__qualname__", repr(key_type))
        raise UnsupportedKeyTypeError(
            f"{name} is not supported as aggregate key in DynamoDB",
            key_type=name,
        )
    return kind


def convert_key(value: Any, kind: KeyKind) -> Any:
    """Coerce a stored attribute value to the given key kind."""
    try:
        return _CONVERTERS[kind](value)
    except _NotRepresentable:
        raise UnsupportedKeyTypeError(
            f"Stored {type(value).__name__} value cannot be used as a "
            f"{kind.value} aggregate key",
            key_type=type(value).__name__,
        ) from None


def extract_aggregate_id(document: Mapping[str, Any], kind: KeyKind) -> Any:
    """Read ``aggregateId`` from a stored document and coerce it to ``kind``."""
    if AGGREGATE_ID not in document:
        raise DeserializationError(f"Document has no '{AGGREGATE_ID}' attribute")
    return convert_key(document[AGGREGATE_ID], kind)


def to_attribute_value(value: Any) -> Any:
    """Normalize a scalar to the form it is stored in."""
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, BytesIO):
        return value.getvalue()
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return value
