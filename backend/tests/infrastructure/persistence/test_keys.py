"""Tests for aggregate key extraction."""

from datetime import datetime, timezone
from decimal import Decimal
from io import BytesIO
from uuid import UUID

import pytest

from event_store import UnsupportedKeyTypeError
from event_store.domain.shared import DeserializationError
from event_store.infrastructure.persistence.event_store.keys import (
    KeyKind,
    convert_key,
    extract_aggregate_id,
    key_kind_for,
    to_attribute_value,
)


class TestKeyKindFor:
    """Tests for resolving Python types to key kinds."""

    @pytest.mark.parametrize(
        ("key_type", "expected"),
        [
            (bool, KeyKind.BOOLEAN),
            (int, KeyKind.INT64),
            (float, KeyKind.DOUBLE),
            (Decimal, KeyKind.DECIMAL),
            (str, KeyKind.STRING),
            (bytes, KeyKind.BYTES),
            (datetime, KeyKind.DATETIME),
            (UUID, KeyKind.UUID),
            (BytesIO, KeyKind.STREAM),
        ],
    )
    def test_supported_python_types(self, key_type, expected):
        """Test every supported Python type maps to a kind."""
        assert key_kind_for(key_type) is expected

    def test_key_kind_passes_through(self):
        """Test that an explicit KeyKind is returned unchanged."""
        assert key_kind_for(KeyKind.UINT16) is KeyKind.UINT16

    @pytest.mark.parametrize("key_type", [dict, list, object, complex])
    def test_unsupported_type_raises_error(self, key_type):
        """Test that types outside the table are rejected by name."""
        with pytest.raises(UnsupportedKeyTypeError, match="not supported as aggregate key") as exc:
            key_kind_for(key_type)

        assert exc.value.key_type == key_type.__qualname__


class TestConvertKey:
    """Tests for coercing stored values to key kinds."""

    @pytest.mark.parametrize(
        ("kind", "value"),
        [
            (KeyKind.BOOLEAN, True),
            (KeyKind.INT8, -128),
            (KeyKind.INT16, 32767),
            (KeyKind.INT32, -42),
            (KeyKind.INT64, 2**63 - 1),
            (KeyKind.UINT8, 255),
            (KeyKind.UINT16, 65535),
            (KeyKind.UINT32, 2**32 - 1),
            (KeyKind.UINT64, 2**64 - 1),
            (KeyKind.SINGLE, 0.5),
            (KeyKind.DOUBLE, 3.25),
            (KeyKind.DECIMAL, Decimal("12.34")),
            (KeyKind.CHAR, "x"),
            (KeyKind.BYTES, b"\x00\x01"),
            (KeyKind.STRING, "acct-1"),
            (KeyKind.DATETIME, datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)),
            (KeyKind.UUID, UUID("12345678-1234-5678-1234-567812345678")),
        ],
    )
    def test_round_trip(self, kind, value):
        """Test that a key written as an attribute converts back unchanged."""
        assert convert_key(to_attribute_value(value), kind) == value

    def test_stream_round_trip(self):
        """Test that a raw binary stream key converts back to a stream."""
        stored = to_attribute_value(BytesIO(b"raw-key"))

        result = convert_key(stored, KeyKind.STREAM)

        assert isinstance(result, BytesIO)
        assert result.getvalue() == b"raw-key"

    @pytest.mark.parametrize(
        ("kind", "stored", "expected"),
        [
            (KeyKind.INT32, Decimal("7"), 7),
            (KeyKind.UINT64, Decimal("18446744073709551615"), 2**64 - 1),
            (KeyKind.DOUBLE, Decimal("1.5"), 1.5),
            (KeyKind.DECIMAL, 3, Decimal("3")),
            (KeyKind.STRING, Decimal("42"), "42"),
        ],
    )
    def test_converts_numbers_returned_by_dynamodb(self, kind, stored, expected):
        """Test conversion from the Decimal values DynamoDB returns."""
        assert convert_key(stored, kind) == expected

    @pytest.mark.parametrize(
        ("kind", "stored"),
        [
            (KeyKind.STRING, {"nested": "object"}),
            (KeyKind.INT64, ["a", "list"]),
            (KeyKind.INT8, 128),
            (KeyKind.UINT8, -1),
            (KeyKind.INT32, Decimal("1.5")),
            (KeyKind.INT64, True),
            (KeyKind.BOOLEAN, 1),
            (KeyKind.CHAR, "ab"),
            (KeyKind.UUID, "not-a-uuid"),
            (KeyKind.DATETIME, "yesterday"),
            (KeyKind.BYTES, "text"),
            (KeyKind.SINGLE, 1e300),
        ],
    )
    def test_unrepresentable_value_raises_error(self, kind, stored):
        """Test that values that do not fit the kind are rejected."""
        with pytest.raises(UnsupportedKeyTypeError, match=kind.value):
            convert_key(stored, kind)

    def test_single_rounds_to_nearest_float32(self):
        """Test that single keys are narrowed to 32-bit precision."""
        assert convert_key(0.1, KeyKind.SINGLE) == pytest.approx(0.1, rel=1e-7)
        assert convert_key(0.1, KeyKind.SINGLE) != 0.1
        assert convert_key(Decimal("3.0e38"), KeyKind.SINGLE) == pytest.approx(3.0e38, rel=1e-7)

    @pytest.mark.parametrize("stored", [3.5e38, -3.5e38, Decimal("1e39")])
    def test_single_overflow_raises_error(self, stored):
        """Test that values beyond the float32 range are not stored as infinity."""
        with pytest.raises(UnsupportedKeyTypeError, match="single"):
            convert_key(stored, KeyKind.SINGLE)


class TestExtractAggregateId:
    """Tests for reading aggregateId from documents."""

    def test_extracts_and_converts(self):
        """Test extraction from a stored document."""
        document = {"aggregateId": Decimal("5"), "aggregateVersion": Decimal("1")}

        assert extract_aggregate_id(document, KeyKind.INT64) == 5

    def test_nested_object_id_raises_error(self):
        """Test that a nested map cannot be used as an aggregate id."""
        document = {"aggregateId": {"region": "jp"}, "aggregateVersion": 1}

        with pytest.raises(UnsupportedKeyTypeError) as exc:
            extract_aggregate_id(document, KeyKind.STRING)

        assert exc.value.key_type == "dict"

    def test_missing_id_raises_error(self):
        """Test that a document without aggregateId cannot be read."""
        with pytest.raises(DeserializationError):
            extract_aggregate_id({"aggregateVersion": 1}, KeyKind.STRING)


class TestToAttributeValue:
    """Tests for normalizing values before they are stored."""

    def test_normalizes_rich_types(self):
        """Test that non-primitive scalars become storable primitives."""
        when = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        uid = UUID("12345678-1234-5678-1234-567812345678")

        assert to_attribute_value(when) == "2024-01-02T03:04:05+00:00"
        assert to_attribute_value(uid) == "12345678-1234-5678-1234-567812345678"
        assert to_attribute_value(bytearray(b"ab")) == b"ab"
        assert to_attribute_value("plain") == "plain"
