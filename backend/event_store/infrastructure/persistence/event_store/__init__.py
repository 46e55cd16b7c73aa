"""Event store persistence - codec, key extraction and table adapters."""

from .dynamodb_event_store import DynamoDBEventStore
from .dynamodb_table import DynamoDBSearch, DynamoDBTable
from .in_memory_table import InMemoryCursor, InMemoryTable
from .keys import (
    AGGREGATE_ID,
    AGGREGATE_VERSION,
    KeyKind,
    convert_key,
    extract_aggregate_id,
    key_kind_for,
    to_attribute_value,
)
from .serialization import TYPE_ATTRIBUTE, EventCodec
from .table import EventTable, PageCursor

__all__ = [
    "DynamoDBEventStore",
    "DynamoDBTable",
    "DynamoDBSearch",
    "InMemoryTable",
    "InMemoryCursor",
    "EventTable",
    "PageCursor",
    "EventCodec",
    "TYPE_ATTRIBUTE",
    "KeyKind",
    "AGGREGATE_ID",
    "AGGREGATE_VERSION",
    "convert_key",
    "extract_aggregate_id",
    "key_kind_for",
    "to_attribute_value",
]
