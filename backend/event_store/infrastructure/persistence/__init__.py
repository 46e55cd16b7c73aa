"""Persistence layer - Event store and table adapters."""

from .event_store import (
    DynamoDBEventStore,
    DynamoDBTable,
    EventCodec,
    EventTable,
    InMemoryTable,
    KeyKind,
)

__all__ = [
    "DynamoDBEventStore",
    "DynamoDBTable",
    "InMemoryTable",
    "EventTable",
    "EventCodec",
    "KeyKind",
]
