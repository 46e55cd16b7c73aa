"""DynamoDB-backed event store for event-sourced aggregates."""

from .domain.shared import (
    AggregateEvent,
    DeserializationError,
    EventStoreError,
    EventTypeNotRegisteredError,
    StoreUnavailableError,
    UnsupportedKeyTypeError,
    ValueObject,
)
from .domain.event_store import EventStore
from .infrastructure.persistence import (
    DynamoDBEventStore,
    DynamoDBTable,
    EventCodec,
    InMemoryTable,
    KeyKind,
)

__all__ = [
    "AggregateEvent",
    "ValueObject",
    "EventStore",
    "DynamoDBEventStore",
    "DynamoDBTable",
    "InMemoryTable",
    "EventCodec",
    "KeyKind",
    "EventStoreError",
    "StoreUnavailableError",
    "DeserializationError",
    "UnsupportedKeyTypeError",
    "EventTypeNotRegisteredError",
]
