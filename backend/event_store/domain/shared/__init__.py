"""Shared domain components."""

from .domain_event import AggregateEvent
from .exceptions import (
    DeserializationError,
    EventStoreError,
    EventTypeNotRegisteredError,
    StoreUnavailableError,
    UnsupportedKeyTypeError,
)
from .value_object import DocumentModel, ValueObject

__all__ = [
    "AggregateEvent",
    "DocumentModel",
    "ValueObject",
    "EventStoreError",
    "StoreUnavailableError",
    "DeserializationError",
    "UnsupportedKeyTypeError",
    "EventTypeNotRegisteredError",
]
