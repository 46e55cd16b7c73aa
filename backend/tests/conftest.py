"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import pytest

from account_events import ACCOUNT_EVENTS, CounterIncremented
from event_store import DynamoDBEventStore, EventCodec, InMemoryTable


@pytest.fixture
def codec() -> EventCodec:
    """Create a codec for the sample account events."""
    return EventCodec(ACCOUNT_EVENTS)


@pytest.fixture
def table() -> InMemoryTable:
    """Create an in-memory table with small pages to force pagination."""
    return InMemoryTable("accounts", page_size=2)


@pytest.fixture
def store(table: InMemoryTable, codec: EventCodec) -> DynamoDBEventStore:
    """Create an event store keyed by string aggregate ids."""
    return DynamoDBEventStore(table, codec, key_type=str)


@pytest.fixture
def counter_store() -> DynamoDBEventStore:
    """Create an event store keyed by integer aggregate ids."""
    return DynamoDBEventStore(
        InMemoryTable("counters", page_size=3),
        EventCodec([CounterIncremented]),
        key_type=int,
    )


@pytest.fixture
def mock_dynamodb_table() -> MagicMock:
    """Create a mock boto3 DynamoDB Table resource."""
    mock = MagicMock()
    mock.put_item.return_value = {}
    mock.query.return_value = {"Items": []}
    mock.scan.return_value = {"Items": []}
    return mock


@pytest.fixture
def mock_dynamodb_resource(mock_dynamodb_table: MagicMock) -> MagicMock:
    """Create a mock boto3 DynamoDB service resource."""
    mock = MagicMock()
    mock.Table.return_value = mock_dynamodb_table
    return mock
