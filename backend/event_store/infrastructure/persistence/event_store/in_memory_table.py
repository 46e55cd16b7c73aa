"""In-memory table adapter.

Mirrors the DynamoDB semantics the event store relies on: one item per
(``aggregateId``, ``aggregateVersion``) with last-writer-wins puts, and
paginated query/scan cursors that make no ordering promise. Useful for
tests and local development; nothing is persisted.
"""

import asyncio
import copy
from collections.abc import Mapping
from typing import Any

from .keys import AGGREGATE_ID, AGGREGATE_VERSION


class InMemoryCursor:
    """Cursor over a snapshot of documents, handed out a page at a time."""

    def __init__(self, documents: list[dict[str, Any]], page_size: int):
        self._documents = documents
        self._page_size = page_size
        self._position = 0

    @property
    def is_done(self) -> bool:
        return self._position >= len(self._documents)

    async def next_page(self) -> list[dict[str, Any]]:
        await asyncio.sleep(0)
        page = self._documents[self._position : self._position + self._page_size]
        self._position += len(page)
        return copy.deepcopy(page)


class InMemoryTable:
    """Process-local event table."""

    def __init__(self, name: str = "events", *, page_size: int = 100):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self._name = name
        self._page_size = page_size
        self._items: dict[tuple[Any, Any], dict[str, Any]] = {}

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._items)

    async def put_item(self, document: Mapping[str, Any]) -> None:
        if AGGREGATE_ID not in document or AGGREGATE_VERSION not in document:
            raise ValueError(
                f"Item must contain '{AGGREGATE_ID}' and '{AGGREGATE_VERSION}'"
            )
        await asyncio.sleep(0)
        key = (document[AGGREGATE_ID], document[AGGREGATE_VERSION])
        self._items[key] = copy.deepcopy(dict(document))

    def query(self, partition_key_value: Any) -> InMemoryCursor:
        # Newest writes first, so callers cannot rely on insertion order.
        documents = [
            item
            for (aggregate_id, _), item in reversed(self._items.items())
            if aggregate_id == partition_key_value
        ]
        return InMemoryCursor(documents, self._page_size)

    def scan(self) -> InMemoryCursor:
        return InMemoryCursor(list(reversed(self._items.values())), self._page_size)
