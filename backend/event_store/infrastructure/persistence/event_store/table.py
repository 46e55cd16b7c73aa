"""Table abstraction the event store is built on."""

from collections.abc import Mapping
from typing import Any, Protocol


class PageCursor(Protocol):
    """Cursor over a paginated query or scan.

    Callers keep fetching pages until ``is_done`` becomes true. Pages may
    be empty without the cursor being exhausted.
    """

    @property
    def is_done(self) -> bool:
        """Whether every page has been fetched."""
        ...

    async def next_page(self) -> list[dict[str, Any]]:
        """Fetch the next page of documents."""
        ...


class EventTable(Protocol):
    """Key-value table partitioned by ``aggregateId`` and sorted by ``aggregateVersion``.

    Neither ``query`` nor ``scan`` guarantees any ordering of the returned
    documents.
    """

    @property
    def name(self) -> str:
        """Physical table name."""
        ...

    async def put_item(self, document: Mapping[str, Any]) -> None:
        """Write a document, replacing any item with the same key."""
        ...

    def query(self, partition_key_value: Any) -> PageCursor:
        """Start a query over all items of one partition."""
        ...

    def scan(self) -> PageCursor:
        """Start a scan over the whole table."""
        ...
