"""DynamoDB Event Store implementation."""

import time
from contextlib import nullcontext
from typing import Any, ContextManager, TypeVar

import structlog

from ....domain.event_store import EventStore
from ....domain.shared import AggregateEvent
from ...observability import MetricsService, StoreOperationMetrics, TracingService
from .dynamodb_table import DynamoDBTable
from .keys import KeyKind, extract_aggregate_id, key_kind_for, to_attribute_value
from .serialization import TYPE_ATTRIBUTE, EventCodec
from .table import EventTable

logger = structlog.get_logger()

KeyT = TypeVar("KeyT")


class DynamoDBEventStore(EventStore[KeyT]):
    """Event Store implementation using DynamoDB.

    Stores aggregate events with the aggregate ID as the partition key and
    the aggregate version as the sort key. Any ``EventTable`` works; the
    DynamoDB-backed one is built by ``for_table``.

    Appends are plain puts: there is no existence or version check, so a
    second event with the same (id, version) replaces the first. Reads
    never trust the table's ordering and sort client-side by version.
    Every failure propagates to the caller unchanged; nothing is retried
    and no partial result is ever returned.
    """

    def __init__(
        self,
        table: EventTable,
        codec: EventCodec,
        key_type: type[KeyT] | KeyKind = str,
        *,
        tracing: TracingService | None = None,
        metrics: MetricsService | None = None,
    ):
        self._table = table
        self._codec = codec
        self._key_kind = key_kind_for(key_type)
        self._tracing = tracing
        self._metrics = metrics

    @classmethod
    def for_table(
        cls,
        table_name: str,
        codec: EventCodec,
        key_type: type[KeyT] | KeyKind = str,
        region_name: str = "ap-northeast-1",
        *,
        endpoint_url: str | None = None,
        page_size: int | None = None,
        tracing: TracingService | None = None,
        metrics: MetricsService | None = None,
    ) -> "DynamoDBEventStore[KeyT]":
        """Create a store over a DynamoDB table."""
        table = DynamoDBTable(
            table_name,
            region_name,
            endpoint_url=endpoint_url,
            page_size=page_size,
        )
        logger.info(
            "event_store_created",
            table=table_name,
            region=region_name,
            key_kind=key_kind_for(key_type).value,
        )
        return cls(table, codec, key_type, tracing=tracing, metrics=metrics)

    @property
    def table_name(self) -> str:
        return self._table.name

    @property
    def key_kind(self) -> KeyKind:
        return self._key_kind

    async def append_event(self, event: AggregateEvent[KeyT]) -> None:
        """Append an event to the store."""
        if not isinstance(event, AggregateEvent):
            raise TypeError(f"Expected an AggregateEvent, got {type(event).__qualname__}")

        document = self._codec.encode(event)
        started = time.perf_counter()

        with self._trace("append_event"):
            await self._table.put_item(document)

        logger.debug(
            "event_appended",
            table=self.table_name,
            event_type=document[TYPE_ATTRIBUTE],
            aggregate_id=str(event.aggregate_id),
            version=event.aggregate_version,
        )
        self._record(
            StoreOperationMetrics(
                operation="append_event",
                table_name=self.table_name,
                events_appended=1,
                latency_ms=(time.perf_counter() - started) * 1000,
            )
        )

    async def get_aggregate_ids(self) -> list[KeyT]:
        """Get the id of every aggregate that has at least one event.

        Scans the whole table, so the cost grows with the total number of
        events rather than the number of aggregates.
        """
        started = time.perf_counter()
        # Keyed by stored form so ids without value equality (streams) still dedupe.
        ids: dict[Any, Any] = {}
        pages = 0
        scanned = 0

        with self._trace("get_aggregate_ids"):
            cursor = self._table.scan()
            while True:
                documents = await cursor.next_page()
                pages += 1
                scanned += len(documents)
                for document in documents:
                    aggregate_id = extract_aggregate_id(document, self._key_kind)
                    ids.setdefault(to_attribute_value(aggregate_id), aggregate_id)
                if cursor.is_done:
                    break

        logger.debug(
            "aggregate_ids_scanned",
            table=self.table_name,
            pages=pages,
            items=scanned,
            aggregate_count=len(ids),
        )
        self._record(
            StoreOperationMetrics(
                operation="get_aggregate_ids",
                table_name=self.table_name,
                events_read=scanned,
                pages_fetched=pages,
                aggregate_ids_scanned=len(ids),
                latency_ms=(time.perf_counter() - started) * 1000,
            )
        )
        return list(ids.values())

    async def get_events(self, aggregate_id: KeyT) -> list[AggregateEvent[KeyT]]:
        """Get all events for an aggregate.

        Returns events in order of version, or an empty list when the
        aggregate has none.
        """
        started = time.perf_counter()
        events: list[AggregateEvent[KeyT]] = []
        pages = 0

        with self._trace("get_events"):
            cursor = self._table.query(to_attribute_value(aggregate_id))
            while True:
                documents = await cursor.next_page()
                pages += 1
                events.extend(self._codec.decode(document) for document in documents)
                if cursor.is_done:
                    break

        events.sort(key=lambda event: event.aggregate_version)

        logger.debug(
            "events_loaded",
            table=self.table_name,
            aggregate_id=str(aggregate_id),
            pages=pages,
            event_count=len(events),
        )
        self._record(
            StoreOperationMetrics(
                operation="get_events",
                table_name=self.table_name,
                events_read=len(events),
                pages_fetched=pages,
                latency_ms=(time.perf_counter() - started) * 1000,
            )
        )
        return events

    def _trace(self, operation: str) -> ContextManager[None]:
        if self._tracing is None:
            return nullcontext()
        return self._tracing.trace_store_operation(operation, self.table_name)

    def _record(self, metrics: StoreOperationMetrics) -> None:
        if self._metrics is not None:
            self._metrics.record_store_operation(metrics)
