"""Dependency Injection Container.

Provides centralized construction of event stores and their collaborators.
Implements a simple service locator pattern with lazy initialization.
"""

from functools import cached_property
from typing import Any

import boto3
import structlog

from event_store.infrastructure.config.log_config import configure_logging
from event_store.infrastructure.config.settings import Settings
from event_store.infrastructure.observability import MetricsService, TracingService
from event_store.infrastructure.persistence.event_store import (
    DynamoDBEventStore,
    DynamoDBTable,
    EventCodec,
    KeyKind,
)

logger = structlog.get_logger()


class EventStoreContainer:
    """Dependency Injection Container.
    
    Provides lazy-loaded access to event stores and their dependencies.
    One store is created per aggregate type and reused afterwards.
    
    Example usage:
        ```python
        container = EventStoreContainer()
        codec = EventCodec([AccountOpened, MoneyDeposited])
        store = container.event_store("Account", codec, key_type=str)
        ```
    """

    def __init__(self, settings: Settings | None = None):
        """Initialize the container.
        
        Args:
            settings: Event store settings (loads from env if not provided)
        """
        self._settings = settings or Settings()
        self._instances: dict[str, Any] = {}
        configure_logging(self._settings.log_level, self._settings.log_json)

    @property
    def settings(self) -> Settings:
        """Get event store settings."""
        return self._settings

    @cached_property
    def dynamodb_resource(self) -> Any:
        """Get the shared boto3 DynamoDB resource."""
        logger.info(
            "initializing_dynamodb_resource",
            region=self._settings.aws_region,
            endpoint_url=self._settings.endpoint_url,
        )
        return boto3.resource(
            "dynamodb",
            region_name=self._settings.aws_region,
            endpoint_url=self._settings.endpoint_url,
        )

    @cached_property
    def tracing_service(self) -> TracingService | None:
        """Get the tracing service, or None when tracing is disabled."""
        if not self._settings.tracing_enabled:
            return None
        return TracingService(service=self._settings.service_name)

    @cached_property
    def metrics_service(self) -> MetricsService | None:
        """Get the metrics service, or None when metrics are disabled."""
        if not self._settings.metrics_enabled:
            return None
        return MetricsService(
            namespace=self._settings.metrics_namespace,
            service=self._settings.service_name,
        )

    def event_store(
        self,
        aggregate_type: str,
        codec: EventCodec,
        key_type: type | KeyKind = str,
    ) -> DynamoDBEventStore:
        """Get the event store for an aggregate type.
        
        Args:
            aggregate_type: Aggregate type name used to resolve the table
            codec: Codec covering the aggregate's event types
            key_type: Python type (or KeyKind) of the aggregate id
        
        Returns:
            The store for that aggregate type, created on first use
        """
        if aggregate_type in self._instances:
            return self._instances[aggregate_type]

        table_name = self._settings.table_name_for(aggregate_type)
        table = DynamoDBTable(
            table_name,
            self._settings.aws_region,
            page_size=self._settings.page_size,
            resource=self.dynamodb_resource,
        )
        store = DynamoDBEventStore(
            table,
            codec,
            key_type,
            tracing=self.tracing_service,
            metrics=self.metrics_service,
        )
        logger.info(
            "event_store_created",
            aggregate_type=aggregate_type,
            table=table_name,
            key_kind=store.key_kind.value,
        )
        self._instances[aggregate_type] = store
        return store

    def reset(self) -> None:
        """Reset all cached instances.
        
        Useful for testing or when configuration changes.
        """
        for attr in ["dynamodb_resource", "tracing_service", "metrics_service"]:
            if attr in self.__dict__:
                del self.__dict__[attr]
        
        self._instances.clear()
        logger.info("di_container_reset")


# Global container instance
_container: EventStoreContainer | None = None


def get_container() -> EventStoreContainer:
    """Get the global DI container instance.
    
    Creates the container on first call (singleton pattern).
    
    Returns:
        The global EventStoreContainer instance
    """
    global _container
    if _container is None:
        _container = EventStoreContainer()
    return _container


def reset_container() -> None:
    """Reset the global container.
    
    Useful for testing or reconfiguration.
    """
    global _container
    if _container is not None:
        _container.reset()
    _container = None
