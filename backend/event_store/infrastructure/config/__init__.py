"""Infrastructure configuration module.

Contains event store settings, logging setup and the DI container.
"""

from event_store.infrastructure.config.settings import Settings
from event_store.infrastructure.config.log_config import configure_logging
from event_store.infrastructure.config.di_container import (
    EventStoreContainer,
    get_container,
    reset_container,
)

__all__ = [
    "Settings",
    "configure_logging",
    "EventStoreContainer",
    "get_container",
    "reset_container",
]
