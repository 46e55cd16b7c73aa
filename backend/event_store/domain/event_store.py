"""Event store interface."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .shared import AggregateEvent

KeyT = TypeVar("KeyT")


class EventStore(ABC, Generic[KeyT]):
    """Append-only store of aggregate events.

    This interface defines the contract the aggregate layer relies on.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def append_event(self, event: AggregateEvent[KeyT]) -> None:
        """Append one event; an existing event with the same version is overwritten."""
        pass

    @abstractmethod
    async def get_aggregate_ids(self) -> list[KeyT]:
        """Return every known aggregate id, without duplicates, in no particular order."""
        pass

    @abstractmethod
    async def get_events(self, aggregate_id: KeyT) -> list[AggregateEvent[KeyT]]:
        """Return the full history of one aggregate, ascending by version."""
        pass
