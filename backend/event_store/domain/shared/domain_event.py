"""Base class for all persisted aggregate events."""

from abc import ABC
from datetime import datetime, timezone
from typing import ClassVar, Generic, TypeVar
from uuid import uuid4

from pydantic import Field

from .value_object import DocumentModel

KeyT = TypeVar("KeyT")


class AggregateEvent(DocumentModel, ABC, Generic[KeyT]):
    """An immutable fact that happened to one aggregate.

    Events are partitioned by ``aggregate_id`` and ordered by
    ``aggregate_version``. The version is assigned by the caller before the
    event is appended; the store never assigns or checks it.

    Concrete events subclass a parametrized base, e.g.
    ``class AccountOpened(AggregateEvent[str])``.
    """

    # Name written to the discriminator attribute; defaults to the class name.
    event_type_name: ClassVar[str | None] = None

    aggregate_id: KeyT
    aggregate_version: int
    event_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def type_name(cls) -> str:
        """Return the discriminator value for this event class."""
        return cls.event_type_name or cls.__name__
