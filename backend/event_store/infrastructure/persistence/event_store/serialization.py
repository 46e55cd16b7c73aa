"""Event serialization codec.

Events are written as flat-ish documents: lower camelCase attribute names,
``None`` fields left out entirely, enum members stored by name, and the
concrete event class recorded under ``$type`` so mixed event shapes can
share one table.
"""

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from ....domain.shared import (
    AggregateEvent,
    DeserializationError,
    EventTypeNotRegisteredError,
)
from .keys import to_attribute_value

logger = structlog.get_logger()

TYPE_ATTRIBUTE = "$type"


def _to_document(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            str(to_attribute_value(key)): _to_document(item)
            for key, item in value.items()
            if item is not None
        }
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_document(item) for item in value]
    return to_attribute_value(value)


class EventCodec:
    """Bidirectional mapping between events and stored documents.

    The set of event classes is closed: it is fixed when the codec is
    built, and decoding a document whose discriminator is not in it fails
    rather than falling back to some default type.
    """

    def __init__(self, event_types: Iterable[type[AggregateEvent]]):
        self._event_types: dict[str, type[AggregateEvent]] = {}
        for event_type in event_types:
            name = event_type.type_name()
            registered = self._event_types.get(name)
            if registered is not None and registered is not event_type:
                raise ValueError(
                    f"Event type name '{name}' is used by both "
                    f"{registered.__qualname__} and {event_type.__qualname__}"
                )
            self._event_types[name] = event_type

        logger.debug("event_codec_created", event_types=sorted(self._event_types))

    @property
    def type_names(self) -> list[str]:
        """Discriminator values this codec can decode."""
        return sorted(self._event_types)

    def encode(self, event: AggregateEvent) -> dict[str, Any]:
        """Convert an event to a document tagged with its concrete type."""
        name = type(event).type_name()
        if self._event_types.get(name) is not type(event):
            raise EventTypeNotRegisteredError(
                f"{type(event).__qualname__} is not registered with this codec"
            )

        document: dict[str, Any] = {TYPE_ATTRIBUTE: name}
        document.update(_to_document(event.model_dump(by_alias=True, exclude_none=True)))
        return document

    def decode(self, document: Mapping[str, Any]) -> AggregateEvent:
        """Rebuild the concrete event a document was encoded from."""
        name = document.get(TYPE_ATTRIBUTE)
        if not isinstance(name, str) or not name:
            raise DeserializationError(f"Document has no '{TYPE_ATTRIBUTE}' discriminator")

        event_type = self._event_types.get(name)
        if event_type is None:
            raise DeserializationError(f"Unknown event type '{name}'")

        fields = {key: value for key, value in document.items() if key != TYPE_ATTRIBUTE}
        try:
            return event_type.model_validate(fields)
        except ValidationError as e:
            raise DeserializationError(
                f"Document cannot be decoded as {name}: {e}"
            ) from e
