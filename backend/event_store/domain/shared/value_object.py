"""Base models for everything that is persisted as a document."""

import types
from collections.abc import Mapping
from collections.abc import Set as AbstractSet
from collections.abc import Sequence
from enum import Enum
from io import BytesIO
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


def _from_stored(annotation: Any, value: Any) -> Any:
    """Undo the storage-only encodings pydantic cannot reverse on its own.

    Enum members are stored by name and binary streams as raw bytes; both
    may sit at any depth inside lists, tuples, sets and mappings.
    """
    if annotation is BytesIO:
        if isinstance(value, (bytes, bytearray, memoryview)):
            return BytesIO(bytes(value))
        return value
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        if isinstance(value, str) and value in annotation.__members__:
            return annotation[value]
        return value

    origin = get_origin(annotation)
    args = get_args(annotation)
    if origin is Annotated:
        return _from_stored(args[0], value)
    if origin is Union or origin is types.UnionType:
        for arg in args:
            converted = _from_stored(arg, value)
            if converted is not value:
                return converted
        return value
    if not isinstance(origin, type) or not args:
        return value

    if issubclass(origin, tuple) and isinstance(value, (list, tuple)):
        if len(args) == 2 and args[1] is Ellipsis:
            return [_from_stored(args[0], item) for item in value]
        return [_from_stored(arg, item) for arg, item in zip(args, value)]
    if issubclass(origin, Mapping) and isinstance(value, Mapping) and len(args) == 2:
        return {
            _from_stored(args[0], key): _from_stored(args[1], item)
            for key, item in value.items()
        }
    if issubclass(origin, (Sequence, AbstractSet)) and isinstance(
        value, (list, tuple, set, frozenset)
    ):
        return [_from_stored(args[0], item) for item in value]
    return value


class DocumentModel(BaseModel):
    """Immutable model with the stored-document conventions.

    Fields are exposed as lower camelCase aliases. Enum members are
    accepted by name, and ``BytesIO`` fields from raw bytes, which is how
    they are written to the table.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def coerce_stored_values(cls, value: Any, info: ValidationInfo) -> Any:
        if info.field_name is None:
            return value
        field = cls.model_fields.get(info.field_name)
        if field is None:
            return value
        return _from_stored(field.annotation, value)


class ValueObject(DocumentModel):
    """Base class for nested event payload parts.

    Value objects are immutable and are distinguished by their attributes
    rather than identity.
    """

    pass
