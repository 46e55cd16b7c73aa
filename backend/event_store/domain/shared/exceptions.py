"""Event store errors.

Cancellation is not modelled here: it surfaces as ``asyncio.CancelledError``
at whichever await the calling task was suspended on.
"""


class EventStoreError(Exception):
    """Base class for all event store failures."""

    pass


class StoreUnavailableError(EventStoreError):
    """Raised when the underlying table cannot be reached or rejects a call.

    Covers network failures, throttling and permission errors. The original
    exception is chained as ``__cause__``. Never retried by the store.
    """

    pass


class DeserializationError(EventStoreError):
    """Raised when a stored document cannot be turned back into an event."""

    pass


class UnsupportedKeyTypeError(EventStoreError):
    """Raised when an aggregate key type has no coercion rule.

    This is a configuration error, not a transient condition.
    """

    def __init__(self, message: str, key_type: str):
        super().__init__(message)
        self.key_type = key_type


class EventTypeNotRegisteredError(ValueError):
    """Raised when encoding an event whose class the codec does not know."""

    pass
