"""
Stream registry.

Process-wide table of named streams plus one default stream. Unqualified
``publish``/``subscribe`` calls go to the default stream.
"""

import logging
import threading
from typing import Any, Dict, Hashable, List, Mapping, Optional

from .event import Event
from .exceptions import StreamRegistrationError, UnknownStreamError
from .filters import FilterSpec
from .stream import Handler, Stream, Subscriber, Subscription

logger = logging.getLogger(__name__)

DEFAULT_STREAM_NAME = "default"


class StreamRegistry:
    """
    Maps names to streams and owns the default stream.

    Registering a name that is already bound replaces the binding. The
    replaced stream is not cleared; anything still holding it can keep
    publishing and subscribing on it.
    """

    def __init__(self) -> None:
        self._default = Stream(name=DEFAULT_STREAM_NAME)
        self._streams: Dict[Hashable, Stream] = {}
        self._lock = threading.Lock()

    def default_stream(self) -> Stream:
        """The always-present default stream."""
        return self._default

    def register_stream(self, name: Hashable, stream: Optional[Stream] = None) -> Stream:
        """
        Bind a name to a stream, replacing any previous binding.

        Args:
            name: Stream name
            stream: Stream to register; a new one is created when omitted

        Returns:
            The registered stream
        """
        if name == DEFAULT_STREAM_NAME:
            raise StreamRegistrationError(
                f"'{DEFAULT_STREAM_NAME}' is reserved for the default stream"
            )
        if stream is None:
            stream = Stream(name=str(name))

        with self._lock:
            previous = self._streams.get(name)
            self._streams[name] = stream

        if previous is not None and previous is not stream:
            logger.info(f"Replaced stream {name!r}; the previous stream is left running")
        else:
            logger.debug(f"Registered stream {name!r}")
        return stream

    def unregister_stream(self, name: Hashable) -> Stream:
        """Remove a binding and return the stream that was bound."""
        if name == DEFAULT_STREAM_NAME:
            raise StreamRegistrationError("The default stream cannot be removed")
        with self._lock:
            try:
                stream = self._streams.pop(name)
            except KeyError:
                raise UnknownStreamError(name) from None
        logger.debug(f"Unregistered stream {name!r}")
        return stream

    def lookup(self, name: Hashable) -> Stream:
        """Get a stream by name, raising UnknownStreamError when absent."""
        stream = self.get(name)
        if stream is None:
            raise UnknownStreamError(name)
        return stream

    def get(self, name: Hashable, default: Optional[Stream] = None) -> Optional[Stream]:
        if name == DEFAULT_STREAM_NAME:
            return self._default
        with self._lock:
            return self._streams.get(name, default)

    def names(self) -> List[Hashable]:
        """Names of registered streams, excluding the default stream."""
        with self._lock:
            return list(self._streams)

    def __getitem__(self, name: Hashable) -> Stream:
        return self.lookup(name)

    def __contains__(self, name: object) -> bool:
        if name == DEFAULT_STREAM_NAME:
            return True
        with self._lock:
            return name in self._streams

    def __len__(self) -> int:
        with self._lock:
            return len(self._streams)

    # Shorthands for the default stream

    def publish(
        self,
        name_or_event: Any,
        attributes: Optional[Mapping[str, Any]] = None,
        /,
        **extra: Any,
    ) -> Event:
        return self._default.publish(name_or_event, attributes, **extra)

    def subscribe(self, filter: FilterSpec = None, handler: Optional[Handler] = None):
        return self._default.subscribe(filter, handler)

    def add_subscriber(self, subscriber: Subscriber) -> Subscription:
        return self._default.add_subscriber(subscriber)

    def unsubscribe(self, subscription: Subscription) -> bool:
        return self._default.unsubscribe(subscription)

    def clear_subscribers(self) -> None:
        self._default.clear_subscribers()


# Global registry instance
registry = StreamRegistry()


def default_stream() -> Stream:
    return registry.default_stream()


def register_stream(name: Hashable, stream: Optional[Stream] = None) -> Stream:
    return registry.register_stream(name, stream)


def unregister_stream(name: Hashable) -> Stream:
    return registry.unregister_stream(name)


def get_stream(name: Hashable) -> Stream:
    """Look up a registered stream in the global registry."""
    return registry.lookup(name)


def publish(
    name_or_event: Any,
    attributes: Optional[Mapping[str, Any]] = None,
    /,
    **extra: Any,
) -> Event:
    """Publish on the default stream of the global registry."""
    return registry.publish(name_or_event, attributes, **extra)


def subscribe(filter: FilterSpec = None, handler: Optional[Handler] = None):
    """Subscribe on the default stream of the global registry."""
    return registry.subscribe(filter, handler)


def add_subscriber(subscriber: Subscriber) -> Subscription:
    return registry.add_subscriber(subscriber)


def unsubscribe(subscription: Subscription) -> bool:
    return registry.unsubscribe(subscription)


def clear_subscribers() -> None:
    registry.clear_subscribers()
