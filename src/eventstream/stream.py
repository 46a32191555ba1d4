"""
Stream - synchronous publish/subscribe channel.

A Stream owns an ordered list of subscriptions. Publishing an event runs
every matching handler synchronously, in subscription order, before
``publish`` returns.
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union
from uuid import uuid4

from .event import Event, TagSpec
from .filters import Filter, FilterSpec, to_filter

logger = logging.getLogger(__name__)

Handler = Callable[[Event], Any]


@dataclass(frozen=True, eq=False)
class Subscription:
    """Binding of a filter to a handler; also the handle used to unsubscribe."""
    filter: Filter
    handler: Handler
    subscription_id: str = field(default_factory=lambda: f"sub_{uuid4().hex[:12]}")

    def matches(self, event: Event) -> bool:
        return self.filter.matches(event)


class Subscriber(ABC):
    """
    Base class for object-style event consumers.

    Subclasses implement ``handle`` and may narrow ``event_filter``; the
    filter accepts every shape ``Stream.subscribe`` does.
    """

    event_filter: FilterSpec = None

    @abstractmethod
    def handle(self, event: Event) -> None:
        """Handle the event."""
        pass

    def __call__(self, event: Event) -> None:
        self.handle(event)


class Stream:
    """
    Independent pub/sub channel with its own subscriber list.

    The subscription list is guarded by a lock, but handlers always run
    outside of it, so they may subscribe, unsubscribe or publish themselves.
    """

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name
        self._subscriptions: List[Subscription] = []
        self._lock = threading.Lock()

    def subscribe(
        self,
        filter: FilterSpec = None,
        handler: Optional[Handler] = None,
    ) -> Union[Subscription, Callable[[Handler], Handler]]:
        """
        Subscribe a handler to events matching a filter.

        Args:
            filter: None, a tag, a list of tags, a regex, an attribute
                mapping, a predicate or a Filter instance
            handler: Callable invoked with each matching event. When omitted,
                a decorator is returned that subscribes the decorated function.

        Returns:
            The Subscription handle, or a decorator when no handler is given
        """
        if handler is None:
            def decorator(func: Handler) -> Handler:
                self.subscribe(filter, func)
                return func
            return decorator

        subscription = Subscription(filter=to_filter(filter), handler=handler)
        with self._lock:
            self._subscriptions.append(subscription)
        logger.debug(
            f"Stream {self.name!r}: added {subscription.subscription_id} "
            f"with {subscription.filter!r}"
        )
        return subscription

    def add_subscriber(self, subscriber: Subscriber) -> Subscription:
        """Subscribe a Subscriber instance using its own event_filter."""
        return self.subscribe(subscriber.event_filter, subscriber)

    def unsubscribe(self, subscription: Subscription) -> bool:
        """
        Remove a subscription.

        Returns False, without raising, when it was already removed.
        """
        with self._lock:
            for index, existing in enumerate(self._subscriptions):
                if existing is subscription:
                    del self._subscriptions[index]
                    break
            else:
                return False
        logger.debug(f"Stream {self.name!r}: removed {subscription.subscription_id}")
        return True

    def clear_subscribers(self) -> None:
        """Remove all subscriptions."""
        with self._lock:
            removed = len(self._subscriptions)
            self._subscriptions.clear()
        logger.debug(f"Stream {self.name!r}: cleared {removed} subscriptions")

    @property
    def subscriptions(self) -> Tuple[Subscription, ...]:
        """Snapshot of current subscriptions in dispatch order."""
        with self._lock:
            return tuple(self._subscriptions)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def publish(
        self,
        name_or_event: Union[Event, TagSpec],
        attributes: Optional[Mapping[str, Any]] = None,
        /,
        **extra: Any,
    ) -> Event:
        """
        Publish an event to all matching subscribers.

        Args:
            name_or_event: A pre-built Event, published as-is, or a tag or
                list of tags to build one from
            attributes: Attributes for the new event; ignored for an Event
            **extra: Additional attributes for the new event

        The first two parameters are positional-only, so any attribute name,
        including ``tags`` or ``attributes``, can be passed as a keyword.

        Returns:
            The published Event

        Handlers run in subscription order. An exception raised by a handler
        or a filter predicate propagates immediately; handlers that already
        ran are not undone and the remaining ones are skipped.
        """
        if isinstance(name_or_event, Event):
            event = name_or_event
        else:
            event = Event(name_or_event, attributes, **extra)

        # Changes made by handlers apply from the next publish on
        snapshot = self.subscriptions

        delivered = 0
        for subscription in snapshot:
            if subscription.matches(event):
                subscription.handler(event)
                delivered += 1

        logger.debug(
            "Stream %r: published %r to %d/%d subscriptions",
            self.name, event, delivered, len(snapshot),
        )
        return event

    def __repr__(self) -> str:
        return f"Stream(name={self.name!r}, subscriptions={self.subscriber_count})"
