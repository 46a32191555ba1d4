"""Event Stream

In-process, synchronous event streams. Producers publish tagged events with
attributes; subscribers receive the events their filter matches.
"""

__version__ = "0.1.0"

from .event import Event, tag_string, validate_tag
from .exceptions import (
    AttributeNotFoundError,
    ConfigurationError,
    EventStreamError,
    InvalidTagError,
    StreamRegistrationError,
    UnknownStreamError,
)
from .filters import (
    AnyFilter,
    AttributeMapFilter,
    Filter,
    PatternFilter,
    PredicateFilter,
    TagFilter,
    TagListFilter,
    matches,
    to_filter,
)
from .stream import Stream, Subscriber, Subscription
from .registry import (
    DEFAULT_STREAM_NAME,
    StreamRegistry,
    add_subscriber,
    clear_subscribers,
    default_stream,
    get_stream,
    publish,
    register_stream,
    registry,
    subscribe,
    unregister_stream,
    unsubscribe,
)

__all__ = [
    # Core types
    "Event",
    "Stream",
    "StreamRegistry",
    "Subscriber",
    "Subscription",

    # Filters
    "Filter",
    "AnyFilter",
    "TagFilter",
    "TagListFilter",
    "PatternFilter",
    "AttributeMapFilter",
    "PredicateFilter",
    "matches",
    "to_filter",

    # Errors
    "EventStreamError",
    "InvalidTagError",
    "AttributeNotFoundError",
    "UnknownStreamError",
    "StreamRegistrationError",
    "ConfigurationError",

    # Global registry and shorthands
    "DEFAULT_STREAM_NAME",
    "registry",
    "default_stream",
    "register_stream",
    "unregister_stream",
    "get_stream",
    "publish",
    "subscribe",
    "add_subscriber",
    "unsubscribe",
    "clear_subscribers",

    # Helpers
    "tag_string",
    "validate_tag",
]
