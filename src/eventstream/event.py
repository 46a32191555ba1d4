"""
Event value object.

An Event is an immutable value defined by its tags and attributes. Tags
classify the event (an event may carry several), attributes carry its data.
Events are built either explicitly by a producer or implicitly by
``Stream.publish`` from a tag (or list of tags) and an attribute mapping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from .exceptions import AttributeNotFoundError, InvalidTagError

Tag = Union[str, Enum]
TagSpec = Union[Tag, Iterable[Tag]]


def validate_tag(tag: Any) -> Tag:
    """Return the tag unchanged if it is symbolic, raise InvalidTagError otherwise."""
    if isinstance(tag, Enum):
        return tag
    if isinstance(tag, str):
        if not tag:
            raise InvalidTagError("Event tags must not be empty strings", tag)
        return tag
    raise InvalidTagError(
        f"Event tags must be str or Enum members, got {type(tag).__name__}", tag
    )


def tag_string(tag: Tag) -> str:
    """String form of a tag, used for pattern matching."""
    if isinstance(tag, Enum):
        return tag.value if isinstance(tag.value, str) else tag.name
    return str(tag)


def normalize_tags(tags: TagSpec) -> Tuple[Tag, ...]:
    """Turn one tag or a collection of tags into an ordered, de-duplicated tuple."""
    if isinstance(tags, (str, Enum)):
        candidates: Iterable[Any] = (tags,)
    elif isinstance(tags, (list, tuple, set, frozenset)):
        candidates = tags
    else:
        # Fall through to validation so the caller sees which value was rejected
        candidates = (tags,)

    # dict keeps first-seen order while collapsing duplicates
    ordered = dict.fromkeys(validate_tag(tag) for tag in candidates)
    if not ordered:
        raise InvalidTagError("An event needs at least one tag")
    return tuple(ordered)


def freeze(value: Any) -> Any:
    """Recursively convert containers into read-only equivalents."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, list) or type(value) is tuple:
        return tuple(freeze(item) for item in value)
    if isinstance(value, set):
        return frozenset(value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of freeze, producing plain dicts and lists."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if type(value) is tuple:
        return [thaw(item) for item in value]
    if isinstance(value, frozenset):
        return list(value)
    return value


@dataclass(frozen=True, eq=False, repr=False)
class Event:
    """
    Immutable event carrying an ordered set of tags and named attributes.

    Attributes can be read with ``attribute(name)``, ``get(name)`` or plain
    attribute access (``event.x``) when the name does not clash with a
    member of this class.
    """

    _tags: Tuple[Tag, ...] = field(default=())
    _attributes: Mapping[str, Any] = field(default_factory=dict)

    def __init__(
        self,
        tags: TagSpec,
        attributes: Optional[Mapping[str, Any]] = None,
        /,
        **extra: Any,
    ) -> None:
        """Create an Event, validating tags and freezing attribute values."""
        merged: Dict[str, Any] = dict(attributes or {})
        merged.update(extra)

        for name in merged:
            if not isinstance(name, str):
                raise TypeError(f"Attribute names must be str, got {type(name).__name__}")

        object.__setattr__(self, '_tags', normalize_tags(tags))
        object.__setattr__(self, '_attributes', freeze(merged))

    @property
    def tags(self) -> Tuple[Tag, ...]:
        """Tags in construction order."""
        return self._tags

    @property
    def attributes(self) -> Mapping[str, Any]:
        """Read-only view of all attributes."""
        return self._attributes

    def has_tag(self, tag: Tag) -> bool:
        return tag in self._tags

    def attribute(self, name: str) -> Any:
        """Get an attribute value, raising AttributeNotFoundError when absent."""
        try:
            return self._attributes[name]
        except KeyError:
            raise AttributeNotFoundError(name) from None

    def get(self, name: str, default: Any = None) -> Any:
        return self._attributes.get(name, default)

    def with_attributes(self, **changes: Any) -> Event:
        """Return a new Event with the same tags and updated attributes."""
        merged = dict(self._attributes)
        merged.update(changes)
        return Event(self._tags, merged)

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "tags": list(self._tags),
            "attributes": thaw(self._attributes),
        }

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails; private names never map to attributes
        if name.startswith('_'):
            raise AttributeError(name)
        try:
            return self._attributes[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} has no attribute '{name}'"
            ) from None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return (
            set(self._tags) == set(other._tags)
            and dict(self._attributes) == dict(other._attributes)
        )

    def __hash__(self) -> int:
        return hash(frozenset(self._tags))

    def __repr__(self) -> str:
        return f"Event(tags={self._tags!r}, attributes={dict(self._attributes)!r})"
