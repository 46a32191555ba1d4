"""
Subscription filters.

A filter decides whether a subscription receives an event. Each filter shape
is its own small immutable class with a pure ``matches(event)`` method, and
``to_filter`` turns the loosely typed filter argument accepted by
``Stream.subscribe`` into one of them.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Tuple, Union

from .event import Event, Tag, freeze, tag_string

Predicate = Callable[[Event], Any]
FilterSpec = Any


class Filter(ABC):
    """Base class for all subscription filters."""

    @abstractmethod
    def matches(self, event: Event) -> bool:
        """Return True if the event satisfies this filter."""
        pass


@dataclass(frozen=True)
class AnyFilter(Filter):
    """Matches every event."""

    def matches(self, event: Event) -> bool:
        return True


@dataclass(frozen=True)
class TagFilter(Filter):
    """Matches events carrying the given tag."""
    tag: Any

    def matches(self, event: Event) -> bool:
        return self.tag in event.tags


@dataclass(frozen=True)
class TagListFilter(Filter):
    """Matches events carrying at least one of the given tags."""
    tags: Tuple[Tag, ...] = ()

    def __post_init__(self) -> None:
        # Kept as a tuple so unhashable entries are accepted; they never match
        object.__setattr__(self, 'tags', tuple(self.tags))

    def matches(self, event: Event) -> bool:
        return any(tag in event.tags for tag in self.tags)


@dataclass(frozen=True)
class PatternFilter(Filter):
    """Matches events where the pattern is found in the string form of any tag."""
    pattern: Union[re.Pattern, Any]

    def __post_init__(self) -> None:
        if isinstance(self.pattern, str):
            object.__setattr__(self, 'pattern', re.compile(self.pattern))

    def matches(self, event: Event) -> bool:
        return any(self.pattern.search(tag_string(tag)) for tag in event.tags)


@dataclass(frozen=True, eq=False)
class AttributeMapFilter(Filter):
    """
    Matches events whose attributes include every expected key with an equal value.

    Events may carry attributes the filter does not mention.
    """
    expected: Mapping = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'expected', freeze(dict(self.expected)))

    def matches(self, event: Event) -> bool:
        attributes = event.attributes
        for key, value in self.expected.items():
            if key not in attributes or attributes[key] != value:
                return False
        return True


@dataclass(frozen=True)
class PredicateFilter(Filter):
    """Matches events for which the predicate returns a truthy value."""
    predicate: Predicate

    def matches(self, event: Event) -> bool:
        # Exceptions from the predicate reach the publisher untouched
        return bool(self.predicate(event))


def _is_pattern_like(value: Any) -> bool:
    return isinstance(value, re.Pattern) or callable(getattr(value, 'search', None))


def to_filter(spec: FilterSpec) -> Filter:
    """
    Resolve a filter argument into a Filter.

    Shapes are checked in a fixed order so ambiguous values resolve
    predictably: None, Filter instance, callable, pattern, mapping,
    tag collection, and finally a single tag compared by equality.
    """
    if spec is None:
        return AnyFilter()
    if isinstance(spec, Filter):
        return spec
    if callable(spec):
        return PredicateFilter(spec)
    if _is_pattern_like(spec):
        return PatternFilter(spec)
    if isinstance(spec, Mapping):
        return AttributeMapFilter(spec)
    if isinstance(spec, (list, tuple, set, frozenset)):
        return TagListFilter(tuple(spec))
    return TagFilter(spec)


def matches(spec: FilterSpec, event: Event) -> bool:
    """Check whether an event satisfies a filter given in any accepted shape."""
    return to_filter(spec).matches(event)
