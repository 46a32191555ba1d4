"""Custom exceptions for eventstream."""


class EventStreamError(Exception):
    """Base exception for eventstream errors."""
    pass


class InvalidTagError(EventStreamError):
    """Raised when an event is built without tags or with a non-symbolic tag."""

    def __init__(self, message: str, tag: object = None) -> None:
        super().__init__(message)
        self.tag = tag


class AttributeNotFoundError(EventStreamError):
    """Raised when an event does not carry the requested attribute."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Event has no attribute '{name}'")
        self.name = name


class UnknownStreamError(EventStreamError):
    """Raised when a stream name is not registered."""

    def __init__(self, name: object) -> None:
        super().__init__(f"No stream registered under {name!r}")
        self.name = name


class StreamRegistrationError(EventStreamError):
    """Raised when registering or removing the reserved default stream name."""
    pass


class ConfigurationError(EventStreamError):
    """Raised when there's an error in configuration."""
    pass
