"""Configuration model for eventstream."""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional

from ..console import EventPrinter
from ..exceptions import ConfigurationError
from ..filters import PatternFilter
from ..registry import StreamRegistry, registry

logger = logging.getLogger(__name__)


@dataclass
class LoggingConfig:
    """Configuration for the eventstream logger."""
    level: str = "WARNING"


@dataclass
class ConsoleConfig:
    """Configuration for printing default-stream events to the console."""
    enabled: bool = False
    pattern: Optional[str] = None  # regex over tags; None prints everything
    show_attributes: bool = True


@dataclass
class Config:
    """Main configuration model."""
    streams: List[str] = field(default_factory=list)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    console: ConsoleConfig = field(default_factory=ConsoleConfig)

    @classmethod
    def default(cls) -> "Config":
        """Create a default configuration."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        try:
            return cls(
                streams=list(data.get("streams", [])),
                logging=LoggingConfig(**data.get("logging", {})),
                console=ConsoleConfig(**data.get("console", {})),
            )
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def to_dict(self) -> dict:
        return asdict(self)


def load_config(config_path: Path) -> Config:
    """Load configuration from JSON file."""
    with open(config_path, 'r') as f:
        config_data = json.load(f)

    return Config.from_dict(config_data)


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to JSON file."""
    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)


def apply_config(config: Config, target: Optional[StreamRegistry] = None) -> StreamRegistry:
    """
    Apply a configuration to a registry.

    Sets the eventstream logger level, registers the listed streams that are
    not registered yet, and attaches a console printer to the default stream
    when enabled. Uses the global registry when no target is given.
    """
    target = target if target is not None else registry

    level = logging.getLevelName(config.logging.level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {config.logging.level}")
    logging.getLogger("eventstream").setLevel(level)

    for name in config.streams:
        if name not in target:
            target.register_stream(name)

    if config.console.enabled:
        event_filter = PatternFilter(config.console.pattern) if config.console.pattern else None
        printer = EventPrinter(
            show_attributes=config.console.show_attributes,
            event_filter=event_filter,
        )
        target.add_subscriber(printer)

    logger.debug(f"Applied configuration with {len(config.streams)} streams")
    return target
