"""Configuration models."""

from .config import (
    Config,
    ConsoleConfig,
    LoggingConfig,
    apply_config,
    load_config,
    save_config,
)

__all__ = [
    "Config",
    "ConsoleConfig",
    "LoggingConfig",
    "apply_config",
    "load_config",
    "save_config",
]
