"""Exceptions raised by the configuration store and its helpers."""

from __future__ import annotations


class ConfigError(Exception):
    """Generic configuration error."""


class EntryTooLongError(ConfigError):
    """Raised when a list value does not fit the per-entry size bound."""


class ListFullError(ConfigError):
    """Raised when a list already holds its maximum number of entries."""


class InvalidValueError(ConfigError):
    """Raised when a raw config value cannot be converted or stored."""


class ConfigDestroyedError(ConfigError):
    """Raised when a destroyed config store is used."""


__all__ = [
    "ConfigError",
    "EntryTooLongError",
    "ListFullError",
    "InvalidValueError",
    "ConfigDestroyedError",
]
