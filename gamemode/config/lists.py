"""
Bounded string lists used for the whitelist, blacklist and custom scripts.

A list holds at most ``capacity`` entries and each entry must encode to
fewer than ``value_max`` UTF-8 bytes (one byte is kept for the terminator
of the daemon's fixed-width representation). A value that breaks either
bound is rejected on its own; the entries already stored are untouched.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

from .errors import EntryTooLongError, InvalidValueError, ListFullError

logger = logging.getLogger("gamemode.config.lists")

CONFIG_LIST_MAX = 32
CONFIG_VALUE_MAX = 256


class BoundedList:
    """Append-only (per load) ordered collection of bounded strings."""

    def __init__(self, name: str, capacity: int = CONFIG_LIST_MAX, value_max: int = CONFIG_VALUE_MAX) -> None:
        if capacity <= 0 or value_max <= 1:
            raise ValueError("capacity must be > 0 and value_max > 1")
        self.name = name
        self.capacity = int(capacity)
        self.value_max = int(value_max)
        self._items: List[str] = []

    def append(self, value: str) -> None:
        """
        Store ``value`` in the first free slot.

        Raises ListFullError, EntryTooLongError or InvalidValueError; the
        list is unchanged on failure. Empty values take no slot.
        """
        if "\0" in value:
            logger.error("Config: Could not add [%r] to [%s], contains a NUL character", value, self.name)
            raise InvalidValueError(f"value for {self.name} contains a NUL character")

        if len(self._items) >= self.capacity:
            logger.error(
                "Config: Could not add [%s] to [%s], exceeds number of %d", value, self.name, self.capacity
            )
            raise ListFullError(f"{self.name} already holds {self.capacity} entries")

        if len(value.encode("utf-8")) >= self.value_max:
            logger.error(
                "Config: Could not add [%s] to [%s], exceeds length limit of %d", value, self.name, self.value_max
            )
            raise EntryTooLongError(f"value for {self.name} exceeds length limit of {self.value_max}")

        if not value:
            return
        self._items.append(value)

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> List[str]:
        """Return an independent copy of the entries, in insertion order."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __repr__(self) -> str:
        return f"BoundedList(name={self.name!r}, entries={len(self._items)}/{self.capacity})"


__all__ = ["BoundedList", "CONFIG_LIST_MAX", "CONFIG_VALUE_MAX"]
