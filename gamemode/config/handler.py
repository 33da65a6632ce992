"""
Routing of parsed ``(section, key, value)`` triples into config state.

Dispatch table:

    [filter]  whitelist=    -> whitelist list
    [filter]  blacklist=    -> blacklist list
    [general] reaper_freq=  -> reaper frequency (positive integer)
    [custom]  start=        -> start scripts list
    [custom]  end=          -> end scripts list

Anything else, and any value the target refuses, is logged as ignored.
The handler always tells the line parser to keep going.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from .errors import ConfigError
from .lists import BoundedList
from .metrics import ConfigMetrics
from .values import parse_positive_int

logger = logging.getLogger("gamemode.config.handler")

DEFAULT_REAPER_FREQ = 5


@dataclass
class ConfigState:
    """Mutable config fields; only ever touched under the store's write lock."""

    whitelist: BoundedList = field(default_factory=lambda: BoundedList("whitelist"))
    blacklist: BoundedList = field(default_factory=lambda: BoundedList("blacklist"))
    startscripts: BoundedList = field(default_factory=lambda: BoundedList("start"))
    endscripts: BoundedList = field(default_factory=lambda: BoundedList("end"))
    reaper_frequency: int = DEFAULT_REAPER_FREQ

    def reset(self) -> None:
        self.whitelist.clear()
        self.blacklist.clear()
        self.startscripts.clear()
        self.endscripts.clear()
        self.reaper_frequency = DEFAULT_REAPER_FREQ


class IniHandler:
    """Callable handed to the INI reader for one load."""

    def __init__(self, state: ConfigState, metrics: Optional[ConfigMetrics] = None) -> None:
        self._state = state
        self._metrics = metrics
        self._routes: Dict[Tuple[str, str], Callable[[str, str], None]] = {
            ("filter", "whitelist"): self._append_to(state.whitelist),
            ("filter", "blacklist"): self._append_to(state.blacklist),
            ("general", "reaper_freq"): self._set_reaper_frequency,
            ("custom", "start"): self._append_to(state.startscripts),
            ("custom", "end"): self._append_to(state.endscripts),
        }

    @staticmethod
    def _append_to(target: BoundedList) -> Callable[[str, str], None]:
        def _append(_name: str, value: str) -> None:
            target.append(value)

        return _append

    def _set_reaper_frequency(self, name: str, value: str) -> None:
        self._state.reaper_frequency = parse_positive_int(name, value)

    def __call__(self, section: str, name: str, value: str) -> bool:
        action = self._routes.get((section, name))
        valid = False
        if action is not None:
            try:
                action(name, value)
                valid = True
            except ConfigError:
                # already logged on the error channel by the target
                valid = False

        if not valid:
            logger.info("Config: Value ignored [%s] %s=%s", section, name, value)
            if self._metrics is not None:
                self._metrics.inc_ignored(section, name)

        return True


__all__ = ["ConfigState", "IniHandler", "DEFAULT_REAPER_FREQ"]
