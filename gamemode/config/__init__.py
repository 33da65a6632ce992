"""
GameMode Configuration Store
----------------------------

Reloadable configuration for the GameMode daemon:
- inih-compatible ``gamemode.ini`` reading from ./ or /usr/share/gamemode/
- whitelist / blacklist client matching
- start / end custom scripts and the reaper frequency
- reload under a reader/writer lock, atomic from the readers' point of view
- optional stat-based reload trigger and Prometheus metrics
"""

from .errors import ConfigDestroyedError, ConfigError, EntryTooLongError, InvalidValueError, ListFullError
from .handler import DEFAULT_REAPER_FREQ, ConfigState, IniHandler
from .hotreload import ConfigWatcher
from .ini import parse_ini_file, parse_ini_string
from .lists import CONFIG_LIST_MAX, CONFIG_VALUE_MAX, BoundedList
from .metrics import ConfigMetrics
from .store import (
    CONFIG_DIR,
    CONFIG_ENV_VAR,
    CONFIG_NAME,
    DEFAULT_SEARCH_PATHS,
    ConfigSnapshot,
    GameModeConfig,
    create_config,
)
from .values import parse_positive_int

__all__ = [
    "GameModeConfig",
    "ConfigSnapshot",
    "create_config",
    "ConfigWatcher",
    "ConfigMetrics",
    "BoundedList",
    "ConfigState",
    "IniHandler",
    "parse_ini_file",
    "parse_ini_string",
    "parse_positive_int",
    "ConfigError",
    "EntryTooLongError",
    "ListFullError",
    "InvalidValueError",
    "ConfigDestroyedError",
    "CONFIG_LIST_MAX",
    "CONFIG_VALUE_MAX",
    "DEFAULT_REAPER_FREQ",
    "CONFIG_NAME",
    "CONFIG_DIR",
    "CONFIG_ENV_VAR",
    "DEFAULT_SEARCH_PATHS",
]
