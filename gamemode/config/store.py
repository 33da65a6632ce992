# gamemode/config/store.py
from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterator, List, Mapping, Optional, Sequence, TextIO, Tuple, Union

from readerwriterlock import rwlock

from .errors import ConfigDestroyedError
from .handler import ConfigState, IniHandler
from .ini import parse_ini_file
from .metrics import ConfigMetrics

if TYPE_CHECKING:  # pragma: no cover
    from .hotreload import ConfigWatcher

logger = logging.getLogger("gamemode.config")

# Name and possible locations of the config file
CONFIG_NAME = "gamemode.ini"
CONFIG_DIR = Path("/usr/share/gamemode")
DEFAULT_SEARCH_PATHS: Tuple[Path, ...] = (Path(CONFIG_NAME), CONFIG_DIR / CONFIG_NAME)

# Extra candidate searched before the defaults when set
CONFIG_ENV_VAR = "GAMEMODE_CONFIG"

# Load outcomes, also used as metric labels
OUTCOME_LOADED = "loaded"
OUTCOME_DEFAULTS = "defaults"
OUTCOME_SYNTAX_ERROR = "syntax_error"
OUTCOME_READ_ERROR = "read_error"


@dataclass(frozen=True)
class ConfigSnapshot:
    """Consistent, detached view of the whole config at one instant."""

    whitelist: Tuple[str, ...]
    blacklist: Tuple[str, ...]
    start_scripts: Tuple[str, ...]
    end_scripts: Tuple[str, ...]
    reaper_frequency: int
    source_path: Optional[Path]

    def as_dict(self) -> dict:
        return {
            "source_path": str(self.source_path) if self.source_path is not None else None,
            "filter": {"whitelist": list(self.whitelist), "blacklist": list(self.blacklist)},
            "general": {"reaper_freq": self.reaper_frequency},
            "custom": {"start": list(self.start_scripts), "end": list(self.end_scripts)},
        }


class GameModeConfig:
    """
    Reloadable config store shared by the daemon's threads.

      - all fields are guarded as one unit by a reader/writer lock
      - reload resets every field to its default and re-reads the file while
        holding the write lock, so readers see the old or the new config,
        never a mix of both
      - missing files, bad lines and bad values only produce log lines
    """

    def __init__(
        self,
        search_paths: Optional[Sequence[Union[str, Path]]] = None,
        *,
        metrics: Optional[ConfigMetrics] = None,
        environment: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._env = dict(os.environ if environment is None else environment)
        self._search_paths = self._resolve_search_paths(search_paths)
        self._metrics = metrics
        self._lock = rwlock.RWLockWrite()
        self._state = ConfigState()
        self._source_path: Optional[Path] = None
        self._callbacks: List[Callable[[ConfigSnapshot], None]] = []
        self._watcher: Optional["ConfigWatcher"] = None
        self._destroyed = False

    # ---------- lifecycle ----------

    def init(self) -> str:
        """Initial load; the store holds defaults until this is called."""
        return self._load_config_file()

    def reload(self) -> str:
        """Re-read the config file. Safe to call from any thread at any time after init."""
        return self._load_config_file()

    def destroy(self) -> None:
        """
        Stop an attached watcher and invalidate the store.

        Callers must make sure no other thread is still using the store.
        """
        if self._destroyed:
            return
        if self._watcher is not None:
            self._watcher.stop()
            self._watcher = None
        with self._lock.gen_wlock():
            self._destroyed = True
            self._state.reset()
            self._callbacks.clear()
        logger.debug("Config store destroyed")

    def __enter__(self) -> "GameModeConfig":
        return self

    def __exit__(self, *exc_info) -> None:
        self.destroy()

    def attach_watcher(self, watcher: "ConfigWatcher") -> None:
        """Hand ownership of a reload trigger to the store so destroy() stops it."""
        self._ensure_alive()
        self._watcher = watcher

    def register_callback(self, fn: Callable[[ConfigSnapshot], None]) -> None:
        """``fn(snapshot)`` runs after every load, outside the lock."""
        self._ensure_alive()
        self._callbacks.append(fn)

    @property
    def search_paths(self) -> Tuple[Path, ...]:
        return self._search_paths

    # ---------- queries ----------

    def is_client_whitelisted(self, client: str) -> bool:
        """
        True when ``client`` contains any whitelist entry as a substring.

        An empty whitelist lets every client through. Matching is a plain,
        case-sensitive containment test, so an entry ``team`` also matches
        ``/usr/bin/steam``.
        """
        with self._reading() as state:
            if not state.whitelist:
                return True
            return any(entry in client for entry in state.whitelist)

    def is_client_blacklisted(self, client: str) -> bool:
        """True when ``client`` contains any blacklist entry; an empty blacklist refuses nobody."""
        with self._reading() as state:
            return any(entry in client for entry in state.blacklist)

    def reaper_frequency(self) -> int:
        """Interval, in seconds, for the daemon's reaper thread."""
        with self._reading() as state:
            return state.reaper_frequency

    def start_scripts(self) -> List[str]:
        """Copy of the commands to run when gamemode starts."""
        with self._reading() as state:
            return state.startscripts.snapshot()

    def end_scripts(self) -> List[str]:
        """Copy of the commands to run when gamemode ends."""
        with self._reading() as state:
            return state.endscripts.snapshot()

    def snapshot(self) -> ConfigSnapshot:
        with self._reading():
            return self._snapshot_locked()

    @property
    def source_path(self) -> Optional[Path]:
        with self._reading():
            return self._source_path

    # ---------- internals ----------

    def _ensure_alive(self) -> None:
        if self._destroyed:
            raise ConfigDestroyedError("config store has been destroyed")

    @contextmanager
    def _reading(self) -> Iterator[ConfigState]:
        self._ensure_alive()
        with self._lock.gen_rlock():
            yield self._state

    def _resolve_search_paths(self, paths: Optional[Sequence[Union[str, Path]]]) -> Tuple[Path, ...]:
        if paths is not None:
            return tuple(Path(p) for p in paths)
        env_path = (self._env.get(CONFIG_ENV_VAR) or "").strip()
        if env_path:
            return (Path(env_path),) + DEFAULT_SEARCH_PATHS
        return DEFAULT_SEARCH_PATHS

    def _snapshot_locked(self) -> ConfigSnapshot:
        state = self._state
        return ConfigSnapshot(
            whitelist=tuple(state.whitelist),
            blacklist=tuple(state.blacklist),
            start_scripts=tuple(state.startscripts),
            end_scripts=tuple(state.endscripts),
            reaper_frequency=state.reaper_frequency,
            source_path=self._source_path,
        )

    def _open_config_file(self) -> Tuple[Optional[TextIO], Optional[Path]]:
        for path in self._search_paths:
            try:
                return open(path, "r", encoding="utf-8", errors="replace"), path
            except OSError as e:
                logger.debug("Config candidate %s not usable: %s", path, e)
        return None, None

    def _load_config_file(self) -> str:
        self._ensure_alive()
        with self._lock.gen_wlock():
            self._state.reset()
            handler = IniHandler(self._state, self._metrics)

            stream, path = self._open_config_file()
            if stream is None:
                # Failure here isn't fatal
                logger.info(
                    "Note: No config file found, searched [%s]",
                    ", ".join(str(p) for p in self._search_paths),
                )
                outcome = OUTCOME_DEFAULTS
            else:
                with stream:
                    try:
                        error = parse_ini_file(stream, handler)
                    except OSError as e:
                        logger.error("Failed to read config file %s: %s", path, e)
                        error = -1
                if error > 0:
                    # Failure here isn't fatal either; what was read so far stays applied
                    logger.info("Failed to parse config file %s - error on line %d!", path, error)
                    outcome = OUTCOME_SYNTAX_ERROR
                elif error < 0:
                    outcome = OUTCOME_READ_ERROR
                else:
                    outcome = OUTCOME_LOADED

            self._source_path = path
            snapshot = self._snapshot_locked()

        logger.info(
            "Config %s (source=%s, whitelist=%d, blacklist=%d, reaper_freq=%d)",
            outcome,
            path,
            len(snapshot.whitelist),
            len(snapshot.blacklist),
            snapshot.reaper_frequency,
        )
        self._publish(outcome, snapshot)
        return outcome

    def _publish(self, outcome: str, snapshot: ConfigSnapshot) -> None:
        if self._metrics is not None:
            self._metrics.inc_reload(outcome)
            self._metrics.set_entries("whitelist", len(snapshot.whitelist))
            self._metrics.set_entries("blacklist", len(snapshot.blacklist))
            self._metrics.set_entries("start", len(snapshot.start_scripts))
            self._metrics.set_entries("end", len(snapshot.end_scripts))
            self._metrics.set_reaper_frequency(snapshot.reaper_frequency)
        for cb in list(self._callbacks):
            try:
                cb(snapshot)
            except Exception:
                logger.exception("Config reload callback failed")


def create_config(
    search_paths: Optional[Sequence[Union[str, Path]]] = None,
    *,
    metrics: Optional[ConfigMetrics] = None,
) -> GameModeConfig:
    """Build a store and run its initial load."""
    config = GameModeConfig(search_paths, metrics=metrics)
    config.init()
    return config


__all__ = [
    "GameModeConfig",
    "ConfigSnapshot",
    "create_config",
    "CONFIG_NAME",
    "CONFIG_DIR",
    "CONFIG_ENV_VAR",
    "DEFAULT_SEARCH_PATHS",
    "OUTCOME_LOADED",
    "OUTCOME_DEFAULTS",
    "OUTCOME_SYNTAX_ERROR",
    "OUTCOME_READ_ERROR",
]
