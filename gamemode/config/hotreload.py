from __future__ import annotations

"""
Reload trigger for the GameMode config store.

ConfigWatcher polls the store's candidate config paths and calls
``store.reload()`` when the set of present files or any of their mtimes or
sizes changes (file created, edited, replaced or removed). It is an
optional collaborator: the store never starts it by itself.
"""

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from .store import GameModeConfig

logger = logging.getLogger("gamemode.config.hotreload")

_Signature = Tuple[Optional[Tuple[int, int]], ...]


class ConfigWatcher:
    """
    Simple stat-based watcher for the config search paths.

    The first signature is taken at construction, so only changes made
    after that point trigger a reload.
    """

    def __init__(self, store: "GameModeConfig", *, poll_interval_sec: float = 1.5) -> None:
        self._store = store
        self._paths = store.search_paths
        self._poll = float(poll_interval_sec)
        self._signature = self._read_signature()
        self._thread: Optional[threading.Thread] = None
        self._stop_evt = threading.Event()

    @property
    def paths(self) -> Tuple[Path, ...]:
        return self._paths

    @property
    def running(self) -> bool:
        return self._thread is not None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop_evt.clear()
        self._thread = threading.Thread(target=self._loop, name="ConfigWatcher[gamemode.ini]", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop_evt.set()
        if self._thread is not threading.current_thread():
            self._thread.join(timeout=3.0)
        self._thread = None

    def poll_once(self) -> bool:
        """Check the paths once; reload and return True if anything changed."""
        signature = self._read_signature()
        if signature == self._signature:
            return False
        self._signature = signature
        logger.info("Config file change detected, reloading")
        self._store.reload()
        return True

    # ----- internals -----

    def _read_signature(self) -> _Signature:
        out = []
        for path in self._paths:
            try:
                st = path.stat()
            except OSError:
                out.append(None)
                continue
            out.append((st.st_mtime_ns, st.st_size))
        return tuple(out)

    def _loop(self) -> None:  # pragma: no cover (threading path)
        while not self._stop_evt.wait(self._poll):
            try:
                self.poll_once()
            except Exception:
                logger.exception("ConfigWatcher reload failed")


__all__ = ["ConfigWatcher"]
