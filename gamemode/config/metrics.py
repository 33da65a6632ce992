from __future__ import annotations

from prometheus_client import Counter, Gauge


class ConfigMetrics:
    """Prometheus metrics for config loads.

    Helpers never raise; a broken registry must not break a reload.
    """

    def __init__(self, registry) -> None:
        self.reload_total = Counter(
            "gamemode_config_reload_total",
            "Config loads by outcome",
            ["outcome"],  # outcome in {loaded, defaults, syntax_error, read_error}
            registry=registry,
        )
        self.ignored_total = Counter(
            "gamemode_config_ignored_total",
            "Config values ignored during load",
            ["section", "key"],
            registry=registry,
        )
        self.entries = Gauge(
            "gamemode_config_entries",
            "Entries held per config list after the last load",
            ["list"],
            registry=registry,
        )
        self.reaper_frequency = Gauge(
            "gamemode_config_reaper_frequency_seconds",
            "Reaper frequency in effect after the last load",
            registry=registry,
        )

    def inc_reload(self, outcome: str) -> None:
        try:
            self.reload_total.labels(outcome=outcome).inc()
        except Exception:
            pass

    def inc_ignored(self, section: str, key: str) -> None:
        try:
            self.ignored_total.labels(section=section, key=key).inc()
        except Exception:
            pass

    def set_entries(self, list_name: str, count: int) -> None:
        try:
            self.entries.labels(list=list_name).set(count)
        except Exception:
            pass

    def set_reaper_frequency(self, seconds: int) -> None:
        try:
            self.reaper_frequency.set(seconds)
        except Exception:
            pass


__all__ = ["ConfigMetrics"]
