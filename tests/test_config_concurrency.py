"""Readers racing a reloading writer must only ever see whole generations."""

import threading
from pathlib import Path

from gamemode.config import GameModeConfig

GEN_A = {
    "whitelist": tuple(f"alpha{i}" for i in range(8)),
    "blacklist": ("alpha-bad",),
    "start": ("echo alpha start",),
    "end": ("echo alpha end", "echo alpha end 2"),
    "freq": 3,
}
GEN_B = {
    "whitelist": tuple(f"beta{i}" for i in range(3)),
    "blacklist": ("beta-bad", "beta-worse"),
    "start": ("echo beta start", "echo beta start 2", "echo beta start 3"),
    "end": (),
    "freq": 17,
}


def _render(gen) -> str:
    lines = ["[filter]"]
    lines += [f"whitelist={v}" for v in gen["whitelist"]]
    lines += [f"blacklist={v}" for v in gen["blacklist"]]
    lines += ["[custom]"]
    lines += [f"start={v}" for v in gen["start"]]
    lines += [f"end={v}" for v in gen["end"]]
    lines += ["[general]", f"reaper_freq={gen['freq']}"]
    return "\n".join(lines) + "\n"


def _as_gen(snapshot):
    return {
        "whitelist": snapshot.whitelist,
        "blacklist": snapshot.blacklist,
        "start": snapshot.start_scripts,
        "end": snapshot.end_scripts,
        "freq": snapshot.reaper_frequency,
    }


def test_readers_never_observe_torn_config(tmp_path: Path):
    cfg = tmp_path / "gamemode.ini"
    cfg.write_text(_render(GEN_A), encoding="utf-8")
    store = GameModeConfig([cfg])
    store.init()

    stop = threading.Event()
    failures = []
    observed = {"a": 0, "b": 0}
    counter_lock = threading.Lock()

    def writer():
        gens = [GEN_B, GEN_A]
        i = 0
        while not stop.is_set() and i < 200:
            cfg.write_text(_render(gens[i % 2]), encoding="utf-8")
            store.reload()
            i += 1

    def reader():
        while not stop.is_set():
            gen = _as_gen(store.snapshot())
            if gen == GEN_A:
                key = "a"
            elif gen == GEN_B:
                key = "b"
            else:
                failures.append(gen)
                return
            # per-call accessors must always agree with one of the generations
            scripts = tuple(store.start_scripts())
            if scripts not in (GEN_A["start"], GEN_B["start"]):
                failures.append(scripts)
                return
            with counter_lock:
                observed[key] += 1

    readers = [threading.Thread(target=reader) for _ in range(6)]
    w = threading.Thread(target=writer)
    for t in readers:
        t.start()
    w.start()
    w.join(timeout=60)
    stop.set()
    for t in readers:
        t.join(timeout=10)

    assert not failures, f"torn reads observed: {failures[:3]}"
    assert observed["a"] + observed["b"] > 0


def test_concurrent_queries_during_reload(tmp_path: Path):
    cfg = tmp_path / "gamemode.ini"
    cfg.write_text("[filter]\nwhitelist=steam\nblacklist=wine\n", encoding="utf-8")
    store = GameModeConfig([cfg])
    store.init()

    errors = []

    def query():
        try:
            for _ in range(300):
                assert store.is_client_whitelisted("/usr/bin/steam")
                assert store.is_client_blacklisted("/usr/bin/wine")
                assert store.reaper_frequency() == 5
        except AssertionError as e:  # pragma: no cover
            errors.append(e)

    def reload():
        for _ in range(50):
            store.reload()

    threads = [threading.Thread(target=query) for _ in range(4)] + [threading.Thread(target=reload)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=60)

    assert not errors
