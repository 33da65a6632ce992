import io
from typing import List, Tuple

from gamemode.config.ini import parse_ini_file, parse_ini_string


def _collect(text: str) -> Tuple[int, List[Tuple[str, str, str]]]:
    seen: List[Tuple[str, str, str]] = []

    def handler(section, name, value):
        seen.append((section, name, value))
        return True

    return parse_ini_string(text, handler), seen


def test_sections_keys_and_repeated_keys():
    err, seen = _collect("[filter]\nwhitelist=steam\nwhitelist = lutris\n\n[general]\nreaper_freq: 10\n")
    assert err == 0
    assert seen == [
        ("filter", "whitelist", "steam"),
        ("filter", "whitelist", "lutris"),
        ("general", "reaper_freq", "10"),
    ]


def test_comments_and_inline_comments():
    text = (
        "; leading comment\n"
        "# hash comment\n"
        "[custom]\n"
        "start=notify-send start ; say hello\n"
        "end=echo a;b\n"
        "   ; indented comment\n"
    )
    err, seen = _collect(text)
    assert err == 0
    assert seen == [("custom", "start", "notify-send start"), ("custom", "end", "echo a;b")]


def test_bom_is_skipped():
    err, seen = _collect("\ufeff[general]\nreaper_freq=3\n")
    assert err == 0
    assert seen == [("general", "reaper_freq", "3")]


def test_continuation_lines_repeat_previous_name():
    err, seen = _collect("[filter]\nwhitelist=steam\n  lutris\n")
    assert err == 0
    assert seen == [("filter", "whitelist", "steam"), ("filter", "whitelist", "lutris")]


def test_syntax_error_reports_first_line_and_keeps_going():
    text = "[filter]\nwhitelist=steam\nthis is not valid\n[broken\nblacklist=wine\n"
    err, seen = _collect(text)
    assert err == 3
    assert ("filter", "whitelist", "steam") in seen
    assert ("filter", "blacklist", "wine") in seen


def test_keys_before_any_section_use_empty_section():
    err, seen = _collect("orphan=1\n")
    assert err == 0
    assert seen == [("", "orphan", "1")]


def test_handler_failure_marks_line():
    def handler(section, name, value):
        return name != "bad"

    assert parse_ini_string("[a]\ngood=1\nbad=2\nbad=3\n", handler) == 3


def test_parse_from_stream():
    seen = []
    stream = io.StringIO("[general]\nreaper_freq=10\n")
    assert parse_ini_file(stream, lambda s, k, v: seen.append((s, k, v)) or True) == 0
    assert seen == [("general", "reaper_freq", "10")]


def test_string_and_stream_split_lines_the_same_way():
    text = "[custom]\nstart=printf 'a\x0bb'\r\nend=echo\x0cdone\n"
    from_string = _collect(text)

    seen = []
    stream = io.StringIO(text, newline=None)
    err = parse_ini_file(stream, lambda s, k, v: seen.append((s, k, v)) or True)

    assert from_string == (err, seen)
    assert from_string[1] == [("custom", "start", "printf 'a\x0bb'"), ("custom", "end", "echo\x0cdone")]
