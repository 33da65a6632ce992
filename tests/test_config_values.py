import logging

import pytest

from gamemode.config.errors import InvalidValueError
from gamemode.config.values import LONG_MAX, parse_positive_int


@pytest.mark.parametrize(
    "text,expected",
    [("10", 10), ("1", 1), ("+7", 7), ("  42", 42), ("007", 7), (str(LONG_MAX), LONG_MAX)],
)
def test_parse_positive_int_accepts(text, expected):
    assert parse_positive_int("reaper_freq", text) == expected


@pytest.mark.parametrize(
    "text",
    ["", "0", "-3", "10s", "ten", "1.5", "1_000", "10 ", " ", "0x10", "٣"],
)
def test_parse_positive_int_rejects(text, caplog):
    caplog.set_level(logging.ERROR)
    with pytest.raises(InvalidValueError):
        parse_positive_int("reaper_freq", text)
    assert "reaper_freq was invalid" in caplog.text


def test_parse_positive_int_overflow(caplog):
    caplog.set_level(logging.ERROR)
    with pytest.raises(InvalidValueError, match="overflowed"):
        parse_positive_int("reaper_freq", str(LONG_MAX + 1))
    with pytest.raises(InvalidValueError, match="overflowed"):
        parse_positive_int("reaper_freq", "-99999999999999999999999")
    assert "reaper_freq overflowed, given [" in caplog.text


def test_parse_positive_int_huge_digit_strings_are_overflow(caplog):
    caplog.set_level(logging.ERROR)
    with pytest.raises(InvalidValueError, match="overflowed"):
        parse_positive_int("reaper_freq", "9" * 5000)
    with pytest.raises(InvalidValueError, match="overflowed"):
        parse_positive_int("reaper_freq", "-" + "1" * 5000)
    # leading zeros are not significant
    assert parse_positive_int("reaper_freq", "0" * 5000 + "12") == 12
