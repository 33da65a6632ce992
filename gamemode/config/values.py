"""Typed conversion of raw config values."""

from __future__ import annotations

import logging
import re

from .errors import InvalidValueError

logger = logging.getLogger("gamemode.config.values")

# Range of the daemon's C ``long``; anything outside is reported as overflow.
LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1
_LONG_DIGITS = len(str(LONG_MAX))

# Base-10 integer as accepted by strtol with full consumption of the text.
_INT_RE = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+")


def parse_positive_int(name: str, text: str) -> int:
    """
    Parse ``text`` as a strictly positive base-10 integer.

    The whole text must be consumed. Raises InvalidValueError (after logging
    the field name and raw text) on empty input, trailing garbage,
    non-positive values or overflow.
    """
    if not _INT_RE.fullmatch(text):
        logger.error("Config: %s was invalid, given [%s]", name, text)
        raise InvalidValueError(f"{name} was invalid, given [{text}]")

    # more significant digits than any long can hold; also keeps int() within its digit limit
    body = text.lstrip(" \t\n\v\f\r")
    negative = body.startswith("-")
    digits = body.lstrip("+-").lstrip("0")
    if len(digits) > _LONG_DIGITS:
        logger.error("Config: %s overflowed, given [%s]", name, text)
        raise InvalidValueError(f"{name} overflowed, given [{text}]")

    value = int(digits or "0")
    if negative:
        value = -value
    if value > LONG_MAX or value < LONG_MIN:
        logger.error("Config: %s overflowed, given [%s]", name, text)
        raise InvalidValueError(f"{name} overflowed, given [{text}]")
    if value <= 0:
        logger.error("Config: %s was invalid, given [%s]", name, text)
        raise InvalidValueError(f"{name} was invalid, given [{text}]")
    return value


__all__ = ["parse_positive_int", "LONG_MAX", "LONG_MIN"]
