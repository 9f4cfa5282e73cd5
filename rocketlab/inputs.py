"""Tolerant normalization of user-entered numbers.

Control panel values arrive as whatever the user typed. Instead of
rejecting bad input, every field is parsed or defaulted to zero: a mistyped
fuel load produces a degenerate flight, never an exception.

Parsing follows browser `parseFloat` semantics: leading whitespace is
skipped and the longest leading numeric prefix is used, so "12.5t" reads as
12.5 and "abc" reads as 0.

Example:
    >>> from rocketlab.inputs import parse_or_zero, parse_percent
    >>>
    >>> parse_or_zero("12.5 t")
    12.5
    >>> parse_or_zero("")
    0.0
    >>> parse_percent("150")
    100
"""

import math
import re

from beartype import beartype

_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

RawValue = str | float | int | None


@beartype
def parse_or_zero(value: RawValue) -> float:
    """Parse a user-entered non-negative number, defaulting to 0.0.

    Empty, non-numeric, NaN, infinite and negative values all map to 0.0.

    Args:
        value: Raw value from a control (text or number)

    Returns:
        Parsed value, >= 0
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, str):
        match = _NUMBER_PREFIX.match(value)
        if match is None:
            return 0.0
        number = float(match.group(1))
    else:
        number = float(value)

    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


@beartype
def parse_percent(value: RawValue) -> int:
    """Parse an integer percentage clamped to [0, 100].

    Fractional input is truncated, like `parseInt`.
    """
    return min(100, int(parse_or_zero(value)))
