"""Parsers for human readable sizes and durations.

Sizes use binary multipliers (``4k`` is 4096 bytes). Durations are sequences
of ``<number><unit>`` terms such as ``500ms``, ``12s`` or ``1h30m``.
"""

import re
from datetime import timedelta
from decimal import Decimal

_SIZE_RE = re.compile(r"^(?P<value>\d+) ?(?P<unit>[kmgtp])?i?b?$", re.IGNORECASE)
_SIZE_MULTIPLIERS = {
    "k": 1 << 10,
    "m": 1 << 20,
    "g": 1 << 30,
    "t": 1 << 40,
    "p": 1 << 50,
}

_DURATION_RE = re.compile(
    r"^[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+$"
)
_DURATION_TERM_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
# microseconds per unit
_DURATION_UNITS = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),
    "μs": Decimal(1),
    "ms": Decimal(1000),
    "s": Decimal(1000 * 1000),
    "m": Decimal(60 * 1000 * 1000),
    "h": Decimal(60 * 60 * 1000 * 1000),
}


def parse_buffer_size(text: str) -> int:
    """Convert a size string such as ``1234``, ``4k`` or ``2MiB`` into bytes.

    Args:
        text: Size string; a missing unit means bytes

    Returns:
        Size in bytes

    Raises:
        ValueError: If the string is not a non-negative integer with an
            optional known unit
    """
    match = _SIZE_RE.match(text.strip())
    if not match:
        raise ValueError(f"invalid size: '{text}'")

    size = int(match.group("value"))
    unit = match.group("unit")
    if unit:
        size *= _SIZE_MULTIPLIERS[unit.lower()]
    return size


def parse_duration(text: str) -> timedelta:
    """Convert a duration string such as ``3s`` or ``1h30m`` into a timedelta.

    Args:
        text: Duration string, every number but a lone 0 must carry a unit

    Returns:
        Parsed duration, rounded to microseconds

    Raises:
        ValueError: If the string is empty, has a unitless number other
            than 0 or an unknown unit
    """
    text = text.strip()
    # zero is the only number allowed without a unit
    if text in ("0", "+0", "-0"):
        return timedelta(0)
    if not _DURATION_RE.match(text):
        raise ValueError(f"invalid duration: '{text}'")

    total = Decimal(0)
    for value, unit in _DURATION_TERM_RE.findall(text):
        total += Decimal(value) * _DURATION_UNITS[unit]

    if text.startswith("-"):
        total = -total
    return timedelta(microseconds=int(total.to_integral_value()))
