"""
Conversion between JUnit time attributes and durations.
"""

import math
from datetime import timedelta
from typing import List, Union

_MILLISECOND = timedelta(milliseconds=1)

# (label, size in milliseconds), largest first
_UNITS = [
    ("day", 24 * 60 * 60 * 1000),
    ("h", 60 * 60 * 1000),
    ("m", 60 * 1000),
    ("s", 1000),
    ("ms", 1),
]


def parse_seconds(value: Union[str, float]) -> timedelta:
    """
    Convert a fractional-seconds value into a duration.

    Some runners write negative times; those are folded to their absolute
    value rather than rejected.

    Args:
        value: Seconds as a float or as the raw attribute string

    Returns:
        Non-negative timedelta

    Raises:
        ValueError: If the value is not a finite number, or is too large
            for a timedelta
    """
    seconds = float(value)
    if not math.isfinite(seconds):
        raise ValueError(f"time must be a finite number, got: {value!r}")
    try:
        return timedelta(seconds=abs(seconds))
    except OverflowError:
        raise ValueError(f"time is out of range, got: {value!r}")


def to_millis(duration: timedelta) -> int:
    """Return whole milliseconds, truncating any sub-millisecond remainder."""
    return duration // _MILLISECOND


def format_duration(duration: timedelta) -> str:
    """Render a duration with millisecond resolution, e.g. ``1s 1ms``."""
    remaining = to_millis(duration)
    if remaining <= 0:
        return "0ms"

    parts: List[str] = []
    for label, size in _UNITS:
        amount, remaining = divmod(remaining, size)
        if amount:
            plural = "s" if label == "day" and amount > 1 else ""
            parts.append(f"{amount}{label}{plural}")
    return " ".join(parts)
