"""Resolve ``now``-relative time expressions to epoch milliseconds."""

from __future__ import annotations

import re
import time
from typing import Optional

_UNIT_MS = {
    "s": 1_000,
    "m": 60_000,
    "h": 3_600_000,
    "d": 86_400_000,
}

_RELATIVE = re.compile(r"^now(?:-(\d+)([smhd]))?$")


def now_ms() -> int:
    return int(time.time() * 1000)


def parse_time(value: str, now: Optional[int] = None) -> int:
    """
    Accept ``now``, ``now-<n><s|m|h|d>`` or an integer millisecond timestamp.

    Raises:
        ValueError: for anything else.
    """
    text = value.strip()
    match = _RELATIVE.match(text)
    if match:
        reference = now_ms() if now is None else now
        amount, unit = match.groups()
        if amount is None:
            return reference
        return reference - int(amount) * _UNIT_MS[unit]
    try:
        return int(text)
    except ValueError as exc:
        raise ValueError(
            f"invalid time {value!r}: use epoch milliseconds or now[-<n><s|m|h|d>]"
        ) from exc


__all__ = ["now_ms", "parse_time"]
