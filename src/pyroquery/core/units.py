"""Profile-type identifier grammar, unit display tokens and label conventions."""

from __future__ import annotations

from .errors import InvalidProfileTypeID
from .types import ProfileTypeID

PRIVATE_LABEL_PREFIX = "__"

_MIN_ID_PARTS = 3

_UNIT_DISPLAY = {
    "nanoseconds": "ns",
    "count": "short",
}


def normalize_unit(unit: str) -> str:
    """Map a backend unit token to the token used for display."""
    return _UNIT_DISPLAY.get(unit, unit)


def parse_profile_type_id(profile_type_id: str) -> ProfileTypeID:
    """
    Split ``<kind>:<sampleType>:<unit>[:...]`` into its components.

    Raises:
        InvalidProfileTypeID: when fewer than three components are present.
    """
    parts = profile_type_id.split(":") if profile_type_id else []
    if len(parts) < _MIN_ID_PARTS:
        raise InvalidProfileTypeID(profile_type_id)
    return ProfileTypeID(
        kind=parts[0],
        sample_type=parts[1],
        unit=parts[2],
        extra=tuple(parts[3:]),
    )


def is_private_label(name: str) -> bool:
    return name.startswith(PRIVATE_LABEL_PREFIX)


__all__ = [
    "PRIVATE_LABEL_PREFIX",
    "is_private_label",
    "normalize_unit",
    "parse_profile_type_id",
]
