from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ProfileType:
    """Selectable profile type; ``label`` reads ``"<name> - <sampleType>"``."""

    id: str
    label: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label}


@dataclass(frozen=True, slots=True)
class ProfileTypeID:
    """Components of a ``<kind>:<sampleType>:<unit>[:...]`` identifier."""

    kind: str
    sample_type: str
    unit: str
    extra: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Level:
    """
    One depth of the flame graph.

    ``values`` is kept exactly as the service sent it; its grouping belongs
    to the renderer.
    """

    values: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True)
class Flamebearer:
    names: tuple[str, ...] = ()
    levels: tuple[Level, ...] = ()
    total: int = 0
    max_self: int = 0


@dataclass(frozen=True, slots=True)
class LabelPair:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class Point:
    value: float
    # Milliseconds since the Unix epoch
    timestamp: int


@dataclass(frozen=True, slots=True)
class Series:
    labels: tuple[LabelPair, ...] = ()
    points: tuple[Point, ...] = ()


@dataclass(frozen=True, slots=True)
class ProfileResponse:
    flamebearer: Flamebearer
    units: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class NoData:
    """
    Merge query finished without a flame graph.

    Expected for windows outside the service's retention; not an error.
    """

    profile_type_id: str
    start: int
    end: int

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["no_data"] = True
        return payload


@dataclass(frozen=True, slots=True)
class SeriesResponse:
    series: tuple[Series, ...]
    units: str
    label: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


__all__ = [
    "Flamebearer",
    "LabelPair",
    "Level",
    "NoData",
    "Point",
    "ProfileResponse",
    "ProfileType",
    "ProfileTypeID",
    "Series",
    "SeriesResponse",
]
