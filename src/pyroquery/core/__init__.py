"""
Domain model, error taxonomy and transport-independent helpers.
"""

from .config import ClientConfig
from .context import CallContext
from .errors import (
    InvalidProfileTypeID,
    QueryCancelled,
    QueryError,
    QueryValidationError,
    TransportError,
)
from .service import QuerierService
from .types import (
    Flamebearer,
    LabelPair,
    Level,
    NoData,
    Point,
    ProfileResponse,
    ProfileType,
    ProfileTypeID,
    Series,
    SeriesResponse,
)
from .units import is_private_label, normalize_unit, parse_profile_type_id

__all__ = [
    "CallContext",
    "ClientConfig",
    "Flamebearer",
    "InvalidProfileTypeID",
    "LabelPair",
    "Level",
    "NoData",
    "Point",
    "ProfileResponse",
    "ProfileType",
    "ProfileTypeID",
    "QuerierService",
    "QueryCancelled",
    "QueryError",
    "QueryValidationError",
    "Series",
    "SeriesResponse",
    "TransportError",
    "is_private_label",
    "normalize_unit",
    "parse_profile_type_id",
]
