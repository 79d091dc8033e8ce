"""
Client-side query and normalization layer for profiling query services.

The primary entry point is :class:`QueryClient`; domain types and errors are
re-exported here so callers can import from a single namespace.
"""

from .client import QueryClient
from .core.config import ClientConfig
from .core.context import CallContext
from .core.errors import (
    InvalidProfileTypeID,
    QueryCancelled,
    QueryError,
    QueryValidationError,
    TransportError,
)
from .core.service import QuerierService
from .core.types import (
    Flamebearer,
    LabelPair,
    Level,
    NoData,
    Point,
    ProfileResponse,
    ProfileType,
    Series,
    SeriesResponse,
)
from .core.units import normalize_unit
from .transport import GrpcQuerierService

__all__ = [
    "QueryClient",
    "ClientConfig",
    "CallContext",
    "QuerierService",
    "GrpcQuerierService",
    "InvalidProfileTypeID",
    "QueryCancelled",
    "QueryError",
    "QueryValidationError",
    "TransportError",
    "Flamebearer",
    "LabelPair",
    "Level",
    "NoData",
    "Point",
    "ProfileResponse",
    "ProfileType",
    "Series",
    "SeriesResponse",
    "normalize_unit",
]
