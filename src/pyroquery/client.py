"""Query client that normalizes querier responses into the domain model."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence, Tuple

import grpc

from .core.config import ClientConfig
from .core.context import CallContext
from .core.errors import QueryValidationError, TransportError
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
from .core.units import is_private_label, normalize_unit, parse_profile_type_id
from .transport.grpc_service import GrpcQuerierService

logger = logging.getLogger("pyroquery.client")

DEFAULT_STEP = 15.0


class QueryClient:
    """
    Issue profile queries and return rendering-ready results.

    Every operation makes exactly one call on the underlying service. The
    client keeps no per-call state, so one instance can be shared between
    threads. Results are not cached and failed calls are not retried.
    """

    def __init__(self, service: QuerierService, *, default_timeout: Optional[float] = None) -> None:
        self._service = service
        self._default_timeout = default_timeout

    @classmethod
    def connect(
        cls,
        endpoint: str,
        *,
        credentials: Optional[grpc.ChannelCredentials] = None,
        channel_options: Optional[Tuple[Tuple[str, Any], ...]] = None,
        default_timeout: Optional[float] = None,
    ) -> "QueryClient":
        service = GrpcQuerierService(
            endpoint,
            credentials=credentials,
            channel_options=channel_options,
        )
        return cls(service, default_timeout=default_timeout)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "QueryClient":
        credentials = grpc.ssl_channel_credentials() if config.secure else None
        return cls.connect(
            config.endpoint,
            credentials=credentials,
            channel_options=config.channel_options,
            default_timeout=config.timeout,
        )

    @property
    def endpoint(self) -> str:
        return getattr(self._service, "endpoint", "")

    def list_profile_types(self, context: Optional[CallContext] = None) -> list[ProfileType]:
        records = self._service.profile_types(self._context(context))
        return [
            ProfileType(id=record.ID, label=f"{record.name} - {record.sample_type}")
            for record in records or ()
        ]

    def get_series(
        self,
        profile_type_id: str,
        label_selector: str,
        start: int,
        end: int,
        group_by: Sequence[str] = (),
        step: float = DEFAULT_STEP,
        context: Optional[CallContext] = None,
    ) -> SeriesResponse:
        """
        Fetch time series for a profile type.

        Args:
            profile_type_id: ``<kind>:<sampleType>:<unit>[:...]`` identifier
            label_selector: Selector expression, forwarded as-is
            start: Inclusive start, epoch milliseconds
            end: Inclusive end, epoch milliseconds
            group_by: Label names to group series by
            step: Sampling interval in seconds
            context: Deadline and cancellation for this call

        Raises:
            InvalidProfileTypeID: identifier has fewer than three components
            QueryValidationError: non-integer bounds, ``start > end`` or a step that is not positive
            TransportError: the remote call failed
        """
        parsed = parse_profile_type_id(profile_type_id)
        _check_window(start, end)
        if not step > 0:
            raise QueryValidationError(f"step must be positive, got {step}")

        records = self._service.select_series(
            profile_type_id,
            label_selector,
            start,
            end,
            tuple(group_by),
            step,
            self._context(context),
        )
        return SeriesResponse(
            series=tuple(_to_series(record) for record in records or ()),
            units=normalize_unit(parsed.unit),
            label=parsed.sample_type,
        )

    def get_merge_profile(
        self,
        profile_type_id: str,
        label_selector: str,
        start: int,
        end: int,
        max_nodes: Optional[int] = None,
        context: Optional[CallContext] = None,
    ) -> ProfileResponse | NoData:
        """
        Merge the stack traces matching the query into one flame graph.

        Returns :class:`NoData` when the service has no flame graph for the
        window, which happens for ranges outside its retention.
        """
        parsed = parse_profile_type_id(profile_type_id)
        _check_window(start, end)

        flamegraph = self._service.select_merge_stacktraces(
            profile_type_id,
            label_selector,
            start,
            end,
            max_nodes,
            self._context(context),
        )
        if flamegraph is None:
            logger.debug("No flame graph for %s in [%d, %d]", profile_type_id, start, end)
            return NoData(profile_type_id=profile_type_id, start=start, end=end)

        return ProfileResponse(
            flamebearer=_to_flamebearer(flamegraph),
            units=normalize_unit(parsed.unit),
        )

    def list_label_names(self, context: Optional[CallContext] = None) -> list[str]:
        """Label names known to the service, without ``__``-prefixed private names."""
        try:
            names = self._service.label_names(self._context(context))
        except TransportError as exc:
            raise exc.with_prefix("error sending LabelNames request") from exc
        return [name for name in names or () if not is_private_label(name)]

    def list_label_values(self, label: str, context: Optional[CallContext] = None) -> list[str]:
        return list(self._service.label_values(label, self._context(context)) or ())

    def close(self) -> None:
        self._service.close()

    def __enter__(self) -> "QueryClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _context(self, context: Optional[CallContext]) -> CallContext:
        if context is not None:
            return context
        return CallContext(timeout=self._default_timeout)


def _check_window(start: int, end: int) -> None:
    for bound, value in (("start", start), ("end", end)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise QueryValidationError(f"{bound} must be integer epoch milliseconds, got {value!r}")
    if start > end:
        raise QueryValidationError(f"start ({start}) must not be after end ({end})")


def _to_series(record: Any) -> Series:
    return Series(
        labels=tuple(LabelPair(name=label.name, value=label.value) for label in record.labels),
        points=tuple(
            Point(value=float(point.value), timestamp=int(point.timestamp))
            for point in record.points
        ),
    )


def _to_flamebearer(flamegraph: Any) -> Flamebearer:
    return Flamebearer(
        names=tuple(flamegraph.names),
        levels=_to_levels(flamegraph.levels),
        total=flamegraph.total,
        max_self=flamegraph.max_self,
    )


def _to_levels(levels: Iterable[Any]) -> tuple[Level, ...]:
    return tuple(Level(values=tuple(level.values)) for level in levels)


__all__ = ["DEFAULT_STEP", "QueryClient"]
