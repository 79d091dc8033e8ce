"""gRPC implementation of :class:`~pyroquery.core.service.QuerierService`."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple

import grpc

from ..core.config import normalize_endpoint
from ..core.context import CallContext
from ..core.errors import QueryCancelled, TransportError
from ..core.service import QuerierService
from .proto import get_stub_bundle

logger = logging.getLogger("pyroquery.transport")


class GrpcQuerierService(QuerierService):
    """
    Issue querier RPCs over a grpc channel.

    The channel is thread-safe; every call gets its own future so concurrent
    callers never share per-call state. A channel passed in by the caller is
    left open by :meth:`close`.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        channel: Optional[grpc.Channel] = None,
        credentials: Optional[grpc.ChannelCredentials] = None,
        channel_options: Optional[Tuple[Tuple[str, Any], ...]] = None,
    ) -> None:
        self.endpoint = normalize_endpoint(endpoint)
        self._bundle = get_stub_bundle()
        self._owns_channel = channel is None
        if channel is None:
            options = list(channel_options or ())
            if credentials is not None:
                channel = grpc.secure_channel(self.endpoint, credentials, options=options)
            else:
                channel = grpc.insecure_channel(self.endpoint, options=options)
        self._channel = channel
        self._stub = self._bundle.stub_factory(channel)

    def profile_types(self, context: CallContext) -> Sequence[Any]:
        request = self._bundle.message("ProfileTypesRequest")()
        response = self._invoke("ProfileTypes", request, context)
        return list(response.profile_types)

    def select_series(
        self,
        profile_type_id: str,
        label_selector: str,
        start: int,
        end: int,
        group_by: Sequence[str],
        step: float,
        context: CallContext,
    ) -> Sequence[Any]:
        request = self._bundle.message("SelectSeriesRequest")(
            profile_typeID=profile_type_id,
            label_selector=label_selector,
            start=start,
            end=end,
            group_by=list(group_by),
            step=step,
        )
        response = self._invoke("SelectSeries", request, context)
        return list(response.series)

    def select_merge_stacktraces(
        self,
        profile_type_id: str,
        label_selector: str,
        start: int,
        end: int,
        max_nodes: Optional[int],
        context: CallContext,
    ) -> Optional[Any]:
        request = self._bundle.message("SelectMergeStacktracesRequest")(
            profile_typeID=profile_type_id,
            label_selector=label_selector,
            start=start,
            end=end,
        )
        if max_nodes is not None:
            request.max_nodes = max_nodes
        response = self._invoke("SelectMergeStacktraces", request, context)
        if not response.HasField("flamegraph"):
            return None
        return response.flamegraph

    def label_names(self, context: CallContext) -> Sequence[str]:
        request = self._bundle.message("LabelNamesRequest")()
        response = self._invoke("LabelNames", request, context)
        return list(response.names)

    def label_values(self, name: str, context: CallContext) -> Sequence[str]:
        request = self._bundle.message("LabelValuesRequest")(name=name)
        response = self._invoke("LabelValues", request, context)
        return list(response.names)

    def close(self) -> None:
        if self._owns_channel:
            self._channel.close()

    def _invoke(self, operation: str, request: Any, context: CallContext) -> Any:
        context.check(operation)
        rpc = getattr(self._stub, operation)
        logger.debug("Calling %s on %s", operation, self.endpoint)
        future = rpc.future(request, timeout=context.remaining())
        unregister = context.add_callback(future.cancel)
        try:
            return future.result()
        except grpc.FutureCancelledError as exc:
            raise QueryCancelled(operation, details="call cancelled by caller") from exc
        except grpc.RpcError as exc:
            raise _translate_error(operation, exc) from exc
        finally:
            unregister()


def _translate_error(operation: str, exc: grpc.RpcError) -> TransportError:
    code = exc.code() if hasattr(exc, "code") else None
    details = exc.details() if hasattr(exc, "details") else str(exc)
    if code is grpc.StatusCode.CANCELLED:
        return QueryCancelled(operation, details=details or "")
    name = code.name if code is not None else "UNKNOWN"
    return TransportError(operation, name, details or "")


__all__ = ["GrpcQuerierService"]
