"""Transport implementations for the querier service."""

from .grpc_service import GrpcQuerierService
from .proto import SERVICE_NAME, StubBundle, get_stub_bundle

__all__ = ["GrpcQuerierService", "SERVICE_NAME", "StubBundle", "get_stub_bundle"]
