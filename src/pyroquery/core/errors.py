"""Exceptions raised by the query layer."""

from __future__ import annotations


class QueryError(RuntimeError):
    """Base class for every error raised by pyroquery."""


class TransportError(QueryError):
    """A remote call failed at the network or service level."""

    def __init__(self, operation: str, code: str, details: str = "") -> None:
        self.operation = operation
        self.code = code
        self.details = details
        super().__init__(self._format())

    def _format(self) -> str:
        message = f"{self.operation} failed: {self.code}"
        if self.details:
            message += f" {self.details}"
        return message

    def with_prefix(self, prefix: str) -> "TransportError":
        """Return a copy of this error whose details start with ``prefix``."""
        details = f"{prefix}: {self.details}" if self.details else prefix
        return type(self)(self.operation, self.code, details)


class QueryCancelled(TransportError):
    """The call was cancelled before the service answered."""

    def __init__(self, operation: str, code: str = "CANCELLED", details: str = "") -> None:
        super().__init__(operation, code, details)


class QueryValidationError(QueryError, ValueError):
    """Query arguments violate the caller contract."""


class InvalidProfileTypeID(QueryValidationError):
    """Profile-type identifier lacks the ``<kind>:<sampleType>:<unit>`` components."""

    def __init__(self, profile_type_id: str) -> None:
        self.profile_type_id = profile_type_id
        super().__init__(
            f"invalid profile type id {profile_type_id!r}: "
            "expected at least '<kind>:<sampleType>:<unit>'"
        )


__all__ = [
    "InvalidProfileTypeID",
    "QueryCancelled",
    "QueryError",
    "QueryValidationError",
    "TransportError",
]
