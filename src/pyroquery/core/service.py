from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from .context import CallContext


class QuerierService(ABC):
    """
    Capability interface over the querier RPC stub.

    Implementations perform exactly one remote round trip per method and
    return the unwrapped response payload. Records only need attribute access
    matching the wire schema: profile types expose ``ID``, ``name`` and
    ``sample_type``; series expose ``labels`` (``name``/``value``) and
    ``points`` (``value``/``timestamp``); flame graphs expose ``names``,
    ``levels`` (``values``), ``total`` and ``max_self``.

    Failures are raised as :class:`~pyroquery.core.errors.TransportError`.
    """

    endpoint: str = ""

    @abstractmethod
    def profile_types(self, context: CallContext) -> Sequence[Any]:
        """Return the upstream profile type records."""

    @abstractmethod
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
        """Return the upstream series records."""

    @abstractmethod
    def select_merge_stacktraces(
        self,
        profile_type_id: str,
        label_selector: str,
        start: int,
        end: int,
        max_nodes: Optional[int],
        context: CallContext,
    ) -> Optional[Any]:
        """Return the merged flame graph, or ``None`` when the service sent none."""

    @abstractmethod
    def label_names(self, context: CallContext) -> Sequence[str]:
        """Return every label name known to the service."""

    @abstractmethod
    def label_values(self, name: str, context: CallContext) -> Sequence[str]:
        """Return the values recorded for label ``name``."""

    def close(self) -> None:
        """Release transport resources owned by this service."""


__all__ = ["QuerierService"]
