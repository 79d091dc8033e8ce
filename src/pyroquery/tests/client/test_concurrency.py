"""Concurrent callers sharing one QueryClient."""

from __future__ import annotations

import random
import threading
import time
import types
from concurrent.futures import ThreadPoolExecutor

from pyroquery.client import QueryClient
from pyroquery.core.service import QuerierService
from pyroquery.core.types import ProfileResponse


def _jitter() -> None:
    time.sleep(random.uniform(0.0, 0.005))


class EchoQuerierService(QuerierService):
    """Answers every call with data derived from its own arguments."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.call_count = 0

    def _count(self) -> None:
        with self._lock:
            self.call_count += 1

    def profile_types(self, context):
        self._count()
        _jitter()
        return [types.SimpleNamespace(ID="a:b:c", name="a", sample_type="b")]

    def select_series(self, profile_type_id, label_selector, start, end, group_by, step, context):
        self._count()
        _jitter()
        return [
            types.SimpleNamespace(
                labels=[types.SimpleNamespace(name="selector", value=label_selector)],
                points=[types.SimpleNamespace(value=float(start), timestamp=end)],
            )
        ]

    def select_merge_stacktraces(self, profile_type_id, label_selector, start, end, max_nodes, context):
        self._count()
        _jitter()
        return types.SimpleNamespace(
            names=[label_selector],
            levels=[types.SimpleNamespace(values=[start, end, max_nodes or 0])],
            total=start,
            max_self=end,
        )

    def label_names(self, context):
        self._count()
        _jitter()
        return ["__name__", "job"]

    def label_values(self, name, context):
        self._count()
        _jitter()
        return [f"{name}-value"]


def _run(client: QueryClient, index: int):
    kind = index % 5
    if kind == 0:
        return kind, index, client.list_profile_types()
    if kind == 1:
        unit = ("nanoseconds", "count", "bytes")[index % 3]
        return kind, index, client.get_series(
            f"k{index}:sample{index}:{unit}", f"{{i={index}}}", index, index + 100
        )
    if kind == 2:
        return kind, index, client.get_merge_profile(
            "a:b:nanoseconds", f"{{i={index}}}", index, index + 1, max_nodes=index
        )
    if kind == 3:
        return kind, index, client.list_label_names()
    return kind, index, client.list_label_values(f"label{index}")


def test_concurrent_calls_match_their_own_arguments() -> None:
    service = EchoQuerierService()
    client = QueryClient(service)
    total_calls = 200

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(lambda i: _run(client, i), range(total_calls)))

    assert service.call_count == total_calls

    for kind, index, result in results:
        if kind == 0:
            assert [(p.id, p.label) for p in result] == [("a:b:c", "a - b")]
        elif kind == 1:
            unit = ("nanoseconds", "count", "bytes")[index % 3]
            assert result.label == f"sample{index}"
            assert result.units == {"nanoseconds": "ns", "count": "short"}.get(unit, unit)
            (series,) = result.series
            assert series.labels[0].value == f"{{i={index}}}"
            assert series.points[0].value == float(index)
            assert series.points[0].timestamp == index + 100
        elif kind == 2:
            assert isinstance(result, ProfileResponse)
            assert result.flamebearer.names == (f"{{i={index}}}",)
            assert result.flamebearer.levels[0].values == (index, index + 1, index)
            assert result.flamebearer.total == index
        elif kind == 3:
            assert result == ["job"]
        else:
            assert result == [f"label{index}-value"]
