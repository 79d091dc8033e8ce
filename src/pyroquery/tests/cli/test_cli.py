from __future__ import annotations

import json
import types

import pytest
from click.testing import CliRunner

from pyroquery.cli import cli
from pyroquery.client import QueryClient
from pyroquery.core.config import ClientConfig
from pyroquery.core.errors import TransportError
from pyroquery.core.service import QuerierService


class StubQuerierService(QuerierService):
    endpoint = "stub:4040"

    def __init__(self) -> None:
        self.merge_args = None
        self.series_args = None
        self.flamegraph = types.SimpleNamespace(
            names=["total"],
            levels=[types.SimpleNamespace(values=[0, 5, 5, 0])],
            total=5,
            max_self=5,
        )
        self.closed = False

    def profile_types(self, context):
        return [types.SimpleNamespace(ID="memory:inuse_space:bytes", name="memory", sample_type="inuse_space")]

    def select_series(self, profile_type_id, label_selector, start, end, group_by, step, context):
        self.series_args = (profile_type_id, label_selector, start, end, group_by, step)
        return [
            types.SimpleNamespace(
                labels=[types.SimpleNamespace(name="pod", value="p-1")],
                points=[types.SimpleNamespace(value=3.0, timestamp=start)],
            )
        ]

    def select_merge_stacktraces(self, profile_type_id, label_selector, start, end, max_nodes, context):
        self.merge_args = (profile_type_id, label_selector, start, end, max_nodes)
        return self.flamegraph

    def label_names(self, context):
        return ["__name__", "pod"]

    def label_values(self, name, context):
        if name == "broken":
            raise TransportError("LabelValues", "UNAVAILABLE", "down")
        return [f"{name}-1"]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def stub() -> StubQuerierService:
    return StubQuerierService()


@pytest.fixture
def invoke(stub: StubQuerierService):
    configs: list[ClientConfig] = []

    def factory(config: ClientConfig) -> QueryClient:
        configs.append(config)
        return QueryClient(stub)

    def run(*args: str, env: dict[str, str] | None = None):
        runner = CliRunner()
        result = runner.invoke(cli, list(args), obj={"client_factory": factory}, env=env)
        return result, configs

    return run


def test_profile_types(invoke, stub) -> None:
    result, _ = invoke("profile-types")
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [{"id": "memory:inuse_space:bytes", "label": "memory - inuse_space"}]
    assert stub.closed


def test_series(invoke, stub) -> None:
    result, _ = invoke(
        "series",
        "process_cpu:cpu:nanoseconds",
        "--selector",
        '{pod="p-1"}',
        "--from",
        "1000",
        "--until",
        "5000",
        "--group-by",
        "pod",
        "--step",
        "10",
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["label"] == "cpu"
    assert payload["units"] == "ns"
    assert payload["series"][0]["points"] == [{"value": 3.0, "timestamp": 1000}]
    assert stub.series_args == ("process_cpu:cpu:nanoseconds", '{pod="p-1"}', 1000, 5000, ("pod",), 10.0)


def test_merge(invoke, stub) -> None:
    result, _ = invoke("merge", "a:b:count", "--from", "0", "--until", "10", "--max-nodes", "64")
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["units"] == "short"
    assert payload["flamebearer"]["levels"] == [{"values": [0, 5, 5, 0]}]
    assert stub.merge_args == ("a:b:count", "{}", 0, 10, 64)


def test_merge_no_data(invoke, stub) -> None:
    stub.flamegraph = None
    result, _ = invoke("merge", "a:b:c", "--from", "0", "--until", "10")
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["no_data"] is True


def test_label_names_and_values(invoke) -> None:
    names, _ = invoke("label-names")
    values, _ = invoke("label-values", "pod")
    assert json.loads(names.output) == ["pod"]
    assert json.loads(values.output) == ["pod-1"]


def test_query_error_becomes_click_error(invoke) -> None:
    result, _ = invoke("label-values", "broken")
    assert result.exit_code == 1
    assert "UNAVAILABLE" in result.output


def test_invalid_profile_type_id(invoke) -> None:
    result, _ = invoke("series", "cpu", "--from", "0", "--until", "1")
    assert result.exit_code == 1
    assert "invalid profile type id" in result.output


def test_bad_time_is_usage_error(invoke) -> None:
    result, _ = invoke("series", "a:b:c", "--from", "yesterday")
    assert result.exit_code == 2
    assert "invalid time" in result.output


def test_global_options_build_config(invoke) -> None:
    result, configs = invoke("--endpoint", "https://profiles.example.com", "--timeout", "3", "label-names")
    assert result.exit_code == 0, result.output
    (config,) = configs
    assert config.endpoint == "profiles.example.com:4040"
    assert config.secure is True
    assert config.timeout == 3.0


def test_endpoint_from_environment(invoke) -> None:
    result, configs = invoke("label-names", env={"PYROQUERY_ENDPOINT": "querier:9095"})
    assert result.exit_code == 0, result.output
    assert configs[0].endpoint == "querier:9095"
