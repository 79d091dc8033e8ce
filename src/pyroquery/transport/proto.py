"""Dynamic protobuf helpers for the querier API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Type, cast

import grpc
from google.protobuf import descriptor_pb2 as _descriptor_pb2, descriptor_pool, message_factory

descriptor_pb2 = cast(Any, _descriptor_pb2)

SERVICE_NAME = "querier.v1.QuerierService"

_TYPES_FILE = "types/v1/types.proto"
_QUERIER_FILE = "querier/v1/querier.proto"

# (rpc name, request message, response message)
METHODS = (
    ("ProfileTypes", "ProfileTypesRequest", "ProfileTypesResponse"),
    ("SelectSeries", "SelectSeriesRequest", "SelectSeriesResponse"),
    ("SelectMergeStacktraces", "SelectMergeStacktracesRequest", "SelectMergeStacktracesResponse"),
    ("LabelNames", "LabelNamesRequest", "LabelNamesResponse"),
    ("LabelValues", "LabelValuesRequest", "LabelValuesResponse"),
)


@dataclass(frozen=True)
class StubBundle:
    """Container for lazily constructed gRPC stub callables and message classes."""

    stub_factory: Type[Any]
    messages: dict[str, Type[Any]]

    def message(self, name: str) -> Type[Any]:
        return self.messages[name]


_STUB_BUNDLE: StubBundle | None = None


def get_stub_bundle() -> StubBundle:
    """Return the cached dynamic gRPC stub bundle, creating it on first use."""

    global _STUB_BUNDLE
    if _STUB_BUNDLE is not None:
        return _STUB_BUNDLE

    pool = descriptor_pool.Default()
    try:
        pool.FindFileByName(_QUERIER_FILE)
    except KeyError:
        _register_proto_descriptors(pool)

    messages: dict[str, Type[Any]] = {}
    for _, request_name, response_name in METHODS:
        for name in (request_name, response_name):
            messages[name] = message_factory.GetMessageClass(
                pool.FindMessageTypeByName(f"querier.v1.{name}")
            )
    for name in ("ProfileType", "Series", "LabelPair", "Point"):
        messages[name] = message_factory.GetMessageClass(
            pool.FindMessageTypeByName(f"types.v1.{name}")
        )
    for name in ("FlameGraph", "Level"):
        messages[name] = message_factory.GetMessageClass(
            pool.FindMessageTypeByName(f"querier.v1.{name}")
        )

    class QuerierServiceStub:
        def __init__(self, channel: grpc.Channel) -> None:
            for rpc_name, request_name, response_name in METHODS:
                setattr(
                    self,
                    rpc_name,
                    channel.unary_unary(
                        f"/{SERVICE_NAME}/{rpc_name}",
                        request_serializer=messages[request_name].SerializeToString,
                        response_deserializer=messages[response_name].FromString,
                    ),
                )

    _STUB_BUNDLE = StubBundle(stub_factory=QuerierServiceStub, messages=messages)
    return _STUB_BUNDLE


def _register_proto_descriptors(pool: descriptor_pool.DescriptorPool) -> None:
    FieldType = descriptor_pb2.FieldDescriptorProto
    repeated = FieldType.LABEL_REPEATED

    types_proto = descriptor_pb2.FileDescriptorProto()
    types_proto.name = _TYPES_FILE
    types_proto.package = "types.v1"
    types_proto.syntax = "proto3"

    label_pair = types_proto.message_type.add()
    label_pair.name = "LabelPair"
    _add_field(label_pair, "name", 1, FieldType.TYPE_STRING)
    _add_field(label_pair, "value", 2, FieldType.TYPE_STRING)

    profile_type = types_proto.message_type.add()
    profile_type.name = "ProfileType"
    _add_field(profile_type, "ID", 1, FieldType.TYPE_STRING)
    _add_field(profile_type, "name", 2, FieldType.TYPE_STRING)
    _add_field(profile_type, "sample_type", 4, FieldType.TYPE_STRING)
    _add_field(profile_type, "sample_unit", 5, FieldType.TYPE_STRING)
    _add_field(profile_type, "period_type", 6, FieldType.TYPE_STRING)
    _add_field(profile_type, "period_unit", 7, FieldType.TYPE_STRING)

    point = types_proto.message_type.add()
    point.name = "Point"
    _add_field(point, "value", 1, FieldType.TYPE_DOUBLE)
    _add_field(point, "timestamp", 2, FieldType.TYPE_INT64)

    series = types_proto.message_type.add()
    series.name = "Series"
    _add_field(series, "labels", 1, FieldType.TYPE_MESSAGE, type_name=".types.v1.LabelPair", label=repeated)
    _add_field(series, "points", 2, FieldType.TYPE_MESSAGE, type_name=".types.v1.Point", label=repeated)

    pool.AddSerializedFile(types_proto.SerializeToString())

    file_proto = descriptor_pb2.FileDescriptorProto()
    file_proto.name = _QUERIER_FILE
    file_proto.package = "querier.v1"
    file_proto.syntax = "proto3"
    file_proto.dependency.append(_TYPES_FILE)

    file_proto.message_type.add().name = "ProfileTypesRequest"

    profile_types_res = file_proto.message_type.add()
    profile_types_res.name = "ProfileTypesResponse"
    _add_field(
        profile_types_res,
        "profile_types",
        1,
        FieldType.TYPE_MESSAGE,
        type_name=".types.v1.ProfileType",
        label=repeated,
    )

    file_proto.message_type.add().name = "LabelNamesRequest"

    label_names_res = file_proto.message_type.add()
    label_names_res.name = "LabelNamesResponse"
    _add_field(label_names_res, "names", 1, FieldType.TYPE_STRING, label=repeated)

    label_values_req = file_proto.message_type.add()
    label_values_req.name = "LabelValuesRequest"
    _add_field(label_values_req, "name", 1, FieldType.TYPE_STRING)

    label_values_res = file_proto.message_type.add()
    label_values_res.name = "LabelValuesResponse"
    _add_field(label_values_res, "names", 1, FieldType.TYPE_STRING, label=repeated)

    series_req = file_proto.message_type.add()
    series_req.name = "SelectSeriesRequest"
    _add_field(series_req, "profile_typeID", 1, FieldType.TYPE_STRING)
    _add_field(series_req, "label_selector", 2, FieldType.TYPE_STRING)
    _add_field(series_req, "start", 3, FieldType.TYPE_INT64)
    _add_field(series_req, "end", 4, FieldType.TYPE_INT64)
    _add_field(series_req, "group_by", 5, FieldType.TYPE_STRING, label=repeated)
    _add_field(series_req, "step", 6, FieldType.TYPE_DOUBLE)

    series_res = file_proto.message_type.add()
    series_res.name = "SelectSeriesResponse"
    _add_field(series_res, "series", 1, FieldType.TYPE_MESSAGE, type_name=".types.v1.Series", label=repeated)

    merge_req = file_proto.message_type.add()
    merge_req.name = "SelectMergeStacktracesRequest"
    _add_field(merge_req, "profile_typeID", 1, FieldType.TYPE_STRING)
    _add_field(merge_req, "label_selector", 2, FieldType.TYPE_STRING)
    _add_field(merge_req, "start", 3, FieldType.TYPE_INT64)
    _add_field(merge_req, "end", 4, FieldType.TYPE_INT64)
    # proto3 ``optional`` is encoded as a synthetic oneof
    merge_req.oneof_decl.add().name = "_max_nodes"
    max_nodes = _add_field(merge_req, "max_nodes", 5, FieldType.TYPE_INT64)
    max_nodes.oneof_index = 0
    max_nodes.proto3_optional = True

    level = file_proto.message_type.add()
    level.name = "Level"
    _add_field(level, "values", 1, FieldType.TYPE_INT64, label=repeated)

    flamegraph = file_proto.message_type.add()
    flamegraph.name = "FlameGraph"
    _add_field(flamegraph, "names", 1, FieldType.TYPE_STRING, label=repeated)
    _add_field(flamegraph, "levels", 2, FieldType.TYPE_MESSAGE, type_name=".querier.v1.Level", label=repeated)
    _add_field(flamegraph, "total", 3, FieldType.TYPE_INT64)
    _add_field(flamegraph, "max_self", 4, FieldType.TYPE_INT64)

    merge_res = file_proto.message_type.add()
    merge_res.name = "SelectMergeStacktracesResponse"
    _add_field(merge_res, "flamegraph", 1, FieldType.TYPE_MESSAGE, type_name=".querier.v1.FlameGraph")

    service = file_proto.service.add()
    service.name = "QuerierService"
    for rpc_name, request_name, response_name in METHODS:
        method = service.method.add()
        method.name = rpc_name
        method.input_type = f".querier.v1.{request_name}"
        method.output_type = f".querier.v1.{response_name}"

    pool.AddSerializedFile(file_proto.SerializeToString())


def _add_field(message, name, number, field_type, *, type_name=None, label=descriptor_pb2.FieldDescriptorProto.LABEL_OPTIONAL):
    field = message.field.add()
    field.name = name
    field.number = number
    field.label = label
    field.type = field_type
    if type_name:
        field.type_name = type_name
    return field


__all__ = ["METHODS", "SERVICE_NAME", "StubBundle", "get_stub_bundle"]
