"""gRPC contract for the CurrencyConverter service.

Message classes are built at import time from a descriptor equivalent to
``proto/currency.proto``, so no code generation step is needed. The module
exposes the same names generated ``*_pb2`` / ``*_pb2_grpc`` modules would:
message classes, a servicer base, a client stub and a registration helper.
"""

from abc import ABC, abstractmethod

import grpc
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "currency"
SERVICE_NAME = f"{PACKAGE}.CurrencyConverter"
CONVERT_METHOD = f"/{SERVICE_NAME}/Convert"

_FIELD = descriptor_pb2.FieldDescriptorProto


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="currency_converter/currency.proto",
        package=PACKAGE,
        syntax="proto3",
    )

    request = file_proto.message_type.add(name="ConvertRequest")
    request.field.add(name="amount", json_name="amount", number=1,
                      type=_FIELD.TYPE_DOUBLE, label=_FIELD.LABEL_OPTIONAL)
    request.field.add(name="source_currency", json_name="sourceCurrency", number=2,
                      type=_FIELD.TYPE_STRING, label=_FIELD.LABEL_OPTIONAL)
    request.field.add(name="target_currency", json_name="targetCurrency", number=3,
                      type=_FIELD.TYPE_STRING, label=_FIELD.LABEL_OPTIONAL)

    response = file_proto.message_type.add(name="ConvertResponse")
    response.field.add(name="converted_amount", json_name="convertedAmount", number=1,
                       type=_FIELD.TYPE_DOUBLE, label=_FIELD.LABEL_OPTIONAL)

    service = file_proto.service.add(name="CurrencyConverter")
    service.method.add(
        name="Convert",
        input_type=f".{PACKAGE}.ConvertRequest",
        output_type=f".{PACKAGE}.ConvertResponse",
    )
    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file().SerializeToString())

ConvertRequest = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName(f"{PACKAGE}.ConvertRequest")
)
ConvertResponse = message_factory.GetMessageClass(
    _pool.FindMessageTypeByName(f"{PACKAGE}.ConvertResponse")
)


class CurrencyConverterServicer(ABC):
    """Server-side interface of the CurrencyConverter service."""

    @abstractmethod
    async def Convert(self, request, context):
        """Convert an amount between two currencies."""


class CurrencyConverterStub:
    """Client-side stub of the CurrencyConverter service."""

    def __init__(self, channel: grpc.aio.Channel):
        self.Convert = channel.unary_unary(
            CONVERT_METHOD,
            request_serializer=ConvertRequest.SerializeToString,
            response_deserializer=ConvertResponse.FromString,
        )


def add_CurrencyConverterServicer_to_server(servicer: CurrencyConverterServicer, server) -> None:
    """Register a servicer implementation on a gRPC server."""
    rpc_method_handlers = {
        "Convert": grpc.unary_unary_rpc_method_handler(
            servicer.Convert,
            request_deserializer=ConvertRequest.FromString,
            response_serializer=ConvertResponse.SerializeToString,
        ),
    }
    generic_handler = grpc.method_handlers_generic_handler(SERVICE_NAME, rpc_method_handlers)
    server.add_generic_rpc_handlers((generic_handler,))
