"""
Protobuf messages for the executor gRPC service.

The executor speaks package `executor`, service `Executor`. Only the
methods this service calls are described here; message classes are built
from an in-memory FileDescriptorProto, so no generated stubs are needed.
"""
from typing import Dict, Tuple

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import Message

PACKAGE = "executor"
SERVICE = "Executor"

_STRING = descriptor_pb2.FieldDescriptorProto.TYPE_STRING
_BOOL = descriptor_pb2.FieldDescriptorProto.TYPE_BOOL
_OPTIONAL = descriptor_pb2.FieldDescriptorProto.LABEL_OPTIONAL

# message name -> fields in tag order (tag = position + 1)
MESSAGE_FIELDS: Dict[str, Tuple[Tuple[str, int], ...]] = {
    "AppendCodeRequest": (("context", _STRING), ("workspace", _STRING), ("code", _STRING)),
    "AppendCodeResponse": (("success", _BOOL), ("error", _STRING)),
    "PlanRequest": (("context", _STRING), ("workspace", _STRING)),
    "PlanResponse": (("success", _BOOL), ("plan_output", _STRING), ("error", _STRING)),
    "ApplyRequest": (("context", _STRING), ("workspace", _STRING), ("plan_file", _STRING)),
    "ApplyResponse": (("success", _BOOL), ("apply_output", _STRING), ("error", _STRING)),
    "DestroyRequest": (("context", _STRING), ("workspace", _STRING)),
    "DestroyResponse": (("success", _BOOL), ("destroy_output", _STRING), ("error", _STRING)),
    "ClearCodeRequest": (("context", _STRING), ("workspace", _STRING)),
    "ClearCodeResponse": (("success", _BOOL), ("error", _STRING)),
    "CreateContextRequest": (("context", _STRING),),
    "CreateContextResponse": (("success", _BOOL), ("error", _STRING)),
    "CreateWorkspaceRequest": (("context", _STRING), ("workspace", _STRING)),
    "CreateWorkspaceResponse": (("success", _BOOL), ("error", _STRING)),
    "GetMainTfRequest": (("context", _STRING), ("workspace", _STRING)),
    "GetMainTfResponse": (("success", _BOOL), ("content", _STRING), ("error", _STRING)),
}

# rpc name -> (request message, response message)
METHODS: Dict[str, Tuple[str, str]] = {
    "AppendCode": ("AppendCodeRequest", "AppendCodeResponse"),
    "Plan": ("PlanRequest", "PlanResponse"),
    "Apply": ("ApplyRequest", "ApplyResponse"),
    "Destroy": ("DestroyRequest", "DestroyResponse"),
    "ClearCode": ("ClearCodeRequest", "ClearCodeResponse"),
    "CreateContext": ("CreateContextRequest", "CreateContextResponse"),
    "CreateWorkspace": ("CreateWorkspaceRequest", "CreateWorkspaceResponse"),
    "GetMainTf": ("GetMainTfRequest", "GetMainTfResponse"),
}


def build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="executor.proto",
        package=PACKAGE,
        syntax="proto3",
    )

    for message_name, fields in MESSAGE_FIELDS.items():
        message = file_proto.message_type.add(name=message_name)
        for number, (field_name, field_type) in enumerate(fields, start=1):
            message.field.add(
                name=field_name,
                number=number,
                type=field_type,
                label=_OPTIONAL,
            )

    service = file_proto.service.add(name=SERVICE)
    for method_name, (request_name, response_name) in METHODS.items():
        service.method.add(
            name=method_name,
            input_type=f".{PACKAGE}.{request_name}",
            output_type=f".{PACKAGE}.{response_name}",
        )

    return file_proto


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(build_file_descriptor().SerializeToString())

_MESSAGE_CLASSES: Dict[str, type] = {
    name: message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{PACKAGE}.{name}"))
    for name in MESSAGE_FIELDS
}


def message_class(name: str) -> type:
    """Get the generated message class for `name` (e.g. "PlanRequest")."""
    try:
        return _MESSAGE_CLASSES[name]
    except KeyError:
        raise KeyError(f"Unknown executor message: {name}") from None


def new_message(name: str, **fields) -> Message:
    return message_class(name)(**fields)


def method_path(method: str) -> str:
    """Full gRPC method path, e.g. /executor.Executor/Plan."""
    if method not in METHODS:
        raise KeyError(f"Unknown executor method: {method}")
    return f"/{PACKAGE}.{SERVICE}/{method}"
