"""Protobuf wire form of the payload records.

The payment platform parses the decrypted payload as a proto3 message, so
the records are serialized with the real protobuf runtime. Descriptors are
built once at import time into a private pool; the resulting message
classes are immutable and safe to share across threads.

    message PlainPayload {
        int64 timestamp = 1;
        string client_id = 2;
        map<string, string> metadata = 3;
    }

    message SignedCheckoutPayload {
        int64 timestamp = 1;
        string client_id = 2;
        string sign = 3;
        map<string, string> metadata = 4;
    }

    message AccountPayload {
        int64 timestamp = 1;
        string client_id = 2;
        string account_id = 3;
        string ref_id = 4;
    }
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import DecodeError, Message
from pydantic import ValidationError

from secure_payload.core.errors import DeserializationError

from .payload import AccountPayload, PayloadRecord, PlainPayload, SignedCheckoutPayload

__all__ = ["PACKAGE", "from_wire", "message_class", "to_wire"]

PACKAGE = "secure_payload.v1"

_F = descriptor_pb2.FieldDescriptorProto


def _add_field(message, name, number, field_type, label=_F.LABEL_OPTIONAL, type_name=None):
    field = message.field.add(name=name, number=number, type=field_type, label=label)
    if type_name:
        field.type_name = type_name
    return field


def _add_string_map(message, name, number):
    entry_name = "".join(part.capitalize() for part in name.split("_")) + "Entry"
    entry = message.nested_type.add(name=entry_name)
    entry.options.map_entry = True
    _add_field(entry, "key", 1, _F.TYPE_STRING)
    _add_field(entry, "value", 2, _F.TYPE_STRING)
    _add_field(
        message,
        name,
        number,
        _F.TYPE_MESSAGE,
        label=_F.LABEL_REPEATED,
        type_name=f".{PACKAGE}.{message.name}.{entry_name}",
    )


def _build_pool() -> descriptor_pool.DescriptorPool:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="secure_payload/v1/payload.proto",
        package=PACKAGE,
        syntax="proto3",
    )

    plain = file_proto.message_type.add(name=PlainPayload.wire_name)
    _add_field(plain, "timestamp", 1, _F.TYPE_INT64)
    _add_field(plain, "client_id", 2, _F.TYPE_STRING)
    _add_string_map(plain, "metadata", 3)

    signed = file_proto.message_type.add(name=SignedCheckoutPayload.wire_name)
    _add_field(signed, "timestamp", 1, _F.TYPE_INT64)
    _add_field(signed, "client_id", 2, _F.TYPE_STRING)
    _add_field(signed, "sign", 3, _F.TYPE_STRING)
    _add_string_map(signed, "metadata", 4)

    account = file_proto.message_type.add(name=AccountPayload.wire_name)
    _add_field(account, "timestamp", 1, _F.TYPE_INT64)
    _add_field(account, "client_id", 2, _F.TYPE_STRING)
    _add_field(account, "account_id", 3, _F.TYPE_STRING)
    _add_field(account, "ref_id", 4, _F.TYPE_STRING)

    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(file_proto.SerializeToString())
    return pool


_pool = _build_pool()

_classes: dict[str, type[Message]] = {
    model.wire_name: message_factory.GetMessageClass(
        _pool.FindMessageTypeByName(f"{PACKAGE}.{model.wire_name}")
    )
    for model in (PlainPayload, SignedCheckoutPayload, AccountPayload)
}


def message_class(model: type[PayloadRecord]) -> type[Message]:
    return _classes[model.wire_name]


def _is_map(field) -> bool:
    return field.message_type is not None and field.message_type.GetOptions().map_entry


def to_wire(record: PayloadRecord) -> bytes:
    """Serialize a record to proto3 bytes (tag order, map keys sorted)."""
    message = message_class(type(record))(**record.model_dump())
    return message.SerializeToString(deterministic=True)


def from_wire[R: PayloadRecord](model: type[R], data: bytes) -> R:
    """Parse proto3 bytes into ``model``.

    Unlike a stock proto3 parser this refuses fields the schema does not
    define, including known tags sent with the wrong wire type: a record
    that decrypted under the wrong key must not come back looking valid.
    """
    message = message_class(model)()
    try:
        message.ParseFromString(data)
    except (DecodeError, ValueError) as e:
        raise DeserializationError(f"Malformed {model.__name__}: {e}") from e

    full_size = message.ByteSize()
    message.DiscardUnknownFields()
    if message.ByteSize() != full_size:
        raise DeserializationError(
            f"Malformed {model.__name__}: unexpected fields outside the schema"
        )

    values = {}
    for field in message.DESCRIPTOR.fields:
        value = getattr(message, field.name)
        values[field.name] = dict(value) if _is_map(field) else value

    try:
        return model.model_validate(values)
    except ValidationError as e:
        raise DeserializationError(f"Malformed {model.__name__}: {e}") from e
