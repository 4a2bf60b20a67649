from enum import IntEnum
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Seconds or milliseconds, whichever the caller agreed with the platform.
Timestamp = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]


class PayloadSchema(IntEnum):
    """Known payload layouts. Picked explicitly on both ends, never sniffed."""

    PLAIN = 1
    SIGNED = 2
    ACCOUNT = 3


class PayloadRecord(BaseModel):
    """Base for the record variants carried inside an encrypted payload.

    Field declaration order is the protobuf tag order; see
    :mod:`secure_payload.models.wire`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    schema_version: ClassVar[PayloadSchema]
    wire_name: ClassVar[str]

    timestamp: Timestamp = 0
    client_id: str = ""


class PlainPayload(PayloadRecord):
    schema_version: ClassVar[PayloadSchema] = PayloadSchema.PLAIN
    wire_name: ClassVar[str] = "PlainPayload"

    metadata: dict[str, str] = Field(default_factory=dict)


class SignedCheckoutPayload(PayloadRecord):
    """Checkout payload carrying an HMAC signature over the order details."""

    schema_version: ClassVar[PayloadSchema] = PayloadSchema.SIGNED
    wire_name: ClassVar[str] = "SignedCheckoutPayload"

    sign: str = ""
    metadata: dict[str, str] = Field(default_factory=dict)


class AccountPayload(PayloadRecord):
    schema_version: ClassVar[PayloadSchema] = PayloadSchema.ACCOUNT
    wire_name: ClassVar[str] = "AccountPayload"

    account_id: str = ""
    ref_id: str = ""


PAYLOAD_MODELS: dict[PayloadSchema, type[PayloadRecord]] = {
    model.schema_version: model
    for model in (PlainPayload, SignedCheckoutPayload, AccountPayload)
}


def payload_model(schema: PayloadSchema) -> type[PayloadRecord]:
    return PAYLOAD_MODELS[PayloadSchema(schema)]
