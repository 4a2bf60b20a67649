"""Payload records to Base64 text and back.

    record --protobuf--> bytes --AES-192-CBC--> blob --Base64--> str

The record variant is fixed per codec instance. Decoding never guesses
which variant a message holds.
"""

import binascii
import logging
from base64 import b64decode, b64encode

from secure_payload.models.payload import (
    PayloadRecord,
    PayloadSchema,
    SignedCheckoutPayload,
    payload_model,
)
from secure_payload.models.wire import from_wire, to_wire

from .cipher import BlockCipherCodec
from .errors import EncodingError
from .keys import derive_key

__all__ = ["PayloadCodec", "decode_payload", "encode_payload"]

logger = logging.getLogger(__name__)


def _to_text(data: bytes) -> str:
    return b64encode(data).decode("ascii")


def _from_text(message: str) -> bytes:
    try:
        return b64decode(message, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Payload is not valid Base64: {e}") from e


class PayloadCodec[R: PayloadRecord]:
    """Encrypts and decrypts one payload variant.

    ``PayloadCodec(SignedCheckoutPayload)`` is the checkout default. Pass a
    :class:`BlockCipherCodec` to change how embedded IVs are chosen; the
    default reuses the plaintext prefix, as the platform expects.
    """

    def __init__(self, model: type[R], cipher: BlockCipherCodec | None = None):
        self.model = model
        self.cipher = cipher or BlockCipherCodec()

    @classmethod
    def for_schema(cls, schema: PayloadSchema, cipher: BlockCipherCodec | None = None):
        return cls(payload_model(schema), cipher)

    def __repr__(self):
        return f"{type(self).__name__}({self.model.__name__}, {self.cipher!r})"

    def _serialize(self, record: R) -> bytes:
        if type(record) is not self.model:
            raise TypeError(
                f"{type(self).__name__} for {self.model.__name__} "
                f"cannot encode {type(record).__name__}"
            )
        return to_wire(record)

    def encode(self, record: R, secret: str) -> str:
        plaintext = self._serialize(record)
        message = _to_text(self.cipher.encrypt(plaintext, derive_key(secret)))
        logger.debug(
            "Encoded %s (%d bytes) into %d chars",
            self.model.__name__,
            len(plaintext),
            len(message),
        )
        return message

    def decode(self, message: str, secret: str) -> R:
        blob = _from_text(message)
        plaintext = self.cipher.decrypt(blob, derive_key(secret))
        record = from_wire(self.model, plaintext)
        logger.debug("Decoded %s from %d chars", self.model.__name__, len(message))
        return record

    def encode_with_iv(self, record: R, secret: str, iv: bytes) -> str:
        plaintext = self._serialize(record)
        return _to_text(self.cipher.encrypt_with_iv(plaintext, derive_key(secret), iv))

    def decode_with_iv(self, message: str, secret: str, iv: bytes) -> R:
        ciphertext = _from_text(message)
        plaintext = self.cipher.decrypt_with_iv(ciphertext, derive_key(secret), iv)
        return from_wire(self.model, plaintext)


def encode_payload(record: PayloadRecord, secret: str) -> str:
    """Encode ``record`` with the codec for its own variant."""
    return PayloadCodec(type(record)).encode(record, secret)


def decode_payload[R: PayloadRecord](
    message: str,
    secret: str,
    model: type[R] = SignedCheckoutPayload,
) -> R:
    return PayloadCodec(model).decode(message, secret)
