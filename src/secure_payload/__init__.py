from .core import (
    BlockCipherCodec,
    PayloadCodec,
    PayloadError,
    decode_payload,
    derive_key,
    encode_payload,
    sign,
    verify,
)
from .models import (
    AccountPayload,
    CheckoutSign,
    PayloadSchema,
    PlainPayload,
    SignedCheckoutPayload,
)

__all__ = [
    "AccountPayload",
    "BlockCipherCodec",
    "CheckoutSign",
    "PayloadCodec",
    "PayloadError",
    "PayloadSchema",
    "PlainPayload",
    "SignedCheckoutPayload",
    "decode_payload",
    "derive_key",
    "encode_payload",
    "sign",
    "verify",
]
