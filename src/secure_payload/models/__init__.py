from .payload import (
    AccountPayload,
    PayloadRecord,
    PayloadSchema,
    PlainPayload,
    SignedCheckoutPayload,
    payload_model,
)
from .serde_base import SerdeBase
from .signature import CheckoutSign
from .webhook import (
    Charge,
    ChargeAttributes,
    Webhook,
    WebhookData,
    WebhookMeta,
    WebhookPayload,
    WebhookType,
)

__all__ = [
    "AccountPayload",
    "Charge",
    "ChargeAttributes",
    "CheckoutSign",
    "PayloadRecord",
    "PayloadSchema",
    "PlainPayload",
    "SerdeBase",
    "SignedCheckoutPayload",
    "Webhook",
    "WebhookData",
    "WebhookMeta",
    "WebhookPayload",
    "WebhookType",
    "payload_model",
]
