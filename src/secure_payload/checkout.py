import time

from secure_payload.core import BlockCipherCodec, PayloadCodec, PlaintextPrefixIV, RandomIV, sign
from secure_payload.models import CheckoutSign, PayloadSchema, SignedCheckoutPayload
from secure_payload.shared.config import Config, IvStrategyName, PayloadSchemaName

_IV_STRATEGIES = {
    IvStrategyName.PLAINTEXT_PREFIX: PlaintextPrefixIV,
    IvStrategyName.RANDOM: RandomIV,
}

_SCHEMAS = {
    PayloadSchemaName.PLAIN: PayloadSchema.PLAIN,
    PayloadSchemaName.SIGNED: PayloadSchema.SIGNED,
    PayloadSchemaName.ACCOUNT: PayloadSchema.ACCOUNT,
}


def codec_from_config(config: Config) -> PayloadCodec:
    """Payload codec for the variant and IV strategy named in ``[merchant]``."""
    merchant = config.merchant
    cipher = BlockCipherCodec(_IV_STRATEGIES[merchant.iv_strategy]())
    return PayloadCodec.for_schema(_SCHEMAS[merchant.payload_schema], cipher)


def build_checkout_payload(
    order_id: str,
    amount: float,
    currency: str,
    client_id: str,
    secret: str,
    timestamp: int | None = None,
    metadata: dict[str, str] | None = None,
    codec: PayloadCodec[SignedCheckoutPayload] | None = None,
) -> str:
    """Build the encrypted ``payload`` field of a cashier session request.

    The order details are signed with ``secret`` and the signature travels
    inside the encrypted record, so the webhook receiver can check that
    the charge it is told about matches the order it created.
    """
    signature = sign(
        CheckoutSign(amount=amount, order_id=order_id, currency=currency), secret
    )
    record = SignedCheckoutPayload(
        timestamp=int(time.time()) if timestamp is None else timestamp,
        client_id=client_id,
        sign=signature,
        metadata=metadata or {},
    )
    codec = codec or PayloadCodec(SignedCheckoutPayload)
    return codec.encode(record, secret)
