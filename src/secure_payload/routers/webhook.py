from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from secure_payload.checkout import codec_from_config
from secure_payload.core import verify
from secure_payload.models import CheckoutSign, SignedCheckoutPayload, WebhookPayload
from secure_payload.shared import Logger, get_api_key, load_config
from secure_payload.shared.http import payload_error_handler

logger = Logger(__name__).get_logger()

router = APIRouter()

config = load_config()
merchant = config.merchant
codec = codec_from_config(config)


def verify_order_signature(
    notification: WebhookPayload, record: SignedCheckoutPayload, secret: str
):
    """
    Check the signature stored in the decrypted payload against the order
    the platform reports in ``data``.
    Raises HTTPException(400) if the payload carries no signature, or if
    the charge is missing or does not match.
    """
    if not record.sign:
        logger.warning("Payload for client %s carries no signature", record.client_id)
        raise HTTPException(status_code=400, detail="Missing signature")

    try:
        data = notification.parse_data()
    except ValidationError as e:
        logger.warning("Webhook data is not a valid order document: %s", e)
        raise HTTPException(status_code=400, detail="Invalid webhook data") from e

    if data.charge is None:
        logger.warning("Webhook for order %s carries no charge", data.order_id)
        raise HTTPException(status_code=400, detail="Missing charge")

    attestation = CheckoutSign(
        amount=data.charge.attributes.amount,
        order_id=data.order_id,
        currency=data.charge.attributes.currency,
    )
    if not verify(attestation, secret, record.sign):
        logger.warning("Signature verification failed for order %s", data.order_id)
        raise HTTPException(status_code=400, detail="Invalid signature")

    logger.info("Signature verification successful for order %s", data.order_id)


@router.post("/webhooks/payment")
async def payment_webhook(notification: WebhookPayload):
    """
    Receive a payment notification and authenticate it through the
    encrypted checkout payload we attached to the cashier session.
    """
    meta = notification.meta
    logger.info(
        "Received %s webhook for cashier session %s",
        notification.webhook.webhook_type,
        meta.cashier_session_id,
    )
    if notification.webhook.kind is None:
        logger.warning("Unknown webhook type: %s", notification.webhook.webhook_type)

    if not meta.payload:
        logger.warning("Webhook for session %s has no payload", meta.cashier_session_id)
        raise HTTPException(status_code=400, detail="Missing payload")

    with payload_error_handler():
        secret = get_api_key(config)
        record = codec.decode(meta.payload, secret)

        if merchant.verify_signature and isinstance(record, SignedCheckoutPayload):
            verify_order_signature(notification, record, secret)

    return JSONResponse(
        content={
            "message": "Webhook accepted",
            "type": notification.webhook.webhook_type,
            "client_id": record.client_id,
            "cashier_session_id": meta.cashier_session_id,
        }
    )
