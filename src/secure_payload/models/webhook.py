from enum import StrEnum

from pydantic import Field, JsonValue

from .serde_base import SerdeBase


class WebhookType(StrEnum):
    APPROVED = "approved"
    DECLINED = "declined"
    APPROVED_ON_HOLD = "approved_on_hold"
    REFUNDS = "Refunds"
    PRE_AUTH = "PreAuth"
    CAPTURE = "Capture"
    VOID = "Void"
    PAYOUT = "Payout"


class Webhook(SerdeBase):
    webhook_type: str = Field(alias="type")

    @property
    def kind(self) -> WebhookType | None:
        try:
            return WebhookType(self.webhook_type)
        except ValueError:
            return None


class WebhookMeta(SerdeBase):
    server_time: int
    server_timezone: str
    api_version: str
    payload: str | None = None  # Encrypted checkout payload, returned verbatim
    cashier_session_id: str
    platform_id: str | None = None
    tracking_id: str | None = None
    affiliate_id: str | None = None


class WebhookPayload(SerdeBase):
    webhook: Webhook
    data: str  # JSON document, see WebhookData
    meta: WebhookMeta

    def parse_data(self) -> "WebhookData":
        return WebhookData.model_validate_json(self.data)


class AttributesSource(SerdeBase):
    email: str | None = None
    ip_address: str | None = None
    name: str | None = None


class AttributesCustomer(SerdeBase):
    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    zip_code: str | None = None
    phone: str | None = None
    extra_data: JsonValue = None


class Avs(SerdeBase):
    result: str | None = None
    zip_match: str | None = None
    address_match: str | None = None
    name_match: str | None = None
    message: str | None = None


class AttributesVerifications(SerdeBase):
    cavv: str | None = None
    cavv_message: str | None = None
    avs: Avs | None = None


class ChargeAttributes(SerdeBase):
    is3_d: bool | None = None
    live_mode: bool | None = None
    amount: float
    status: str
    card_number: str | None = None
    currency: str
    payment_method: str | None = None
    description: str | None = None
    decline_code: str | None = None
    decline_reason: str | None = None
    reference_id: str | None = None
    created_at: int
    updated_at: int | None = None
    source: AttributesSource | None = None
    card_masked_number: str | None = None
    card_brand: str | None = None
    card_holder_name: str | None = None
    customer: AttributesCustomer | None = None
    credit_card_token: str | None = None
    mid_alias: str | None = None
    is_declined_due_to_funds: bool | None = None
    is_hard_decline: bool | None = None
    verifications: AttributesVerifications | None = None
    crypto_currency: str | None = None


class Charge(SerdeBase):
    charge_type: str = Field(alias="type")
    id: str
    uuid: str | None = None
    psp_order_id: str
    attributes: ChargeAttributes
    is_refundable: bool | None = None
    refund_id: str | None = None
    operation_type: str | None = None
    is_recurring: bool | None = None


class WebhookData(SerdeBase):
    order_id: str
    psp_name: str | None = None
    charge: Charge | None = None
