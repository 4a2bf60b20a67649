from pydantic import BaseModel, ConfigDict


class CheckoutSign(BaseModel):
    """Order details attested by the checkout payload signature.

    Field order here is the canonical order; do not reorder.
    """

    model_config = ConfigDict(frozen=True)

    amount: float
    order_id: str
    currency: str
