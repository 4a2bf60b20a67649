import base64
import logging

from cryptography.hazmat.primitives import constant_time, hashes, hmac
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError


from .errors import SigningError

__all__ = ["canonicalize", "sign", "verify"]

logger = logging.getLogger(__name__)


def canonicalize(attestation: BaseModel) -> str:
    """Compact JSON of ``attestation`` in declared field order.

    ``CheckoutSign(amount=10.0, order_id="abc", currency="USD")`` becomes
    ``{"amount":10.0,"order_id":"abc","currency":"USD"}``.
    """
    try:
        return attestation.model_dump_json()
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise SigningError(
            f"Cannot canonicalize {type(attestation).__name__}: {e}"
        ) from e


def sign(attestation: BaseModel, secret: str) -> str:
    """Base64 HMAC-SHA512 of the canonical form, keyed by the raw secret.

    The secret is used as-is, without key derivation.
    """
    canonical = canonicalize(attestation)

    mac = hmac.HMAC(secret.encode("utf-8"), hashes.SHA512())
    mac.update(canonical.encode("utf-8"))
    return base64.b64encode(mac.finalize()).decode("ascii")


def verify(attestation: BaseModel, secret: str, signature: str) -> bool:
    """Recompute the signature and compare it in constant time."""
    expected = sign(attestation, secret)
    valid = constant_time.bytes_eq(
        expected.encode("ascii"), signature.encode("utf-8")
    )
    if not valid:
        logger.debug("Signature mismatch for %s", type(attestation).__name__)
    return valid
