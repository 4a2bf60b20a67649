from secure_payload.checkout import build_checkout_payload, codec_from_config
from secure_payload.core import PayloadCodec, RandomIV, verify
from secure_payload.models import AccountPayload, CheckoutSign, SignedCheckoutPayload
from secure_payload.shared import load_config

SECRET = "API_KEY_VALUE"


def test_build_checkout_payload_carries_valid_signature():
    message = build_checkout_payload(
        order_id="abc",
        amount=10.0,
        currency="USD",
        client_id="test-client-id",
        secret=SECRET,
        timestamp=123,
        metadata={"test": "test"},
    )
    record = PayloadCodec(SignedCheckoutPayload).decode(message, SECRET)

    assert record.timestamp == 123
    assert record.client_id == "test-client-id"
    assert record.metadata == {"test": "test"}
    assert verify(CheckoutSign(amount=10.0, order_id="abc", currency="USD"), SECRET, record.sign)


def test_build_checkout_payload_defaults_timestamp():
    message = build_checkout_payload(
        order_id="abc", amount=1.5, currency="EUR", client_id="client", secret=SECRET
    )
    record = PayloadCodec(SignedCheckoutPayload).decode(message, SECRET)

    assert record.timestamp > 1_600_000_000
    assert record.metadata == {}


def test_codec_from_config(tmp_path):
    override = tmp_path / "override.toml"
    override.write_text('[merchant]\npayload_schema = "account"\niv_strategy = "random"\n')

    codec = codec_from_config(load_config(specific_config_file=override))

    assert codec.model is AccountPayload
    assert isinstance(codec.cipher.iv_strategy, RandomIV)
