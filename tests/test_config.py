import logging

import pytest

from secure_payload.shared.config import (
    IvStrategyName,
    PayloadSchemaName,
    get_api_key,
    load_config,
)

BASE_CONFIG = """
[general]
title = "test"

[logging]
level = "debug"

[paths]
logs = "logs"

[network]
host = "127.0.0.1"
port = 9000
reload = false
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(BASE_CONFIG)
    return path


def test_repository_config_loads():
    config = load_config()

    assert config.merchant.payload_schema is PayloadSchemaName.SIGNED
    assert config.merchant.iv_strategy is IvStrategyName.PLAINTEXT_PREFIX


def test_merchant_defaults(config_file):
    config = load_config(config_file)

    assert config.logging.level == logging.DEBUG
    assert config.merchant.api_key_env == "API_KEY"
    assert config.merchant.verify_signature is True


def test_specific_config_overrides_sections(config_file, tmp_path):
    override = tmp_path / "override.toml"
    override.write_text('[merchant]\npayload_schema = "account"\niv_strategy = "random"\n')

    config = load_config(config_file, override)

    assert config.merchant.payload_schema is PayloadSchemaName.ACCOUNT
    assert config.merchant.iv_strategy is IvStrategyName.RANDOM
    assert config.network.port == 9000


def test_unknown_log_level_falls_back_to_info(config_file, tmp_path):
    override = tmp_path / "override.toml"
    override.write_text('[logging]\nlevel = "chatty"\n')

    assert load_config(config_file, override).logging.level == logging.INFO


def test_get_api_key(config_file, monkeypatch):
    config = load_config(config_file)

    monkeypatch.setenv("API_KEY", "secret-value")
    assert get_api_key(config) == "secret-value"

    monkeypatch.delenv("API_KEY")
    with pytest.raises(RuntimeError, match="API_KEY"):
        get_api_key(config)
