from enum import StrEnum
from logging import CRITICAL, DEBUG, ERROR, INFO, WARNING
from os import PathLike, environ
from pathlib import Path
from tomllib import load

from pydantic import BaseModel, field_validator

DEFAULT_CONFIG_PATH = Path(environ.get("SECURE_PAYLOAD_CONFIG", "config.toml"))


class PayloadSchemaName(StrEnum):
    PLAIN = "plain"
    SIGNED = "signed"
    ACCOUNT = "account"


class IvStrategyName(StrEnum):
    PLAINTEXT_PREFIX = "plaintext_prefix"
    RANDOM = "random"


class General(BaseModel):
    title: str


class Logging(BaseModel):
    level: int

    @field_validator("level", mode="before")
    @classmethod
    def convert_log_level(cls, value):
        if isinstance(value, int):
            return value
        log_levels = {
            "DEBUG": DEBUG,
            "INFO": INFO,
            "WARNING": WARNING,
            "ERROR": ERROR,
            "CRITICAL": CRITICAL,
        }
        return log_levels.get(value.upper(), INFO)


class Paths(BaseModel):
    logs: str


class Merchant(BaseModel):
    # Name of the environment variable holding the shared secret.
    # The secret itself is never written to the config file.
    api_key_env: str = "API_KEY"
    payload_schema: PayloadSchemaName = PayloadSchemaName.SIGNED
    iv_strategy: IvStrategyName = IvStrategyName.PLAINTEXT_PREFIX
    verify_signature: bool = True


class Network(BaseModel):
    host: str
    port: int
    reload: bool


class Config(BaseModel):
    general: General
    paths: Paths
    logging: Logging
    merchant: Merchant = Merchant()
    network: Network


def load_config(
    shared_config_file: PathLike = DEFAULT_CONFIG_PATH,
    specific_config_file: PathLike | None = None,
) -> Config:
    """Load and merge configurations from TOML files."""
    # Load shared config
    with Path(shared_config_file).open("rb") as f:
        config_data = load(f)

    # Load and merge specific config if provided
    if specific_config_file:
        with Path(specific_config_file).open("rb") as f:
            specific_data = load(f)
            config_data.update(specific_data)

    return Config(**config_data)


def get_api_key(config: Config) -> str:
    """Resolve the merchant shared secret from the environment.

    Raises RuntimeError when the configured variable is not set.
    """
    name = config.merchant.api_key_env
    value = environ.get(name)
    if not value:
        raise RuntimeError(f"Environment variable {name} is not set")
    return value
