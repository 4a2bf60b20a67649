from .config import Config, get_api_key, load_config
from .logger import Logger

__all__ = ["Config", "Logger", "get_api_key", "load_config"]
