import logging
import re
import sys
from datetime import datetime
from pathlib import Path

from colorama import Fore, Style, init

from .config import load_config

PACKAGE_LOGGER = "secure_payload"


class ColorFormatter(logging.Formatter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.color_map = {
            logging.DEBUG: Fore.CYAN,
            logging.INFO: Fore.GREEN,
            logging.WARNING: Fore.YELLOW,
            logging.ERROR: Fore.RED,
            logging.CRITICAL: Fore.MAGENTA,
        }

    def format(self, record):
        color = self.color_map.get(record.levelno, Fore.WHITE)
        message = super().format(record)
        return f"{color}{message}{Style.RESET_ALL}"


class Logger:
    """Named logger for the application edge.

    The first instance attaches colored stdout output and a daily file
    under ``paths.logs`` to the package logger, so the core modules, which
    only use ``logging.getLogger(__name__)``, log through the same
    handlers once the app is running. Importing the core alone configures
    nothing.

    Callers must never pass shared secrets, derived keys or decrypted
    plaintext to the returned logger.
    """

    def __init__(self, name, log_file=None, level=None):
        if log_file is None or level is None:
            config = load_config()
            log_file = config.paths.logs if log_file is None else log_file
            level = config.logging.level if level is None else level

        self.logger = logging.getLogger(name)

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.setLevel(level)

        # Loggers are process-wide; attach the handlers only once.
        if package_logger.handlers:
            return

        Path(log_file).mkdir(parents=True, exist_ok=True)
        init()

        format_string_console = (
            f"{Style.BRIGHT}%(levelname)-10s "
            + f"{Style.DIM}%(name)-28s "
            + "%(module)s.%(funcName)-24s "
            + f"{Style.RESET_ALL}%(message)s"
        )
        format_string_file = re.sub(
            r"\x1b\[[0-9;]*m", "", "%(asctime)s - " + format_string_console
        )

        file_handler = logging.FileHandler(
            log_file + f"/{datetime.now().strftime('%Y-%m-%d')}.log"
        )
        file_handler.setFormatter(logging.Formatter(format_string_file))

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColorFormatter(format_string_console))

        package_logger.addHandler(file_handler)
        package_logger.addHandler(console_handler)

    def get_logger(self):
        return self.logger
