"""
Process-wide logging for the Shamiri service.

Provider errors can echo request details back at us, so every handler carries
a filter that masks the configured API keys before a record is written.
"""

import logging
import sys
from typing import Iterable, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'

# Own loggers follow the configured level; these stay at WARNING
_APP_LOGGERS = ("shamiri", "server")
_QUIET_LOGGERS = ("openai", "anthropic", "httpx", "httpcore", "sqlalchemy.engine", "aiosqlite")

MASK = "***"


class SecretMaskingFilter(logging.Filter):
    """Replace known secret values in a record's rendered message."""

    def __init__(self, secrets: Iterable[str] = ()):
        super().__init__()
        # Very short values would mask ordinary words
        self.secrets = sorted({s for s in secrets if s and len(s) >= 8}, key=len, reverse=True)

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True
        message = record.getMessage()
        masked = message
        for secret in self.secrets:
            masked = masked.replace(secret, MASK)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    secrets: Iterable[str] = (),
) -> None:
    """
    Install console (and optionally file) handlers on the root logger.

    Args:
        log_level: Level name for the application loggers
        log_file: Also append to this file when given
        secrets: Values to mask in every emitted message
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    formatter = logging.Formatter(LOG_FORMAT)
    masking = SecretMaskingFilter(secrets)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(masking)
        root_logger.addHandler(handler)

    for name in _APP_LOGGERS:
        logging.getLogger(name).setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
