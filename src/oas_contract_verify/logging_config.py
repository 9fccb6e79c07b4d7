"""Process-wide logging setup."""

import logging

from oas_contract_verify.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LOGGING_CONFIGURED = False


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once; ``level`` overrides the settings."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    level_name = (level or get_settings().LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING), format=LOG_FORMAT)
    _LOGGING_CONFIGURED = True
