"""Logging configuration for wbglance."""

import logging
import sys

from wbglance.config import is_debug

# Create logger for wbglance
logger = logging.getLogger("wbglance")


def setup_logger(level: int | None = None) -> None:
    """Setup the wbglance logger with default configuration.

    Args:
        level: Logging level. Defaults to DEBUG when WBGLANCE_DEBUG=1, INFO otherwise.
    """
    if logger.handlers:
        # Already configured
        return

    if level is None:
        level = logging.DEBUG if is_debug() else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter("wbglance: %(message)s")
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def mask_secret(secret: str) -> str:
    """Return a short preview of a secret that is safe to log.

    Args:
        secret: The secret value (e.g. an API key)

    Returns:
        First and last four characters joined by "...", or "***" for short values.
    """
    trimmed = secret.strip()
    if len(trimmed) <= 8:
        return "***"
    return f"{trimmed[:4]}...{trimmed[-4:]}"


# Initialize logger on import
setup_logger()
