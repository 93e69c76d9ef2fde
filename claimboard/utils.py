"""
Shared utilities for Claimboard.

This module provides common functions used across multiple modules
to avoid code duplication.
"""

import logging
from datetime import datetime, timezone

from claimboard.config import LOG_LEVEL
from claimboard.errors import ValidationError


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = LOG_LEVEL) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__ from the calling module)
        level: Logging level (default: LOG_LEVEL from config)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


# --- Time ---
def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


# --- Validation ---
def normalize_name(name) -> str:
    """
    Trim a display name and make sure something is left.

    Args:
        name: Raw name as typed by the user

    Returns:
        The name without leading/trailing whitespace

    Raises:
        ValidationError: If the name is missing or blank after trimming
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Please enter a valid user name.", title="Invalid name")
    return name.strip()


__all__ = [
    # Logging
    'setup_logging',
    # Time
    'utcnow',
    # Validation
    'normalize_name',
]
