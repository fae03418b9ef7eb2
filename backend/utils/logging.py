"""
Logging utilities for the Invoice Dashboard backend.

SECURITY RULES:
- NEVER log submitted passwords, stored bcrypt hashes or session tokens
- NEVER log the session secret or the Supabase secret key
- NEVER log whole form payloads (the login form carries a password)
- Log emails only through mask_email()

Fine to log: invoice ids, user ids, request paths, invoice status, error
classes and sanitized messages.
"""

import logging
from typing import Optional

from backend.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _configured_level() -> int:
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger for `name` with its own stream handler.

    Args:
        name: Module name (typically __name__)
        level: Logging level; defaults to settings.LOG_LEVEL (INFO if unknown)

    Usage:
        >>> from backend.utils.logging import get_logger
        >>> logger = get_logger(__name__)
    """
    logger = logging.getLogger(name)
    logger.setLevel(level if level is not None else _configured_level())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)

    return logger


def mask_email(email: Optional[str]) -> str:
    """
    Reduce an email to something safe to log.

    >>> mask_email("user@nextmail.com")
    'u***@nextmail.com'
    >>> mask_email("nonsense")
    '***'
    """
    if not email or "@" not in email:
        return "***"
    local, _, domain = email.partition("@")
    return f"{local[:1]}***@{domain}"
