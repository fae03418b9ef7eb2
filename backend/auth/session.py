"""
Session tokens.

A session is an HS256-signed JWT kept in an HttpOnly cookie. The token carries
the principal (sub, email, name) and an expiry; nothing is stored server-side.
An invalid or expired token is simply the absence of a principal.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jwt import decode, encode
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from backend.config import settings
from backend.schemas.auth import Principal

logger = logging.getLogger(__name__)

SESSION_ALGORITHM = "HS256"


def _secret() -> str:
    if not settings.SESSION_SECRET:
        raise ValueError(
            "SESSION_SECRET is not configured. "
            "Cannot sign or verify session tokens."
        )
    return settings.SESSION_SECRET


def issue_session_token(principal: Principal, now: Optional[datetime] = None) -> str:
    """
    Sign a session token for `principal`.

    Args:
        principal: The authenticated identity
        now: Issue time (defaults to current UTC time)

    Returns:
        Encoded JWT string
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": principal.id,
        "email": principal.email,
        "name": principal.name,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.SESSION_TTL_MINUTES),
    }
    return encode(payload, _secret(), algorithm=SESSION_ALGORITHM)


def decode_session_token(token: Optional[str]) -> Optional[Principal]:
    """
    Verify a session token and extract the principal.

    Returns:
        Principal, or None if the token is missing, expired, or invalid
    """
    if not token:
        return None

    try:
        payload = decode(
            token,
            _secret(),
            algorithms=[SESSION_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except ExpiredSignatureError:
        logger.info("Session token has expired")
        return None
    except InvalidTokenError as e:
        logger.warning(f"Invalid session token: {str(e)}")
        return None

    return Principal(
        id=str(payload["sub"]),
        email=str(payload.get("email") or ""),
        name=str(payload.get("name") or ""),
    )
