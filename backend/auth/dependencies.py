"""
FastAPI dependency functions for the current session.

The gate middleware resolves the principal from the session cookie once per
request and stores it on request.state.principal. These dependencies read it
from there so route handlers receive the principal as an explicit argument.
"""

import logging
from typing import Optional

from fastapi import HTTPException, Request, status

from backend.config import settings
from backend.auth.session import decode_session_token
from backend.schemas.auth import Principal

logger = logging.getLogger(__name__)


def resolve_principal(request: Request) -> Optional[Principal]:
    """
    Resolve the principal for a request from its session cookie.

    Used by the middleware; routes should depend on get_current_principal.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    return decode_session_token(token)


async def get_current_principal(request: Request) -> Optional[Principal]:
    """
    Return the principal for this request, or None.

    Falls back to decoding the cookie when the middleware did not run for
    this path (e.g. paths outside the gate's matcher).
    """
    if hasattr(request.state, "principal"):
        return request.state.principal
    return resolve_principal(request)


async def require_principal(request: Request) -> Principal:
    """
    Return the principal or raise 401 (JSON endpoints only).

    Raises:
        HTTPException: 401 if there is no valid session
    """
    principal = await get_current_principal(request)

    if principal is None:
        logger.warning("Missing or invalid session")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "unauthorized", "details": "No active session"}
        )

    return principal
