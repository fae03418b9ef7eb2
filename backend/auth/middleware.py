"""
Auth gate middleware.

Runs once per navigation:
1. Resolve the principal from the session cookie -> request.state.principal
2. Skip the gate for paths outside its matcher (health, static, logout, docs)
3. Ask authorize() and act on the decision:
   - ALLOW    -> continue to the route
   - DENY     -> 303 to the sign-in page with ?callbackUrl=<path>
   - REDIRECT -> 303 to the decision's target
"""

import logging
from typing import Tuple
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from backend.auth.authorization import AuthOutcome, authorize
from backend.auth.dependencies import resolve_principal
from backend.utils.constants import LOGIN_PATH

logger = logging.getLogger(__name__)

# Paths the gate never applies to (matched per segment)
UNGATED_PREFIXES: Tuple[str, ...] = (
    "/health",
    "/static",
    "/auth/logout",
    "/auth/me",
    "/docs",
    "/redoc",
    "/openapi.json",
)


def is_gated(path: str) -> bool:
    for prefix in UNGATED_PREFIXES:
        if path == prefix or path.startswith(prefix + "/"):
            return False
    return True


def login_redirect_url(path: str) -> str:
    return f"{LOGIN_PATH}?{urlencode({'callbackUrl': path})}"


class AuthGateMiddleware(BaseHTTPMiddleware):
    """Apply the authorization predicate to every gated request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        principal = resolve_principal(request)
        request.state.principal = principal

        path = request.url.path
        if not is_gated(path):
            return await call_next(request)

        decision = authorize(path, principal is not None)

        if decision.outcome is AuthOutcome.DENY:
            logger.info(f"Unauthenticated request to {path}; redirecting to sign-in")
            return RedirectResponse(url=login_redirect_url(path), status_code=303)

        if decision.outcome is AuthOutcome.REDIRECT:
            logger.debug(f"Authenticated request to public page {path}; redirecting")
            return RedirectResponse(url=decision.redirect_to, status_code=303)

        return await call_next(request)
