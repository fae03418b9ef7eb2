"""
Auth pages and endpoints.

- GET  /auth/login  - sign-in form
- POST /auth/login  - verify credentials, start a session
- POST /auth/logout - end the session
- GET  /auth/me     - identity of the current session (JSON)

A rejected sign-in always renders the same page with the same message,
whether the email is unknown or the password is wrong.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from backend.auth.authorization import is_protected_path
from backend.auth.credentials import verify_credentials
from backend.auth.dependencies import require_principal
from backend.auth.session import issue_session_token
from backend.config import settings
from backend.db.client import get_supabase_client
from backend.schemas.auth import AuthMeResponse, Principal
from backend.services.user_service import UserLookupError
from backend.utils.constants import DASHBOARD_PATH, LOGIN_PATH
from backend.utils.forms import read_form_fields
from backend.utils.logging import get_logger
from backend.utils.templates import templates

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."


def safe_redirect_target(target: Optional[str]) -> str:
    """
    Only allow post-login redirects into the protected area.

    Anything else (absolute URLs, other sites, public pages) falls back to
    the dashboard.
    """
    if target and target.startswith("/") and not target.startswith("//"):
        path = target.split("?", 1)[0]
        if is_protected_path(path):
            return target
    return DASHBOARD_PATH


@router.get(
    "/login",
    response_class=HTMLResponse,
    summary="Sign-in form",
)
async def login_page(request: Request, callbackUrl: str = DASHBOARD_PATH) -> Response:
    return templates.TemplateResponse(
        request,
        "login.html",
        {
            "principal": None,
            "redirect_to": safe_redirect_target(callbackUrl),
            "email": "",
            "error": None,
        },
    )


@router.post(
    "/login",
    summary="Sign in with email and password",
    description="""
    Verify email/password against the stored bcrypt hash.

    - Success: session cookie set, 303 to `redirectTo` (protected paths only)
    - Rejected credentials: sign-in page re-rendered (401)
    - Users table unavailable: 500
    """
)
async def login(request: Request) -> Response:
    form = await read_form_fields(request)
    email = form.get("email", "")
    redirect_to = safe_redirect_target(form.get("redirectTo"))

    supabase_client = get_supabase_client()

    try:
        principal = await verify_credentials(
            supabase_client,
            email=email,
            password=form.get("password"),
        )
    except UserLookupError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "auth_unavailable",
                "details": "Could not verify credentials. Please try again later."
            }
        )

    if principal is None:
        return templates.TemplateResponse(
            request,
            "login.html",
            {
                "principal": None,
                "redirect_to": redirect_to,
                "email": email,
                "error": INVALID_CREDENTIALS_MESSAGE,
            },
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    response = RedirectResponse(url=redirect_to, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=issue_session_token(principal),
        max_age=settings.session_max_age_seconds(),
        httponly=True,
        samesite="lax",
        secure=settings.is_production(),
    )

    logger.info(f"Session started for user_id={principal.id}")

    return response


@router.post(
    "/logout",
    summary="Sign out",
)
async def logout() -> Response:
    response = RedirectResponse(url=LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get(
    "/me",
    response_model=AuthMeResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current session identity",
)
async def get_auth_me(
    principal: Annotated[Principal, Depends(require_principal)]
) -> AuthMeResponse:
    return AuthMeResponse(
        user_id=principal.id,
        email=principal.email,
        name=principal.name,
    )
