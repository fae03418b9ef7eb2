"""
Route authorization predicate.

authorize() decides, for one navigation, whether the request may proceed. It is
a pure function of (path, principal presence): no I/O, no request object, and
it returns a decision for every input.

    under /dashboard | logged in | decision
    -----------------+-----------+------------------------------
    yes              | yes       | ALLOW
    yes              | no        | DENY      -> sign-in page
    no               | yes       | REDIRECT  -> /dashboard
    no               | no        | ALLOW
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from backend.utils.constants import DASHBOARD_PATH, PROTECTED_PREFIX


class AuthOutcome(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class AuthDecision:
    """
    Attributes:
        outcome: What the gate should do
        redirect_to: Target for REDIRECT, None otherwise
    """
    outcome: AuthOutcome
    redirect_to: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.outcome is AuthOutcome.ALLOW


ALLOW = AuthDecision(AuthOutcome.ALLOW)
DENY = AuthDecision(AuthOutcome.DENY)


def is_protected_path(path: str) -> bool:
    """
    True for the protected prefix itself and anything below it.

    Matching is per path segment: /dashboard/invoices is protected,
    /dashboards is not.
    """
    prefix = PROTECTED_PREFIX.rstrip("/")
    return path == prefix or path.startswith(prefix + "/")


def authorize(path: str, is_logged_in: bool) -> AuthDecision:
    """
    Decide whether a navigation to `path` may proceed.

    Args:
        path: Requested URL path (no query string)
        is_logged_in: Whether an authenticated principal is present

    Returns:
        ALLOW, DENY (caller sends the user to sign in), or a REDIRECT
        to the dashboard for logged-in users on public pages.
    """
    if is_protected_path(path):
        return ALLOW if is_logged_in else DENY

    if is_logged_in:
        return AuthDecision(AuthOutcome.REDIRECT, redirect_to=DASHBOARD_PATH)

    return ALLOW
