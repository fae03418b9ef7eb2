"""
Credential verifier for email/password sign-in.

verify_credentials() returns the principal only when the email exists and the
password matches the stored bcrypt hash. Every rejection looks the same to the
caller (None), so a response can't reveal whether the email or the password
was wrong. A storage failure is different: it raises UserLookupError.
"""

import logging
from typing import Optional

import bcrypt
from supabase import Client

from backend.schemas.auth import Principal
from backend.services.user_service import get_user_by_email
from backend.services.validation import validate_credentials
from backend.utils.logging import mask_email

logger = logging.getLogger(__name__)


def password_matches(password: str, password_hash: str) -> bool:
    """
    Compare a submitted password with a stored bcrypt hash.

    bcrypt.checkpw compares digests in constant time. A malformed stored hash
    (or a password bcrypt refuses) counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError as e:
        logger.warning(f"Password hash check failed: {e}")
        return False


async def verify_credentials(
    supabase_client: Client,
    email: Optional[str],
    password: Optional[str],
) -> Optional[Principal]:
    """
    Authenticate an email/password pair.

    Args:
        supabase_client: Supabase client
        email: Submitted email
        password: Submitted password (plaintext, never logged)

    Returns:
        The principal on success, None on any credential rejection

    Raises:
        UserLookupError: If the users table can't be queried
    """
    credentials = validate_credentials({"email": email, "password": password})
    if credentials is None:
        logger.info("Login rejected: malformed credentials")
        return None

    user = await get_user_by_email(supabase_client, credentials.email)

    if user is None:
        logger.info(f"Login rejected: no user for {mask_email(credentials.email)}")
        return None

    if not password_matches(credentials.password, user.password):
        logger.info(f"Login rejected: password mismatch for user_id={user.id}")
        return None

    logger.info(f"Login succeeded for user_id={user.id}")
    return user.to_principal()
