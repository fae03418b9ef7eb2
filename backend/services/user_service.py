"""
User record service.

CRITICAL RULES:
1. users.password holds a bcrypt hash, never plaintext
2. A failed lookup (storage unavailable) raises UserLookupError; "no such user"
   returns None. Callers must keep the two apart.
3. NEVER log passwords or hashes
"""

import logging
from typing import Any, Dict, Optional, cast

import bcrypt
from supabase import Client

from backend.db.client import run_query
from backend.schemas.auth import Principal, StoredUser
from backend.utils.logging import mask_email

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


class UserLookupError(Exception):
    """The users table could not be queried."""


async def get_user_by_email(
    supabase_client: Client,
    email: str,
) -> Optional[StoredUser]:
    """
    Look up a user by exact email match.

    Matching is case-sensitive, as the column collation decides.

    Args:
        supabase_client: Supabase client
        email: Email as submitted

    Returns:
        The stored user, or None if no row matches

    Raises:
        UserLookupError: If the query itself fails
    """
    try:
        result = await run_query(
            supabase_client.table(USERS_TABLE)
            .select("id, name, email, password")
            .eq("email", email)
            .limit(1)
        )
    except Exception as e:
        logger.error(f"Failed to fetch user: {e}", exc_info=True)
        raise UserLookupError("Failed to fetch user.") from e

    if not result.data:
        return None

    row = cast(Dict[str, Any], result.data[0])

    return StoredUser(
        id=str(row["id"]),
        name=row.get("name") or "",
        email=row["email"],
        password=row["password"],
    )


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


async def create_user(
    supabase_client: Client,
    name: str,
    email: str,
    password: str,
) -> Principal:
    """
    Create a dashboard user with a bcrypt-hashed password.

    Used by scripts/create_user.py; the dashboard has no sign-up flow.

    Raises:
        Exception: If the insert fails or returns no row
    """
    user_data = {
        "name": name,
        "email": email,
        "password": hash_password(password),
    }

    result = await run_query(supabase_client.table(USERS_TABLE).insert(user_data))

    if not result.data:
        raise Exception("Failed to create user: no data returned")

    row = cast(Dict[str, Any], result.data[0])
    logger.info(f"User created: id={row.get('id')} email={mask_email(email)}")

    return Principal(id=str(row["id"]), name=row["name"], email=row["email"])
