"""
Tests for user lookup and creation.
"""

import bcrypt
import pytest

from backend.services.user_service import (
    UserLookupError,
    create_user,
    get_user_by_email,
    hash_password,
)
from conftest import make_client, make_query

USER_ROW = {
    "id": "410544b2-4001-4271-9855-fec4b6a6442a",
    "name": "User",
    "email": "user@nextmail.com",
    "password": "$2b$04$hashedvaluehashedvaluehashedvaluehashedvalue",
}


class TestGetUserByEmail:
    """Tests for get_user_by_email."""

    @pytest.mark.asyncio
    async def test_existing_user_is_returned(self):
        users = make_query(data=[USER_ROW])
        client = make_client(users=users)

        user = await get_user_by_email(client, "user@nextmail.com")

        assert user is not None
        assert user.id == USER_ROW["id"]
        assert user.to_principal().email == "user@nextmail.com"
        users.eq.assert_called_once_with("email", "user@nextmail.com")

    @pytest.mark.asyncio
    async def test_unknown_email_returns_none(self):
        client = make_client(users=make_query(data=[]))

        assert await get_user_by_email(client, "nobody@nextmail.com") is None

    @pytest.mark.asyncio
    async def test_query_failure_raises_lookup_error(self):
        client = make_client(users=make_query(error=Exception("connection reset")))

        with pytest.raises(UserLookupError, match="Failed to fetch user."):
            await get_user_by_email(client, "user@nextmail.com")


class TestCreateUser:
    """Tests for hash_password and create_user."""

    def test_hash_password_is_bcrypt(self):
        hashed = hash_password("123456")

        assert hashed != "123456"
        assert bcrypt.checkpw(b"123456", hashed.encode("utf-8"))

    @pytest.mark.asyncio
    async def test_create_user_stores_hash_not_plaintext(self):
        users = make_query(data=[{"id": USER_ROW["id"], "name": "User", "email": "user@nextmail.com"}])
        client = make_client(users=users)

        principal = await create_user(client, "User", "user@nextmail.com", "123456")

        assert principal.id == USER_ROW["id"]
        stored = users.insert.call_args[0][0]
        assert stored["password"] != "123456"
        assert bcrypt.checkpw(b"123456", stored["password"].encode("utf-8"))

    @pytest.mark.asyncio
    async def test_create_user_without_returned_row_raises(self):
        client = make_client(users=make_query(data=[]))

        with pytest.raises(Exception, match="no data returned"):
            await create_user(client, "User", "user@nextmail.com", "123456")
