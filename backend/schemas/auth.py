"""
Pydantic schemas for authentication.

These models define the principal carried by a session and the JSON contract
of the auth endpoints.
"""

from typing import Optional
from pydantic import BaseModel, Field


class Principal(BaseModel):
    """
    The authenticated identity associated with a session.

    Never carries the password hash.
    """
    id: str = Field(..., description="User UUID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Login email")


class StoredUser(BaseModel):
    """
    A row of the users table.

    `password` holds a bcrypt hash; plaintext passwords are never stored.
    """
    id: str
    name: str
    email: str
    password: str

    def to_principal(self) -> Principal:
        return Principal(id=self.id, name=self.name, email=self.email)


class Credentials(BaseModel):
    """Shape-validated login input."""
    email: str
    password: str


class AuthMeResponse(BaseModel):
    """
    Response for GET /auth/me - Identity of the current session.
    """
    user_id: str = Field(..., description="User UUID (from the session 'sub' claim)")
    email: Optional[str] = Field(None, description="User's email")
    name: Optional[str] = Field(None, description="User's display name")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "410544b2-4001-4271-9855-fec4b6a6442a",
                    "email": "user@nextmail.com",
                    "name": "User",
                }
            ]
        }
    }
