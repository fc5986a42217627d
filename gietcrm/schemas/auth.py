"""
Authentication schemas.
"""

from datetime import datetime
from pydantic import EmailStr, Field

from gietcrm.models.user import User
from gietcrm.schemas.base import BaseSchema


class LoginRequest(BaseSchema):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class SignInResult(BaseSchema):
    """
    Outcome of a sign-in attempt.
    Rejected credentials are a normal result with ``ok`` set to False.
    """

    ok: bool
    user: User | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    expires_at: datetime | None = None
    error: str | None = None


class TokenResponse(BaseSchema):
    """Session handed back to the caller after login."""

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_at: datetime | None = None
    user: User
