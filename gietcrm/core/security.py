"""
Access token helpers.
The identity provider issues JWT access tokens; signatures are checked by
the backend on every call, here we only read the claims.
"""

from datetime import datetime, timezone
from typing import Optional
from jose import JWTError, jwt
from pydantic import BaseModel


class TokenData(BaseModel):
    """Token payload data."""
    user_id: Optional[str] = None
    email: Optional[str] = None
    expires_at: Optional[datetime] = None


def decode_token(token: str) -> Optional[TokenData]:
    """
    Read the claims of an access token without verifying it.

    Args:
        token: JWT access token

    Returns:
        TokenData if the token is well formed, None otherwise
    """
    try:
        payload = jwt.get_unverified_claims(token)
    except JWTError:
        return None

    user_id = payload.get("sub")
    if user_id is None:
        return None

    exp = payload.get("exp")
    try:
        expires_at = (
            datetime.fromtimestamp(int(exp), tz=timezone.utc) if exp is not None else None
        )
    except (TypeError, ValueError, OverflowError, OSError):
        return None

    return TokenData(
        user_id=str(user_id),
        email=payload.get("email"),
        expires_at=expires_at,
    )


def is_expired(expires_at: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """True when the expiry instant has passed. A missing expiry never expires."""
    if expires_at is None:
        return False
    now = now or datetime.now(timezone.utc)
    return expires_at <= now
