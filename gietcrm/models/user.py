"""
Authenticated user.
Not stored as an application entity: it comes from the identity provider.
"""

from typing import Any, Mapping, Optional

from gietcrm.models.base import BaseModel


class User(BaseModel):
    """Identity of the acting user."""

    email: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_identity(cls, payload: Mapping[str, Any]) -> "User":
        """Build from the identity provider's user object."""
        metadata = payload.get("user_metadata") or {}
        return cls(
            id=str(payload["id"]),
            email=payload.get("email"),
            name=metadata.get("name") or metadata.get("full_name"),
        )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
