"""
Token module data models.
"""

from datetime import timedelta
from typing import Optional

from pydantic import BaseModel, Field

from shared.models import AuthenticatedUser, TokenLifetime, UserRole

TOKEN_ISSUER = "MaBar-Auth-Service"
MAX_TOKEN_AGE = timedelta(days=7)

__all__ = ["TOKEN_ISSUER", "MAX_TOKEN_AGE", "TokenLifetime", "Claims"]


class Claims(BaseModel):
    """
    Decoded session token payload.

    Timestamps are integer seconds since the epoch, as in the JWT.
    """

    model_config = {"frozen": True, "extra": "ignore"}

    id: str = Field(..., min_length=1, description="Subject (user ID)")
    email: str = Field(..., description="User's email at issue time")
    role: Optional[UserRole] = Field(None, description="Role at issue time")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
    iss: str = Field(..., description="Issuer")

    def to_identity(self) -> AuthenticatedUser:
        return AuthenticatedUser(id=self.id, email=self.email, role=self.role)
