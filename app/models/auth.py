"""
Authentication models for the request principal.

Tokens are issued by an external identity provider; this service only
verifies them and turns the claims into a CurrentUser.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class TokenData(BaseModel):
    """JWT token payload model."""
    sub: str = Field(..., description="User ID")  # Subject
    email: Optional[str] = Field(None, description="Email address")
    roles: List[str] = Field(default_factory=list, description="User roles")
    exp: int = Field(..., description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")
    token_type: str = Field("access", description="Token type")

    @field_validator("sub")
    @classmethod
    def validate_sub(cls, v: str) -> str:
        """Principals are identified by UUID."""
        UUID(v)
        return v


class CurrentUser(BaseModel):
    """Current authenticated user context model."""
    user_id: str = Field(..., description="User ID")
    email: Optional[str] = Field(None, description="Email address")
    roles: List[str] = Field(default_factory=list, description="User roles")

    @classmethod
    def from_token_data(cls, token_data: TokenData) -> "CurrentUser":
        """Create CurrentUser from verified token claims."""
        return cls(
            user_id=token_data.sub,
            email=token_data.email,
            roles=token_data.roles,
        )
