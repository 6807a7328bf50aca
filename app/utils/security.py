"""
Security utilities for bearer token verification
"""

import jwt
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional, List
from uuid import uuid4

import structlog
from pydantic import ValidationError

from app.core.config import get_settings
from app.models.auth import TokenData, CurrentUser

logger = structlog.get_logger(__name__)


class TokenManager:
    """JWT token management utilities"""

    def __init__(self, secret_key: Optional[str] = None, algorithm: Optional[str] = None):
        self._secret_key = secret_key
        self._algorithm = algorithm

    @property
    def secret_key(self) -> str:
        return self._secret_key or get_settings().SECRET_KEY

    @property
    def algorithm(self) -> str:
        return self._algorithm or get_settings().JWT_ALGORITHM

    def create_access_token(
        self,
        user_id: str,
        email: Optional[str] = None,
        roles: Optional[List[str]] = None,
        expires_delta: Optional[timedelta] = None,
        extra_claims: Optional[Dict[str, Any]] = None
    ) -> str:
        """Create JWT access token.

        Production tokens come from the identity provider; this is used by
        local tooling and tests.
        """
        now = datetime.now(timezone.utc)
        if expires_delta is None:
            expires_delta = timedelta(minutes=get_settings().ACCESS_TOKEN_EXPIRE_MINUTES)

        payload = {
            "sub": user_id,
            "email": email,
            "roles": roles or [],
            "exp": now + expires_delta,
            "iat": now,
            "jti": str(uuid4()),
            "token_type": "access"
        }

        if extra_claims:
            payload.update(extra_claims)

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        """Verify and decode JWT token"""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            logger.warning("Token has expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning("Token validation failed", error=str(e))
            return None

    def extract_token_data(self, payload: Dict[str, Any]) -> Optional[TokenData]:
        """Extract structured token data from payload"""
        try:
            return TokenData(
                sub=payload["sub"],
                email=payload.get("email"),
                roles=payload.get("roles") or [],
                exp=payload["exp"],
                iat=payload.get("iat"),
                token_type=payload.get("token_type", "access")
            )
        except KeyError as e:
            logger.warning("Missing required token field", field=str(e))
            return None
        except ValidationError as e:
            logger.warning("Malformed token claims", error=str(e))
            return None

    def resolve_principal(self, token: str) -> Optional[CurrentUser]:
        """Verify an access token and return the principal it names."""
        payload = self.verify_token(token)
        if not payload:
            return None

        token_data = self.extract_token_data(payload)
        if not token_data or token_data.token_type != "access":
            return None

        return CurrentUser.from_token_data(token_data)


# Global instances
token_manager = TokenManager()
