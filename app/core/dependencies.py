"""
FastAPI Dependencies
"""

from typing import Annotated, Optional

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.models.auth import CurrentUser
from app.utils.security import token_manager

logger = structlog.get_logger(__name__)

# Security scheme
security = HTTPBearer(auto_error=False)


# Authentication dependencies
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """Get current authenticated user"""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    current_user = token_manager.resolve_principal(credentials.credentials)
    if not current_user:
        logger.info("Rejected bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    structlog.contextvars.bind_contextvars(user_id=current_user.user_id)
    return current_user


# Type aliases
CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]


__all__ = [
    "security",
    "get_current_user",
    "CurrentUserDep",
]
