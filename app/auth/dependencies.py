# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Session tokens are HS256-signed and stateless: a token is valid when its
# signature checks out and its `exp` claim is in the future.
#
# Usage:
#   from app.auth import get_current_user
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from pydantic import ValidationError

from app.dependencies import get_auth_service
from core.models import AuthUser
from core.services import AuthService

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor (missing header handled below, not by FastAPI)
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth: AuthService = Depends(get_auth_service),
) -> AuthUser:
    """
    Extract and validate the user from a session token.

    Args:
        credentials: Bearer token from Authorization header
        auth: Service holding the signing key

    Returns:
        AuthUser: The authenticated user

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise _unauthorized("Authentication token is required")

    try:
        payload = auth.decode_token(credentials.credentials)
    except ExpiredSignatureError:
        logger.warning("Session token has expired")
        raise _unauthorized("Token has expired")
    except (JWTError, ValidationError) as e:
        logger.warning(f"Session token validation failed: {e}")
        raise _unauthorized("Invalid token")

    return AuthUser(id=payload.id, email=payload.email)
