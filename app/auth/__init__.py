# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Login (credential check + token issuance) and token verification.
#
# Usage:
#   from app.auth import get_current_user
#   from core.models import AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import get_current_user

__all__ = [
    "get_current_user",
]
