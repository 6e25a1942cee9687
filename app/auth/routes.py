# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication:
# - POST /login: exchange email + password for a session token
# - GET /auth/verify: check a stored token is still valid
# =============================================================================

import logging

from fastapi import APIRouter, Depends, Request

from app.auth.dependencies import get_current_user
from app.dependencies import AuthServiceDep
from app.routers.common import read_json_body
from core.models import AuthUser, LoginForm
from core.validation import SchemaKind, validate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login")
async def login(request: Request, auth: AuthServiceDep) -> dict:
    """
    Log in with email and password.

    Returns:
        dict: success shape with a token valid for one hour

    Raises:
        400: Missing fields, unknown email or wrong password
    """
    form: LoginForm = validate(SchemaKind.LOGIN, await read_json_body(request))
    token = await auth.login(form)
    return {
        "status": "success",
        "message": "Successfully Logged In!",
        "token": token,
    }


@router.get("/auth/verify")
async def verify_token(user: AuthUser = Depends(get_current_user)) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is missing, invalid or expired
    """
    return {
        "status": "success",
        "user": {"id": user.id, "email": user.email},
    }
