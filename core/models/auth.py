# =============================================================================
# core/models/auth.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict


class Credential(BaseModel):
    """
    A row of the users table, as far as login cares.

    `password` is the bcrypt hash, never the plain password.
    """
    model_config = ConfigDict(extra="ignore")

    id: int
    email: str
    password: str


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a session token.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    email: str


class TokenPayload(BaseModel):
    """
    Decoded session token.

    Tokens carry only the user's id and email plus the standard
    issued-at / expiry timestamps.
    """
    id: int
    email: str
    iat: int  # Issued at timestamp
    exp: int  # Expiration timestamp
