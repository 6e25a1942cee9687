# =============================================================================
# core/services/auth_service.py - Credential Check & Token Issuance
# =============================================================================
# Login flow:
# 1. Look up the user by email in the users table
# 2. Compare the submitted password against the stored bcrypt hash
# 3. Sign a short-lived token carrying {id, email}
#
# Tokens are stateless: nothing is stored server-side, verification is the
# signature plus the expiry claim. bcrypt runs in a worker thread so the
# event loop is never blocked by hashing.
# =============================================================================

import asyncio
import logging
import time
from typing import Any

import bcrypt
from jose import jwt

from app.exceptions import FormValidationError
from core.models import Credential, LoginForm, TokenPayload
from core.services.record_store import RecordStore

logger = logging.getLogger(__name__)

TOKEN_TTL_SECONDS = 3600


class AuthService:
    """
    Verifies credentials and issues session tokens.

    Example:
        auth = AuthService(store, secret_key="...")
        token = await auth.login(LoginForm(email="a@b.co", password="pw"))
        payload = auth.decode_token(token)
    """

    def __init__(
        self,
        store: RecordStore,
        secret_key: str,
        algorithm: str = "HS256",
        token_ttl: int = TOKEN_TTL_SECONDS,
        users_table: str = "users",
    ):
        self.store = store
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.token_ttl = token_ttl
        self.users_table = users_table

    async def find_credential(self, email: str) -> Credential | None:
        """Return the stored credential for `email`, or None."""
        row = await self.store.find_one_by(self.users_table, "email", email)
        return Credential.model_validate(row) if row else None

    @staticmethod
    def _check(password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt hash")
            return False

    async def verify_password(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self._check, password, password_hash)

    def issue_token(self, claims: dict[str, Any], ttl: int | None = None) -> str:
        """
        Sign `claims` with an issued-at time and an expiry `ttl` seconds later.
        """
        issued_at = int(time.time())
        payload = {
            **claims,
            "iat": issued_at,
            "exp": issued_at + (ttl if ttl is not None else self.token_ttl),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> TokenPayload:
        """
        Verify signature and expiry, then return the payload.

        Raises:
            jose.ExpiredSignatureError: Token expired
            jose.JWTError: Bad signature or malformed token
        """
        payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        return TokenPayload.model_validate(payload)

    async def login(self, form: LoginForm) -> str:
        """
        Check `form` against the users table and return a signed token.

        Raises:
            FormValidationError: Unknown email or wrong password (field-level)
        """
        credential = await self.find_credential(form.email)
        if credential is None:
            logger.info("Login attempt for unknown email")
            raise FormValidationError.for_field("email", "User does not exist")

        if not await self.verify_password(form.password, credential.password):
            logger.info(f"Incorrect password for user {credential.id}")
            raise FormValidationError.for_field("password", "Incorrect password")

        logger.info(f"User {credential.id} logged in")
        return self.issue_token({"id": credential.id, "email": credential.email})
