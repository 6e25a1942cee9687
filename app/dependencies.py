# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Long-lived resources (connection pool, attachment service) are created by
# the application and kept on `app.state`; per-request services wrap them.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request
from psycopg_pool import AsyncConnectionPool

from app.config import settings
from core.services import AttachmentService, AuthService, MailService, RecordStore


def get_pool(request: Request) -> AsyncConnectionPool:
    """Return the pool opened by the application lifespan."""
    return request.app.state.db_pool


def get_record_store(pool: AsyncConnectionPool = Depends(get_pool)) -> RecordStore:
    return RecordStore(pool)


def get_attachment_service(request: Request) -> AttachmentService:
    """
    Return the application's attachment service.

    A single instance is shared so stored-name prefixes stay unique.
    """
    return request.app.state.attachments


def get_auth_service(store: RecordStore = Depends(get_record_store)) -> AuthService:
    return AuthService(
        store,
        secret_key=settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        token_ttl=settings.TOKEN_TTL_SECONDS,
        users_table=settings.USERS_TABLE,
    )


def get_mail_service() -> MailService:
    return MailService(
        host=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        sender=settings.MAIL_FROM,
        template_path=settings.MAIL_TEMPLATE_PATH,
        subject=settings.MAIL_SUBJECT,
        username=settings.SMTP_USERNAME,
        password=settings.SMTP_PASSWORD,
        use_tls=settings.SMTP_USE_TLS,
        timeout=settings.MAIL_TIMEOUT_SECONDS,
    )


# Type aliases for dependency injection
RecordStoreDep = Annotated[RecordStore, Depends(get_record_store)]
AttachmentsDep = Annotated[AttachmentService, Depends(get_attachment_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
MailServiceDep = Annotated[MailService, Depends(get_mail_service)]
