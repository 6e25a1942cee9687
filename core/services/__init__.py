# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .record_store import RecordStore
from .attachment_service import (
    IMAGE_SLOT,
    PDF_SLOT,
    AttachmentService,
    AttachmentSlot,
    PendingUpload,
)
from .auth_service import AuthService
from .mail_service import MailService

__all__ = [
    "RecordStore",
    "AttachmentService",
    "AttachmentSlot",
    "PendingUpload",
    "IMAGE_SLOT",
    "PDF_SLOT",
    "AuthService",
    "MailService",
]
