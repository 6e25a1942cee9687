# =============================================================================
# core/services/attachment_service.py - Attachment Resolver & File Storage
# =============================================================================
# Turns the attachment parts of a multipart request into the references
# that get stored on a record, and writes accepted files to the public
# upload directory.
#
# For each slot (`image`, `pdfFile`) a request may carry:
# - a file part -> a fresh name "<millis>_<original name>" is issued
# - a plain string -> "keep the current attachment", used verbatim
# - nothing -> None (the schema decides whether that is an error)
#
# Files are checked (count, extension, MIME type, size) as soon as they are
# picked out of the form, before any field validation. Bytes are written
# only after validation succeeds, and removed again if the database write
# that should reference them fails.
# =============================================================================

import asyncio
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path

from starlette.datastructures import FormData, UploadFile

from app.exceptions import (
    DuplicateAttachmentError,
    FileTooLargeError,
    StorageWriteError,
    UploadRejectedError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttachmentSlot:
    """A named multipart field that may hold one file, and the column it fills."""
    field: str
    column: str
    extensions: frozenset[str]
    mime_types: frozenset[str]
    required_message: str | None = None


IMAGE_SLOT = AttachmentSlot(
    field="image",
    column="image",
    extensions=frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"}),
    mime_types=frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"}),
    required_message="Image path is required",
)

PDF_SLOT = AttachmentSlot(
    field="pdfFile",
    column="pdf",
    extensions=frozenset({".pdf"}),
    mime_types=frozenset({"application/pdf"}),
)


@dataclass
class PendingUpload:
    """An accepted file whose bytes have not been written yet."""
    slot: AttachmentSlot
    upload: UploadFile
    stored_name: str


class AttachmentService:
    """
    Resolves attachment slots and owns the upload directory.

    Example:
        attachments = AttachmentService("public", max_bytes=10 * 1024 * 1024)
        pending, retained = attachments.accept(form, IMAGE_SLOT)
        image = attachments.resolve(retained, pending)
        ...validate...
        await attachments.persist([pending])
    """

    def __init__(self, upload_dir: str | Path, max_bytes: int):
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes
        self._last_stamp = 0

    # -------------------------------------------------------------------------
    # Naming
    # -------------------------------------------------------------------------

    def next_stored_name(self, original_name: str) -> str:
        """
        Issue "<millis>_<original_name>".

        The millisecond prefix never repeats within the process, so two
        uploads of the same file in the same millisecond still differ.
        """
        stamp = max(int(time.time() * 1000), self._last_stamp + 1)
        self._last_stamp = stamp
        return f"{stamp}_{original_name}"

    # -------------------------------------------------------------------------
    # Accepting Parts
    # -------------------------------------------------------------------------

    def check_upload(self, slot: AttachmentSlot, upload: UploadFile) -> None:
        """
        Reject a file part that may not be stored in `slot`.

        Raises:
            UploadRejectedError: Bad filename, extension or MIME type
            FileTooLargeError: Declared size above the limit
        """
        filename = upload.filename or ""
        allowed = sorted(slot.extensions)

        if ".." in filename or "/" in filename or "\\" in filename:
            raise UploadRejectedError(filename, allowed)

        ext = os.path.splitext(filename.lower())[1]
        if ext not in slot.extensions:
            raise UploadRejectedError(filename, allowed)

        if upload.content_type not in slot.mime_types:
            raise UploadRejectedError(filename, allowed)

        if upload.size is not None and upload.size > self.max_bytes:
            raise FileTooLargeError(upload.size / (1024 * 1024), self.max_bytes // (1024 * 1024))

    def accept(self, form: FormData, slot: AttachmentSlot) -> tuple[PendingUpload | None, str | None]:
        """
        Pick the file part and/or retained string sent for `slot`.

        An empty file input (no filename) counts as no file. More than one
        file, or more than one string, for the same slot is rejected.

        Returns:
            (pending upload or None, retained string or None)
        """
        values = form.getlist(slot.field)
        files = [v for v in values if isinstance(v, UploadFile) and v.filename]
        strings = [v for v in values if isinstance(v, str)]

        if len(files) > 1 or len(strings) > 1:
            raise DuplicateAttachmentError(slot.field)

        pending = None
        if files:
            self.check_upload(slot, files[0])
            pending = PendingUpload(
                slot=slot,
                upload=files[0],
                stored_name=self.next_stored_name(files[0].filename),
            )

        retained = strings[0] if strings else None
        return pending, retained

    @staticmethod
    def resolve(retained: str | None, pending: PendingUpload | None) -> str | None:
        """
        Final reference for a slot: the new upload wins, else the retained string.
        """
        if pending is not None:
            return pending.stored_name
        return retained or None

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    def _write(self, name: str, data: bytes) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        (self.upload_dir / name).write_bytes(data)

    async def persist(self, pending: list[PendingUpload | None]) -> None:
        """
        Write every pending upload to the upload directory.

        If any write fails, files already written by this call are removed.

        Raises:
            FileTooLargeError: Actual size above the limit
            StorageWriteError: Filesystem failure
        """
        written: list[PendingUpload] = []
        try:
            for item in pending:
                if item is None:
                    continue
                data = await item.upload.read()
                if len(data) > self.max_bytes:
                    raise FileTooLargeError(len(data) / (1024 * 1024), self.max_bytes // (1024 * 1024))
                try:
                    await asyncio.to_thread(self._write, item.stored_name, data)
                except OSError as e:
                    logger.error(f"Failed to write {item.stored_name}: {e}", exc_info=True)
                    raise StorageWriteError(item.stored_name) from e
                written.append(item)
                logger.info(f"Stored attachment {item.stored_name} ({len(data)} bytes)")
        except Exception:
            await self.discard(written)
            raise

    async def discard(self, pending: list[PendingUpload | None]) -> None:
        """Remove files written for a request whose record was never saved."""
        for item in pending:
            if item is None:
                continue
            path = self.upload_dir / item.stored_name
            try:
                await asyncio.to_thread(path.unlink, True)
                logger.info(f"Removed unreferenced attachment {item.stored_name}")
            except OSError as e:
                logger.warning(f"Could not remove {path}: {e}")

    def public_file(self, relative_path: str) -> Path | None:
        """
        Resolve a request path to a file inside the upload directory.

        Returns None for missing files and for paths that would escape it.
        """
        root = self.upload_dir.resolve()
        candidate = (root / relative_path).resolve()
        if not candidate.is_relative_to(root) or not candidate.is_file():
            return None
        return candidate
