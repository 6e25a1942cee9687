# =============================================================================
# app/routers/common.py - Shared Request Handling
# =============================================================================
# Helpers used by more than one router:
# - read_json_body: tolerant JSON body decoding
# - save_record: the multipart create/edit pipeline for app & project tables
# - keep_stored_attachments: edit fallback to the attachment already stored
# - results_response: the {status, results} list shape
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder

from app.exceptions import FormValidationError, MissingTableError
from core.models import RecordForm
from core.services import AttachmentService, AttachmentSlot, RecordStore
from core.validation import SchemaKind, validate

logger = logging.getLogger(__name__)


async def read_json_body(request: Request) -> dict[str, Any]:
    """
    Decode a JSON object body.

    Anything that is not a JSON object is treated as an empty body so that
    validation reports every required field.
    """
    try:
        body = await request.json()
    except ValueError:
        logger.debug(f"Unparseable JSON body on {request.url.path}")
        return {}
    return body if isinstance(body, dict) else {}


def results_response(rows: list[dict[str, Any]]) -> dict[str, Any]:
    return {"status": "success", "results": jsonable_encoder(rows)}


async def keep_stored_attachments(
    store: RecordStore,
    table: str,
    record: RecordForm,
    slots: list[AttachmentSlot],
) -> None:
    """
    Let an edit omit a required attachment when the row already has one.

    The omitted column is left out of the update, so the stored reference
    is reused. A row without one fails validation like a create would.

    Raises:
        RecordNotFoundError: No row has the record's id
        FormValidationError: The row has no stored reference either
    """
    missing = [
        slot for slot in slots
        if slot.required_message and getattr(record, slot.column, None) is None
    ]
    if not missing:
        return

    row = await store.read_one(table, record.id)
    errors = [
        {"field": slot.column, "message": slot.required_message}
        for slot in missing
        if not row.get(slot.column)
    ]
    if errors:
        raise FormValidationError(errors)


async def save_record(
    request: Request,
    store: RecordStore,
    attachments: AttachmentService,
    kind: SchemaKind,
    text_fields: list[str],
    slots: list[AttachmentSlot],
) -> None:
    """
    Create or update one record from a multipart form.

    Steps run strictly in this order, so nothing is written when an earlier
    step fails:
    1. Table name present
    2. Attachment parts accepted (count, type, size)
    3. Fields validated against `kind`, attachment slots already resolved;
       an edit that omits a required attachment must find one on the row
    4. Accepted files written to the upload directory
    5. Row inserted/updated; files from step 4 removed if this fails

    The parsed form (and any spooled upload files) is closed on every exit.

    Raises:
        MissingTableError, UploadRejectedError, FormValidationError,
        RecordNotFoundError (edit, no matching row), DatabaseError
    """
    async with request.form() as form:
        table = form.get("table")
        if not isinstance(table, str) or not table:
            raise MissingTableError()

        accepted = [(slot, *attachments.accept(form, slot)) for slot in slots]

        raw: dict[str, Any] = {}
        for name in text_fields:
            value = form.get(name)
            if isinstance(value, str):
                raw[name] = value
        for slot, pending, retained in accepted:
            reference = attachments.resolve(retained, pending)
            if reference is not None:
                raw[slot.column] = reference

        record = validate(kind, raw)
        record_id = getattr(record, "id", None)
        if record_id is not None:
            await keep_stored_attachments(store, table, record, slots)

        pending_uploads = [pending for _, pending, _ in accepted]
        await attachments.persist(pending_uploads)
        try:
            if record_id is None:
                await store.create(table, record.to_columns())
            else:
                await store.update(table, record.to_columns(), record_id)
        except Exception:
            await attachments.discard(pending_uploads)
            raise
