# =============================================================================
# app/routers/projects.py - Project Record Endpoints
# =============================================================================
# CRUD over project tables. Projects carry a cover image and an optional
# PDF (multipart part `pdfFile`, stored in column `pdf`).
#
# POST /projects                  multipart: table, image (file), pdfFile (file, optional)
# POST /edit/projects             as above plus id; either slot may be a kept name
# GET  /projects?db=              all rows
# GET  /edit/projects?db=&id=     one row
# GET  /projects/delete?type=&id= delete one row
# =============================================================================

import logging

from fastapi import APIRouter, Request

from app.dependencies import AttachmentsDep, RecordStoreDep
from app.exceptions import MissingParameterError, MissingTableError
from app.routers.common import results_response, save_record
from core.services import IMAGE_SLOT, PDF_SLOT
from core.validation import SchemaKind

logger = logging.getLogger(__name__)

router = APIRouter()

PROJECT_SLOTS = [IMAGE_SLOT, PDF_SLOT]


@router.post("/projects")
async def create_project_record(request: Request, store: RecordStoreDep, attachments: AttachmentsDep) -> dict:
    await save_record(request, store, attachments, SchemaKind.PROJECT_CREATE, [], PROJECT_SLOTS)
    return {"status": "success", "message": "Project submitted successfully!"}


@router.post("/edit/projects")
async def edit_project_record(request: Request, store: RecordStoreDep, attachments: AttachmentsDep) -> dict:
    await save_record(request, store, attachments, SchemaKind.PROJECT_EDIT, ["id"], PROJECT_SLOTS)
    return {"status": "success", "message": "Project updated successfully!"}


@router.get("/projects")
async def list_project_records(store: RecordStoreDep, db: str | None = None) -> dict:
    return results_response(await store.read(db))


@router.get("/edit/projects")
async def get_project_record(store: RecordStoreDep, db: str | None = None, id: int | None = None) -> dict:
    if not db:
        raise MissingTableError()
    if id is None:
        raise MissingParameterError("id")
    return results_response([await store.read_one(db, id)])


@router.get("/projects/delete")
async def delete_project_record(store: RecordStoreDep, type: str | None = None, id: int | None = None) -> dict:
    """
    Delete a project row. Deleting an id that no longer exists still succeeds.

    Attachment files stay in the upload directory.
    """
    if not type:
        raise MissingTableError()
    if id is None:
        raise MissingParameterError("id")
    await store.delete(type, id)
    return {"status": "success", "message": "Project deleted successfully!"}
