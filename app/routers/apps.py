# =============================================================================
# app/routers/apps.py - App Record Endpoints
# =============================================================================
# CRUD over app tables. The table is named by the client on every request:
# form field `table` for writes, query parameter `db` for reads.
#
# POST /apps              multipart: title, content, link, category, table, image (file)
# POST /edit/apps         as above plus id; image may be a file or the kept name
# GET  /apps?db=          all rows
# GET  /edit/apps?db=&id= one row
# =============================================================================

from fastapi import APIRouter, Request

from app.dependencies import AttachmentsDep, RecordStoreDep
from app.exceptions import MissingParameterError, MissingTableError
from app.routers.common import results_response, save_record
from core.services import IMAGE_SLOT
from core.validation import SchemaKind

router = APIRouter()

APP_FIELDS = ["title", "content", "link", "category"]


@router.post("/apps")
async def create_app_record(request: Request, store: RecordStoreDep, attachments: AttachmentsDep) -> dict:
    """Create an app row with a freshly uploaded image."""
    await save_record(request, store, attachments, SchemaKind.APP_CREATE, APP_FIELDS, [IMAGE_SLOT])
    return {"status": "success", "message": "App submitted successfully!"}


@router.post("/edit/apps")
async def edit_app_record(request: Request, store: RecordStoreDep, attachments: AttachmentsDep) -> dict:
    """Replace an app row; 404 if the id matches nothing."""
    await save_record(request, store, attachments, SchemaKind.APP_EDIT, APP_FIELDS + ["id"], [IMAGE_SLOT])
    return {"status": "success", "message": "App updated successfully!"}


@router.get("/apps")
async def list_app_records(store: RecordStoreDep, db: str | None = None) -> dict:
    return results_response(await store.read(db))


@router.get("/edit/apps")
async def get_app_record(store: RecordStoreDep, db: str | None = None, id: int | None = None) -> dict:
    if not db:
        raise MissingTableError()
    if id is None:
        raise MissingParameterError("id")
    return results_response([await store.read_one(db, id)])
