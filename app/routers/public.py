# =============================================================================
# app/routers/public.py - Uploaded Files & Unmatched Routes
# =============================================================================
# Must be mounted last. Serves stored attachments by name
# (GET /<stored name>) and turns every other unmatched request, whatever
# its method, into the 404 "Cannot find <path> on this server" shape.
# =============================================================================

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

from app.dependencies import AttachmentsDep
from app.exceptions import RouteNotFoundError

router = APIRouter()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def public_file_or_not_found(request: Request, path: str, attachments: AttachmentsDep):
    if request.method in ("GET", "HEAD") and path:
        file_path = attachments.public_file(path)
        if file_path is not None:
            return FileResponse(file_path)

    original_url = request.url.path
    if request.url.query:
        original_url += f"?{request.url.query}"
    raise RouteNotFoundError(original_url)
