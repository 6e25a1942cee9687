# =============================================================================
# app/proxy.py - CORS Relay
# =============================================================================
# A separate ASGI app that lets the browser reach third-party HTTP APIs:
#
#   GET http://localhost:8080/https://api.example.com/v1/items?page=2
#     -> GET https://api.example.com/v1/items?page=2
#
# Only allow-listed request headers are forwarded upstream, preflights are
# answered locally, and every response is stamped with permissive CORS
# headers. Nothing is cached or rewritten.
#
# Usage:
#   uvicorn app.proxy:app --port 8080
# =============================================================================

import logging
import re
from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from app.config import settings

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

RELAY_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]

# Hop-by-hop headers plus those httpx already resolved (decoded body)
DROPPED_RESPONSE_HEADERS = {
    "connection",
    "keep-alive",
    "transfer-encoding",
    "content-encoding",
    "content-length",
    "upgrade",
    "proxy-authenticate",
    "trailer",
}

_SCHEME = re.compile(r"^(https?):/+", re.IGNORECASE)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.http_client = httpx.AsyncClient(
        timeout=settings.PROXY_TIMEOUT_SECONDS,
        follow_redirects=True,
    )
    logger.info("CORS relay started")
    yield
    await app.state.http_client.aclose()


app = FastAPI(title="CORS Relay", docs_url=None, redoc_url=None, openapi_url=None, lifespan=lifespan)


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def cors_headers() -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": ", ".join(RELAY_METHODS),
        "Access-Control-Allow-Headers": ", ".join(settings.proxy_allowed_headers_list),
    }


def target_url(path: str, query: str) -> str | None:
    """
    Rebuild the upstream URL from the request path.

    Accepts "https://host/..." and the collapsed "https:/host/..." form some
    clients produce; anything else is not a relay target.
    """
    match = _SCHEME.match(path)
    if not match:
        return None
    url = f"{match.group(1).lower()}://{path[match.end():]}"
    if query:
        url += f"?{query}"
    return url


def forwarded_headers(request: Request) -> dict[str, str]:
    allowed = set(settings.proxy_allowed_headers_list)
    return {name: value for name, value in request.headers.items() if name.lower() in allowed}


@app.api_route("/{path:path}", methods=RELAY_METHODS)
async def relay(
    request: Request,
    path: str,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> Response:
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=cors_headers())

    url = target_url(path, request.url.query)
    if url is None:
        return JSONResponse(
            status_code=400,
            content={"status": "fail", "message": "Target must be an absolute http(s) URL"},
            headers=cors_headers(),
        )

    body = await request.body()
    try:
        upstream = await client.request(
            request.method,
            url,
            headers=forwarded_headers(request),
            content=body or None,
        )
    except httpx.HTTPError as e:
        logger.error(f"Relay {request.method} {url} failed: {e}")
        return JSONResponse(
            status_code=502,
            content={"status": "error", "message": "Upstream request failed"},
            headers=cors_headers(),
        )

    logger.info(f"Relayed {request.method} {url} - {upstream.status_code}")

    headers = {
        name: value
        for name, value in upstream.headers.items()
        if name.lower() not in DROPPED_RESPONSE_HEADERS
    }
    headers.update(cors_headers())
    headers["Access-Control-Expose-Headers"] = ", ".join(sorted(upstream.headers.keys()))
    return Response(content=upstream.content, status_code=upstream.status_code, headers=headers)
