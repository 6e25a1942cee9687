# =============================================================================
# app/middleware.py - Request Logging
# =============================================================================
# One access-log line per request: method, path, status and duration.
# Failures are logged at ERROR and re-raised for the exception handlers.
# =============================================================================

import logging
import time
from typing import Callable

from fastapi import Request

logger = logging.getLogger(__name__)


async def log_requests(request: Request, call_next: Callable):
    start_time = time.time()
    client = request.client.host if request.client else "-"

    try:
        response = await call_next(request)
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(f"{client} {request.method} {request.url.path} - ERROR: {e} - {process_time:.3f}s")
        raise

    process_time = time.time() - start_time
    level = logging.WARNING if response.status_code >= 500 else logging.INFO
    logger.log(level, f"{client} {request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s")
    return response
