# =============================================================================
# lib/database.py - Connection Pool Lifecycle
# =============================================================================
# Creates and disposes of the process-wide PostgreSQL connection pool.
#
# The pool is not a module-level singleton: the application lifespan opens
# it at startup, hangs it on `app.state`, and closes it at shutdown. Request
# handlers receive it through dependency injection.
#
# Usage:
#   pool = await open_pool(settings)
#   async with pool.connection() as conn:
#       ...
#   await close_pool(pool)
# =============================================================================

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

if TYPE_CHECKING:
    from app.config import Settings

logger = logging.getLogger(__name__)


def build_pool(settings: Settings) -> AsyncConnectionPool:
    """
    Build (but do not open) the pool described by `settings`.

    Connections return rows as dicts and run every statement under the
    configured server-side timeout.
    """
    kwargs = {"row_factory": dict_row}
    if settings.DB_STATEMENT_TIMEOUT_MS:
        kwargs["options"] = f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"

    return AsyncConnectionPool(
        settings.DATABASE_URL,
        min_size=settings.DB_POOL_MIN_SIZE,
        max_size=settings.DB_POOL_MAX_SIZE,
        timeout=settings.DB_POOL_TIMEOUT_SECONDS,
        kwargs=kwargs,
        open=False,
        name="portfolio",
    )


async def open_pool(settings: Settings) -> AsyncConnectionPool:
    """Open the pool; connections are established in the background."""
    pool = build_pool(settings)
    await pool.open()
    logger.info(
        f"Database pool opened (min={settings.DB_POOL_MIN_SIZE}, max={settings.DB_POOL_MAX_SIZE})"
    )
    return pool


async def close_pool(pool: AsyncConnectionPool) -> None:
    """Close the pool, waiting for checked-out connections to come back."""
    await pool.close()
    logger.info("Database pool closed")
