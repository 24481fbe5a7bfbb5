"""PostgreSQL async connection pool built from settings."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from roleguard.config import Settings

logger = logging.getLogger(__name__)


def create_pool(settings: Settings) -> AsyncConnectionPool:
    """Unopened pool sized from settings; ``pooled`` opens and closes it."""
    return AsyncConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        open=False,
        name="roleguard",
    )


@asynccontextmanager
async def pooled(settings: Settings) -> AsyncIterator[AsyncConnectionPool]:
    """Pool open for the duration of the block, with min_size connections ready."""
    pool = create_pool(settings)
    await pool.open(wait=True)
    logger.info(
        "Opened connection pool (%d-%d connections)",
        settings.db_pool_min_size,
        settings.db_pool_max_size,
    )
    try:
        yield pool
    finally:
        await pool.close()
