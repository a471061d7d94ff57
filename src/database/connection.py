"""
Database connection and pool management
"""

import asyncpg
import logging
from fastapi import Request

from config.settings import Settings

logger = logging.getLogger(__name__)


async def init_database(settings: Settings) -> asyncpg.Pool:
    """Create the connection pool and verify the database is reachable"""
    db_pool = await asyncpg.create_pool(
        settings.dsn,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        command_timeout=settings.command_timeout,
    )

    # Test connection
    async with db_pool.acquire() as conn:
        await conn.fetchval("SELECT 1")

    logger.info("Database initialized successfully")
    return db_pool


async def close_database(db_pool: asyncpg.Pool):
    """Close database connection pool"""
    if db_pool:
        await db_pool.close()
    logger.info("Database connections closed")


def get_db_pool(request: Request) -> asyncpg.Pool:
    """FastAPI dependency returning the pool created at startup"""
    db_pool = getattr(request.app.state, "db_pool", None)
    if db_pool is None:
        raise RuntimeError("Database pool not initialized")
    return db_pool
