"""
Health check API route
"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException, Depends

from database.connection import get_db_pool
from services.base_service import STORAGE_ERRORS

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(db_pool=Depends(get_db_pool)):
    """Health check - reports unhealthy only when the database cannot be reached"""
    try:
        async with db_pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except STORAGE_ERRORS as e:
        logger.warning(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="Database unavailable")

    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected"
    }
