"""
Base service layer for single-statement database operations
"""

import logging
from typing import Dict, Any, List, Optional
from dataclasses import dataclass

import asyncpg

logger = logging.getLogger(__name__)

# Failures that mean the storage backend could not run the statement
STORAGE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None


class BaseService:
    """Runs one statement per operation on a connection borrowed from the pool"""

    def __init__(self, resource_name: str, db_pool: asyncpg.Pool):
        self.resource_name = resource_name
        self.db_pool = db_pool

    async def fetch_all(self, query: str, *params) -> ServiceResult:
        """Execute a statement and return every row it produces"""
        try:
            async with self.db_pool.acquire() as conn:
                rows = await conn.fetch(query, *params)
        except STORAGE_ERRORS as e:
            return self._storage_failure(e)

        data = [dict(row) for row in rows]
        return ServiceResult(success=True, data=data, count=len(data))

    async def fetch_one(self, query: str, *params, not_found: str = "Record not found") -> ServiceResult:
        """
        Execute a statement expected to produce at most one row

        Returns a RESOURCE_NOT_FOUND result when the statement matched nothing.
        """
        try:
            async with self.db_pool.acquire() as conn:
                row = await conn.fetchrow(query, *params)
        except STORAGE_ERRORS as e:
            return self._storage_failure(e)

        if row is None:
            return self.not_found(not_found)
        return ServiceResult(success=True, data=[dict(row)], count=1)

    @staticmethod
    def not_found(message: str) -> ServiceResult:
        return ServiceResult(
            success=False,
            error=message,
            error_type="RESOURCE_NOT_FOUND"
        )

    def _storage_failure(self, exc: Exception) -> ServiceResult:
        logger.error(f"Database operation failed for {self.resource_name}: {exc}", exc_info=True)
        return ServiceResult(
            success=False,
            error=f"Database operation failed: {type(exc).__name__}",
            error_type="DATABASE_ERROR"
        )
