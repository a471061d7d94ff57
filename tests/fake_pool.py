"""
In-memory stand-in for an asyncpg pool
Answers the restaurants service's statements against a dict-backed table so
routes and services can be tested without a running PostgreSQL.
"""

from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

from database.schema import CREATE_RESTAURANTS_TABLE
from services import restaurants_service as sql


class FakeRestaurantTable:
    """SERIAL-like id generation: ids are never reused, TRUNCATE resets them"""

    def __init__(self):
        self.rows: Dict[int, Dict[str, Any]] = {}
        self.next_id = 1

    def insert(self, name: str, cuisine: Optional[str] = None, rating=None) -> Dict[str, Any]:
        row = {
            "id": self.next_id,
            "name": name,
            "cuisine": cuisine,
            "rating": None if rating is None else Decimal(str(rating)),
        }
        self.rows[self.next_id] = row
        self.next_id += 1
        return dict(row)

    def truncate(self):
        self.rows.clear()
        self.next_id = 1


class FakeConnection:
    def __init__(self, pool: "FakePool"):
        self.pool = pool
        self.statements: List[str] = []

    @property
    def table(self) -> FakeRestaurantTable:
        return self.pool.table

    def _check(self, query: str):
        self.statements.append(query)
        if self.pool.statement_error is not None:
            raise self.pool.statement_error

    async def fetch(self, query: str, *params):
        self._check(query)
        if query == sql.LIST_RESTAURANTS:
            return [dict(self.table.rows[key]) for key in sorted(self.table.rows)]
        raise AssertionError(f"Unexpected fetch: {query}")

    async def fetchrow(self, query: str, *params):
        self._check(query)
        if query == sql.GET_RESTAURANT:
            row = self.table.rows.get(params[0])
            return dict(row) if row else None
        if query == sql.INSERT_RESTAURANT:
            return self.table.insert(*params)
        if query == sql.UPDATE_RESTAURANT:
            name, cuisine, rating, restaurant_id = params
            row = self.table.rows.get(restaurant_id)
            if row is None:
                return None
            row.update(name=name, cuisine=cuisine, rating=rating)
            return dict(row)
        if query == sql.DELETE_RESTAURANT:
            row = self.table.rows.pop(params[0], None)
            return dict(row) if row else None
        raise AssertionError(f"Unexpected fetchrow: {query}")

    async def fetchval(self, query: str, *params):
        self._check(query)
        if query == "SELECT 1":
            return 1
        raise AssertionError(f"Unexpected fetchval: {query}")

    async def execute(self, query: str, *params):
        self._check(query)
        if query == CREATE_RESTAURANTS_TABLE:
            self.pool.schema_created = True
            return "CREATE TABLE"
        raise AssertionError(f"Unexpected execute: {query}")


class FakePool:
    """Tracks every checkout so tests can assert connections are returned"""

    def __init__(self, table: Optional[FakeRestaurantTable] = None):
        self.table = table or FakeRestaurantTable()
        self.connection = FakeConnection(self)
        self.acquired = 0
        self.released = 0
        self.closed = False
        self.schema_created = False
        # Raised by acquire() / by every statement when set
        self.acquire_error: Optional[Exception] = None
        self.statement_error: Optional[Exception] = None

    @asynccontextmanager
    async def acquire(self):
        if self.acquire_error is not None:
            raise self.acquire_error
        self.acquired += 1
        try:
            yield self.connection
        finally:
            self.released += 1

    async def close(self):
        self.closed = True

    @property
    def in_use(self) -> int:
        return self.acquired - self.released


def seed_restaurants(table: FakeRestaurantTable):
    table.insert("Testaurant", "Test Cuisine", "4.0")
    table.insert("Mock Bistro", "Mock Cuisine", "4.2")
