"""
End-to-end scenario against a real PostgreSQL database
Requires RUN_DB_TESTS=1 and the PG_* / DATABASE_URL settings of a disposable database.
The restaurants table is truncated and reseeded before every test.
"""

import os

import httpx
import pytest
import pytest_asyncio

from app import create_app
from config.settings import get_settings
from database.connection import init_database, close_database
from database.schema import ensure_schema

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_DB_TESTS") != "1",
    reason="set RUN_DB_TESTS=1 to run against PostgreSQL"
)

SEED_RESTAURANTS = """
INSERT INTO restaurants (name, cuisine, rating)
VALUES
    ('Testaurant', 'Test Cuisine', 4.0),
    ('Mock Bistro', 'Mock Cuisine', 4.2)
"""


@pytest_asyncio.fixture
async def db_pool():
    settings = get_settings()
    pool = await init_database(settings)
    await ensure_schema(pool)
    async with pool.acquire() as conn:
        await conn.execute("TRUNCATE TABLE restaurants RESTART IDENTITY CASCADE")
        await conn.execute(SEED_RESTAURANTS)
    yield pool
    await close_database(pool)


@pytest_asyncio.fixture
async def api(db_pool):
    app = create_app(get_settings())
    app.state.db_pool = db_pool
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_list_restaurants(api):
    response = await api.get("/restaurants")

    assert response.status_code == 200
    assert len(response.json()) == 2
    assert response.json()[0]["name"] == "Testaurant"


@pytest.mark.asyncio
async def test_get_restaurant(api):
    response = await api.get("/restaurants/1")

    assert response.status_code == 200
    assert response.json()["name"] == "Testaurant"
    assert response.json()["rating"] == "4.0"


@pytest.mark.asyncio
async def test_get_missing_restaurant(api):
    response = await api.get("/restaurants/999")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_restaurant(api):
    response = await api.post("/restaurants", json={
        "name": "Brand New Cafe",
        "cuisine": "Coffee & Pastries",
        "rating": 4.9
    })

    assert response.status_code == 201
    assert response.json()["id"] == 3
    assert response.json()["name"] == "Brand New Cafe"


@pytest.mark.asyncio
async def test_update_restaurant(api):
    response = await api.put("/restaurants/1", json={
        "name": "Testaurant Updated",
        "cuisine": "New Cuisine",
        "rating": 5.0
    })

    assert response.status_code == 200
    assert response.json()["name"] == "Testaurant Updated"
    assert response.json()["rating"] == "5.0"

    fetched = await api.get("/restaurants/1")
    assert fetched.json() == response.json()


@pytest.mark.asyncio
async def test_delete_restaurant(api):
    response = await api.delete("/restaurants/1")

    assert response.status_code == 200
    assert response.json()["name"] == "Testaurant"

    verify = await api.get("/restaurants/1")
    assert verify.status_code == 404


@pytest.mark.asyncio
async def test_ids_not_reused_after_delete(api):
    await api.delete("/restaurants/2")

    created = await api.post("/restaurants", json={"name": "Next"})

    assert created.json()["id"] == 3


@pytest.mark.asyncio
async def test_health(api):
    response = await api.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
