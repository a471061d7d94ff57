"""
pytest configuration and shared fixtures
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from app import create_app
from config.settings import Settings
from fake_pool import FakePool, seed_restaurants


@pytest.fixture
def fake_pool() -> FakePool:
    """Pool over a table seeded with the two reference restaurants"""
    pool = FakePool()
    seed_restaurants(pool.table)
    return pool


@pytest.fixture
def app(fake_pool):
    """Application wired to the fake pool; the lifespan is not run"""
    application = create_app(Settings())
    application.state.db_pool = fake_pool
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
