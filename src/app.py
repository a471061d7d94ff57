"""
Restaurant Service API Server
CRUD over the restaurants table, backed by a PostgreSQL connection pool
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import Settings, get_settings
from database.connection import init_database, close_database
from database.schema import ensure_schema
from api.routes import health, restaurants
from utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application; the pool is opened by the lifespan handler"""
    settings = settings or get_settings()

    # Configure logging
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        db_pool = await init_database(settings)
        try:
            await ensure_schema(db_pool)
            app.state.db_pool = db_pool
            yield
        finally:
            app.state.db_pool = None
            await close_database(db_pool)

    app = FastAPI(
        title="Restaurant Service",
        description="CRUD API for restaurants backed by PostgreSQL",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.db_pool = None

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Setup centralized error handling
    setup_error_handling(app)

    # Include API routes
    app.include_router(health.router, tags=["Health"])
    app.include_router(restaurants.router, prefix="/restaurants", tags=["Restaurants"])

    return app


# FastAPI app instance is exported for use by uvicorn
# Server startup is handled by main.py at the project root
app = create_app()
