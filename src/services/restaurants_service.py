"""
Restaurants service - storage operations for the restaurants table
"""

import logging
from decimal import Decimal
from typing import Optional

import asyncpg
from fastapi import Depends

from database.connection import get_db_pool
from services.base_service import BaseService, ServiceResult

logger = logging.getLogger(__name__)

# SERIAL columns are 32-bit; ids outside this range can never exist
MAX_ID = 2**31 - 1

RESTAURANT_COLUMNS = "id, name, cuisine, rating"

LIST_RESTAURANTS = f"SELECT {RESTAURANT_COLUMNS} FROM restaurants ORDER BY id"
GET_RESTAURANT = f"SELECT {RESTAURANT_COLUMNS} FROM restaurants WHERE id = $1"
INSERT_RESTAURANT = (
    "INSERT INTO restaurants (name, cuisine, rating) VALUES ($1, $2, $3) "
    f"RETURNING {RESTAURANT_COLUMNS}"
)
UPDATE_RESTAURANT = (
    "UPDATE restaurants SET name = $1, cuisine = $2, rating = $3 WHERE id = $4 "
    f"RETURNING {RESTAURANT_COLUMNS}"
)
DELETE_RESTAURANT = f"DELETE FROM restaurants WHERE id = $1 RETURNING {RESTAURANT_COLUMNS}"

NOT_FOUND_MESSAGE = "Restaurant not found"


class RestaurantsService(BaseService):
    """Service for restaurant CRUD operations"""

    def __init__(self, db_pool: asyncpg.Pool):
        super().__init__("restaurants", db_pool)

    async def list_restaurants(self) -> ServiceResult:
        """Return every restaurant in id order"""
        logger.debug("Listing restaurants")
        return await self.fetch_all(LIST_RESTAURANTS)

    async def get_restaurant(self, restaurant_id: int) -> ServiceResult:
        """
        Get a restaurant by its ID

        Args:
            restaurant_id: Primary key of the restaurant

        Returns:
            ServiceResult with one row, or RESOURCE_NOT_FOUND
        """
        if not 0 < restaurant_id <= MAX_ID:
            return self.not_found(NOT_FOUND_MESSAGE)
        logger.debug(f"Fetching restaurant {restaurant_id}")
        return await self.fetch_one(GET_RESTAURANT, restaurant_id, not_found=NOT_FOUND_MESSAGE)

    async def create_restaurant(
        self,
        name: str,
        cuisine: Optional[str] = None,
        rating: Optional[Decimal] = None
    ) -> ServiceResult:
        """Insert a restaurant; the id is assigned by the database"""
        logger.info(f"Creating restaurant: {name}")
        result = await self.fetch_one(INSERT_RESTAURANT, name, cuisine, rating)
        if result.success:
            logger.info(f"Created restaurant {result.data[0]['id']}")
        return result

    async def update_restaurant(
        self,
        restaurant_id: int,
        name: str,
        cuisine: Optional[str] = None,
        rating: Optional[Decimal] = None
    ) -> ServiceResult:
        """Replace every mutable field of an existing restaurant"""
        if not 0 < restaurant_id <= MAX_ID:
            return self.not_found(NOT_FOUND_MESSAGE)
        logger.info(f"Updating restaurant {restaurant_id}")
        return await self.fetch_one(
            UPDATE_RESTAURANT, name, cuisine, rating, restaurant_id, not_found=NOT_FOUND_MESSAGE
        )

    async def delete_restaurant(self, restaurant_id: int) -> ServiceResult:
        """Delete a restaurant and return the row as it was before deletion"""
        if not 0 < restaurant_id <= MAX_ID:
            return self.not_found(NOT_FOUND_MESSAGE)
        logger.info(f"Deleting restaurant {restaurant_id}")
        return await self.fetch_one(DELETE_RESTAURANT, restaurant_id, not_found=NOT_FOUND_MESSAGE)


def get_restaurants_service(db_pool: asyncpg.Pool = Depends(get_db_pool)) -> RestaurantsService:
    """FastAPI dependency binding the service to the application's pool"""
    return RestaurantsService(db_pool)
