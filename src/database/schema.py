"""
Table definition for the restaurants store
"""

import logging

logger = logging.getLogger(__name__)

CREATE_RESTAURANTS_TABLE = """
CREATE TABLE IF NOT EXISTS restaurants (
    id SERIAL PRIMARY KEY,
    name VARCHAR(100) NOT NULL,
    cuisine VARCHAR(50),
    rating DECIMAL(2, 1)
)
"""


async def ensure_schema(db_pool):
    """Create the restaurants table if it does not exist yet"""
    async with db_pool.acquire() as conn:
        await conn.execute(CREATE_RESTAURANTS_TABLE)
    logger.info("Schema ready: restaurants")
