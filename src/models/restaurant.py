"""
Restaurant-related Pydantic models
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Mapping, Optional
from pydantic import BaseModel, Field, field_validator

RATING_STEP = Decimal("0.1")


def format_rating(rating: Any) -> Optional[str]:
    """Render a stored rating with exactly one fractional digit ("5.0")"""
    if rating is None:
        return None
    return str(Decimal(str(rating)).quantize(RATING_STEP, rounding=ROUND_HALF_UP))


class RestaurantWriteRequest(BaseModel):
    """Full set of mutable restaurant fields, used by create and replace"""
    name: str = Field(..., min_length=1, max_length=100, description="Restaurant name")
    cuisine: Optional[str] = Field(None, max_length=50, description="Cuisine served")
    rating: Optional[Decimal] = Field(None, ge=0, le=5, description="Rating from 0.0 to 5.0")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value

    @field_validator("rating")
    @classmethod
    def rating_one_decimal(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        # DECIMAL(2,1) keeps one fractional digit
        if value is None:
            return value
        return value.quantize(RATING_STEP, rounding=ROUND_HALF_UP)


class RestaurantCreateRequest(RestaurantWriteRequest):
    pass


class RestaurantUpdateRequest(RestaurantWriteRequest):
    """Full replacement: omitted optional fields are stored as null"""
    pass


class RestaurantResponse(BaseModel):
    id: int
    name: str
    cuisine: Optional[str] = None
    rating: Optional[str] = Field(None, description="Rating with one decimal place, e.g. \"4.5\"")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "RestaurantResponse":
        return cls(
            id=record["id"],
            name=record["name"],
            cuisine=record["cuisine"],
            rating=format_rating(record["rating"]),
        )
