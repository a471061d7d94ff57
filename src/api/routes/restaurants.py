"""
Restaurant API routes
All database access goes through RestaurantsService; routes only translate
service results into HTTP responses.
"""

import logging
from typing import List
from fastapi import APIRouter, HTTPException, Depends

from models.restaurant import (
    RestaurantCreateRequest,
    RestaurantUpdateRequest,
    RestaurantResponse,
)
from services.base_service import ServiceResult
from services.restaurants_service import RestaurantsService, get_restaurants_service

router = APIRouter()
logger = logging.getLogger(__name__)


def _raise_for_failure(result: ServiceResult):
    if result.success:
        return
    if result.error_type == "RESOURCE_NOT_FOUND":
        raise HTTPException(status_code=404, detail="Restaurant not found")
    # Storage details stay in the logs
    raise HTTPException(status_code=500, detail="Database operation failed")


@router.get("", response_model=List[RestaurantResponse])
async def list_restaurants(
    service: RestaurantsService = Depends(get_restaurants_service)
):
    """List all restaurants in creation order"""
    result = await service.list_restaurants()
    _raise_for_failure(result)
    return [RestaurantResponse.from_record(row) for row in result.data]


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
async def get_restaurant(
    restaurant_id: int,
    service: RestaurantsService = Depends(get_restaurants_service)
):
    """Get restaurant details"""
    result = await service.get_restaurant(restaurant_id)
    _raise_for_failure(result)
    return RestaurantResponse.from_record(result.data[0])


@router.post("", response_model=RestaurantResponse, status_code=201)
async def create_restaurant(
    request: RestaurantCreateRequest,
    service: RestaurantsService = Depends(get_restaurants_service)
):
    """Create a new restaurant"""
    result = await service.create_restaurant(
        name=request.name,
        cuisine=request.cuisine,
        rating=request.rating
    )
    _raise_for_failure(result)
    return RestaurantResponse.from_record(result.data[0])


@router.put("/{restaurant_id}", response_model=RestaurantResponse)
async def update_restaurant(
    restaurant_id: int,
    request: RestaurantUpdateRequest,
    service: RestaurantsService = Depends(get_restaurants_service)
):
    """Replace all fields of a restaurant"""
    result = await service.update_restaurant(
        restaurant_id,
        name=request.name,
        cuisine=request.cuisine,
        rating=request.rating
    )
    _raise_for_failure(result)
    return RestaurantResponse.from_record(result.data[0])


@router.delete("/{restaurant_id}", response_model=RestaurantResponse)
async def delete_restaurant(
    restaurant_id: int,
    service: RestaurantsService = Depends(get_restaurants_service)
):
    """Delete a restaurant, returning it as it was before deletion"""
    result = await service.delete_restaurant(restaurant_id)
    _raise_for_failure(result)
    return RestaurantResponse.from_record(result.data[0])
