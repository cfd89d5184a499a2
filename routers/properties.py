# routers/properties.py
"""
Public property API routes.

Only available listings are ever returned from these endpoints.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from dependencies import get_property_service
from schemas.property import PropertyFilter, PropertyResponse
from services.property_service import PropertyService
from services.search import refine_properties

router = APIRouter(prefix="/api/properties", tags=["properties"])


@router.get(
     "",
     response_model=List[PropertyResponse],
     summary="List available properties"
)
def list_properties(
     property_type: Optional[str] = Query(None, description="apartment, house, studio or office"),
     min_price: Optional[float] = Query(None, ge=0),
     max_price: Optional[float] = Query(None, ge=0),
     min_area: Optional[float] = Query(None, ge=0),
     max_area: Optional[float] = Query(None, ge=0),
     room_type: Optional[str] = Query(None),
     q: Optional[str] = Query(None, description="Free-text search over title, address and description"),
     service: PropertyService = Depends(get_property_service),
):
     """
     List available properties, newest first.

     - Filter parameters are applied by the store (all must match)
     - **q** further narrows the result in memory
     """
     try:
          filters = PropertyFilter(
               property_type=property_type,
               min_price=min_price,
               max_price=max_price,
               min_area=min_area,
               max_area=max_area,
               room_type=room_type,
          )
     except ValidationError as exc:
          raise RequestValidationError(exc.errors())
     if filters.is_empty():
          properties = service.list_available_properties()
     else:
          properties = service.list_filtered_properties(filters)

     return refine_properties(properties, q or "")


@router.get(
     "/{property_id}",
     response_model=PropertyResponse,
     summary="Get a property by ID"
)
def get_property(
     property_id: str,
     service: PropertyService = Depends(get_property_service),
):
     prop = service.get_property_by_id(property_id)
     if prop is None:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Property not found"
          )
     return prop
