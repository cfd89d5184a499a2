# schemas/property.py
"""
Pydantic schemas for Property API request/response validation.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_validator

from models.property import PropertyType


def _clean_features(value: Optional[List[str]]) -> Optional[List[str]]:
     """Trim tags, drop blanks and duplicates, keep first-seen order."""
     if value is None:
          return None
     seen = []
     for tag in value:
          tag = tag.strip()
          if tag and tag not in seen:
               seen.append(tag)
     return seen


class PropertyBase(BaseModel):
     """Fields shared by create payloads and responses."""
     title: str = Field(..., min_length=1, max_length=255)
     price: float = Field(..., ge=0, description="Price in units of 10,000")
     address: str = Field(..., min_length=1, max_length=255)
     area: float = Field(..., ge=0, description="Floor area")
     room_type: str = Field(default="", max_length=100, description="e.g. 2 bedrooms 1 bath")
     property_type: PropertyType = Field(default=PropertyType.APARTMENT)
     description: str = Field(default="")
     images: List[str] = Field(default_factory=list, description="Public image URLs in display order")
     features: List[str] = Field(default_factory=list)
     floor: int = Field(default=1, ge=0)
     total_floors: int = Field(default=1, ge=0)
     age: int = Field(default=0, ge=0, description="Building age in years")
     direction: str = Field(default="", max_length=50)
     management_fee: float = Field(default=0, ge=0, description="Monthly management fee")
     contact_phone: str = Field(default="", max_length=50)
     contact_name: str = Field(default="", max_length=100)


class PropertyCreate(PropertyBase):
     """Schema for creating a new property."""
     is_available: bool = Field(default=True, description="Publicly visible once created")

     @field_validator("features")
     @classmethod
     def clean_features(cls, value: List[str]) -> List[str]:
          return _clean_features(value)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "title": "Sunny Loft near the Park",
                    "price": 888,
                    "address": "12 Riverside Rd",
                    "area": 32.5,
                    "room_type": "2 bedrooms 1 bath",
                    "property_type": "apartment",
                    "description": "Bright corner unit with balcony.",
                    "images": [],
                    "features": ["elevator", "balcony"],
                    "floor": 5,
                    "total_floors": 12,
                    "age": 8,
                    "direction": "south",
                    "management_fee": 2500,
                    "contact_phone": "0912-345-678",
                    "contact_name": "Ms. Lin",
                    "is_available": True
               }
          }
     )


class PropertyUpdate(BaseModel):
     """Schema for updating an existing property. Only set fields are applied."""
     title: Optional[str] = Field(None, min_length=1, max_length=255)
     price: Optional[float] = Field(None, ge=0)
     address: Optional[str] = Field(None, min_length=1, max_length=255)
     area: Optional[float] = Field(None, ge=0)
     room_type: Optional[str] = Field(None, max_length=100)
     property_type: Optional[PropertyType] = None
     description: Optional[str] = None
     images: Optional[List[str]] = None
     features: Optional[List[str]] = None
     floor: Optional[int] = Field(None, ge=0)
     total_floors: Optional[int] = Field(None, ge=0)
     age: Optional[int] = Field(None, ge=0)
     direction: Optional[str] = Field(None, max_length=50)
     management_fee: Optional[float] = Field(None, ge=0)
     contact_phone: Optional[str] = Field(None, max_length=50)
     contact_name: Optional[str] = Field(None, max_length=100)
     is_available: Optional[bool] = None

     @field_validator("features")
     @classmethod
     def clean_features(cls, value: Optional[List[str]]) -> Optional[List[str]]:
          return _clean_features(value)

     def changes(self) -> dict:
          """Fields explicitly provided by the caller, without nulls."""
          return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "price": 850,
                    "is_available": False
               }
          }
     )


class PropertyResponse(PropertyBase):
     """Schema for property response."""
     id: str
     is_available: bool
     created_at: datetime
     updated_at: datetime

     model_config = ConfigDict(from_attributes=True)


class PropertyFilter(BaseModel):
     """
     Optional server-side filters for the listing query.

     Every present field narrows the result; absent fields impose nothing.
     """
     property_type: Optional[PropertyType] = None
     min_price: Optional[float] = Field(None, ge=0)
     max_price: Optional[float] = Field(None, ge=0)
     min_area: Optional[float] = Field(None, ge=0)
     max_area: Optional[float] = Field(None, ge=0)
     room_type: Optional[str] = None

     @field_validator("property_type", "room_type", mode="before")
     @classmethod
     def blank_as_missing(cls, value):
          if isinstance(value, str) and not value.strip():
               return None
          return value

     def is_empty(self) -> bool:
          return not self.model_dump(exclude_none=True)
