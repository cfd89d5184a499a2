# schemas/admin.py
"""
Pydantic schemas for the admin gate and image uploads.
"""
from datetime import datetime
from typing import List
from pydantic import BaseModel, Field


class AdminLoginRequest(BaseModel):
     """Request body for POST /api/admin/auth."""
     password: str = Field(..., min_length=1)


class AdminTokenResponse(BaseModel):
     """Bearer token for a freshly opened admin session."""
     token: str
     expires_at: datetime


class ImageUploadResponse(BaseModel):
     """Public URLs of the uploaded images, in upload order."""
     urls: List[str]
