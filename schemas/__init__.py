from .property import (
     PropertyCreate,
     PropertyUpdate,
     PropertyResponse,
     PropertyFilter,
)
from .admin import (
     AdminLoginRequest,
     AdminTokenResponse,
     ImageUploadResponse,
)

__all__ = [
     "PropertyCreate",
     "PropertyUpdate",
     "PropertyResponse",
     "PropertyFilter",
     "AdminLoginRequest",
     "AdminTokenResponse",
     "ImageUploadResponse",
]
