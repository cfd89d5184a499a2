# services/__init__.py
from .property_service import PropertyService
from .search import refine_properties
from .admin_session import (
     AdminSession,
     is_valid,
     load_session,
     save_session,
     clear_session,
     verify_admin_password,
)

__all__ = [
     "PropertyService",
     "refine_properties",
     "AdminSession",
     "is_valid",
     "load_session",
     "save_session",
     "clear_session",
     "verify_admin_password",
]
