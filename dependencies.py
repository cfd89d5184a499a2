# dependencies.py
"""
Shared FastAPI dependencies: data-access layer wiring and the admin gate.
"""
import logging
from datetime import timedelta
from typing import MutableMapping

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from azure_blob import ImageStorage, get_image_storage
from config import settings
from database import get_session
from errors import ConfigurationError
from models.base import utcnow
from services.admin_session import AdminSession, load_session, session_key
from services.property_service import PropertyService

logger = logging.getLogger(__name__)


def get_optional_image_storage() -> ImageStorage | None:
     """Image storage, or None when the blob service is not configured."""
     try:
          return get_image_storage()
     except ConfigurationError as exc:
          logger.debug("Image storage unavailable: %s", exc)
          return None


def get_property_service(
     db: Session = Depends(get_session),
     images: ImageStorage | None = Depends(get_optional_image_storage),
) -> PropertyService:
     return PropertyService(db, images)


def get_session_store(request: Request) -> MutableMapping[str, str]:
     """Application-scoped key-value store holding admin sessions."""
     return request.app.state.admin_sessions


def session_max_age() -> timedelta:
     return timedelta(hours=settings.admin.session_hours)


def jwt_secret() -> str:
     if not settings.admin.jwt_secret:
          raise ConfigurationError("JWT_SECRET is not configured")
     return settings.admin.jwt_secret


# Token Auth Dependency
def verify_admin(
     request: Request,
     store: MutableMapping[str, str] = Depends(get_session_store),
) -> AdminSession:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
     token = auth.split(" ", 1)[1]
     try:
          payload = jwt.decode(token, jwt_secret(), algorithms=[settings.admin.jwt_algorithm])
     except JWTError:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")

     sid = payload.get("sid")
     session = load_session(store, session_key(sid), utcnow(), session_max_age()) if sid else None
     if session is None:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Session expired")
     request.state.admin_session_id = sid
     return session
