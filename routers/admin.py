# routers/admin.py
"""
Admin API routes.

Password-gated management of listings and their images. Every route except
POST /auth requires a bearer token for a live admin session.
"""
import logging
import uuid
from typing import List, MutableMapping
from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, Response, UploadFile, status
from jose import jwt

from config import settings
from dependencies import (
     get_property_service,
     get_session_store,
     jwt_secret,
     session_max_age,
     verify_admin,
)
from errors import ImageNotFoundError, ImageValidationError, PropertyNotFoundError, StoreError
from models.base import utcnow
from schemas.admin import AdminLoginRequest, AdminTokenResponse, ImageUploadResponse
from schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate
from services.admin_session import (
     AdminSession,
     clear_session,
     save_session,
     session_key,
     verify_admin_password,
)
from services.property_service import PropertyService
from utils.images import generate_image_filename, validate_image_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _not_found(property_id: str) -> HTTPException:
     return HTTPException(
          status_code=status.HTTP_404_NOT_FOUND,
          detail=f"Property with ID {property_id} not found"
     )


def _read_validated(upload: UploadFile, existing_count: int, incoming_count: int = 1) -> bytes:
     """Read an upload and run the image checks before any store call."""
     data = upload.file.read()
     try:
          validate_image_upload(
               filename=upload.filename or "upload",
               content_type=upload.content_type,
               size=len(data),
               existing_count=existing_count,
               incoming_count=incoming_count,
               max_images=settings.uploads.max_images,
               max_bytes=settings.uploads.max_image_bytes,
          )
     except ImageValidationError as exc:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
     return data


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

@router.post("/auth", response_model=AdminTokenResponse, summary="Open an admin session")
def login(
     body: AdminLoginRequest,
     store: MutableMapping[str, str] = Depends(get_session_store),
):
     if not verify_admin_password(body.password):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect password")

     issued_at = utcnow()
     expires_at = issued_at + session_max_age()
     sid = uuid.uuid4().hex
     save_session(store, session_key(sid), AdminSession(authenticated=True, issued_at=issued_at))

     token = jwt.encode(
          {"sid": sid, "iat": issued_at, "exp": expires_at},
          jwt_secret(),
          algorithm=settings.admin.jwt_algorithm,
     )
     logger.info("Admin session opened")
     return {"token": token, "expires_at": expires_at}


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, summary="Close the admin session")
def logout(
     request: Request,
     session: AdminSession = Depends(verify_admin),
     store: MutableMapping[str, str] = Depends(get_session_store),
):
     clear_session(store, session_key(request.state.admin_session_id))
     return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

@router.get("/properties", response_model=List[PropertyResponse], summary="List every property")
def list_all_properties(
     session: AdminSession = Depends(verify_admin),
     service: PropertyService = Depends(get_property_service),
):
     return service.list_all_properties()


@router.get("/properties/{property_id}", response_model=PropertyResponse, summary="Get any property by ID")
def get_property(
     property_id: str,
     session: AdminSession = Depends(verify_admin),
     service: PropertyService = Depends(get_property_service),
):
     prop = service.get_property_for_admin(property_id)
     if prop is None:
          raise _not_found(property_id)
     return prop


@router.post(
     "/properties",
     response_model=PropertyResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new property"
)
def create_property(
     property_data: PropertyCreate,
     session: AdminSession = Depends(verify_admin),
     service: PropertyService = Depends(get_property_service),
):
     """
     Create a new listing.

     - **property_type**: apartment, house, studio or office
     - **price**: in units of 10,000 (must be non-negative)
     - **is_available**: defaults to true
     """
     return service.create_property(property_data)


@router.patch("/properties/{property_id}", response_model=PropertyResponse, summary="Update a property")
def update_property(
     property_id: str,
     changes: PropertyUpdate,
     session: AdminSession = Depends(verify_admin),
     service: PropertyService = Depends(get_property_service),
):
     try:
          return service.update_property(property_id, changes)
     except PropertyNotFoundError:
          raise _not_found(property_id)


@router.delete(
     "/properties/{property_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete a property"
)
def delete_property(
     property_id: str,
     session: AdminSession = Depends(verify_admin),
     service: PropertyService = Depends(get_property_service),
):
     service.delete_property(property_id)
     return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

@router.post("/images", response_model=ImageUploadResponse, summary="Upload listing images")
def upload_images(
     files: List[UploadFile] = File(...),
     existing_count: int = Query(0, ge=0, description="Images already on the listing being edited"),
     session: AdminSession = Depends(verify_admin),
     service: PropertyService = Depends(get_property_service),
):
     """
     Upload images and return their public URLs in upload order.

     Every file is validated before the first one is stored.
     """
     payloads = []
     for upload in files:
          data = _read_validated(upload, existing_count, incoming_count=len(files))
          payloads.append((upload, data))

     urls = []
     stored = []
     try:
          for upload, data in payloads:
               filename = generate_image_filename(upload.filename or "")
               urls.append(service.upload_image(data, filename, upload.content_type))
               stored.append(filename)
     except StoreError:
          if stored:
               logger.warning(
                    "Upload of %d images failed after %d were stored; orphaned blobs: %s",
                    len(payloads),
                    len(stored),
                    ", ".join(stored),
               )
          raise
     return {"urls": urls}


@router.post(
     "/properties/{property_id}/images",
     response_model=PropertyResponse,
     summary="Upload an image and append it to a property"
)
def attach_image(
     property_id: str,
     file: UploadFile = File(...),
     session: AdminSession = Depends(verify_admin),
     service: PropertyService = Depends(get_property_service),
):
     prop = service.get_property_for_admin(property_id)
     if prop is None:
          raise _not_found(property_id)

     data = _read_validated(file, len(prop.images))
     try:
          return service.attach_image(
               property_id,
               data,
               generate_image_filename(file.filename or ""),
               file.content_type,
          )
     except PropertyNotFoundError:
          raise _not_found(property_id)


@router.delete(
     "/properties/{property_id}/images",
     response_model=PropertyResponse,
     summary="Remove an image from a property"
)
def remove_image(
     property_id: str,
     url: str = Query(..., description="Public URL of the image to remove"),
     session: AdminSession = Depends(verify_admin),
     service: PropertyService = Depends(get_property_service),
):
     try:
          return service.remove_image(property_id, url)
     except PropertyNotFoundError:
          raise _not_found(property_id)
     except ImageNotFoundError:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Image not found on property"
          )
