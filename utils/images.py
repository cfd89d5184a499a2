# utils/images.py
"""
Caller-side checks and naming for listing image uploads.

Validation runs before anything is sent to the store so that a rejected
file never produces a partial upload.
"""
import os
import time
import uuid
from typing import Optional
from urllib.parse import unquote, urlparse

from errors import ImageValidationError

MAX_IMAGES = 10
MAX_IMAGE_BYTES = 5 * 1024 * 1024


def validate_image_upload(
     filename: str,
     content_type: Optional[str],
     size: int,
     existing_count: int,
     incoming_count: int = 1,
     max_images: int = MAX_IMAGES,
     max_bytes: int = MAX_IMAGE_BYTES,
) -> None:
     """
     Reject an upload that breaks the image limits.

     Raises:
          ImageValidationError: On too many images, a non-image content
               type, or an oversized file
     """
     if existing_count + incoming_count > max_images:
          raise ImageValidationError(f"At most {max_images} images can be uploaded")

     if not content_type or not content_type.startswith("image/"):
          raise ImageValidationError(f"{filename} is not a valid image file")

     if size > max_bytes:
          raise ImageValidationError(f"{filename} exceeds {max_bytes // (1024 * 1024)}MB")


def generate_image_filename(original: str, now: Optional[float] = None) -> str:
     """property_<epoch ms>_<random>.<ext>, keeping the original extension."""
     now = time.time() if now is None else now
     ext = os.path.splitext(original or "")[1].lower()
     return f"property_{int(now * 1000)}_{uuid.uuid4().hex[:12]}{ext}"


def filename_from_url(url: str) -> str:
     """Last path segment of a public image URL."""
     path = urlparse(url).path
     return unquote(path.rsplit("/", 1)[-1])
