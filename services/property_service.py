# services/property_service.py
"""
Property Service - the single data-access layer for listings.

Every read and write against the property table and the image container
goes through this class. Store failures are surfaced as StoreError with the
driver exception chained; nothing is retried or cached here, so callers
re-list to observe fresh state after a write.

Public reads (list_available_properties, get_property_by_id,
list_filtered_properties) only ever return rows whose is_available flag is
set. Admin reads and all writes ignore the flag.
"""
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Optional

from azure.core.exceptions import AzureError
from sqlalchemy import desc, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from models import Property
from schemas.property import PropertyCreate, PropertyFilter, PropertyUpdate
from errors import ConfigurationError, ImageNotFoundError, PropertyNotFoundError, StoreError
from utils.images import filename_from_url

if TYPE_CHECKING:
     from azure_blob import ImageStorage

logger = logging.getLogger(__name__)


class PropertyService:
     """Data-access layer for properties and their images."""

     def __init__(self, db: Session, images: Optional["ImageStorage"] = None):
          self.db = db
          self.images = images

     # ------------------------------------------------------------------
     # Store call helpers
     # ------------------------------------------------------------------

     @contextmanager
     def _store_call(self, action: str) -> Iterator[None]:
          """Translate database failures into StoreError, rolling back writes."""
          try:
               yield
          except SQLAlchemyError as exc:
               self.db.rollback()
               logger.exception("Property store failed to %s", action)
               raise StoreError(f"Failed to {action}: {exc}") from exc

     @contextmanager
     def _blob_call(self, action: str) -> Iterator[None]:
          """Translate blob storage failures into StoreError."""
          try:
               yield
          except AzureError as exc:
               logger.exception("Image storage failed to %s", action)
               raise StoreError(f"Failed to {action}: {exc}") from exc

     def _available(self) -> Query:
          return self.db.query(Property).filter(Property.is_available == true())

     def _require_images(self) -> "ImageStorage":
          if self.images is None:
               raise ConfigurationError("Image storage is not configured")
          return self.images

     def _get_row(self, property_id: str) -> Optional[Property]:
          return self.db.query(Property).filter(Property.id == property_id).first()

     # ------------------------------------------------------------------
     # Public reads
     # ------------------------------------------------------------------

     def list_available_properties(self) -> list[Property]:
          """All available properties, newest first."""
          with self._store_call("list properties"):
               return self._available().order_by(desc(Property.created_at)).all()

     def get_property_by_id(self, property_id: str) -> Optional[Property]:
          """
          Fetch a single available property.

          Returns None when no row matches or the row is unavailable; the two
          cases are indistinguishable on this path.
          """
          with self._store_call(f"fetch property {property_id}"):
               return self._available().filter(Property.id == property_id).first()

     def list_filtered_properties(self, filters: PropertyFilter) -> list[Property]:
          """
          Available properties matching every present filter field.

          Category and room type match by equality; minimums and maximums
          are inclusive bounds.
          """
          query = self._available()

          if filters.property_type is not None:
               query = query.filter(Property.property_type == filters.property_type)
          if filters.min_price is not None:
               query = query.filter(Property.price >= filters.min_price)
          if filters.max_price is not None:
               query = query.filter(Property.price <= filters.max_price)
          if filters.min_area is not None:
               query = query.filter(Property.area >= filters.min_area)
          if filters.max_area is not None:
               query = query.filter(Property.area <= filters.max_area)
          if filters.room_type is not None:
               query = query.filter(Property.room_type == filters.room_type)

          with self._store_call("filter properties"):
               return query.order_by(desc(Property.created_at)).all()

     # ------------------------------------------------------------------
     # Admin reads
     # ------------------------------------------------------------------

     def list_all_properties(self) -> list[Property]:
          """Every property regardless of availability, newest first."""
          with self._store_call("list all properties"):
               return self.db.query(Property).order_by(desc(Property.created_at)).all()

     def get_property_for_admin(self, property_id: str) -> Optional[Property]:
          with self._store_call(f"fetch property {property_id}"):
               return self._get_row(property_id)

     # ------------------------------------------------------------------
     # Writes
     # ------------------------------------------------------------------

     def create_property(self, data: PropertyCreate) -> Property:
          """
          Insert a new property.

          The store assigns id, created_at and updated_at. The insert is
          committed before returning; on failure nothing is persisted.
          """
          prop = Property(**data.model_dump())
          with self._store_call("create property"):
               self.db.add(prop)
               self.db.commit()
               self.db.refresh(prop)
          logger.info("Created property %s", prop.id)
          return prop

     def update_property(self, property_id: str, changes: PropertyUpdate) -> Property:
          """
          Apply the explicitly set fields of changes to a property.

          No concurrency check is made; the last writer wins.

          Raises:
               PropertyNotFoundError: If no property has this id
               StoreError: If the update is rejected
          """
          with self._store_call(f"update property {property_id}"):
               prop = self._get_row(property_id)
               if prop is None:
                    raise PropertyNotFoundError(f"Property {property_id} not found")

               for field, value in changes.changes().items():
                    setattr(prop, field, value)
               prop.touch()

               self.db.commit()
               self.db.refresh(prop)
          logger.info("Updated property %s", property_id)
          return prop

     def delete_property(self, property_id: str) -> None:
          """
          Remove a property row. Unknown ids are a no-op.

          Uploaded images are left in storage.
          """
          with self._store_call(f"delete property {property_id}"):
               deleted = (
                    self.db.query(Property)
                    .filter(Property.id == property_id)
                    .delete(synchronize_session=False)
               )
               self.db.commit()
          if deleted:
               logger.info("Deleted property %s", property_id)

     # ------------------------------------------------------------------
     # Images
     # ------------------------------------------------------------------

     def upload_image(self, data: bytes, filename: str, content_type: Optional[str] = None) -> str:
          """
          Store an image under filename and return its public URL.

          Raises StoreError if the name is already taken or the upload is
          rejected. Callers pick collision-resistant names.
          """
          images = self._require_images()
          with self._blob_call(f"upload image {filename}"):
               url = images.upload(data, filename, content_type)
          logger.info("Uploaded image %s", filename)
          return url

     def delete_image(self, filename: str) -> None:
          images = self._require_images()
          with self._blob_call(f"delete image {filename}"):
               images.delete(filename)
          logger.info("Deleted image %s", filename)

     def attach_image(
          self,
          property_id: str,
          data: bytes,
          filename: str,
          content_type: Optional[str] = None
     ) -> Property:
          """
          Upload an image, then append its URL to the property's images.

          The two steps are independent store calls. If the row update fails
          after the upload succeeded, the blob is left orphaned and reported.
          """
          if self.get_property_for_admin(property_id) is None:
               raise PropertyNotFoundError(f"Property {property_id} not found")

          url = self.upload_image(data, filename, content_type)
          try:
               with self._store_call(f"attach image to property {property_id}"):
                    prop = self._get_row(property_id)
                    if prop is None:
                         raise PropertyNotFoundError(f"Property {property_id} not found")
                    prop.images = [*prop.images, url]
                    prop.touch()
                    self.db.commit()
                    self.db.refresh(prop)
          except StoreError:
               logger.warning(
                    "Image %s uploaded but not linked to property %s; blob is orphaned",
                    filename,
                    property_id,
               )
               raise
          return prop

     def remove_image(self, property_id: str, url: str) -> Property:
          """
          Drop an image URL from a property, deleting the blob best-effort.

          Only URLs already on the property are accepted. A failed blob delete
          is logged and does not stop the row update.
          """
          prop = self.get_property_for_admin(property_id)
          if prop is None:
               raise PropertyNotFoundError(f"Property {property_id} not found")
          if url not in prop.images:
               raise ImageNotFoundError(f"Image {url} is not attached to property {property_id}")

          filename = filename_from_url(url)
          if filename:
               try:
                    self.delete_image(filename)
               except (StoreError, ConfigurationError) as exc:
                    logger.warning("Could not delete image %s, removing reference anyway: %s", filename, exc)

          with self._store_call(f"remove image from property {property_id}"):
               prop.images = [u for u in prop.images if u != url]
               prop.touch()
               self.db.commit()
               self.db.refresh(prop)
          return prop
