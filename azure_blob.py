from functools import lru_cache
from typing import Optional
from urllib.parse import quote

from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings

from config import settings
from errors import ConfigurationError


class ImageStorage:
     """
     Flat image namespace inside a single blob container.

     Objects are keyed by filename; rows reference them by full public URL.
     """

     def __init__(self, container_client: ContainerClient):
          self.container = container_client

     @property
     def container_name(self) -> str:
          return self.container.container_name

     def public_url(self, filename: str) -> str:
          return f"{self.container.url.rstrip('/')}/{quote(filename)}"

     def upload(self, data: bytes, filename: str, content_type: Optional[str] = None) -> str:
          """Store data under filename without overwriting, return its public URL."""
          self.container.upload_blob(
               name=filename,
               data=data,
               overwrite=False,
               content_settings=ContentSettings(content_type=content_type) if content_type else None,
          )
          return self.public_url(filename)

     def delete(self, filename: str) -> None:
          self.container.delete_blob(filename)

     def exists(self) -> bool:
          return self.container.exists()

     def properties(self) -> dict:
          """Container metadata: name and public access level."""
          props = self.container.get_container_properties()
          return {
               "name": props.name,
               "public_access": props.public_access,
               "last_modified": props.last_modified,
          }


@lru_cache(maxsize=1)
def get_blob_service() -> BlobServiceClient:
     if not settings.storage.connection_string:
          raise ConfigurationError("Azure storage is not configured")
     return BlobServiceClient.from_connection_string(settings.storage.connection_string)


def get_image_storage() -> ImageStorage:
     """FastAPI dependency providing the listing image container."""
     container = get_blob_service().get_container_client(settings.storage.container)
     return ImageStorage(container)
