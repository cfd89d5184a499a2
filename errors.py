# errors.py
"""Exception hierarchy for the listings backend."""


class ListingError(Exception):
     """Base exception for all listings errors."""


class StoreError(ListingError):
     """Raised when the database or blob store rejects or fails an operation."""


class PropertyNotFoundError(StoreError):
     """Raised when a write targets a property id that does not exist."""


class ImageValidationError(ListingError, ValueError):
     """Raised when an upload is rejected before reaching the store."""


class ConfigurationError(ListingError):
     """Raised when a required setting is missing or invalid."""


class ImageNotFoundError(ListingError):
     """Raised when an image URL is not among a property's images."""
