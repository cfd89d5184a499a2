from .base import Base, TimestampMixin, utcnow
from .property import Property, PropertyType

__all__ = [
     "Base",
     "TimestampMixin",
     "utcnow",
     "Property",
     "PropertyType",
]
