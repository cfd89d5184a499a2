from datetime import datetime, timedelta, timezone

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import DeclarativeBase, declared_attr


def utcnow() -> datetime:
     """Naive UTC timestamp, microsecond precision."""
     return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Provides common configuration and mixins.
     """

     @declared_attr.directive
     def __tablename__(cls) -> str:
          """
          Automatically generate table name from class name.
          Example: Property -> properties
          """
          import re
          name = re.sub(r'(?<!^)(?=[A-Z])', '_', cls.__name__).lower()
          # Pluralize (simple version)
          if name.endswith('y'):
               return name[:-1] + 'ies'
          elif name.endswith('s'):
               return name + 'es'
          return name + 's'


class TimestampMixin:
     """
     created_at / updated_at columns maintained by the application.

     Both are assigned on insert with microsecond precision.
     """
     created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
     updated_at = Column(DateTime, default=utcnow, nullable=False)

     def touch(self) -> None:
          """Refresh updated_at, never moving it backwards or standing still."""
          now = utcnow()
          if self.updated_at is not None and now <= self.updated_at:
               now = self.updated_at + timedelta(microseconds=1)
          self.updated_at = now
