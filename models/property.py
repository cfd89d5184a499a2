import enum
import uuid

from sqlalchemy import Boolean, CheckConstraint, Column, Enum, Float, Integer, JSON, String, Text
from sqlalchemy.ext.mutable import MutableList

from .base import Base, TimestampMixin


class PropertyType(str, enum.Enum):
     """Closed set of listing categories."""
     APARTMENT = "apartment"
     HOUSE = "house"
     STUDIO = "studio"
     OFFICE = "office"


class Property(TimestampMixin, Base):
     """
     Property model - a single real-estate listing.

     Price is expressed in units of 10,000. Images are stored as full public
     URLs in display order; only rows with is_available set are visible on
     the public read paths.
     """
     __tablename__ = "properties"
     __table_args__ = (
          CheckConstraint("price >= 0", name="ck_properties_price_non_negative"),
          CheckConstraint("area >= 0", name="ck_properties_area_non_negative"),
     )

     id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
     title = Column(String(255), nullable=False)
     description = Column(Text, nullable=False, default="")
     address = Column(String(255), nullable=False)
     property_type = Column(
          Enum(
               PropertyType,
               name="property_type",
               create_constraint=True,
               values_callable=lambda members: [m.value for m in members],
          ),
          nullable=False,
          index=True,
     )
     room_type = Column(String(100), nullable=False, default="")

     price = Column(Float, nullable=False, default=0)
     area = Column(Float, nullable=False, default=0)
     floor = Column(Integer, nullable=False, default=1)
     total_floors = Column(Integer, nullable=False, default=1)
     age = Column(Integer, nullable=False, default=0)
     direction = Column(String(50), nullable=False, default="")
     management_fee = Column(Float, nullable=False, default=0)

     images = Column(MutableList.as_mutable(JSON), nullable=False, default=list)
     features = Column(MutableList.as_mutable(JSON), nullable=False, default=list)

     is_available = Column(Boolean, nullable=False, default=True, index=True)

     contact_name = Column(String(100), nullable=False, default="")
     contact_phone = Column(String(50), nullable=False, default="")

     def __repr__(self):
          return f"<Property(id={self.id}, title='{self.title}', available={self.is_available})>"
