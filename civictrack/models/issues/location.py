# Third-party imports
from sqlalchemy import Column, Float, Index, String

# Local application imports
from civictrack.models.base import Base
from civictrack.models.mixins.uuid_timestamp import UUIDTimeStampMixin


class Location(Base, UUIDTimeStampMixin):
    __tablename__ = "locations"
    # Serves the bounding-box pre-filter of the nearby search
    __table_args__ = (Index("ix_locations_lat_lng", "latitude", "longitude"),)

    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    address = Column(String(255), nullable=True)
