"""Charging station model."""
from sqlalchemy import Column, String, Float, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
import uuid
from evcharge.constants import LOCATION_TYPE_POINT
from evcharge.database import Base


class ChargingStation(Base):
    """EV charging station record, owned by the user who created it."""
    __tablename__ = "charging_stations"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    location_type = Column(String(16), nullable=False, default=LOCATION_TYPE_POINT)
    longitude = Column(Float, nullable=False)
    latitude = Column(Float, nullable=False)
    address = Column(String(200), nullable=True)
    status = Column(String(32), nullable=False)
    power_output = Column(Float, nullable=False)  # kW
    connector_type = Column(String(32), nullable=False)
    created_by = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    owner = relationship("User", backref="stations")

    __table_args__ = (
        Index("ix_charging_stations_location", "longitude", "latitude"),
    )

    @property
    def coordinates(self) -> list[float]:
        """[longitude, latitude], the order used on the wire."""
        return [self.longitude, self.latitude]
