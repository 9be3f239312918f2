"""Schemas for charging station requests and responses."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictFloat

from evcharge.constants import LOCATION_TYPE_POINT
from evcharge.utils.serialization import serialize_datetime, serialize_uuid


class LocationIn(BaseModel):
    """GeoJSON-style point supplied by clients."""
    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = LOCATION_TYPE_POINT
    coordinates: Optional[List[StrictFloat]] = None
    address: Optional[str] = None


class StationFields(BaseModel):
    """
    Station fields accepted on create and update.

    Only the shape is checked here; numbers are strict, so booleans and
    numeric strings are rejected rather than coerced. Range and enum rules live in
    ``evcharge.services.station_validation`` so that every failing field
    is reported at once. Server-managed keys (id, owner, timestamps) are ignored.
    """
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    location: Optional[LocationIn] = None
    status: Optional[str] = None
    powerOutput: Optional[StrictFloat] = None
    connectorType: Optional[str] = None

    def supplied(self) -> dict:
        """Return only the keys present in the request body, explicit nulls included."""
        return {key: getattr(self, key) for key in self.model_fields_set}


class LocationOut(BaseModel):
    type: str = LOCATION_TYPE_POINT
    coordinates: List[float]
    address: Optional[str] = None


class StationResponse(BaseModel):
    """Charging station as returned by the API."""
    id: str
    name: str
    location: LocationOut
    status: str
    powerOutput: float
    connectorType: str
    createdBy: str
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

    @classmethod
    def from_orm(cls, obj) -> "StationResponse":
        """Convert SQLAlchemy model to response model."""
        return cls(
            id=serialize_uuid(obj.id),
            name=obj.name,
            location=LocationOut(
                type=obj.location_type,
                coordinates=obj.coordinates,
                address=obj.address,
            ),
            status=obj.status,
            powerOutput=obj.power_output,
            connectorType=obj.connector_type,
            createdBy=serialize_uuid(obj.created_by),
            createdAt=serialize_datetime(obj.created_at),
            updatedAt=serialize_datetime(obj.updated_at),
        )


class DeleteStationResponse(BaseModel):
    message: str
    deletedStation: StationResponse


class StationFilters(BaseModel):
    """Optional list filters used by the dashboard."""
    status: Optional[str] = None
    connectorType: Optional[str] = None
    minPower: float = Field(default=0, ge=0)

