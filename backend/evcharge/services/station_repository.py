"""Persistence and validation for charging station records."""
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from evcharge.constants import LOCATION_TYPE_POINT
from evcharge.models import ChargingStation
from evcharge.schemas.station import LocationIn, StationFilters
from evcharge.services.station_validation import validate_station_fields
from evcharge.utils.db import get_by_id
from evcharge.utils.exceptions import ErrorCode
from evcharge.utils.logger import logger, log_context
from evcharge.utils.result import ServiceResult

NOT_FOUND_MESSAGE = "Charging station not found"
INVALID_ID_MESSAGE = "Invalid station ID format"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _apply_fields(station: ChargingStation, fields: Dict[str, Any]) -> None:
    """Copy validated API fields onto the model."""
    if "name" in fields:
        station.name = fields["name"].strip()
    if "location" in fields:
        location: LocationIn = fields["location"]
        station.location_type = location.type or LOCATION_TYPE_POINT
        station.longitude = float(location.coordinates[0])
        station.latitude = float(location.coordinates[1])
        station.address = location.address.strip() if location.address is not None else None
    if "status" in fields:
        station.status = fields["status"]
    if "powerOutput" in fields:
        station.power_output = float(fields["powerOutput"])
    if "connectorType" in fields:
        station.connector_type = fields["connectorType"]


class StationRepository:
    """
    CRUD over ``charging_stations``.

    Each write validates first and commits a single row, so a rejected
    request never leaves a partial station behind.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = _utcnow):
        self.db = db
        self._clock = clock

    def create(self, fields: Dict[str, Any], owner_id: str | UUID) -> ServiceResult[ChargingStation]:
        """
        Validate and insert a station owned by ``owner_id``.

        Args:
            fields: API field name to value; all station fields are required
            owner_id: Identity of the creating user

        Returns:
            Result holding the stored station, or VALIDATION_ERROR listing every failing field
        """
        errors = validate_station_fields(fields)
        if errors:
            return ServiceResult.fail(ErrorCode.VALIDATION_ERROR, "Validation error", errors)

        now = self._clock()
        station = ChargingStation(
            created_by=owner_id if isinstance(owner_id, UUID) else UUID(str(owner_id)),
            created_at=now,
            updated_at=now,
        )
        _apply_fields(station, fields)

        self.db.add(station)
        self._commit()
        self.db.refresh(station)

        logger.info("Station created: " + log_context(station_id=station.id, owner_id=owner_id))
        return ServiceResult.ok(station)

    def get_by_id(self, station_id: Optional[str]) -> ServiceResult[ChargingStation]:
        """Fetch one station; malformed ids fail with INVALID_IDENTIFIER before any lookup."""
        result = get_by_id(self.db, ChargingStation, station_id, error_message=NOT_FOUND_MESSAGE)
        if result.error_code == ErrorCode.INVALID_IDENTIFIER:
            return ServiceResult.fail(ErrorCode.INVALID_IDENTIFIER, INVALID_ID_MESSAGE)
        return result

    def list(self) -> ServiceResult[List[ChargingStation]]:
        """Return every station, newest first. Each call re-reads current state."""
        stations = (
            self.db.query(ChargingStation)
            .order_by(ChargingStation.created_at.desc())
            .all()
        )
        return ServiceResult.ok(stations)

    def update(self, station_id: Optional[str], fields: Dict[str, Any]) -> ServiceResult[ChargingStation]:
        """
        Apply a partial update.

        Only keys present in ``fields`` are validated and written; an
        explicit None is a value (and fails validation), not "leave unchanged".
        """
        found = self.get_by_id(station_id)
        if not found.success:
            return found

        errors = validate_station_fields(fields, partial=True)
        if errors:
            return ServiceResult.fail(ErrorCode.VALIDATION_ERROR, "Validation error", errors)

        station = found.data
        _apply_fields(station, fields)
        station.updated_at = self._clock()
        self._commit()
        self.db.refresh(station)

        logger.info(
            "Station updated: " + log_context(station_id=station.id, fields=",".join(sorted(fields)) or "-")
        )
        return ServiceResult.ok(station)

    def delete(self, station_id: Optional[str]) -> ServiceResult[ChargingStation]:
        """Remove a station and return its last state."""
        found = self.get_by_id(station_id)
        if not found.success:
            return found

        station = found.data
        self.db.delete(station)
        self._commit()

        logger.info("Station deleted: " + log_context(station_id=station.id))
        return ServiceResult.ok(station)

    def replace_all(self, stations: Sequence[Dict[str, Any]], owner_id: str | UUID) -> ServiceResult[List[ChargingStation]]:
        """
        Delete every station and insert ``stations`` in one transaction.

        Used to seed demo data. All entries are validated before anything is deleted.
        """
        errors = [error for fields in stations for error in validate_station_fields(fields)]
        if errors:
            return ServiceResult.fail(ErrorCode.VALIDATION_ERROR, "Validation error", errors)

        owner = owner_id if isinstance(owner_id, UUID) else UUID(str(owner_id))
        self.db.query(ChargingStation).delete()
        created = []
        for fields in stations:
            now = self._clock()
            station = ChargingStation(created_by=owner, created_at=now, updated_at=now)
            _apply_fields(station, fields)
            self.db.add(station)
            created.append(station)
        self._commit()

        logger.info("Stations replaced: " + log_context(count=len(created), owner_id=owner))
        return ServiceResult.ok(created)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise


def filter_stations(stations: Sequence[ChargingStation], filters: StationFilters) -> List[ChargingStation]:
    """
    Narrow a station list the way the dashboard does.

    ``status`` must match exactly, ``connectorType`` matches as a substring,
    and ``minPower`` of 0 means no power filter.
    """
    matched = []
    for station in stations:
        if filters.status and station.status != filters.status:
            continue
        if filters.connectorType and filters.connectorType not in station.connector_type:
            continue
        if filters.minPower > 0 and station.power_output < filters.minPower:
            continue
        matched.append(station)
    return matched
