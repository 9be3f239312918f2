"""Field rules for charging station records."""
import math
from typing import Any, Callable, Dict, List, Optional

from evcharge.constants import (
    ADDRESS_MAX_LENGTH,
    LATITUDE_RANGE,
    LOCATION_TYPE_POINT,
    LONGITUDE_RANGE,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    POWER_OUTPUT_MAX_KW,
    POWER_OUTPUT_MIN_KW,
    ConnectorType,
    StationStatus,
)
from evcharge.schemas.station import LocationIn

STATION_FIELDS = ("name", "location", "status", "powerOutput", "connectorType")

COORDINATES_MESSAGE = (
    f"Invalid coordinates. Longitude must be between {LONGITUDE_RANGE[0]:g} and {LONGITUDE_RANGE[1]:g}, "
    f"latitude between {LATITUDE_RANGE[0]:g} and {LATITUDE_RANGE[1]:g}"
)
STATUS_MESSAGE = f"Status must be one of: {', '.join(StationStatus.ALL)}"
CONNECTOR_MESSAGE = f"Connector type must be one of: {', '.join(ConnectorType.ALL)}"


def _validate_name(value: Optional[str]) -> List[str]:
    if value is None or not value.strip():
        return ["Name is required"]
    name = value.strip()
    if len(name) < NAME_MIN_LENGTH:
        return [f"Name must be at least {NAME_MIN_LENGTH} characters long"]
    if len(name) > NAME_MAX_LENGTH:
        return [f"Name cannot exceed {NAME_MAX_LENGTH} characters"]
    return []


def _validate_location(value: Optional[LocationIn]) -> List[str]:
    if value is None:
        return ["Location is required"]

    errors = []
    if value.type is not None and value.type != LOCATION_TYPE_POINT:
        errors.append("Location type must be Point")

    coordinates = value.coordinates
    if (
        coordinates is None
        or len(coordinates) != 2
        or not all(math.isfinite(c) for c in coordinates)
        or not LONGITUDE_RANGE[0] <= coordinates[0] <= LONGITUDE_RANGE[1]
        or not LATITUDE_RANGE[0] <= coordinates[1] <= LATITUDE_RANGE[1]
    ):
        errors.append(COORDINATES_MESSAGE)

    if value.address is not None and len(value.address.strip()) > ADDRESS_MAX_LENGTH:
        errors.append(f"Address cannot exceed {ADDRESS_MAX_LENGTH} characters")
    return errors


def _validate_status(value: Optional[str]) -> List[str]:
    if value is None or value == "":
        return ["Status is required"]
    if value not in StationStatus.ALL:
        return [STATUS_MESSAGE]
    return []


def _validate_power_output(value: Optional[float]) -> List[str]:
    if value is None:
        return ["Power output is required"]
    if not math.isfinite(value):
        return ["Power output must be a number"]
    if value < POWER_OUTPUT_MIN_KW:
        return ["Power output cannot be negative"]
    if value > POWER_OUTPUT_MAX_KW:
        return [f"Power output cannot exceed {POWER_OUTPUT_MAX_KW} kW"]
    return []


def _validate_connector_type(value: Optional[str]) -> List[str]:
    if value is None or value == "":
        return ["Connector type is required"]
    if value not in ConnectorType.ALL:
        return [CONNECTOR_MESSAGE]
    return []


VALIDATORS: Dict[str, Callable[[Any], List[str]]] = {
    "name": _validate_name,
    "location": _validate_location,
    "status": _validate_status,
    "powerOutput": _validate_power_output,
    "connectorType": _validate_connector_type,
}


def validate_station_fields(fields: Dict[str, Any], partial: bool = False) -> List[str]:
    """
    Check station fields and collect every violation.

    Args:
        fields: Mapping of API field name to parsed value
        partial: When True only the keys present in ``fields`` are checked
            (update); otherwise every station field is required (create)

    Returns:
        Error messages in field order; empty when the fields are valid
    """
    names = [name for name in STATION_FIELDS if name in fields] if partial else STATION_FIELDS
    errors: List[str] = []
    for name in names:
        errors.extend(VALIDATORS[name](fields.get(name)))
    return errors
