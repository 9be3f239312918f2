"""Charging station API endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from evcharge.api.dependencies import get_app_settings, get_station_repository
from evcharge.auth import Identity, get_current_identity
from evcharge.config import Settings
from evcharge.constants import ConnectorType, StationStatus
from evcharge.schemas.station import (
    DeleteStationResponse,
    StationFields,
    StationFilters,
    StationResponse,
)
from evcharge.services.station_repository import StationRepository, filter_stations
from evcharge.utils.exceptions import APIError, ErrorCode, raise_for_result

# Every station route requires a bearer token
router = APIRouter(
    prefix="/api/charging-stations",
    tags=["charging-stations"],
    dependencies=[Depends(get_current_identity)],
)

seed_router = APIRouter(prefix="/api", tags=["seed"])

DEMO_STATIONS = [
    {
        "name": "Downtown Station",
        "location": {"type": "Point", "coordinates": [-73.935242, 40.730610]},
        "status": StationStatus.AVAILABLE,
        "powerOutput": 50,
        "connectorType": ConnectorType.TYPE_2,
    },
    {
        "name": "Central Park Station",
        "location": {"type": "Point", "coordinates": [-73.965354, 40.782865]},
        "status": StationStatus.IN_USE,
        "powerOutput": 100,
        "connectorType": ConnectorType.CCS,
    },
    {
        "name": "Brooklyn Station",
        "location": {"type": "Point", "coordinates": [-73.949721, 40.678178]},
        "status": StationStatus.AVAILABLE,
        "powerOutput": 75,
        "connectorType": ConnectorType.CHADEMO,
    },
]


def ensure_can_mutate(
    repository: StationRepository,
    station_id: str,
    identity: Identity,
    settings: Settings,
) -> None:
    """
    Enforce owner-only writes when the deployment asks for it.

    By default any authenticated user may change any station.
    """
    if not settings.restrict_station_mutation_to_owner:
        return

    found = repository.get_by_id(station_id)
    raise_for_result(found, "check_station_owner", station_id=station_id)
    if str(found.data.created_by) != identity.user_id:
        raise APIError(ErrorCode.FORBIDDEN, "Only the station owner can modify this station")


@router.get("", response_model=list[StationResponse])
async def list_stations(
    status_filter: Optional[str] = Query(None, alias="status"),
    connector_type: Optional[str] = Query(None, alias="connectorType"),
    min_power: float = Query(0, ge=0, alias="minPower"),
    repository: StationRepository = Depends(get_station_repository),
) -> list[StationResponse]:
    """
    List all charging stations, newest first.

    Args:
        status_filter: Only stations with this status
        connector_type: Only stations whose connector type contains this text
        min_power: Only stations delivering at least this many kW (0 disables)
        repository: Station repository

    Returns:
        Matching stations
    """
    result = repository.list()
    raise_for_result(result, "list_stations")

    filters = StationFilters(status=status_filter, connectorType=connector_type, minPower=min_power)
    stations = filter_stations(result.data, filters)
    return [StationResponse.from_orm(s) for s in stations]


@router.get("/{station_id}", response_model=StationResponse)
async def get_station(
    station_id: str,
    repository: StationRepository = Depends(get_station_repository),
) -> StationResponse:
    """Get a single charging station by ID."""
    result = repository.get_by_id(station_id)
    raise_for_result(result, "get_station", station_id=station_id)

    return StationResponse.from_orm(result.data)


@router.post("", response_model=StationResponse, status_code=status.HTTP_201_CREATED)
async def create_station(
    fields: StationFields,
    identity: Identity = Depends(get_current_identity),
    repository: StationRepository = Depends(get_station_repository),
) -> StationResponse:
    """
    Create a new charging station owned by the caller.

    Args:
        fields: Station fields (id, owner and timestamps are assigned by the server)
        identity: Authenticated caller
        repository: Station repository

    Returns:
        The stored station
    """
    result = repository.create(fields.supplied(), identity.user_id)
    raise_for_result(result, "create_station", user_id=identity.user_id)

    return StationResponse.from_orm(result.data)


@router.put("/{station_id}", response_model=StationResponse)
async def update_station(
    station_id: str,
    fields: StationFields,
    identity: Identity = Depends(get_current_identity),
    repository: StationRepository = Depends(get_station_repository),
    settings: Settings = Depends(get_app_settings),
) -> StationResponse:
    """
    Update the supplied fields of a charging station.

    Keys missing from the body are left untouched.
    """
    ensure_can_mutate(repository, station_id, identity, settings)

    result = repository.update(station_id, fields.supplied())
    raise_for_result(result, "update_station", station_id=station_id, user_id=identity.user_id)

    return StationResponse.from_orm(result.data)


@router.delete("/{station_id}", response_model=DeleteStationResponse)
async def delete_station(
    station_id: str,
    identity: Identity = Depends(get_current_identity),
    repository: StationRepository = Depends(get_station_repository),
    settings: Settings = Depends(get_app_settings),
) -> DeleteStationResponse:
    """Delete a charging station and echo its last state."""
    ensure_can_mutate(repository, station_id, identity, settings)

    result = repository.delete(station_id)
    raise_for_result(result, "delete_station", station_id=station_id, user_id=identity.user_id)

    return DeleteStationResponse(
        message="Charging station deleted successfully",
        deletedStation=StationResponse.from_orm(result.data),
    )


@seed_router.post("/seed-data")
async def seed_data(
    identity: Identity = Depends(get_current_identity),
    repository: StationRepository = Depends(get_station_repository),
) -> dict[str, str | int]:
    """Replace all stations with a small demo data set owned by the caller."""
    fields = [StationFields.model_validate(station).supplied() for station in DEMO_STATIONS]
    result = repository.replace_all(fields, identity.user_id)
    raise_for_result(result, "seed_data", user_id=identity.user_id)

    return {"message": "Test data added successfully", "count": len(result.data)}
