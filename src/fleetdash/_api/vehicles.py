"""Vehicle endpoints: ``/vehicles`` and ``/vehicles/{id}``."""

from __future__ import annotations

from fleetdash._api._common import call_endpoint, resource_path
from fleetdash._constants import CREATE_VEHICLE_FAILED, LIST_VEHICLES_FAILED, UPDATE_VEHICLE_FAILED
from fleetdash._transport import Transport
from fleetdash.ingestion.records import normalize_vehicle, normalize_vehicles
from fleetdash.models.requests import CreateVehicleRequest, UpdateVehicleRequest
from fleetdash.models.vehicle import Vehicle


async def list_vehicles(transport: Transport) -> list[Vehicle]:
    """Fetch all vehicles."""
    return await call_endpoint(
        transport=transport,
        method="GET",
        endpoint=resource_path("vehicles"),
        failure_message=LIST_VEHICLES_FAILED,
        parse=normalize_vehicles,
    )


async def create_vehicle(transport: Transport, request: CreateVehicleRequest) -> Vehicle:
    """Create a vehicle and return the server's normalized representation."""
    return await call_endpoint(
        transport=transport,
        method="POST",
        endpoint=resource_path("vehicles"),
        failure_message=CREATE_VEHICLE_FAILED,
        parse=normalize_vehicle,
        json_body=request.model_dump(),
    )


async def update_vehicle(transport: Transport, vehicle_id: str, request: UpdateVehicleRequest) -> Vehicle:
    """Rename a vehicle; only ``name`` is sent."""
    return await call_endpoint(
        transport=transport,
        method="PUT",
        endpoint=resource_path("vehicles", vehicle_id),
        failure_message=UPDATE_VEHICLE_FAILED,
        parse=normalize_vehicle,
        json_body=request.model_dump(),
    )
