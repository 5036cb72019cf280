"""Telemetry history endpoint: ``/vehicles/{id}/telemetry``."""

from __future__ import annotations

from datetime import datetime

from fleetdash._api._common import call_endpoint, resource_path
from fleetdash._constants import FETCH_TELEMETRY_FAILED
from fleetdash._transport import Transport
from fleetdash.ingestion.records import normalize_telemetry
from fleetdash.models.telemetry import TelemetrySample, to_query_timestamp


def build_telemetry_params(start: datetime | None, end: datetime | None) -> dict[str, str]:
    """Query parameters for the range; unset bounds are omitted."""
    params: dict[str, str] = {}
    if start is not None:
        params["from"] = to_query_timestamp(start)
    if end is not None:
        params["to"] = to_query_timestamp(end)
    return params


async def fetch_telemetry(
    transport: Transport,
    vehicle_id: str,
    *,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[TelemetrySample]:
    """Fetch telemetry samples for a vehicle.

    Range semantics (inclusive/exclusive bounds) are defined by the server.
    """
    return await call_endpoint(
        transport=transport,
        method="GET",
        endpoint=resource_path("vehicles", vehicle_id, "telemetry"),
        failure_message=FETCH_TELEMETRY_FAILED,
        parse=normalize_telemetry,
        params=build_telemetry_params(start, end) or None,
    )
