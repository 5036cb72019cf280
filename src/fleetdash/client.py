"""High-level async client for the fleet REST API."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import aiohttp

from fleetdash._api import telemetry as _telemetry_api
from fleetdash._api import vehicles as _vehicles_api
from fleetdash._transport import HttpTransport, Transport
from fleetdash.config import DashboardConfig
from fleetdash.exceptions import FleetDashError
from fleetdash.models.requests import CreateVehicleRequest, UpdateVehicleRequest
from fleetdash.models.telemetry import TelemetrySample
from fleetdash.models.vehicle import Vehicle

_logger = logging.getLogger(__name__)


class FleetClient:
    """Async client for the fleet API.

    Usage::

        async with FleetClient(DashboardConfig.from_env()) as client:
            vehicles = await client.list_vehicles()

    A ``transport`` may be injected instead of an HTTP session (tests, or
    a caller that already owns a transport).
    """

    def __init__(
        self,
        config: DashboardConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or DashboardConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport

    @property
    def config(self) -> DashboardConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> FleetClient:
        if self._transport is not None:
            return self
        if self._http_session is None:
            timeout = (
                aiohttp.ClientTimeout(total=self._config.request_timeout)
                if self._config.request_timeout is not None
                else None
            )
            if timeout is None:
                self._http_session = aiohttp.ClientSession()
            else:
                self._http_session = aiohttp.ClientSession(timeout=timeout)
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise FleetDashError("Client not initialized. Use 'async with FleetClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def list_vehicles(self) -> list[Vehicle]:
        """Fetch all vehicles."""
        return await _vehicles_api.list_vehicles(self._require_transport())

    async def create_vehicle(self, name: str, code: str) -> Vehicle:
        """Create a vehicle with an immutable *code*."""
        request = CreateVehicleRequest(name=name, code=code)
        vehicle = await _vehicles_api.create_vehicle(self._require_transport(), request)
        _logger.debug("Created vehicle id=%s code=%s", vehicle.id, vehicle.code)
        return vehicle

    async def update_vehicle(self, vehicle_id: str, name: str) -> Vehicle:
        """Rename a vehicle."""
        request = UpdateVehicleRequest(name=name)
        vehicle = await _vehicles_api.update_vehicle(self._require_transport(), vehicle_id, request)
        _logger.debug("Updated vehicle id=%s", vehicle.id)
        return vehicle

    async def get_telemetry(
        self,
        vehicle_id: str,
        *,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[TelemetrySample]:
        """Fetch telemetry history for *vehicle_id* within ``[start, end]``."""
        return await _telemetry_api.fetch_telemetry(
            self._require_transport(),
            vehicle_id,
            start=start,
            end=end,
        )
