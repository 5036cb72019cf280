"""Shared fakes for fleetdash tests."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import pytest

from fleetdash._constants import (
    CREATE_VEHICLE_FAILED,
    FETCH_TELEMETRY_FAILED,
    LIST_VEHICLES_FAILED,
    UPDATE_VEHICLE_FAILED,
)
from fleetdash._transport import HttpResponse
from fleetdash.exceptions import FetchError
from fleetdash.models.telemetry import TelemetrySample
from fleetdash.models.vehicle import Vehicle

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


@dataclass(frozen=True)
class RecordedCall:
    method: str
    endpoint: str
    params: dict[str, str] | None = None
    json_body: dict[str, Any] | None = None


@dataclass
class FakeTransport:
    """Transport double keyed on (method, endpoint)."""

    responses: dict[tuple[str, str], HttpResponse | Exception] = field(default_factory=dict)
    calls: list[RecordedCall] = field(default_factory=list)

    def respond(self, method: str, endpoint: str, *, status: int = 200, body: Any = None, text: str | None = None) -> None:
        if text is None:
            text = "" if body is None else json.dumps(body)
        self.responses[(method, endpoint)] = HttpResponse(status=status, text=text, endpoint=endpoint)

    def fail(self, method: str, endpoint: str, exc: Exception) -> None:
        self.responses[(method, endpoint)] = exc

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        self.calls.append(
            RecordedCall(
                method=method,
                endpoint=endpoint,
                params=dict(params) if params else None,
                json_body=dict(json_body) if json_body is not None else None,
            )
        )
        outcome = self.responses.get((method, endpoint))
        if outcome is None:
            raise AssertionError(f"Unexpected request in fake transport: {method} {endpoint}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@dataclass
class FakeFleetApi:
    """In-memory stand-in for FleetClient used by controller tests."""

    vehicles: list[Vehicle] = field(default_factory=list)
    telemetry_results: list[list[TelemetrySample]] = field(default_factory=list)
    telemetry_gates: dict[int, asyncio.Event] = field(default_factory=dict)
    fail_list: bool = False
    fail_create: bool = False
    fail_update: bool = False
    fail_telemetry: bool = False
    list_calls: int = 0
    created: list[tuple[str, str]] = field(default_factory=list)
    updated: list[tuple[str, str]] = field(default_factory=list)
    telemetry_calls: list[tuple[str, datetime | None, datetime | None]] = field(default_factory=list)

    async def list_vehicles(self) -> list[Vehicle]:
        self.list_calls += 1
        if self.fail_list:
            raise FetchError(LIST_VEHICLES_FAILED, status_code=500, endpoint="/vehicles")
        return list(self.vehicles)

    async def create_vehicle(self, name: str, code: str) -> Vehicle:
        self.created.append((name, code))
        if self.fail_create:
            raise FetchError(CREATE_VEHICLE_FAILED, status_code=500, endpoint="/vehicles")
        vehicle = Vehicle(id=f"v{len(self.vehicles) + 1}", name=name, code=code)
        self.vehicles.append(vehicle)
        return vehicle

    async def update_vehicle(self, vehicle_id: str, name: str) -> Vehicle:
        self.updated.append((vehicle_id, name))
        if self.fail_update:
            raise FetchError(UPDATE_VEHICLE_FAILED, status_code=500, endpoint=f"/vehicles/{vehicle_id}")
        for index, vehicle in enumerate(self.vehicles):
            if vehicle.id == vehicle_id:
                self.vehicles[index] = vehicle.model_copy(update={"name": name})
                return self.vehicles[index]
        raise FetchError(UPDATE_VEHICLE_FAILED, status_code=404, endpoint=f"/vehicles/{vehicle_id}")

    async def get_telemetry(
        self,
        vehicle_id: str,
        *,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[TelemetrySample]:
        index = len(self.telemetry_calls)
        self.telemetry_calls.append((vehicle_id, start, end))
        gate = self.telemetry_gates.get(index)
        if gate is not None:
            await gate.wait()
        if self.fail_telemetry:
            raise FetchError(FETCH_TELEMETRY_FAILED, status_code=503, endpoint=f"/vehicles/{vehicle_id}/telemetry")
        if index < len(self.telemetry_results):
            return list(self.telemetry_results[index])
        return []


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def fake_api() -> FakeFleetApi:
    return FakeFleetApi(
        vehicles=[
            Vehicle.model_validate({"id": "v1", "name": "Van 5", "vehicle_code": "V005"}),
            Vehicle.model_validate(
                {
                    "id": "v2",
                    "name": "Truck 1",
                    "code": "T001",
                    "latestTelemetry": {"ts": "2026-10-19T11:58:00Z", "lat": 52.3676, "lon": 4.9041, "speed": 48},
                }
            ),
        ]
    )
