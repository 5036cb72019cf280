"""Vehicle model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from fleetdash.ingestion.normalize import safe_float, safe_str
from fleetdash.models._base import FleetBaseModel


class LatestTelemetry(FleetBaseModel):
    """Read-only snapshot of the last reading, embedded by the server."""

    ts: str | None = None
    """ISO-8601 timestamp of the reading."""
    lat: float | None = None
    lon: float | None = None
    speed: float | None = None
    """Speed in km/h."""

    @field_validator("lat", "lon", "speed", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("ts", mode="before")
    @classmethod
    def _coerce_ts(cls, value: Any) -> str | None:
        return safe_str(value)


class Vehicle(FleetBaseModel):
    """A vehicle record as served by ``/vehicles``.

    ``code`` is assigned at creation and never changes afterwards; the
    server may send it as ``vehicle_code`` or ``code``.
    """

    id: str
    """Server-assigned identifier."""
    name: str = ""
    code: str | None = Field(default=None, validation_alias=AliasChoices("vehicle_code", "code"))
    latest_telemetry: LatestTelemetry | None = Field(
        default=None,
        validation_alias=AliasChoices("latestTelemetry", "latest_telemetry"),
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            text = str(value).strip()
            if text:
                return text
        raise ValueError("vehicle id must be a non-empty string")

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        return str(value)

    @field_validator("code", mode="before")
    @classmethod
    def _coerce_code(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("latest_telemetry", mode="before")
    @classmethod
    def _ignore_non_object(cls, value: Any) -> Any:
        if isinstance(value, LatestTelemetry) or isinstance(value, Mapping):
            return value
        return None

    @property
    def label(self) -> str:
        """Secondary label shown under the name: code, or the id when there is none."""
        return self.code or self.id
