"""Telemetry history models."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from fleetdash.ingestion.normalize import safe_float, safe_str
from fleetdash.models._base import FleetBaseModel


class TelemetrySample(FleetBaseModel):
    """One timestamped position/speed reading.

    ``timestamp`` is read from ``timestamp`` first, then ``ts``, and is
    ``""`` when the server sends neither.
    """

    timestamp: str = Field(default="", validation_alias=AliasChoices("timestamp", "ts"))
    speed: float | None = None
    lat: float | None = None
    lon: float | None = None

    @field_validator("timestamp", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("lat", "lon", "speed", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @property
    def row_key(self) -> str:
        """Stable key for table rows; samples have no identity of their own."""
        return f"{self.timestamp}-{_key_part(self.lat, 'lat')}-{_key_part(self.lon, 'lon')}-{_key_part(self.speed, 'speed')}"


def _key_part(value: float | None, fallback: str) -> str:
    return fallback if value is None else f"{value:g}"


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.astimezone()
    return value


def to_query_timestamp(value: datetime) -> str:
    """Serialize *value* as UTC ISO-8601 with millisecond precision (``...000Z``)."""
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TimeRange(BaseModel):
    """Inclusive ``[start, end]`` telemetry query window.

    Naive datetimes are taken as local time.
    """

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        return _aware(value)

    @model_validator(mode="after")
    def _ordered(self) -> TimeRange:
        if self.start > self.end:
            raise ValueError("time range start must not be after end")
        return self

    @classmethod
    def last(cls, hours: float, *, now: datetime | None = None) -> TimeRange:
        """Range ending at *now* and spanning *hours*."""
        end = _aware(now) if now is not None else datetime.now(UTC)
        return cls(start=end - timedelta(hours=hours), end=end)

    def query_params(self) -> dict[str, str]:
        return {"from": to_query_timestamp(self.start), "to": to_query_timestamp(self.end)}
