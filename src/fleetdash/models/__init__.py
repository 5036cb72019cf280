"""Data models for fleet API records and requests."""

from fleetdash.models._base import FleetBaseModel
from fleetdash.models.requests import CreateVehicleRequest, FormMode, UpdateVehicleRequest, VehicleFormValues
from fleetdash.models.telemetry import TelemetrySample, TimeRange, to_query_timestamp
from fleetdash.models.vehicle import LatestTelemetry, Vehicle

__all__ = [
    "CreateVehicleRequest",
    "FleetBaseModel",
    "FormMode",
    "LatestTelemetry",
    "TelemetrySample",
    "TimeRange",
    "UpdateVehicleRequest",
    "Vehicle",
    "VehicleFormValues",
    "to_query_timestamp",
]
