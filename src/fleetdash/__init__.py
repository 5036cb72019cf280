"""fleetdash - Async client and view state for a vehicle fleet dashboard."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("fleetdash")
except PackageNotFoundError:
    __version__ = "0+local"
from fleetdash.client import FleetClient
from fleetdash.config import DashboardConfig
from fleetdash.controller import Notification, NotificationLevel, VehicleDashboardController
from fleetdash.exceptions import (
    FetchError,
    FleetDashConfigError,
    FleetDashError,
    FleetTransportError,
    RecordShapeError,
    VehicleFormError,
)
from fleetdash.models import (
    CreateVehicleRequest,
    FormMode,
    LatestTelemetry,
    TelemetrySample,
    TimeRange,
    UpdateVehicleRequest,
    Vehicle,
    VehicleFormValues,
)
from fleetdash.state.store import DashboardState, DashboardStore

__all__ = [
    "__version__",
    "CreateVehicleRequest",
    "DashboardConfig",
    "DashboardState",
    "DashboardStore",
    "FetchError",
    "FleetClient",
    "FleetDashConfigError",
    "FleetDashError",
    "FleetTransportError",
    "FormMode",
    "LatestTelemetry",
    "Notification",
    "NotificationLevel",
    "RecordShapeError",
    "TelemetrySample",
    "TimeRange",
    "UpdateVehicleRequest",
    "Vehicle",
    "VehicleDashboardController",
    "VehicleFormError",
    "VehicleFormValues",
]
