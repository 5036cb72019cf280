"""Actions accepted by the dashboard reducer.

User intents and completed round-trips are expressed as these actions.
Only the store is allowed to apply them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fleetdash.models.requests import VehicleFormValues
from fleetdash.models.telemetry import TelemetrySample, TimeRange
from fleetdash.models.vehicle import Vehicle

# ------------------------------------------------------------------
# Vehicle list
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ListRequested:
    pass


@dataclass(frozen=True, slots=True)
class ListLoaded:
    vehicles: tuple[Vehicle, ...]


@dataclass(frozen=True, slots=True)
class ListFailed:
    message: str


# ------------------------------------------------------------------
# Create/edit form
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FormOpened:
    """Open the form; ``vehicle=None`` opens it in create mode."""

    vehicle: Vehicle | None = None


@dataclass(frozen=True, slots=True)
class FormClosed:
    pass


@dataclass(frozen=True, slots=True)
class FormInvalid:
    values: VehicleFormValues
    field_errors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class FormSubmitStarted:
    values: VehicleFormValues


@dataclass(frozen=True, slots=True)
class FormSubmitFailed:
    values: VehicleFormValues


# ------------------------------------------------------------------
# Telemetry drawer
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DrawerOpened:
    """Select *vehicle*; ``default_range`` applies only if no range is held yet."""

    vehicle: Vehicle
    default_range: TimeRange


@dataclass(frozen=True, slots=True)
class DrawerClosed:
    pass


@dataclass(frozen=True, slots=True)
class RangeChanged:
    time_range: TimeRange


@dataclass(frozen=True, slots=True)
class TelemetryLoaded:
    generation: int
    samples: tuple[TelemetrySample, ...]


@dataclass(frozen=True, slots=True)
class TelemetryFailed:
    generation: int


Action = (
    ListRequested
    | ListLoaded
    | ListFailed
    | FormOpened
    | FormClosed
    | FormInvalid
    | FormSubmitStarted
    | FormSubmitFailed
    | DrawerOpened
    | DrawerClosed
    | RangeChanged
    | TelemetryLoaded
    | TelemetryFailed
)
