"""Presentation helpers.

Pure functions that turn :class:`~fleetdash.state.store.DashboardState`
into display rows and views.  Nothing here derives domain values; it
only formats what the normalizer produced.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from fleetdash._constants import PLACEHOLDER
from fleetdash.models.requests import FormMode
from fleetdash.models.telemetry import TelemetrySample, TimeRange
from fleetdash.models.vehicle import Vehicle
from fleetdash.state.store import DashboardState, DrawerState, FormState, FormStatus, ListStatus

VEHICLE_COLUMNS: tuple[str, ...] = ("Vehicle", "Speed (km/h)", "Last location", "Last updated")
TELEMETRY_COLUMNS: tuple[str, ...] = ("Timestamp", "Speed (km/h)", "Location")


def format_timestamp(value: str | None) -> str:
    """Medium date and short time in local time, e.g. ``Oct 19, 2026, 3:04 PM``.

    Text that is not ISO-8601 is shown unchanged.
    """
    if not value:
        return PLACEHOLDER
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    hour = parsed.hour % 12 or 12
    return f"{parsed:%b} {parsed.day}, {parsed.year}, {hour}:{parsed:%M %p}"


def format_number(value: float | None) -> str:
    if value is None:
        return PLACEHOLDER
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_location(lat: float | None, lon: float | None) -> str:
    if lat is None or lon is None:
        return PLACEHOLDER
    return f"{lat:.4f}, {lon:.4f}"


def format_range(time_range: TimeRange | None) -> str:
    if time_range is None:
        return PLACEHOLDER
    return f"{format_timestamp(time_range.start.isoformat())} → {format_timestamp(time_range.end.isoformat())}"


@dataclass(frozen=True, slots=True)
class VehicleRow:
    key: str
    name: str
    label: str
    speed: str
    location: str
    last_updated: str

    def cells(self) -> tuple[str, ...]:
        return (f"{self.name} / {self.label}", self.speed, self.location, self.last_updated)


@dataclass(frozen=True, slots=True)
class TelemetryRow:
    key: str
    timestamp: str
    speed: str
    location: str

    def cells(self) -> tuple[str, ...]:
        return (self.timestamp, self.speed, self.location)


def vehicle_row(vehicle: Vehicle) -> VehicleRow:
    latest = vehicle.latest_telemetry
    return VehicleRow(
        key=vehicle.id,
        name=vehicle.name,
        label=vehicle.label,
        speed=format_number(latest.speed if latest else None),
        location=format_location(latest.lat if latest else None, latest.lon if latest else None),
        last_updated=format_timestamp(latest.ts if latest else None),
    )


def telemetry_row(sample: TelemetrySample) -> TelemetryRow:
    return TelemetryRow(
        key=sample.row_key,
        timestamp=format_timestamp(sample.timestamp),
        speed=format_number(sample.speed),
        location=format_location(sample.lat, sample.lon),
    )


def vehicle_rows(vehicles: Iterable[Vehicle]) -> list[VehicleRow]:
    return [vehicle_row(vehicle) for vehicle in vehicles]


def telemetry_rows(samples: Iterable[TelemetrySample]) -> list[TelemetryRow]:
    return [telemetry_row(sample) for sample in samples]


def empty_vehicles_text(state: DashboardState) -> str:
    if state.list_status == ListStatus.ERRORED:
        return "Unable to load vehicles"
    return "No vehicles found"


@dataclass(frozen=True, slots=True)
class FormView:
    title: str
    ok_text: str
    name: str
    code: str
    code_disabled: bool
    submitting: bool
    field_errors: dict[str, str] = field(default_factory=dict)


def form_view(form: FormState) -> FormView | None:
    """The create/edit dialog, or ``None`` while it is closed."""
    if form.status == FormStatus.CLOSED:
        return None
    editing = form.mode == FormMode.EDIT
    return FormView(
        title="Edit Vehicle" if editing else "New Vehicle",
        ok_text="Save Changes" if editing else "Create Vehicle",
        name=form.values.name,
        code=form.values.code,
        code_disabled=editing,
        submitting=form.status == FormStatus.SUBMITTING,
        field_errors=dict(form.field_errors),
    )


@dataclass(frozen=True, slots=True)
class DrawerView:
    title: str
    subtitle: str
    time_range: str
    rows: list[TelemetryRow]
    loading: bool


def drawer_view(drawer: DrawerState) -> DrawerView | None:
    """The telemetry drawer, or ``None`` while it is closed."""
    vehicle = drawer.vehicle
    if vehicle is None:
        return None
    return DrawerView(
        title=f"{vehicle.name} telemetry",
        subtitle=vehicle.label,
        time_range=format_range(drawer.time_range),
        rows=telemetry_rows(drawer.samples),
        loading=drawer.loading,
    )


def render_table(headers: Sequence[str], rows: Iterable[Sequence[str]], *, empty_text: str = "") -> str:
    """Render rows as a plain-text table with left-aligned columns."""
    body = [tuple(row) for row in rows]
    if not body:
        return "\n".join(["  ".join(headers), empty_text]) if empty_text else "  ".join(headers)
    widths = [len(header) for header in headers]
    for row in body:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))
    lines = ["  ".join(header.ljust(widths[i]) for i, header in enumerate(headers)).rstrip()]
    lines.append("  ".join("-" * width for width in widths))
    for row in body:
        lines.append("  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip())
    return "\n".join(lines)


def render_vehicle_table(state: DashboardState) -> str:
    return render_table(
        VEHICLE_COLUMNS,
        (row.cells() for row in vehicle_rows(state.vehicles)),
        empty_text=empty_vehicles_text(state),
    )


def render_drawer(drawer: DrawerState) -> str:
    view = drawer_view(drawer)
    if view is None:
        return ""
    table = render_table(TELEMETRY_COLUMNS, (row.cells() for row in view.rows), empty_text="No data")
    return "\n".join([view.title, view.subtitle, view.time_range, "", table])
