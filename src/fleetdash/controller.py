"""View state controller for the vehicle dashboard.

The controller turns user actions (mount, form submit, row click, range
change) into API calls and commits the results to the
:class:`~fleetdash.state.store.DashboardStore`.  Failures are reported
once through the notification callback and leave prior state in place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Protocol

from fleetdash.config import DashboardConfig
from fleetdash.exceptions import FleetDashError, VehicleFormError
from fleetdash.models.requests import FormMode, VehicleFormValues
from fleetdash.models.telemetry import TelemetrySample, TimeRange
from fleetdash.models.vehicle import Vehicle
from fleetdash.state.actions import (
    DrawerClosed,
    DrawerOpened,
    FormClosed,
    FormInvalid,
    FormOpened,
    FormSubmitFailed,
    FormSubmitStarted,
    ListFailed,
    ListLoaded,
    ListRequested,
    RangeChanged,
    TelemetryFailed,
    TelemetryLoaded,
)
from fleetdash.state.store import DashboardState, DashboardStore, FormStatus

_logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"
SAVE_FAILED = "Unable to save vehicle"


class NotificationLevel(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notification:
    level: NotificationLevel
    message: str


def log_notification(notification: Notification) -> None:
    """Default notifier: route notifications to the module logger."""
    if notification.level == NotificationLevel.ERROR:
        _logger.error("%s", notification.message)
    else:
        _logger.info("%s", notification.message)


class FleetApi(Protocol):
    """Operations the controller needs; :class:`~fleetdash.client.FleetClient` provides them."""

    async def list_vehicles(self) -> list[Vehicle]: ...

    async def create_vehicle(self, name: str, code: str) -> Vehicle: ...

    async def update_vehicle(self, vehicle_id: str, name: str) -> Vehicle: ...

    async def get_telemetry(
        self,
        vehicle_id: str,
        *,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[TelemetrySample]: ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _error_text(exc: Exception, fallback: str) -> str:
    return str(exc) or fallback


class VehicleDashboardController:
    """Drives the vehicle list, the create/edit form and the telemetry drawer."""

    def __init__(
        self,
        api: FleetApi,
        *,
        config: DashboardConfig | None = None,
        store: DashboardStore | None = None,
        notify: Callable[[Notification], None] = log_notification,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._api = api
        self._config = config or DashboardConfig()
        self._store = store or DashboardStore()
        self._notify = notify
        self._clock = clock

    @property
    def store(self) -> DashboardStore:
        return self._store

    @property
    def state(self) -> DashboardState:
        return self._store.state

    def _error(self, message: str) -> None:
        self._notify(Notification(NotificationLevel.ERROR, message))

    def _success(self, message: str) -> None:
        self._notify(Notification(NotificationLevel.SUCCESS, message))

    # ------------------------------------------------------------------
    # Vehicle list
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Initial mount: load the vehicle list."""
        await self.load_vehicles()

    async def load_vehicles(self) -> bool:
        """Reload the vehicle list; returns ``False`` if the load failed."""
        self._store.dispatch(ListRequested())
        try:
            vehicles = await self._api.list_vehicles()
        except FleetDashError as exc:
            message = _error_text(exc, UNKNOWN_ERROR)
            self._store.dispatch(ListFailed(message))
            self._error(message)
            return False
        self._store.dispatch(ListLoaded(tuple(vehicles)))
        return True

    # ------------------------------------------------------------------
    # Create/edit form
    # ------------------------------------------------------------------

    def open_create_form(self) -> None:
        self._store.dispatch(FormOpened())

    def open_edit_form(self, vehicle: Vehicle) -> None:
        self._store.dispatch(FormOpened(vehicle))

    def close_form(self) -> None:
        self._store.dispatch(FormClosed())

    async def submit_form(self, values: VehicleFormValues) -> bool:
        """Create or update the vehicle from *values*.

        On success the list is reloaded and the form closes.  On failure
        the form stays open with *values* so the operator can retry.
        """
        form = self.state.form
        if form.status != FormStatus.OPEN or form.mode is None:
            _logger.debug("Ignoring submit while form is %s", form.status)
            return False

        try:
            values.validate_for(form.mode)
        except VehicleFormError as exc:
            self._store.dispatch(FormInvalid(values, exc.field_errors))
            return False

        self._store.dispatch(FormSubmitStarted(values))
        try:
            if form.mode == FormMode.EDIT and form.vehicle is not None:
                await self._api.update_vehicle(form.vehicle.id, values.name)
                self._success("Vehicle updated")
            else:
                await self._api.create_vehicle(values.name, values.code)
                self._success("Vehicle created")
        except FleetDashError as exc:
            self._store.dispatch(FormSubmitFailed(values))
            self._error(_error_text(exc, SAVE_FAILED))
            return False

        await self.load_vehicles()
        self._store.dispatch(FormClosed())
        return True

    # ------------------------------------------------------------------
    # Telemetry drawer
    # ------------------------------------------------------------------

    def _default_range(self) -> TimeRange:
        return TimeRange.last(self._config.default_range_hours, now=self._clock())

    async def open_drawer(self, vehicle: Vehicle) -> None:
        """Select *vehicle*: clear samples, then fetch for the held range."""
        drawer = self._store.dispatch(DrawerOpened(vehicle, self._default_range())).drawer
        assert drawer.time_range is not None  # noqa: S101
        await self._load_telemetry(vehicle.id, drawer.time_range, drawer.generation)

    def close_drawer(self) -> None:
        self._store.dispatch(DrawerClosed())

    async def change_range(self, time_range: TimeRange) -> None:
        """Hold *time_range* and, if the drawer is open, re-fetch without clearing samples."""
        drawer = self._store.dispatch(RangeChanged(time_range)).drawer
        if drawer.vehicle is None:
            return
        await self._load_telemetry(drawer.vehicle.id, time_range, drawer.generation)

    async def _load_telemetry(self, vehicle_id: str, time_range: TimeRange, generation: int) -> None:
        try:
            samples = await self._api.get_telemetry(vehicle_id, start=time_range.start, end=time_range.end)
        except FleetDashError as exc:
            if generation != self.state.drawer.generation:
                _logger.debug("Dropping stale telemetry failure for %s: %s", vehicle_id, exc)
                return
            self._store.dispatch(TelemetryFailed(generation))
            self._error(_error_text(exc, UNKNOWN_ERROR))
            return
        self._store.dispatch(TelemetryLoaded(generation, tuple(samples)))
