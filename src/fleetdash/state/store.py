"""Deterministic dashboard state store.

This is the only component allowed to change view state: given the same
sequence of actions, :func:`reduce` produces the same snapshots.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from fleetdash.models.requests import FormMode, VehicleFormValues
from fleetdash.models.telemetry import TelemetrySample, TimeRange
from fleetdash.models.vehicle import Vehicle
from fleetdash.state.actions import (
    Action,
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

_logger = logging.getLogger(__name__)


class ListStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


class FormStatus(StrEnum):
    CLOSED = "closed"
    OPEN = "open"
    SUBMITTING = "submitting"


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class FormState(_Snapshot):
    status: FormStatus = FormStatus.CLOSED
    mode: FormMode | None = None
    vehicle: Vehicle | None = None
    """Vehicle being edited (edit mode only)."""
    values: VehicleFormValues = Field(default_factory=VehicleFormValues)
    field_errors: dict[str, str] = Field(default_factory=dict)


class DrawerState(_Snapshot):
    vehicle: Vehicle | None = None
    time_range: TimeRange | None = None
    """Held across opens; ``None`` until the drawer is first opened."""
    samples: tuple[TelemetrySample, ...] = ()
    loading: bool = False
    generation: int = 0
    """Token of the latest telemetry request; older responses are discarded."""

    @property
    def is_open(self) -> bool:
        return self.vehicle is not None


class DashboardState(_Snapshot):
    vehicles: tuple[Vehicle, ...] = ()
    list_status: ListStatus = ListStatus.IDLE
    list_error: str | None = None
    form: FormState = Field(default_factory=FormState)
    drawer: DrawerState = Field(default_factory=DrawerState)

    @property
    def list_loading(self) -> bool:
        return self.list_status == ListStatus.LOADING

    @property
    def form_submitting(self) -> bool:
        return self.form.status == FormStatus.SUBMITTING

    @property
    def telemetry_loading(self) -> bool:
        return self.drawer.loading


def _update(model: Any, **changes: Any) -> Any:
    return model.model_copy(update=changes)


def reduce(state: DashboardState, action: Action) -> DashboardState:
    """Return the state that results from applying *action* to *state*."""
    # Vehicle list: stale vehicles survive a failed reload.
    if isinstance(action, ListRequested):
        return _update(state, list_status=ListStatus.LOADING, list_error=None)
    if isinstance(action, ListLoaded):
        return _update(state, vehicles=tuple(action.vehicles), list_status=ListStatus.LOADED, list_error=None)
    if isinstance(action, ListFailed):
        return _update(state, list_status=ListStatus.ERRORED, list_error=action.message)

    # Form
    if isinstance(action, FormOpened):
        if action.vehicle is None:
            form = FormState(status=FormStatus.OPEN, mode=FormMode.CREATE)
        else:
            form = FormState(
                status=FormStatus.OPEN,
                mode=FormMode.EDIT,
                vehicle=action.vehicle,
                values=VehicleFormValues(name=action.vehicle.name, code=action.vehicle.code or ""),
            )
        return _update(state, form=form)
    if isinstance(action, FormClosed):
        return _update(state, form=FormState())
    if isinstance(action, FormInvalid):
        return _update(state, form=_update(state.form, values=action.values, field_errors=dict(action.field_errors)))
    if isinstance(action, FormSubmitStarted):
        return _update(
            state,
            form=_update(state.form, status=FormStatus.SUBMITTING, values=action.values, field_errors={}),
        )
    if isinstance(action, FormSubmitFailed):
        return _update(state, form=_update(state.form, status=FormStatus.OPEN, values=action.values))

    # Telemetry drawer
    drawer = state.drawer
    if isinstance(action, DrawerOpened):
        return _update(
            state,
            drawer=_update(
                drawer,
                vehicle=action.vehicle,
                time_range=drawer.time_range or action.default_range,
                samples=(),
                loading=True,
                generation=drawer.generation + 1,
            ),
        )
    if isinstance(action, DrawerClosed):
        return _update(
            state,
            drawer=_update(drawer, vehicle=None, samples=(), loading=False, generation=drawer.generation + 1),
        )
    if isinstance(action, RangeChanged):
        if not drawer.is_open:
            return _update(state, drawer=_update(drawer, time_range=action.time_range))
        # Keep current samples visible until the new ones arrive.
        return _update(
            state,
            drawer=_update(drawer, time_range=action.time_range, loading=True, generation=drawer.generation + 1),
        )
    if isinstance(action, TelemetryLoaded):
        if action.generation != drawer.generation:
            _logger.debug("Discarding telemetry for generation %d (current %d)", action.generation, drawer.generation)
            return state
        return _update(state, drawer=_update(drawer, samples=tuple(action.samples), loading=False))
    if isinstance(action, TelemetryFailed):
        if action.generation != drawer.generation:
            return state
        return _update(state, drawer=_update(drawer, loading=False))

    raise TypeError(f"Unsupported action: {action!r}")


Listener = Callable[[DashboardState], None]


class DashboardStore:
    """Holds the current :class:`DashboardState` and notifies listeners on change."""

    def __init__(self, initial: DashboardState | None = None) -> None:
        self._state = initial or DashboardState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> DashboardState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def dispatch(self, action: Action) -> DashboardState:
        """Apply *action* and notify listeners if the state changed."""
        previous = self._state
        self._state = reduce(previous, action)
        if self._state is not previous:
            for listener in list(self._listeners):
                try:
                    listener(self._state)
                except Exception:
                    _logger.warning("State listener failed", exc_info=True)
        return self._state
