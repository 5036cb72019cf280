"""Scenario tests for the dashboard controller against an in-memory API."""

from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest

from fleetdash.config import DashboardConfig
from fleetdash.controller import Notification, NotificationLevel, VehicleDashboardController
from fleetdash.models import FormMode, TelemetrySample, TimeRange, VehicleFormValues
from fleetdash.render import empty_vehicles_text, vehicle_rows
from fleetdash.state.store import FormStatus, ListStatus

from .conftest import NOW, FakeFleetApi


def _controller(api: FakeFleetApi, notes: list[Notification]) -> VehicleDashboardController:
    return VehicleDashboardController(
        api,
        config=DashboardConfig(),
        notify=notes.append,
        clock=lambda: NOW,
    )


def _sample(timestamp: str, speed: float | None = None) -> TelemetrySample:
    return TelemetrySample(timestamp=timestamp, speed=speed)


# ------------------------------------------------------------------
# Vehicle list
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_start_loads_vehicle_list(fake_api: FakeFleetApi) -> None:
    notes: list[Notification] = []
    controller = _controller(fake_api, notes)

    await controller.start()

    state = controller.state
    assert state.list_status == ListStatus.LOADED
    assert [v.id for v in state.vehicles] == ["v1", "v2"]
    row = vehicle_rows(state.vehicles)[0]
    assert row.cells()[:3] == ("Van 5 / V005", "—", "—")
    assert notes == []


@pytest.mark.asyncio
async def test_list_failure_notifies_once_and_keeps_stale_data(fake_api: FakeFleetApi) -> None:
    notes: list[Notification] = []
    controller = _controller(fake_api, notes)
    await controller.start()

    fake_api.fail_list = True
    assert await controller.load_vehicles() is False

    state = controller.state
    assert notes == [Notification(NotificationLevel.ERROR, "Unable to load vehicles")]
    assert state.list_status == ListStatus.ERRORED
    assert len(state.vehicles) == 2
    assert empty_vehicles_text(state) == "Unable to load vehicles"


# ------------------------------------------------------------------
# Form
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_submits_and_reloads_list(fake_api: FakeFleetApi) -> None:
    notes: list[Notification] = []
    controller = _controller(fake_api, notes)
    await controller.start()

    controller.open_create_form()
    assert controller.state.form.mode == FormMode.CREATE
    ok = await controller.submit_form(VehicleFormValues(name="Truck 2", code="T002"))

    assert ok is True
    assert fake_api.created == [("Truck 2", "T002")]
    assert fake_api.list_calls == 2
    assert controller.state.form.status == FormStatus.CLOSED
    assert "Truck 2" in [v.name for v in controller.state.vehicles]
    assert notes == [Notification(NotificationLevel.SUCCESS, "Vehicle created")]


@pytest.mark.asyncio
async def test_edit_prefills_and_sends_name_only(fake_api: FakeFleetApi) -> None:
    notes: list[Notification] = []
    controller = _controller(fake_api, notes)
    await controller.start()
    van = controller.state.vehicles[0]

    controller.open_edit_form(van)
    assert controller.state.form.values == VehicleFormValues(name="Van 5", code="V005")

    ok = await controller.submit_form(VehicleFormValues(name="Van 6", code="V005"))

    assert ok is True
    assert fake_api.updated == [("v1", "Van 6")]
    assert fake_api.created == []
    assert controller.state.vehicles[0].name == "Van 6"
    assert notes[-1] == Notification(NotificationLevel.SUCCESS, "Vehicle updated")


@pytest.mark.asyncio
async def test_update_failure_keeps_form_open_with_values(fake_api: FakeFleetApi) -> None:
    notes: list[Notification] = []
    controller = _controller(fake_api, notes)
    await controller.start()
    fake_api.fail_update = True

    controller.open_edit_form(controller.state.vehicles[0])
    values = VehicleFormValues(name="Renamed", code="V005")
    ok = await controller.submit_form(values)

    assert ok is False
    assert notes == [Notification(NotificationLevel.ERROR, "Unable to update vehicle")]
    assert controller.state.form.status == FormStatus.OPEN
    assert controller.state.form.values == values
    assert fake_api.list_calls == 1
    assert controller.state.vehicles[0].name == "Van 5"


@pytest.mark.asyncio
async def test_create_failure_keeps_form_open_with_values(fake_api: FakeFleetApi) -> None:
    notes: list[Notification] = []
    controller = _controller(fake_api, notes)
    await controller.start()
    fake_api.fail_create = True

    controller.open_create_form()
    values = VehicleFormValues(name="Truck 2", code="T002")
    ok = await controller.submit_form(values)

    assert ok is False
    assert fake_api.created == [("Truck 2", "T002")]
    assert notes == [Notification(NotificationLevel.ERROR, "Unable to create vehicle")]
    assert controller.state.form.status == FormStatus.OPEN
    assert controller.state.form.mode == FormMode.CREATE
    assert controller.state.form.values == values
    assert fake_api.list_calls == 1
    assert [v.id for v in controller.state.vehicles] == ["v1", "v2"]


@pytest.mark.asyncio
async def test_create_without_code_never_calls_api(fake_api: FakeFleetApi) -> None:
    notes: list[Notification] = []
    controller = _controller(fake_api, notes)

    controller.open_create_form()
    ok = await controller.submit_form(VehicleFormValues(name="Truck 3"))

    assert ok is False
    assert fake_api.created == []
    assert controller.state.form.field_errors == {"code": "Code is required"}
    assert controller.state.form.status == FormStatus.OPEN
    assert notes == []


@pytest.mark.asyncio
async def test_submit_ignored_while_form_closed(fake_api: FakeFleetApi) -> None:
    controller = _controller(fake_api, [])
    assert await controller.submit_form(VehicleFormValues(name="x", code="y")) is False
    assert fake_api.created == []


# ------------------------------------------------------------------
# Telemetry drawer
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_open_drawer_fetches_default_range(fake_api: FakeFleetApi) -> None:
    fake_api.telemetry_results = [[_sample("2026-10-19T10:00:00Z", 30)]]
    controller = _controller(fake_api, [])
    await controller.start()

    await controller.open_drawer(controller.state.vehicles[0])

    assert fake_api.telemetry_calls == [("v1", NOW - timedelta(hours=12), NOW)]
    assert [s.timestamp for s in controller.state.drawer.samples] == ["2026-10-19T10:00:00Z"]
    assert controller.state.telemetry_loading is False


@pytest.mark.asyncio
async def test_range_change_refetches_without_clearing_rows(fake_api: FakeFleetApi) -> None:
    fake_api.telemetry_results = [[_sample("old")], [_sample("new")]]
    gate = asyncio.Event()
    fake_api.telemetry_gates[1] = gate
    controller = _controller(fake_api, [])
    await controller.open_drawer(fake_api.vehicles[0])

    narrower = TimeRange(start=NOW - timedelta(hours=1), end=NOW)
    task = asyncio.create_task(controller.change_range(narrower))
    await asyncio.sleep(0)

    assert [s.timestamp for s in controller.state.drawer.samples] == ["old"]
    assert controller.state.telemetry_loading is True

    gate.set()
    await task

    assert fake_api.telemetry_calls[1] == ("v1", narrower.start, narrower.end)
    assert [s.timestamp for s in controller.state.drawer.samples] == ["new"]
    assert controller.state.drawer.time_range == narrower


@pytest.mark.asyncio
async def test_out_of_order_response_is_discarded(fake_api: FakeFleetApi) -> None:
    fake_api.telemetry_results = [[_sample("initial")], [_sample("slow")], [_sample("fast")]]
    slow_gate = asyncio.Event()
    fake_api.telemetry_gates[1] = slow_gate
    controller = _controller(fake_api, [])
    await controller.open_drawer(fake_api.vehicles[0])

    slow = asyncio.create_task(controller.change_range(TimeRange(start=NOW - timedelta(hours=6), end=NOW)))
    await asyncio.sleep(0)
    latest = TimeRange(start=NOW - timedelta(hours=2), end=NOW)
    await controller.change_range(latest)
    slow_gate.set()
    await slow

    assert [s.timestamp for s in controller.state.drawer.samples] == ["fast"]
    assert controller.state.drawer.time_range == latest
    assert controller.state.telemetry_loading is False


@pytest.mark.asyncio
async def test_selecting_other_vehicle_clears_rows_and_reuses_range(fake_api: FakeFleetApi) -> None:
    fake_api.telemetry_results = [[_sample("a")], [_sample("b")], [_sample("c")]]
    controller = _controller(fake_api, [])
    van, truck = fake_api.vehicles
    await controller.open_drawer(van)
    custom = TimeRange(start=NOW - timedelta(hours=3), end=NOW - timedelta(hours=1))
    await controller.change_range(custom)

    gate = asyncio.Event()
    fake_api.telemetry_gates[2] = gate
    task = asyncio.create_task(controller.open_drawer(truck))
    await asyncio.sleep(0)
    assert controller.state.drawer.samples == ()
    assert controller.state.drawer.vehicle == truck
    gate.set()
    await task

    assert fake_api.telemetry_calls[2] == ("v2", custom.start, custom.end)
    assert [s.timestamp for s in controller.state.drawer.samples] == ["c"]


@pytest.mark.asyncio
async def test_range_is_retained_across_close_and_reopen(fake_api: FakeFleetApi) -> None:
    controller = _controller(fake_api, [])
    custom = TimeRange(start=NOW - timedelta(hours=5), end=NOW)
    await controller.open_drawer(fake_api.vehicles[0])
    await controller.change_range(custom)
    controller.close_drawer()

    assert controller.state.drawer.vehicle is None
    assert controller.state.drawer.samples == ()

    await controller.open_drawer(fake_api.vehicles[0])
    assert fake_api.telemetry_calls[-1] == ("v1", custom.start, custom.end)


@pytest.mark.asyncio
async def test_range_change_while_closed_does_not_fetch(fake_api: FakeFleetApi) -> None:
    controller = _controller(fake_api, [])
    await controller.change_range(TimeRange(start=NOW - timedelta(hours=1), end=NOW))
    assert fake_api.telemetry_calls == []


@pytest.mark.asyncio
async def test_telemetry_failure_notifies_and_keeps_rows(fake_api: FakeFleetApi) -> None:
    notes: list[Notification] = []
    fake_api.telemetry_results = [[_sample("kept")]]
    controller = _controller(fake_api, notes)
    await controller.open_drawer(fake_api.vehicles[0])

    fake_api.fail_telemetry = True
    await controller.change_range(TimeRange(start=NOW - timedelta(hours=1), end=NOW))

    assert notes == [Notification(NotificationLevel.ERROR, "Unable to load telemetry history")]
    assert [s.timestamp for s in controller.state.drawer.samples] == ["kept"]
    assert controller.state.telemetry_loading is False


@pytest.mark.asyncio
async def test_late_response_after_close_is_dropped(fake_api: FakeFleetApi) -> None:
    notes: list[Notification] = []
    fake_api.telemetry_results = [[_sample("late")]]
    gate = asyncio.Event()
    fake_api.telemetry_gates[0] = gate
    controller = _controller(fake_api, notes)

    task = asyncio.create_task(controller.open_drawer(fake_api.vehicles[0]))
    await asyncio.sleep(0)
    controller.close_drawer()
    gate.set()
    await task

    assert controller.state.drawer.samples == ()
    assert controller.state.telemetry_loading is False


@pytest.mark.asyncio
async def test_loading_flags_are_independent(fake_api: FakeFleetApi) -> None:
    gate = asyncio.Event()
    fake_api.telemetry_gates[0] = gate
    controller = _controller(fake_api, [])

    task = asyncio.create_task(controller.open_drawer(fake_api.vehicles[0]))
    await asyncio.sleep(0)
    state = controller.state
    assert state.telemetry_loading is True
    assert state.list_loading is False
    assert state.form_submitting is False
    gate.set()
    await task
