"""Command-line front end for the vehicle dashboard.

Usage
-----
::

    export FLEETDASH_API_BASE_URL="http://localhost:5500/api"
    fleetdash list
    fleetdash create --name "Truck 2" --code T002
    fleetdash update v1 --name "Truck 2b"
    fleetdash telemetry v1 --hours 24
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from fleetdash.client import FleetClient
from fleetdash.config import DashboardConfig
from fleetdash.controller import Notification, NotificationLevel, VehicleDashboardController
from fleetdash.exceptions import FleetDashConfigError
from fleetdash.models.requests import VehicleFormValues
from fleetdash.models.telemetry import TimeRange
from fleetdash.models.vehicle import Vehicle
from fleetdash.render import form_view, render_drawer, render_vehicle_table


def _iso_datetime(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an ISO-8601 timestamp: {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fleetdash", description="Fleet vehicles and telemetry history")
    parser.add_argument("--base-url", help="API base URL (default: $FLEETDASH_API_BASE_URL)")
    parser.add_argument("--json", dest="json_mode", action="store_true", help="Output as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List vehicles with their latest telemetry")

    create = sub.add_parser("create", help="Create a vehicle")
    create.add_argument("--name", required=True)
    create.add_argument("--code", required=True)

    update = sub.add_parser("update", help="Rename a vehicle (the code cannot change)")
    update.add_argument("vehicle_id")
    update.add_argument("--name", required=True)

    telemetry = sub.add_parser("telemetry", help="Show telemetry history for a vehicle")
    telemetry.add_argument("vehicle_id")
    telemetry.add_argument("--from", dest="start", type=_iso_datetime, help="Range start (ISO-8601)")
    telemetry.add_argument("--to", dest="end", type=_iso_datetime, help="Range end (ISO-8601)")
    telemetry.add_argument("--hours", type=float, help="Range width ending now (overrides the default)")
    return parser


class _Reporter:
    """Collects notifications and prints them to stderr."""

    def __init__(self) -> None:
        self.failed = False

    def __call__(self, notification: Notification) -> None:
        if notification.level == NotificationLevel.ERROR:
            self.failed = True
        print(f"[{notification.level}] {notification.message}", file=sys.stderr)


def _find_vehicle(vehicles: Sequence[Vehicle], vehicle_id: str) -> Vehicle | None:
    return next((vehicle for vehicle in vehicles if vehicle.id == vehicle_id), None)


def _dump(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str, ensure_ascii=False))


def _resolve_range(args: argparse.Namespace, config: DashboardConfig) -> TimeRange | None:
    if args.start is None and args.end is None and args.hours is None:
        return None
    if args.hours is not None:
        base = TimeRange.last(args.hours)
    else:
        base = TimeRange.last(config.default_range_hours)
    return TimeRange(start=args.start or base.start, end=args.end or base.end)


async def run(args: argparse.Namespace, config: DashboardConfig) -> int:
    reporter = _Reporter()
    async with FleetClient(config) as client:
        controller = VehicleDashboardController(client, config=config, notify=reporter)
        await controller.start()

        if args.command == "create":
            controller.open_create_form()
            await controller.submit_form(VehicleFormValues(name=args.name, code=args.code))
        elif args.command == "update":
            vehicle = _find_vehicle(controller.state.vehicles, args.vehicle_id)
            if vehicle is None:
                reporter(Notification(NotificationLevel.ERROR, f"Vehicle not found: {args.vehicle_id}"))
                return 1
            controller.open_edit_form(vehicle)
            await controller.submit_form(VehicleFormValues(name=args.name, code=vehicle.code or ""))
        elif args.command == "telemetry":
            try:
                time_range = _resolve_range(args, config)
            except ValueError as exc:
                reporter(Notification(NotificationLevel.ERROR, f"Invalid range: {exc}"))
                return 1
            if time_range is not None:
                await controller.change_range(time_range)
            vehicle = _find_vehicle(controller.state.vehicles, args.vehicle_id) or Vehicle(id=args.vehicle_id)
            await controller.open_drawer(vehicle)

        state = controller.state
        view = form_view(state.form)
        if view is not None and view.field_errors:
            for field_name, message in view.field_errors.items():
                print(f"{field_name}: {message}", file=sys.stderr)
            reporter.failed = True

        if args.command == "telemetry":
            if args.json_mode:
                _dump([sample.model_dump() for sample in state.drawer.samples])
            else:
                print(render_drawer(state.drawer))
        elif args.json_mode:
            _dump([vehicle.model_dump() for vehicle in state.vehicles])
        else:
            print(render_vehicle_table(state))

    return 1 if reporter.failed else 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    try:
        config = DashboardConfig.from_env(**overrides)
    except FleetDashConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    return asyncio.run(run(args, config))


if __name__ == "__main__":
    sys.exit(main())
