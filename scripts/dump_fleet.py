#!/usr/bin/env python3
"""Dump all data the fleetdash library can fetch.

Lists vehicles and fetches telemetry for the default range, printing both
the parsed model fields **and** the raw API JSON so you can spot fields
that aren't normalized yet.

Usage
-----
::

    export FLEETDASH_API_BASE_URL="http://localhost:5500/api"
    python scripts/dump_fleet.py

Options::

    --vehicle ID        Only fetch telemetry for this vehicle (default: all)
    --json              Output as machine-readable JSON
    --output FILE       Write JSON output to FILE instead of stdout
    --skip-telemetry    Only dump the vehicle list
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from fleetdash import DashboardConfig, FetchError, FleetClient, TimeRange  # noqa: E402
from fleetdash.models import FleetBaseModel  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _print_model(name: str, obj: FleetBaseModel, out: list[str]) -> dict[str, Any]:
    """Pretty-print a parsed model and return its dict form."""
    out.append(f"\n  ── {name} (parsed) ──")
    d = obj.model_dump(mode="json")
    for key, value in d.items():
        out.append(f"  {key}: {value}")
    return d


def _print_raw(name: str, raw: dict[str, Any], out: list[str]) -> None:
    out.append(f"\n  ── {name} (raw JSON) ──")
    out.append(json.dumps(raw, indent=2, default=str, ensure_ascii=False))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dump fleet vehicles and telemetry")
    parser.add_argument("--vehicle", help="Only fetch telemetry for this vehicle id")
    parser.add_argument("--json", dest="json_mode", action="store_true")
    parser.add_argument("--output", help="Write JSON output to this file")
    parser.add_argument("--skip-telemetry", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args()


# ── main ─────────────────────────────────────────────────────


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    config = DashboardConfig.from_env(api_trace_enabled=args.verbose)

    result: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "base_url": config.base_url,
        "vehicles": [],
    }
    out: list[str] = [_section("fleetdash dump_fleet"), f"  base_url  : {config.base_url}"]

    async with FleetClient(config) as client:
        vehicles = await client.list_vehicles()
        out.append(_section(f"VEHICLES ({len(vehicles)})"))
        for vehicle in vehicles:
            entry = {"info": _print_model(f"Vehicle id={vehicle.id}", vehicle, out), "raw": vehicle.raw}
            _print_raw(f"Vehicle id={vehicle.id}", vehicle.raw, out)
            result["vehicles"].append(entry)

        if not args.skip_telemetry:
            time_range = TimeRange.last(config.default_range_hours)
            targets = [args.vehicle] if args.vehicle else [v.id for v in vehicles]
            for vehicle_id in targets:
                out.append(_section(f"TELEMETRY  id={vehicle_id}"))
                try:
                    samples = await client.get_telemetry(vehicle_id, start=time_range.start, end=time_range.end)
                except FetchError as exc:
                    out.append(f"  !! telemetry failed: {exc} (HTTP {exc.status_code})")
                    telemetry: dict[str, Any] = {"error": str(exc), "status_code": exc.status_code}
                else:
                    out.append(f"  {len(samples)} samples")
                    for sample in samples[:5]:
                        _print_model(f"Sample ts={sample.timestamp}", sample, out)
                    telemetry = {"samples": [{"parsed": s.model_dump(mode="json"), "raw": s.raw} for s in samples]}
                for entry in result["vehicles"]:
                    if entry["info"].get("id") == vehicle_id:
                        entry["telemetry"] = telemetry
                        break

    if args.json_mode or args.output:
        payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(payload)
    else:
        print("\n".join(out))


if __name__ == "__main__":
    asyncio.run(main())
