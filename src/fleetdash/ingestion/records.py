"""Record normalization for vehicle and telemetry payloads."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from fleetdash.exceptions import RecordShapeError
from fleetdash.ingestion.envelope import decode_envelope
from fleetdash.models.telemetry import TelemetrySample
from fleetdash.models.vehicle import Vehicle

_logger = logging.getLogger(__name__)


def normalize_vehicle(record: Any) -> Vehicle:
    """Normalize a single vehicle object.

    Raises
    ------
    RecordShapeError
        If *record* is not an object or has no usable ``id``.
    """
    if not isinstance(record, Mapping):
        raise RecordShapeError(f"vehicle record must be an object, got {type(record).__name__}")
    try:
        return Vehicle.model_validate(record)
    except ValidationError as exc:
        raise RecordShapeError(f"vehicle record has no usable id: {record.get('id')!r}") from exc


def normalize_vehicles(payload: Any) -> list[Vehicle]:
    """Normalize a vehicle collection in any supported envelope."""
    vehicles: list[Vehicle] = []
    for item in decode_envelope(payload).records:
        if not isinstance(item, Mapping):
            _logger.debug("Skipping non-object vehicle entry: %r", item)
            continue
        vehicles.append(normalize_vehicle(item))
    return vehicles


def normalize_telemetry(payload: Any) -> list[TelemetrySample]:
    """Normalize a telemetry collection in any supported envelope.

    Raises
    ------
    RecordShapeError
        If an object entry cannot be read as a sample.
    """
    samples: list[TelemetrySample] = []
    for item in decode_envelope(payload).records:
        if not isinstance(item, Mapping):
            _logger.debug("Skipping non-object telemetry entry: %r", item)
            continue
        try:
            samples.append(TelemetrySample.model_validate(item))
        except ValidationError as exc:
            raise RecordShapeError(f"telemetry record could not be read: {item!r}") from exc
    return samples
