"""Custom exception hierarchy for fleetdash."""

from __future__ import annotations


class FleetDashError(Exception):
    """Base exception for all fleetdash errors."""


class FleetDashConfigError(FleetDashError):
    """Invalid or missing configuration."""


class FleetTransportError(FleetDashError):
    """HTTP-level failure (network error or undecodable JSON body)."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class FetchError(FleetDashError):
    """A data access operation failed.

    The message is the fixed, human-readable text for the operation
    (e.g. ``"Unable to load vehicles"``).  No distinction is made between
    4xx, 5xx and network failures; ``status_code`` is ``None`` when no
    response was received.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class RecordShapeError(FleetDashError):
    """A server record is missing a required identity field."""


class VehicleFormError(FleetDashError):
    """Vehicle form values failed validation before submission."""

    def __init__(self, message: str, *, field_errors: dict[str, str] | None = None) -> None:
        self.field_errors = dict(field_errors or {})
        super().__init__(message)
