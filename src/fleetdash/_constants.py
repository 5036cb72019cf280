"""Internal constants shared across the library."""

DEFAULT_BASE_URL = "http://localhost:5500/api"
DEFAULT_RANGE_HOURS = 12
USER_AGENT = "fleetdash/0"

#: Shown in place of a missing value in tables.
PLACEHOLDER = "—"

LIST_VEHICLES_FAILED = "Unable to load vehicles"
CREATE_VEHICLE_FAILED = "Unable to create vehicle"
UPDATE_VEHICLE_FAILED = "Unable to update vehicle"
FETCH_TELEMETRY_FAILED = "Unable to load telemetry history"
