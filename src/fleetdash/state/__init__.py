"""State/store layer.

This package is the single source of truth for the dashboard's view
state: the vehicle list, the create/edit form and the telemetry drawer.
All transitions go through :func:`fleetdash.state.store.reduce`.
"""
