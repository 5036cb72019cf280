"""Base model for fleet API records.

Every normalized record inherits from :class:`FleetBaseModel` which
provides:

* A ``model_validator(mode="before")`` that drops ``None`` values so an
  alias that is present but null falls through to the next alias choice
  (``vehicle_code: null`` resolves ``code`` from ``code``).
* A ``raw`` dict that captures the original payload.  A server field
  named ``raw`` never reaches the field; it stays inside the stash.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FleetBaseModel(BaseModel):
    """Base for fleet API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)
    """Original API record."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        if not isinstance(values, Mapping):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        cleaned["raw"] = dict(values)
        return cleaned
