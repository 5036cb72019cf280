"""Pydantic request models for the vehicle form and write endpoints.

These models provide a consistent "validate → normalize → execute" flow.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator

from fleetdash.exceptions import VehicleFormError


class FormMode(StrEnum):
    CREATE = "create"
    EDIT = "edit"


class VehicleFormValues(BaseModel):
    """Values entered in the create/edit dialog."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    name: str = ""
    code: str = ""

    def validate_for(self, mode: FormMode) -> None:
        """Raise :class:`VehicleFormError` when a required field is blank.

        The code field is only required when creating; it is read-only
        once the vehicle exists.
        """
        errors: dict[str, str] = {}
        if not self.name:
            errors["name"] = "Name is required"
        if mode == FormMode.CREATE and not self.code:
            errors["code"] = "Code is required"
        if errors:
            raise VehicleFormError("; ".join(errors.values()), field_errors=errors)


class _WriteRequest(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    name: str

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("name must be non-empty")
        return value


class CreateVehicleRequest(_WriteRequest):
    """Body of ``POST /vehicles``."""

    code: str

    @field_validator("code")
    @classmethod
    def _code_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("code must be non-empty")
        return value


class UpdateVehicleRequest(_WriteRequest):
    """Body of ``PUT /vehicles/{id}``; the code cannot be changed."""
