"""
Pydantic models for the JSON shapes exchanged with the leave backend.

The backend speaks camelCase; models accept either the wire alias or the
Python field name and ignore fields they do not know about.
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from smart_leave.exceptions import ResponseFormatError

Identifier = Union[int, str]
Days = Union[int, float]


class WireModel(BaseModel):
    """Base for every backend payload."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # A JSON null falls back to the field default
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def to_wire(self) -> dict[str, Any]:
        """Dump with camelCase keys, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# Response Models
# =============================================================================


class Role(WireModel):
    role_id: Identifier | None = None
    role_name: str = ""
    description: str = ""


class User(WireModel):
    user_id: Identifier | None = None
    first_name: str = ""
    last_name: str = ""
    user_name: str = ""
    email: str = ""
    phone_number: str = ""
    address: str = ""
    gender: str = ""
    country_name: str = ""
    city_name: str = ""
    role: Role | str | None = None
    user_role: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @property
    def role_name(self) -> str:
        """Role name from the nested role object, the role string or ``userRole``."""
        if isinstance(self.role, Role) and self.role.role_name:
            return self.role.role_name
        if isinstance(self.role, str) and self.role:
            return self.role
        return self.user_role or ""

    @property
    def initial(self) -> str:
        return (self.first_name[:1] or "U").upper()


class Admin(WireModel):
    user_id: Identifier | None = None
    first_name: str = ""
    last_name: str = ""
    user_name: str = ""
    email: str = ""
    phone_number: str = ""
    address: str = ""
    gender: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @property
    def initial(self) -> str:
        return (self.first_name[:1] or "A").upper()


class LeavePolicy(WireModel):
    role_based_leave_id: Identifier | None = None
    role: str = ""
    sick_leave: Days | None = None
    earned_leave: Days | None = None
    casual_leave: Days | None = None
    paternity_leave: Days | None = None
    maternity_leave: Days | None = None
    loss_of_pay: Days | None = None
    total_leaves: Days | None = None


class Holiday(WireModel):
    holiday_id: Identifier | None = None
    country_name: str = ""
    calendar_year: Identifier | None = None
    holiday_name: str = ""
    holiday_date: str = ""
    holiday_day: str = ""


class LeaveRequest(WireModel):
    leave_id: Identifier | None = None
    user_id: Identifier | None = None
    user_name: str | None = None
    user_role: str | None = None
    user: User | None = None
    leave_type: str | None = None
    leave_type_planned_and_unplanned: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    duration: Days | None = None
    comments: str | None = None
    approver: str | None = None
    leave_status: str | None = None

    @field_validator("leave_type", "leave_status", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def employee_name(self) -> str:
        if self.user is not None:
            if self.user.first_name and self.user.last_name:
                return f"{self.user.first_name} {self.user.last_name}"
            if self.user.user_name:
                return self.user.user_name
        return self.user_name or "N/A"

    @property
    def employee_role(self) -> str:
        if self.user is not None and self.user.role_name:
            return self.user.role_name
        return self.user_role or "N/A"

    @property
    def requester_id(self) -> Identifier | None:
        """Id the approval endpoints expect: nested user first, then ``userId``."""
        if self.user is not None and self.user.user_id is not None:
            return self.user.user_id
        return self.user_id


class LeaveBalance(WireModel):
    first_name: str = ""
    last_name: str = ""
    sick_leave: Days | None = None
    casual_leave: Days | None = None
    earned_leave: Days | None = None
    paternity_leave: Days | None = None
    maternity_leave: Days | None = None
    loss_of_pay: Days | None = None
    total_leaves: Days | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class RegistrationHistory(WireModel):
    registration_id: Identifier | None = None
    first_name: str = ""
    last_name: str = ""
    user_id: Identifier | None = None
    email: str = ""
    role: str = ""
    register_date: str | None = None


class LoginResult(WireModel):
    token: str
    user_id: Identifier
    role: str = ""
    email: str | None = None


# =============================================================================
# Request Models
# =============================================================================


class LoginDetails(WireModel):
    user_name: str = Field(min_length=1)
    password: str = Field(min_length=1)


class NewRole(WireModel):
    role_name: str = Field(min_length=1)
    description: str = ""


class HolidayEntry(WireModel):
    country_name: str
    calendar_year: str
    holiday_name: str
    holiday_date: str


class LeavePolicyEntry(WireModel):
    role: str
    sick_leave: Days
    earned_leave: Days
    casual_leave: Days
    paternity_leave: Days
    maternity_leave: Days
    loss_of_pay: Days | None = None


class PasswordChange(WireModel):
    old_password: str
    new_password: str


def parse_model(model: type[WireModel], payload: Any) -> Any:
    """
    Validate one JSON object into ``model``.

    Raises:
        ResponseFormatError: The payload is not an object of that shape.
    """
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ResponseFormatError(model.__name__, body=payload, reason=str(exc)) from exc


def parse_list(model: type[WireModel], payload: Any) -> list:
    """Validate a JSON array into a list of ``model``; ``None`` gives ``[]``."""
    if payload is None:
        return []
    try:
        return TypeAdapter(list[model]).validate_python(payload)
    except ValidationError as exc:
        raise ResponseFormatError(model.__name__, body=payload, reason=str(exc)) from exc
