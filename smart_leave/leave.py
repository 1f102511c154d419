"""
Leave rules shared by the admin and employee views.

Balance checks for the apply-leave form, status labels, role options and
promotions, and holiday grouping/formatting.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from smart_leave.config import (
    ADMIN_ROLE,
    APPROVER_ROLES,
    LEAVE_TYPES,
    PREDEFINED_ROLES,
    ROLE_PROMOTION_MAP,
)
from smart_leave.exceptions import InsufficientBalanceError, MissingRequiredFieldError
from smart_leave.models import Holiday, LeaveBalance, LeavePolicy, LeaveRequest, NewRole, Role


# =============================================================================
# Balance
# =============================================================================


def balance_key(leave_type: str) -> str:
    """Balance field for a leave type, e.g. ``SICK`` -> ``sickLeave``."""
    return f"{(leave_type or '').lower()}Leave"


def available_balance(balance: LeaveBalance | Mapping[str, Any] | None, leave_type: str) -> float | None:
    """Remaining days of ``leave_type``, or ``None`` when the balance has no such entry."""
    if not balance or not leave_type:
        return None
    if isinstance(balance, LeaveBalance):
        balance = balance.model_dump(by_alias=True)
    key = balance_key(leave_type)
    if key not in balance:
        return None
    value = balance[key]
    if value is None:
        # A null balance leaves nothing to spend
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def exceeds_balance(leave_type: str, duration: float | None, balance: LeaveBalance | Mapping[str, Any] | None) -> bool:
    """True only when type, duration and balance are all known and duration is larger."""
    if not leave_type or duration is None:
        return False
    available = available_balance(balance, leave_type)
    if available is None:
        return False
    return float(duration) > available


@dataclass
class LeaveApplication:
    """State of the apply-leave form between reruns."""

    leave_type: str = ""
    start_date: str = ""
    end_date: str = ""
    comments: str = ""
    duration: float | None = None
    date_error: str = ""
    balance_error: bool = False

    @property
    def has_dates(self) -> bool:
        return bool(self.start_date and self.end_date)

    def set_duration(self, duration: Any) -> None:
        self.duration = _as_number(duration)
        self.date_error = ""

    def set_date_error(self, message: str) -> None:
        self.duration = None
        self.date_error = message or "Failed to calculate duration. Please check your dates."

    def clear_dates(self) -> None:
        self.duration = None
        self.date_error = ""

    def check_balance(self, balance: LeaveBalance | Mapping[str, Any] | None) -> bool:
        self.balance_error = exceeds_balance(self.leave_type, self.duration, balance)
        return self.balance_error

    def is_valid(self) -> bool:
        return bool(
            self.leave_type
            and self.start_date
            and self.end_date
            and self.comments.strip()
            and not self.date_error
            and not self.balance_error
        )

    def raise_for_balance(self, balance: LeaveBalance | Mapping[str, Any] | None) -> None:
        if self.check_balance(balance):
            raise InsufficientBalanceError(
                self.leave_type,
                requested=float(self.duration or 0),
                available=available_balance(balance, self.leave_type) or 0.0,
            )

    def to_payload(self) -> dict[str, Any]:
        required = (
            ("leaveType", self.leave_type),
            ("startDate", self.start_date),
            ("endDate", self.end_date),
            ("comments", self.comments.strip()),
        )
        for field_name, value in required:
            if not value:
                raise MissingRequiredFieldError(field_name)
        return {
            "startDate": self.start_date,
            "endDate": self.end_date,
            "leaveType": self.leave_type,
            "comments": self.comments,
            "duration": self.duration,
        }


def _as_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def leave_type_options() -> list[str]:
    return list(LEAVE_TYPES)


# =============================================================================
# Status
# =============================================================================

_STATUS_LABELS = {
    "APPROVED": ("Approved", "green"),
    "REJECTED": ("Rejected", "red"),
    "CANCELED": ("Cancelled", "orange"),
}


def status_label(status: str | None) -> str:
    """Display label; anything unknown is shown as Pending."""
    return _STATUS_LABELS.get((status or "").strip(), ("Pending", "gray"))[0]


def status_color(status: str | None) -> str:
    return _STATUS_LABELS.get((status or "").strip(), ("Pending", "gray"))[1]


def is_actionable(request: LeaveRequest) -> bool:
    return request.leave_status == "PENDING"


def is_cancellable(request: LeaveRequest) -> bool:
    return request.leave_status == "PENDING"


def can_approve(role: str | None) -> bool:
    return (role or "") in APPROVER_ROLES


# =============================================================================
# Roles
# =============================================================================


@dataclass(frozen=True)
class RoleOption:
    role_name: str
    label: str
    disabled: bool


def available_promotions(current_role: str | None) -> list[str]:
    return list(ROLE_PROMOTION_MAP.get(current_role or "", ()))


def build_role(role_name: str, description: str = "") -> NewRole:
    """Role to create; an empty description falls back to the predefined one."""
    return NewRole(
        role_name=role_name,
        description=description or PREDEFINED_ROLES.get(role_name, ""),
    )


def role_options(existing: Iterable[Role]) -> list[RoleOption]:
    """Predefined roles, disabled when the backend already has them."""
    taken = {role.role_name for role in existing}
    return [
        RoleOption(role_name=name, label=description, disabled=name in taken)
        for name, description in PREDEFINED_ROLES.items()
    ]


def policy_role_options(roles: Iterable[Role], policies: Iterable[LeavePolicy]) -> list[RoleOption]:
    """Roles a policy can be created for; ADMIN is hidden and roles with a policy are disabled."""
    used = {policy.role for policy in policies}
    return [
        RoleOption(role_name=role.role_name, label=role.role_name, disabled=role.role_name in used)
        for role in roles
        if role.role_name != ADMIN_ROLE
    ]


def enabled_role_names(options: Iterable[RoleOption]) -> list[str]:
    return [option.role_name for option in options if not option.disabled]


def humanize_role(role: str | None) -> str:
    return (role or "").replace("_", " ")


# =============================================================================
# Holidays
# =============================================================================


def group_holidays(holidays: Iterable[Holiday]) -> dict[str, list[Holiday]]:
    """Group holidays under ``"<country> (<year>)"`` keeping first-seen order."""
    groups: dict[str, list[Holiday]] = {}
    for holiday in holidays:
        key = f"{holiday.country_name} ({holiday.calendar_year})"
        groups.setdefault(key, []).append(holiday)
    return groups


def format_holiday_date(value: Any) -> tuple[str, str]:
    """
    Return (``dd-mm-yyyy``, weekday name) for a holiday date.

    Accepts ISO dates or datetimes; anything unparseable gives
    (``"Invalid Date"``, ``"N/A"``).
    """
    parsed = parse_date(value)
    if parsed is None:
        return "Invalid Date", "N/A"
    return parsed.strftime("%d-%m-%Y"), parsed.strftime("%A")


def parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None
