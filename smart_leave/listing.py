"""
Filtering, sorting and pagination for the list views.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel

from smart_leave.models import LeaveRequest, User

T = TypeVar("T")

ALL = "ALL"


def filter_requests(
    requests: Sequence[LeaveRequest],
    status: str = ALL,
    leave_type: str = ALL,
    *,
    case_insensitive: bool = False,
) -> list[LeaveRequest]:
    """
    Filter leave requests by status and type; ``"ALL"`` disables a filter.

    The employee view matches the type exactly; the approver view matches
    it case-insensitively because its type options are re-capitalized.
    """
    filtered = list(requests)
    if status != ALL:
        filtered = [req for req in filtered if req.leave_status == status]
    if leave_type != ALL:
        if case_insensitive:
            wanted = leave_type.lower()
            filtered = [req for req in filtered if (req.leave_type or "").strip().lower() == wanted]
        else:
            filtered = [req for req in filtered if req.leave_type == leave_type]
    return filtered


def unique_leave_types(requests: Sequence[LeaveRequest]) -> list[str]:
    """``ALL`` followed by the distinct trimmed types, sorted."""
    types = {(req.leave_type or "").strip() for req in requests}
    return [ALL, *sorted(t for t in types if t)]


def unique_leave_types_titled(requests: Sequence[LeaveRequest]) -> list[str]:
    """``ALL`` followed by distinct types as ``Sick``, ``Casual``... in first-seen order."""
    seen: dict[str, None] = {}
    for req in requests:
        value = (req.leave_type or "").strip().lower()
        if value:
            seen.setdefault(value, None)
    return [ALL, *(value[:1].upper() + value[1:] for value in seen)]


def search_users(users: Sequence[User], term: str) -> list[User]:
    """Case-insensitive match on full name or email."""
    needle = (term or "").lower()
    return [
        user
        for user in users
        if needle in f"{user.first_name} {user.last_name}".lower() or needle in (user.email or "").lower()
    ]


USER_SORT_KEYS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "countryName": "country_name",
    "role": "role",
}


def _user_sort_value(user: User, key: str) -> str:
    if key == "role":
        return user.role_name
    attr = USER_SORT_KEYS.get(key, key)
    return str(getattr(user, attr, "") or "")


def sort_users(users: Sequence[User], key: str = "firstName") -> list[User]:
    return sorted(users, key=lambda user: _user_sort_value(user, key))


def _record_values(record: Any) -> list[Any]:
    if isinstance(record, BaseModel):
        return list(record.model_dump().values())
    if isinstance(record, dict):
        return list(record.values())
    return [record]


def search_records(records: Sequence[T], term: str) -> list[T]:
    """Keep records where any field, rendered as text, contains ``term``."""
    needle = (term or "").lower()
    if not needle:
        return list(records)
    return [
        record
        for record in records
        if any(needle in str(value).lower() for value in _record_values(record))
    ]


def _field_value(record: Any, field: str) -> Any:
    if isinstance(record, dict):
        return record.get(field)
    return getattr(record, field, None)


def sort_records(records: Sequence[T], field: str, order: str = "asc") -> list[T]:
    """
    Sort by one field; missing values sort first ascending.

    Mixed value types are compared as text.
    """

    def key(record: Any) -> tuple[int, Any]:
        value = _field_value(record, field)
        if value is None:
            return (0, "")
        return (1, value)

    try:
        return sorted(records, key=key, reverse=order == "desc")
    except TypeError:
        return sorted(records, key=lambda r: str(_field_value(r, field) or ""), reverse=order == "desc")


@dataclass
class SortState:
    """Sort field/order of a table; clicking the same header flips the order."""

    field: str
    order: str = "asc"

    def toggle(self, field: str) -> SortState:
        if self.field == field and self.order == "asc":
            self.order = "desc"
        else:
            self.order = "asc"
        self.field = field
        return self


def paginate(items: Sequence[T], page: int, per_page: int) -> list[T]:
    """Slice for a 0-based page; out-of-range pages are empty."""
    if per_page <= 0 or page < 0:
        return []
    start = page * per_page
    return list(items[start:start + per_page])


def page_count(total: int, per_page: int) -> int:
    if per_page <= 0:
        return 0
    return max(1, math.ceil(total / per_page))
