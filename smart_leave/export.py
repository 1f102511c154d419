"""
CSV exports offered by the admin views.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from smart_leave.models import LeaveBalance, RegistrationHistory, User

LEAVE_BALANCES_FILENAME = "admin_all_users_leave_balances.csv"
REGISTRATION_HISTORY_FILENAME = "registration_history.csv"
USERS_FILENAME = "user_list.csv"

LEAVE_BALANCE_HEADERS = (
    "Name",
    "Sick Leave",
    "Casual Leave",
    "Loss of Pay",
    "Earned Leave",
    "Paternity Leave",
    "Maternity Leave",
    "Total Leaves",
)

REGISTRATION_HISTORY_HEADERS = (
    "Reg. ID",
    "First Name",
    "Last Name",
    "User ID",
    "Email",
    "Role",
    "Registered On",
)

USER_HEADERS = ("ID", "Name", "Email", "Role", "Country", "Gender")


def to_csv(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Render rows as CSV text; ``None`` cells are written empty."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(["" if cell is None else cell for cell in row])
    return buffer.getvalue()


def format_registered_on(value: str | None) -> str:
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return value


def leave_balances_csv(balances: Iterable[LeaveBalance]) -> str:
    rows = (
        (
            b.full_name,
            b.sick_leave,
            b.casual_leave,
            b.loss_of_pay,
            b.earned_leave,
            b.paternity_leave,
            b.maternity_leave,
            b.total_leaves,
        )
        for b in balances
    )
    return to_csv(LEAVE_BALANCE_HEADERS, rows)


def registration_history_csv(entries: Iterable[RegistrationHistory]) -> str:
    rows = (
        (
            e.registration_id,
            e.first_name,
            e.last_name,
            e.user_id,
            e.email,
            e.role,
            format_registered_on(e.register_date),
        )
        for e in entries
    )
    return to_csv(REGISTRATION_HISTORY_HEADERS, rows)


def users_csv(users: Iterable[User]) -> str:
    rows = (
        (u.user_id, u.full_name, u.email, u.role_name, u.country_name, u.gender)
        for u in users
    )
    return to_csv(USER_HEADERS, rows)
