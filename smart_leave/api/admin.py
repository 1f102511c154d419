"""
Admin API: calls under ``/admin`` on the leave backend.

Registration, registration history and login are public; every other
call carries the admin's bearer token.
"""

from __future__ import annotations

import json
from typing import Any

from smart_leave.api.http import ApiClient
from smart_leave.models import (
    Admin,
    Holiday,
    HolidayEntry,
    Identifier,
    LeaveBalance,
    LeavePolicy,
    LeavePolicyEntry,
    LeaveRequest,
    LoginDetails,
    LoginResult,
    NewRole,
    RegistrationHistory,
    Role,
    User,
    WireModel,
    parse_list,
    parse_model,
)


def _wire(data: WireModel | dict[str, Any]) -> dict[str, Any]:
    return data.to_wire() if isinstance(data, WireModel) else dict(data)


class AdminApi:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    # -- public -----------------------------------------------------------

    def register_admin(self, admin_data: dict[str, Any]) -> Any:
        """Register an admin; the backend answers with a confirmation text."""
        return self.client.post("/admin/registration", _wire(admin_data), auth=False)

    def registration_history(self) -> list[RegistrationHistory]:
        return parse_list(RegistrationHistory, self.client.get("/admin/get-registration-history", auth=False))

    def login_admin(self, login_details: LoginDetails | dict[str, Any]) -> LoginResult:
        payload = self.client.post("/admin/login", _wire(login_details), auth=False)
        return parse_model(LoginResult, payload)

    # -- configuration ----------------------------------------------------

    def add_new_role(self, admin_id: Identifier, role: NewRole | dict[str, Any]) -> Any:
        return self.client.post(f"/admin/add-newrole/{admin_id}", _wire(role))

    def add_country_calendar(self, admin_id: Identifier, holiday: HolidayEntry | dict[str, Any]) -> Any:
        return self.client.post(f"/admin/add-new-country-calendar/{admin_id}", _wire(holiday))

    def add_leave_policies(self, admin_id: Identifier, policy: LeavePolicyEntry | dict[str, Any]) -> Any:
        return self.client.post(f"/admin/add-new-leave-policies/{admin_id}", _wire(policy))

    def update_calendar(self, admin_id: Identifier) -> Any:
        return self.client.put(f"/admin/update-calendar/{admin_id}")

    def get_all_roles(self, admin_id: Identifier) -> list[Role]:
        return parse_list(Role, self.client.get(f"/admin/get-all-roles/{admin_id}"))

    def get_all_leave_policies(self, admin_id: Identifier) -> list[LeavePolicy]:
        return parse_list(LeavePolicy, self.client.get(f"/admin/get-all-roles-based-leaves-policies/{admin_id}"))

    def get_all_holidays(self, admin_id: Identifier) -> list[Holiday]:
        return parse_list(Holiday, self.client.get(f"/admin/get-all-holidays/{admin_id}"))

    # -- users ------------------------------------------------------------

    def get_all_users(self) -> list[User]:
        return parse_list(User, self.client.get("/admin/get-all-users"))

    def promote_user(self, admin_id: Identifier, user_id: Identifier, role_name: str) -> Any:
        # The role name travels as a JSON string body
        return self.client.put(f"/admin/promote/{admin_id}/{user_id}", json.dumps(role_name))

    def delete_user(self, admin_id: Identifier, user_id: Identifier) -> Any:
        return self.client.delete(f"/admin/delete-user/{admin_id}/{user_id}")

    def get_all_users_leave_balances(self, admin_id: Identifier) -> list[LeaveBalance]:
        return parse_list(LeaveBalance, self.client.get(f"/admin/get-all-users-leave-balance/{admin_id}"))

    # -- leave requests ---------------------------------------------------

    def get_all_leave_requests(self, admin_id: Identifier) -> list[LeaveRequest]:
        return parse_list(LeaveRequest, self.client.get(f"/admin/get-all-leave-requests/{admin_id}"))

    def approve_leave(self, admin_id: Identifier, leave_id: Identifier) -> Any:
        return self.client.post(f"/admin/approve/{admin_id}/{leave_id}")

    def reject_leave(self, admin_id: Identifier, leave_id: Identifier) -> Any:
        return self.client.post(f"/admin/reject/{admin_id}/{leave_id}")

    # -- profile ----------------------------------------------------------

    def get_admin_details(self, admin_id: Identifier) -> Admin:
        return parse_model(Admin, self.client.get(f"/admin/get-admin-details/{admin_id}") or {})

    def update_admin_details(self, admin_id: Identifier, admin_data: Admin | dict[str, Any]) -> Any:
        return self.client.put(f"/admin/update/{admin_id}", _wire(admin_data))
