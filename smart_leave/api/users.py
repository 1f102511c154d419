"""
User API: calls under ``/users`` on the leave backend.

Registration, login, the forgot-username/password OTP flow, city lookup
and the post-OTP password reset are public; everything else carries the
user's bearer token.
"""

from __future__ import annotations

from typing import Any

from smart_leave.api.http import ApiClient
from smart_leave.exceptions import NotFoundError
from smart_leave.models import (
    Holiday,
    Identifier,
    LeaveBalance,
    LeaveRequest,
    LoginDetails,
    LoginResult,
    PasswordChange,
    User,
    WireModel,
    parse_list,
    parse_model,
)


def _wire(data: WireModel | dict[str, Any]) -> dict[str, Any]:
    return data.to_wire() if isinstance(data, WireModel) else dict(data)


class UserApi:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    # -- account ----------------------------------------------------------

    def register_user(self, user_data: dict[str, Any]) -> Any:
        return self.client.post("/users/registration", _wire(user_data), auth=False)

    def login_user(self, login_details: LoginDetails | dict[str, Any]) -> LoginResult:
        payload = self.client.post("/users/login", _wire(login_details), auth=False)
        return parse_model(LoginResult, payload)

    def get_user_details(self, user_id: Identifier) -> User:
        payload = self.client.get(f"/users/get-user-details/{user_id}")
        if not payload:
            raise NotFoundError("User not found", resource_type="User", resource_id=str(user_id))
        return parse_model(User, payload)

    def update_user_details(self, user_id: Identifier, user: User | dict[str, Any]) -> Any:
        return self.client.put(f"/users/update/{user_id}", _wire(user))

    def delete_account(self, user_id: Identifier) -> Any:
        return self.client.delete(f"/users/delete-account/{user_id}")

    def update_password(self, user_id: Identifier, details: PasswordChange | dict[str, Any]) -> Any:
        return self.client.put(f"/users/update-password/{user_id}", _wire(details))

    # -- forgot username / password ---------------------------------------

    def generate_otp_for_password(self, email: str) -> Any:
        return self.client.post("/users/forgot-password/generate-otp", {"email": email}, auth=False)

    def generate_otp_for_username(self, email: str) -> Any:
        return self.client.post("/users/forgot-username/generate-otp", {"email": email}, auth=False)

    def verify_otp_for_password(self, otp: str) -> Any:
        """Returns the backend's confirmation text, which embeds ``UserId : <n>``."""
        return self.client.post("/users/forgot-password/verify-otp", {"otp": otp}, auth=False)

    def verify_otp_for_username(self, otp: str) -> Any:
        """Returns the backend's text revealing the username."""
        return self.client.post("/users/forgot-username/verify-otp", {"otp": otp}, auth=False)

    def update_new_password(self, user_id: Identifier, new_password: str) -> Any:
        return self.client.put(
            f"/users/update-new-password/{user_id}",
            {"newPassword": new_password},
            auth=False,
        )

    # -- lookups ----------------------------------------------------------

    def get_all_countries(self) -> list[str]:
        return list(self.client.get("/users/get-all-countries") or [])

    def get_all_cities(self, country_name: str) -> list[str]:
        return list(self.client.get(f"/users/get-all-cities/{country_name}", auth=False) or [])

    def get_user_holidays(self, user_id: Identifier) -> list[Holiday]:
        return parse_list(Holiday, self.client.get(f"/users/get-holidays/{user_id}"))

    # -- leave ------------------------------------------------------------

    def get_user_leave_balance(self, user_id: Identifier) -> LeaveBalance | None:
        """The backend wraps the balance in a one-element array."""
        balances = parse_list(LeaveBalance, self.client.get(f"/users/get-leave-balance/{user_id}"))
        return balances[0] if balances else None

    def get_all_users_leave_balances(self, user_id: Identifier) -> list[LeaveBalance]:
        return parse_list(LeaveBalance, self.client.get(f"/users/get-all-users-leave-balance/{user_id}"))

    def calculate_leave_duration(self, user_id: Identifier, start_date: str, end_date: str) -> Any:
        """Working days between the dates as counted by the backend."""
        return self.client.post(
            f"/users/calculate-duration/{user_id}",
            {"startDate": start_date, "endDate": end_date},
        )

    def apply_leave(self, user_id: Identifier, application: dict[str, Any]) -> Any:
        return self.client.post(f"/users/apply-leave/{user_id}", application)

    def get_user_leave_requests(self, user_id: Identifier) -> list[LeaveRequest]:
        return parse_list(LeaveRequest, self.client.get(f"/users/get-leave-requests/{user_id}"))

    def cancel_leave(self, user_id: Identifier, leave_id: Identifier) -> Any:
        return self.client.put(f"/users/cancel-leave/{user_id}/{leave_id}")

    # -- approvals (managers) ---------------------------------------------

    def get_all_user_leave_requests(self, user_id: Identifier) -> list[LeaveRequest]:
        return parse_list(LeaveRequest, self.client.get(f"/users/get-all-leave-requests/{user_id}"))

    def approve_user_leave(self, user_id: Identifier, requester_id: Identifier) -> Any:
        return self.client.post(f"/users/approve-leave/{user_id}/{requester_id}")

    def reject_user_leave(self, user_id: Identifier, requester_id: Identifier) -> Any:
        return self.client.post(f"/users/reject-leave/{user_id}/{requester_id}")
