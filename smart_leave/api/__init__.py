"""
REST clients for the leave-management backend.
"""

from __future__ import annotations

from smart_leave.api.admin import AdminApi
from smart_leave.api.http import ApiClient
from smart_leave.api.users import UserApi

__all__ = ["AdminApi", "ApiClient", "UserApi"]
