"""
Pytest configuration and shared fixtures for smart-leave tests.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict
from unittest import mock

import pytest
import requests

sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def sample_leave_requests() -> list[Dict[str, Any]]:
    """Leave requests as the backend returns them."""
    return [
        {
            "leaveId": 1,
            "userId": 10,
            "userName": "Asha1@",
            "userRole": "TEAM_MEMBER",
            "leaveType": "SICK",
            "leaveTypePlannedAndUnplanned": "UNPLANNED",
            "startDate": "2024-01-15",
            "endDate": "2024-01-16",
            "duration": 2,
            "comments": "Fever",
            "leaveStatus": "PENDING",
        },
        {
            "leaveId": 2,
            "userId": 11,
            "userName": "Ravi2#",
            "userRole": "TEAM_LEAD",
            "leaveType": "CASUAL ",
            "leaveTypePlannedAndUnplanned": "PLANNED",
            "startDate": "2024-01-20",
            "endDate": "2024-01-20",
            "duration": 1,
            "comments": "Family function",
            "leaveStatus": "APPROVED",
        },
        {
            "leaveId": 3,
            "userId": 10,
            "userName": "Asha1@",
            "userRole": "TEAM_MEMBER",
            "leaveType": "EARNED",
            "leaveTypePlannedAndUnplanned": "PLANNED",
            "startDate": "2024-03-04",
            "endDate": "2024-03-08",
            "duration": 5,
            "comments": "Vacation",
            "leaveStatus": "CANCELED",
        },
        {
            "leaveId": 4,
            "user": {"userId": 12, "firstName": "Meera", "lastName": "Iyer", "role": {"roleName": "HR_MANAGER"}},
            "leaveType": "sick",
            "leaveTypePlannedAndUnplanned": "UNPLANNED",
            "startDate": "not-a-date",
            "endDate": "2024-04-02",
            "duration": 1,
            "comments": "Migraine",
            "leaveStatus": "REJECTED",
        },
    ]


@pytest.fixture
def sample_users() -> list[Dict[str, Any]]:
    """Users as returned by the admin user listing."""
    return [
        {
            "userId": 1,
            "firstName": "Zara",
            "lastName": "Khan",
            "email": "zara@example.com",
            "countryName": "India",
            "gender": "FEMALE",
            "role": {"roleId": 3, "roleName": "TEAM_LEAD"},
        },
        {
            "userId": 2,
            "firstName": "Adam",
            "lastName": "Smith",
            "email": "adam@corp.io",
            "countryName": "UK",
            "gender": "MALE",
            "userRole": "TEAM_MEMBER",
        },
        {
            "userId": 3,
            "firstName": "Maya",
            "lastName": "Rao",
            "email": "maya@example.com",
            "countryName": "Australia",
            "gender": "FEMALE",
            "role": "HR_MANAGER",
        },
    ]


@pytest.fixture
def sample_balance() -> Dict[str, Any]:
    return {
        "firstName": "Asha",
        "lastName": "Patel",
        "sickLeave": 5,
        "casualLeave": 3,
        "earnedLeave": 10,
        "paternityLeave": 0,
        "maternityLeave": 0,
        "lossOfPay": 0,
        "totalLeaves": 18,
    }


def _make_response(status_code: int = 200, body: Any = None, content_type: str = "application/json") -> mock.Mock:
    """Build a ``requests.Response`` stand-in."""
    response = mock.Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    response.headers = {"Content-Type": content_type}
    if body is None:
        response.text = ""
    elif isinstance(body, str) and "json" not in content_type:
        response.text = body
    else:
        response.text = json.dumps(body)
    response.json.side_effect = lambda: json.loads(response.text)
    return response


@pytest.fixture
def make_response():
    """Factory for fake responses: ``make_response(status, body, content_type)``."""
    return _make_response


@pytest.fixture
def http_session() -> mock.Mock:
    """A mock ``requests.Session`` answering 200 with an empty body."""
    session = mock.Mock(spec=requests.Session)
    session.headers = {}
    session.request.return_value = _make_response(200, None)
    return session


@pytest.fixture
def api_client(http_session):
    from smart_leave.api.http import ApiClient

    return ApiClient("http://backend.test", token="tok-123", session=http_session)
