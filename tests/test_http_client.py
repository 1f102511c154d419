"""
Tests for smart_leave.api.http module.

Covers:
- URL building and bearer token handling
- Payload encoding
- Response decoding
- Error mapping (401, other statuses, timeouts, connection failures)
"""

import json
from unittest import mock

import pytest
import requests


class TestRequestBuilding:
    def test_authenticated_get_sends_bearer_token(self, api_client, http_session):
        api_client.get("/users/get-user-details/7")

        method, url = http_session.request.call_args.args
        kwargs = http_session.request.call_args.kwargs
        assert method == "GET"
        assert url == "http://backend.test/users/get-user-details/7"
        assert kwargs["headers"] == {"Authorization": "Bearer tok-123"}
        assert "data" not in kwargs

    def test_public_call_omits_token(self, api_client, http_session):
        api_client.post("/admin/login", {"userName": "A1@b"}, auth=False)

        assert http_session.request.call_args.kwargs["headers"] == {}

    def test_no_token_no_header(self, http_session):
        from smart_leave.api.http import ApiClient

        client = ApiClient("http://backend.test", session=http_session)
        client.get("/users/get-all-countries")

        assert client.has_token is False
        assert http_session.request.call_args.kwargs["headers"] == {}

    def test_json_payload_encoded(self, api_client, http_session):
        api_client.post("/users/apply-leave/1", {"leaveType": "SICK", "duration": 2})

        assert json.loads(http_session.request.call_args.kwargs["data"]) == {"leaveType": "SICK", "duration": 2}

    def test_string_payload_sent_raw(self, api_client, http_session):
        api_client.put("/users/update/1", "plain")

        assert http_session.request.call_args.kwargs["data"] == b"plain"

    def test_promote_sends_json_string_body(self, api_client, http_session):
        from smart_leave.api.admin import AdminApi

        AdminApi(api_client).promote_user(1, 2, "TEAM_LEAD")

        method, url = http_session.request.call_args.args
        assert method == "PUT"
        assert url == "http://backend.test/admin/promote/1/2"
        assert http_session.request.call_args.kwargs["data"] == b'"TEAM_LEAD"'

    def test_timeout_and_content_type(self, http_session):
        from smart_leave.api.http import ApiClient

        ApiClient("http://backend.test/", timeout=3, session=http_session).get("x")

        assert http_session.request.call_args.args[1] == "http://backend.test/x"
        assert http_session.request.call_args.kwargs["timeout"] == 3
        assert http_session.headers["Content-Type"] == "application/json"

    def test_base_url_defaults_to_settings(self, http_session):
        from smart_leave.api.http import ApiClient
        from smart_leave.config import get_settings

        client = ApiClient(session=http_session)

        assert client.base_url == get_settings().api_base_url


class TestResponseDecoding:
    def test_json_body(self, api_client, http_session, make_response):
        http_session.request.return_value = make_response(200, [{"roleName": "TEAM_LEAD"}])

        assert api_client.get("/admin/get-all-roles/1") == [{"roleName": "TEAM_LEAD"}]

    def test_text_body(self, api_client, http_session, make_response):
        http_session.request.return_value = make_response(200, "Leave applied", content_type="text/plain")

        assert api_client.post("/users/apply-leave/1", {}) == "Leave applied"

    def test_empty_body(self, api_client, http_session):
        assert api_client.delete("/users/delete-account/1") is None

    def test_bad_json_falls_back_to_text(self, api_client, http_session, make_response):
        response = make_response(200, None)
        response.text = "not json"
        http_session.request.return_value = response

        assert api_client.get("/x") == "not json"


class TestErrorMapping:
    def test_401_clears_token_and_fires_hook(self, http_session, make_response):
        from smart_leave.api.http import ApiClient
        from smart_leave.exceptions import SessionExpiredError

        hook = mock.Mock()
        client = ApiClient("http://backend.test", token="tok", on_unauthorized=hook, session=http_session)
        http_session.request.return_value = make_response(401, "Unauthorized", content_type="text/plain")

        with pytest.raises(SessionExpiredError) as excinfo:
            client.get("/admin/get-admin-details/1")

        assert client.token is None
        hook.assert_called_once_with()
        assert excinfo.value.endpoint == "/admin/get-admin-details/1"

    def test_401_on_public_call_is_plain_error(self, http_session, make_response):
        from smart_leave.api.http import ApiClient
        from smart_leave.exceptions import ApiError, SessionExpiredError

        hook = mock.Mock()
        client = ApiClient("http://backend.test", token="tok", on_unauthorized=hook, session=http_session)
        http_session.request.return_value = make_response(401, "Invalid credentials", content_type="text/plain")

        with pytest.raises(ApiError) as excinfo:
            client.post("/admin/login", {}, auth=False)

        assert not isinstance(excinfo.value, SessionExpiredError)
        assert excinfo.value.user_message == "Invalid credentials"
        assert client.token == "tok"
        hook.assert_not_called()

    def test_error_status_keeps_body(self, api_client, http_session, make_response):
        from smart_leave.exceptions import ApiError

        http_session.request.return_value = make_response(409, {"message": "Role exists"})

        with pytest.raises(ApiError) as excinfo:
            api_client.post("/admin/add-newrole/1", {"roleName": "TEAM_LEAD"})

        assert excinfo.value.status_code == 409
        assert excinfo.value.user_message == "Role exists"
        assert excinfo.value.title == "Error 409"

    def test_timeout(self, api_client, http_session):
        from smart_leave.exceptions import APITimeoutError

        http_session.request.side_effect = requests.Timeout("slow")

        with pytest.raises(APITimeoutError) as excinfo:
            api_client.get("/x")

        assert excinfo.value.timeout_seconds == api_client.timeout

    def test_connection_error(self, api_client, http_session):
        from smart_leave.exceptions import APIConnectionError

        http_session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(APIConnectionError) as excinfo:
            api_client.get("/x")

        assert "refused" in excinfo.value.detail

    def test_endpoint_context_cleared_after_call(self, api_client, http_session):
        from smart_leave.logging_config import LogContext

        http_session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(Exception):
            api_client.get("/x")

        assert LogContext.get_endpoint() is None
