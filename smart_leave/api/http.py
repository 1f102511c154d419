"""
Shared HTTP client for the leave-management backend.

Attaches the bearer token to authenticated calls and turns a 401 on such
a call into a forced re-login: the token is dropped, the registered hook
is notified and ``SessionExpiredError`` is raised.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import requests

from smart_leave.config import get_settings
from smart_leave.exceptions import APIConnectionError, ApiError, APITimeoutError, SessionExpiredError
from smart_leave.logging_config import LogContext, PerformanceTracker, get_logger

logger = get_logger(__name__)

_MISSING = object()


class ApiClient:
    """
    Thin wrapper around ``requests.Session`` bound to one backend.

    Args:
        base_url: Gateway URL; defaults to ``settings.api_base_url``.
        token: Bearer token for authenticated calls.
        timeout: Per-call timeout in seconds.
        on_unauthorized: Called with no arguments after a 401 cleared the token.
        session: Optional pre-built session (tests inject a mock here).
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        token: str | None = None,
        timeout: float | None = None,
        on_unauthorized: Callable[[], None] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = settings.request_timeout_seconds if timeout is None else timeout
        self.token = token
        self._on_unauthorized = on_unauthorized
        self._session = session if session is not None else requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    def clear_token(self) -> None:
        self.token = None

    def get(self, path: str, *, auth: bool = True) -> Any:
        return self.request("GET", path, auth=auth)

    def post(self, path: str, payload: Any = _MISSING, *, auth: bool = True) -> Any:
        return self.request("POST", path, payload=payload, auth=auth)

    def put(self, path: str, payload: Any = _MISSING, *, auth: bool = True) -> Any:
        return self.request("PUT", path, payload=payload, auth=auth)

    def delete(self, path: str, *, auth: bool = True) -> Any:
        return self.request("DELETE", path, auth=auth)

    def request(self, method: str, path: str, *, payload: Any = _MISSING, auth: bool = True) -> Any:
        """
        Send one request and return the decoded body.

        A ``str`` payload is sent as the raw body; anything else is JSON
        encoded. Returns parsed JSON for JSON responses, text otherwise,
        and ``None`` for an empty body.

        Raises:
            SessionExpiredError: 401 on an authenticated call.
            ApiError: Any other non-2xx status.
            APITimeoutError: The backend did not answer in time.
            APIConnectionError: The backend could not be reached.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = {}
        if auth and self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        kwargs: dict[str, Any] = {"headers": headers, "timeout": self.timeout}
        if payload is not _MISSING:
            if isinstance(payload, str):
                kwargs["data"] = payload.encode("utf-8")
            else:
                kwargs["data"] = json.dumps(payload)

        LogContext.set_endpoint(path)
        try:
            with PerformanceTracker("http_request", method=method, path=path):
                response = self._session.request(method, url, **kwargs)
        except requests.Timeout as exc:
            logger.warning("Request %s %s timed out", method, path)
            raise APITimeoutError(endpoint=path, timeout_seconds=self.timeout) from exc
        except requests.ConnectionError as exc:
            logger.warning("Request %s %s could not connect: %s", method, path, exc)
            raise APIConnectionError(endpoint=path, reason=str(exc)) from exc
        finally:
            LogContext.set_endpoint(None)

        body = _decode_body(response)

        if response.status_code == 401 and auth:
            logger.warning("Session expired on %s %s", method, path)
            self.clear_token()
            if self._on_unauthorized is not None:
                self._on_unauthorized()
            raise SessionExpiredError(endpoint=path)

        if not response.ok:
            logger.warning("Request %s %s failed with status %s", method, path, response.status_code)
            raise ApiError(
                f"Request to {path} failed",
                status_code=response.status_code,
                body=body,
                endpoint=path,
            )

        logger.info("%s %s -> %s", method, path, response.status_code)
        return body


def _decode_body(response: requests.Response) -> Any:
    content_type = response.headers.get("Content-Type", "")
    text = response.text
    if not text:
        return None
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            logger.warning("Response declared JSON but could not be parsed")
            return text
    return text
