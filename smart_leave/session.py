"""
Session state helpers for the Streamlit UI.

The signed-in actor (admin or employee) lives under ``_auth`` in
``st.session_state``; API clients are rebuilt per rerun from that token.
"""

from __future__ import annotations

import uuid
from typing import Any

import streamlit as st

from smart_leave.api import AdminApi, ApiClient, UserApi
from smart_leave.logging_config import LogContext, get_logger, log_event
from smart_leave.models import Identifier, LoginResult

logger = get_logger(__name__)

ADMIN = "admin"
USER = "user"

SESSION_EXPIRED_MESSAGE = "Session Expired. Your session has expired. Please log in again."


def init_session_state() -> None:
    if "_auth" not in st.session_state:
        st.session_state["_auth"] = None
    if "_session_id" not in st.session_state:
        st.session_state["_session_id"] = str(uuid.uuid4())
    if "_session_expired" not in st.session_state:
        st.session_state["_session_expired"] = False
    if "_flash" not in st.session_state:
        st.session_state["_flash"] = []


def get_session_id() -> str:
    return st.session_state.get("_session_id", "default")


def start_session(kind: str, result: LoginResult, *, user_name: str = "") -> None:
    """Store a successful login; ``kind`` is ``"admin"`` or ``"user"``."""
    st.session_state["_auth"] = {
        "kind": kind,
        "token": result.token,
        "actor_id": result.user_id,
        "role": result.role,
        "email": result.email,
        "user_name": user_name,
    }
    st.session_state["_session_expired"] = False
    LogContext.set_actor_id(str(result.user_id))
    log_event("login", kind=kind, actor_id=str(result.user_id), role=result.role)


def logout() -> None:
    auth = st.session_state.get("_auth")
    if auth:
        log_event("logout", kind=auth.get("kind"), actor_id=str(auth.get("actor_id")))
    st.session_state["_auth"] = None
    LogContext.clear()


def expire_session() -> None:
    """401 hook: drop the actor and flag the notice for the next render."""
    logger.warning("Session expired", extra={"session_id": get_session_id()})
    logout()
    st.session_state["_session_expired"] = True


def pop_session_expired() -> bool:
    expired = bool(st.session_state.get("_session_expired", False))
    st.session_state["_session_expired"] = False
    return expired


def _auth() -> dict[str, Any]:
    return st.session_state.get("_auth") or {}


def is_authenticated(kind: str | None = None) -> bool:
    auth = _auth()
    if not auth.get("token"):
        return False
    return kind is None or auth.get("kind") == kind


def require_login(kind: str) -> None:
    """Stop the page unless an actor of ``kind`` is signed in."""
    if not is_authenticated(kind):
        st.warning("Please log in to continue.")
        st.stop()


def get_actor_id() -> Identifier | None:
    return _auth().get("actor_id")


def get_role() -> str:
    return _auth().get("role") or ""


def get_email() -> str:
    return _auth().get("email") or ""


def get_user_name() -> str:
    return _auth().get("user_name") or ""


def get_token() -> str | None:
    return _auth().get("token")


def _client() -> ApiClient:
    return ApiClient(token=get_token(), on_unauthorized=expire_session)


def get_admin_api() -> AdminApi:
    return AdminApi(_client())


def get_user_api() -> UserApi:
    return UserApi(_client())


def flash(kind: str, message: str) -> None:
    """Queue an alert to show after the next rerun."""
    st.session_state.setdefault("_flash", []).append((kind, message))


def pop_flashes() -> list[tuple[str, str]]:
    messages = list(st.session_state.get("_flash", []))
    st.session_state["_flash"] = []
    return messages


def go_to(view: str) -> None:
    """Select ``view`` in the sidebar on the next run."""
    st.session_state["_next_view"] = view


def apply_pending_view() -> None:
    """Move a queued view into the sidebar selector before it is drawn."""
    if "_next_view" in st.session_state:
        st.session_state["_view"] = st.session_state.pop("_next_view")
