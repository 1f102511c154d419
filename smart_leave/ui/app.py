"""
Streamlit UI entrypoint.
"""

from __future__ import annotations

from collections.abc import Callable

import streamlit as st

from smart_leave.logging_config import configure_logging, get_logger
from smart_leave.session import (
    ADMIN,
    SESSION_EXPIRED_MESSAGE,
    USER,
    apply_pending_view,
    get_role,
    get_user_name,
    init_session_state,
    is_authenticated,
    logout,
    pop_session_expired,
    require_login,
)
from smart_leave.ui.admin_pages import ADMIN_VIEWS
from smart_leave.ui.auth_pages import (
    ADMIN_LOGIN_VIEW,
    ADMIN_REGISTRATION_VIEW,
    USER_LOGIN_VIEW,
    USER_REGISTRATION_VIEW,
    render_admin_login,
    render_admin_registration,
    render_landing_page,
    render_user_login,
    render_user_registration,
)
from smart_leave.ui.components import show_flashes
from smart_leave.ui.user_pages import user_views

logger = get_logger(__name__)

PUBLIC_VIEWS: dict[str, Callable[[], None]] = {
    "Home": render_landing_page,
    ADMIN_LOGIN_VIEW: render_admin_login,
    ADMIN_REGISTRATION_VIEW: render_admin_registration,
    USER_LOGIN_VIEW: render_user_login,
    USER_REGISTRATION_VIEW: render_user_registration,
}


def _current_views() -> tuple[str | None, dict[str, Callable[[], None]]]:
    if is_authenticated(ADMIN):
        return ADMIN, ADMIN_VIEWS
    if is_authenticated(USER):
        return USER, user_views(get_role())
    return None, PUBLIC_VIEWS


def render_sidebar(kind: str | None, views: dict[str, Callable[[], None]]) -> str:
    apply_pending_view()
    if st.session_state.get("_view") not in views:
        st.session_state["_view"] = next(iter(views))

    st.sidebar.title("Smart Leave")
    if kind is not None:
        st.sidebar.caption(f"Signed in as {get_user_name() or kind} · {get_role()}")
    selected = st.sidebar.radio("Go to", list(views), key="_view")
    if kind is not None:
        st.sidebar.divider()
        if st.sidebar.button("Logout", use_container_width=True):
            logout()
            st.rerun()
    return selected


def main() -> None:
    st.set_page_config(
        page_title="Smart Leave Management",
        page_icon="🗓️",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    configure_logging()
    init_session_state()

    if pop_session_expired():
        st.error(SESSION_EXPIRED_MESSAGE)

    kind, views = _current_views()
    selected = render_sidebar(kind, views)
    show_flashes()

    if kind is not None:
        require_login(kind)
    logger.debug("Rendering view %s", selected)
    views[selected]()


if __name__ == "__main__":
    main()
