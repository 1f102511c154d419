"""
Reusable UI pieces (alerts, badges, confirmations, tables, pagination).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import streamlit as st

from smart_leave.exceptions import SessionExpiredError, SmartLeaveError, get_user_message
from smart_leave.leave import status_color, status_label
from smart_leave.listing import page_count, paginate
from smart_leave.logging_config import get_logger
from smart_leave.session import flash, pop_flashes

logger = get_logger(__name__)


def show_flashes() -> None:
    for kind, message in pop_flashes():
        if kind == "success":
            st.success(message)
        elif kind == "warning":
            st.warning(message)
        else:
            st.error(message)


def show_error(exc: Exception, fallback: str) -> None:
    """Log ``exc`` and show it as an error alert; an expired session reruns to the login view."""
    if isinstance(exc, SessionExpiredError):
        st.rerun()
    if isinstance(exc, SmartLeaveError):
        exc.log()
    else:
        logger.exception(fallback)
    st.error(get_user_message(exc, fallback))


def succeed(message: str) -> None:
    """Flash ``message`` and rerun so the view refetches."""
    flash("success", message)
    st.rerun()


def load_or_empty(loader, *args: Any) -> list:
    """Run a list fetch; failures are logged and give an empty list."""
    try:
        return loader(*args)
    except SessionExpiredError:
        st.rerun()
    except SmartLeaveError as exc:
        exc.log()
        return []


def status_badge(status: str | None) -> str:
    return f":{status_color(status)}[{status_label(status)}]"


def confirm(key: str, prompt: str) -> bool | None:
    """
    Two-step confirmation stored under ``_confirm_<key>``.

    Returns True once confirmed, False when cancelled and None while the
    question is pending or was never asked.
    """
    state_key = f"_confirm_{key}"
    if not st.session_state.get(state_key):
        return None
    st.warning(prompt)
    yes, no = st.columns(2)
    if yes.button("Confirm", key=f"{state_key}_yes", type="primary"):
        st.session_state[state_key] = False
        return True
    if no.button("Cancel", key=f"{state_key}_no"):
        st.session_state[state_key] = False
        return False
    return None


def ask_confirmation(key: str) -> None:
    st.session_state[f"_confirm_{key}"] = True
    st.rerun()


def csv_download(label: str, data: str, filename: str, *, key: str | None = None) -> None:
    st.download_button(label, data=data, file_name=filename, mime="text/csv", key=key)


def paged(items: Sequence[Any], key: str, per_page: int) -> list[Any]:
    """Render Prev/Next controls and return the current page of ``items``."""
    state_key = f"_page_{key}"
    total_pages = page_count(len(items), per_page)
    page = min(max(0, int(st.session_state.get(state_key, 0))), total_pages - 1)
    st.session_state[state_key] = page

    nav1, nav2, nav3 = st.columns([1, 2, 1])
    with nav1:
        if st.button("← Prev", key=f"{state_key}_prev", disabled=page <= 0, use_container_width=True):
            st.session_state[state_key] = page - 1
            st.rerun()
    with nav2:
        st.caption(f"Page {page + 1} / {total_pages}")
    with nav3:
        if st.button("Next →", key=f"{state_key}_next", disabled=page >= total_pages - 1, use_container_width=True):
            st.session_state[state_key] = page + 1
            st.rerun()
    return paginate(items, page, per_page)


def records_table(rows: list[dict[str, Any]], *, empty: str = "No records found.") -> None:
    if not rows:
        st.info(empty)
        return
    st.dataframe(rows, use_container_width=True, hide_index=True)
