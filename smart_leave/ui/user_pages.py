"""
Employee dashboard views.
"""

from __future__ import annotations

import streamlit as st

from smart_leave.config import GENDERS, LEAVE_STATUSES
from smart_leave.exceptions import InvalidDateRangeError, SmartLeaveError, get_user_message
from smart_leave.leave import (
    LeaveApplication,
    available_balance,
    balance_key,
    can_approve,
    format_holiday_date,
    group_holidays,
    humanize_role,
    is_actionable,
    is_cancellable,
    leave_type_options,
)
from smart_leave.listing import (
    ALL,
    filter_requests,
    unique_leave_types,
    unique_leave_types_titled,
)
from smart_leave.logging_config import get_logger
from smart_leave.models import PasswordChange
from smart_leave.session import flash, get_actor_id, get_role, get_user_api, go_to, logout
from smart_leave.ui.auth_pages import USER_LOGIN_VIEW
from smart_leave.ui.components import (
    ask_confirmation,
    confirm,
    load_or_empty,
    records_table,
    show_error,
    status_badge,
    succeed,
)
from smart_leave.validation import validate_password_change

logger = get_logger(__name__)


# =============================================================================
# Profile
# =============================================================================


def render_profile() -> None:
    st.title("My Profile")
    api = get_user_api()
    user_id = get_actor_id()
    try:
        user = api.get_user_details(user_id)
    except SmartLeaveError as exc:
        show_error(exc, "Failed to load profile")
        return

    st.subheader(f"{user.initial} · {user.full_name}")
    st.caption(f"{humanize_role(user.role_name)} · {user.email}")
    st.write(f"**Username:** {user.user_name}")
    st.write(f"**Phone:** {user.phone_number}")
    st.write(f"**Gender:** {user.gender}")
    st.write(f"**Address:** {user.address}")
    st.write(f"**Location:** {user.city_name}, {user.country_name}")

    with st.expander("Edit Profile"):
        _render_profile_edit(api, user)
    with st.expander("Change Password"):
        _render_password_change(api, user_id)
    with st.expander("Delete Account"):
        _render_delete_account(api, user_id)


def _render_profile_edit(api, user) -> None:
    try:
        countries = api.get_all_countries()
    except SmartLeaveError as exc:
        exc.log()
        countries = []
    if user.country_name and user.country_name not in countries:
        countries = [user.country_name, *countries]

    # Outside the form so a new country reloads its cities
    country = st.selectbox(
        "Country",
        countries or [""],
        index=countries.index(user.country_name) if user.country_name in countries else 0,
        key="_profile_country",
    )
    try:
        cities = api.get_all_cities(country) if country else []
    except SmartLeaveError as exc:
        exc.log()
        cities = []
    if country == user.country_name and user.city_name and user.city_name not in cities:
        cities = [user.city_name, *cities]

    with st.form("user_profile_edit"):
        edited = {
            "firstName": st.text_input("First Name", value=user.first_name),
            "lastName": st.text_input("Last Name", value=user.last_name),
            "userName": st.text_input("Username", value=user.user_name),
            "email": st.text_input("Email", value=user.email),
            "phoneNumber": st.text_input("Phone Number", value=user.phone_number),
            "address": st.text_input("Address", value=user.address),
            "gender": st.selectbox(
                "Gender",
                GENDERS,
                index=GENDERS.index(user.gender) if user.gender in GENDERS else 0,
            ),
            "countryName": country,
            "cityName": st.selectbox(
                "City",
                cities or [""],
                index=cities.index(user.city_name) if user.city_name in cities else 0,
            ),
        }
        submitted = st.form_submit_button("Save", type="primary")
    if not submitted:
        return
    updated = user.model_copy(update=type(user).model_validate(edited).model_dump(exclude={"user_id", "role", "user_role"}))
    try:
        api.update_user_details(user.user_id or get_actor_id(), updated)
    except SmartLeaveError as exc:
        show_error(exc, "Failed to update profile")
        return
    succeed("Profile updated successfully")


def _render_password_change(api, user_id) -> None:
    state = st.session_state.setdefault("_password_change", {"otp_sent": False, "verified": False})

    email = st.text_input("Email", key="_password_change_email")
    if st.button("Send OTP", key="_password_change_send"):
        if not email:
            st.error("Please enter your email")
            return
        try:
            api.generate_otp_for_password(email)
        except SmartLeaveError as exc:
            exc.log()
            st.error("Failed to generate OTP")
            return
        state["otp_sent"] = True
        st.success("OTP Sent. Check your email for the OTP")

    if not state["otp_sent"]:
        return
    otp = st.text_input("OTP", key="_password_change_otp")
    if st.button("Verify OTP", key="_password_change_verify"):
        if not otp:
            st.error("Please enter the OTP")
            return
        try:
            api.verify_otp_for_password(otp)
        except SmartLeaveError as exc:
            exc.log()
            st.error("Invalid OTP")
            return
        state["verified"] = True
        st.success("OTP verified successfully")

    if not state["verified"]:
        return
    old_password = st.text_input("Old Password", type="password", key="_password_change_old")
    new_password = st.text_input("New Password", type="password", key="_password_change_new")
    if st.button("Update Password", key="_password_change_update", type="primary"):
        is_valid, issues = validate_password_change(old_password, new_password)
        if not is_valid:
            st.error(issues[0])
            return
        try:
            api.update_password(user_id, PasswordChange(old_password=old_password, new_password=new_password))
        except SmartLeaveError as exc:
            show_error(exc, "Failed to update password")
            return
        st.session_state["_password_change"] = {"otp_sent": False, "verified": False}
        st.success("Password updated successfully")


def _render_delete_account(api, user_id) -> None:
    if st.button("Delete my account", key="delete_account", type="primary"):
        ask_confirmation("delete_account")
    decision = confirm("delete_account", "Are you sure? This will permanently delete your account.")
    if not decision:
        return
    try:
        api.delete_account(user_id)
    except SmartLeaveError as exc:
        show_error(exc, "Failed to delete account")
        return
    logout()
    flash("success", "Your account has been deleted.")
    go_to(USER_LOGIN_VIEW)
    st.rerun()


# =============================================================================
# Balance and holidays
# =============================================================================

_BALANCE_LABELS = {
    "SICK": "Sick Leave",
    "CASUAL": "Casual Leave",
    "EARNED": "Earned Leave",
    "PATERNITY": "Paternity Leave",
    "MATERNITY": "Maternity Leave",
}


def render_leave_balance() -> None:
    st.title("Leave Balance")
    try:
        balance = get_user_api().get_user_leave_balance(get_actor_id())
    except SmartLeaveError as exc:
        show_error(exc, "Failed to fetch leave balance")
        return
    if balance is None:
        st.info("No leave balance available.")
        return

    columns = st.columns(len(_BALANCE_LABELS))
    shown = balance.model_dump(by_alias=True)
    for column, (leave_type, label) in zip(columns, _BALANCE_LABELS.items()):
        value = shown.get(balance_key(leave_type))
        column.metric(label, "-" if value is None else f"{value:g}")
    lop, total = st.columns(2)
    lop.metric("Loss of Pay", balance.loss_of_pay if balance.loss_of_pay is not None else "-")
    total.metric("Total Leaves", balance.total_leaves if balance.total_leaves is not None else "-")


def render_holidays() -> None:
    st.title("Holidays")
    holidays = load_or_empty(get_user_api().get_user_holidays, get_actor_id())
    groups = group_holidays(holidays)
    if not groups:
        st.info("No holidays found.")
        return
    for title, entries in groups.items():
        st.subheader(title)
        rows = []
        for holiday in entries:
            day_text, weekday = format_holiday_date(holiday.holiday_date)
            rows.append({"Holiday": holiday.holiday_name, "Date": day_text, "Day": weekday})
        records_table(rows)


# =============================================================================
# Leave requests
# =============================================================================


def _request_line(req) -> str:
    return (
        f"**{req.leave_type}** · {req.start_date} to {req.end_date} · {req.duration} day(s)  \n"
        f"{req.comments or ''}"
    )


def render_leave_requests() -> None:
    st.title("My Leave Requests")
    api = get_user_api()
    user_id = get_actor_id()
    requests = load_or_empty(api.get_user_leave_requests, user_id)

    status_col, type_col = st.columns(2)
    status = status_col.selectbox("Status", [ALL, *LEAVE_STATUSES])
    leave_type = type_col.selectbox("Leave Type", unique_leave_types(requests))
    listed = filter_requests(requests, status, leave_type)
    if not listed:
        st.info("No leave requests found.")
        return

    for req in listed:
        info, status_cell, action = st.columns([4, 1, 1])
        info.markdown(_request_line(req))
        status_cell.markdown(status_badge(req.leave_status))
        if not is_cancellable(req):
            continue
        key = f"cancel_leave_{req.leave_id}"
        if action.button("Cancel", key=key):
            ask_confirmation(key)
        decision = confirm(key, "Cancel Leave Request? This action cannot be undone.")
        if decision:
            try:
                api.cancel_leave(user_id, req.leave_id)
            except SmartLeaveError as exc:
                show_error(exc, "Failed to cancel leave request.")
            else:
                succeed("Your leave request has been cancelled.")


def render_apply_leave() -> None:
    st.title("Apply Leave")
    api = get_user_api()
    user_id = get_actor_id()
    try:
        balance = api.get_user_leave_balance(user_id)
    except SmartLeaveError as exc:
        exc.log()
        balance = None

    application = LeaveApplication(
        leave_type=st.selectbox("Leave Type", ["", *leave_type_options()], key="_apply_type"),
    )
    start_col, end_col = st.columns(2)
    start = start_col.date_input("Start Date", value=None, key="_apply_start")
    end = end_col.date_input("End Date", value=None, key="_apply_end")
    application.start_date = start.isoformat() if start else ""
    application.end_date = end.isoformat() if end else ""
    application.comments = st.text_area("Comments", key="_apply_comments")

    if application.has_dates:
        _update_duration(api, user_id, application)
    else:
        application.clear_dates()
    application.check_balance(balance)

    if application.date_error:
        st.error(application.date_error)
    elif application.duration is not None:
        st.info(f"Duration: {application.duration:g} day(s)")
    if application.balance_error:
        available = available_balance(balance, application.leave_type)
        st.error(f"Requested duration exceeds your available {application.leave_type} balance ({available:g}).")

    if st.button("Apply", type="primary", disabled=not application.is_valid()):
        try:
            application.raise_for_balance(balance)
            api.apply_leave(user_id, application.to_payload())
        except SmartLeaveError as exc:
            show_error(exc, "Failed to apply leave")
            return
        for key in ("_apply_type", "_apply_start", "_apply_end", "_apply_comments", "_apply_duration"):
            st.session_state.pop(key, None)
        logger.info("Leave applied", extra={"leave_type": application.leave_type, "duration": application.duration})
        succeed("Leave applied successfully")


def _update_duration(api, user_id, application: LeaveApplication) -> None:
    """Ask the backend for the duration once per date pair."""
    dates = (application.start_date, application.end_date)
    cached = st.session_state.get("_apply_duration")
    if cached and cached[0] == dates:
        _, duration, error = cached
    else:
        try:
            duration, error = api.calculate_leave_duration(user_id, *dates), ""
        except SmartLeaveError as exc:
            exc.log()
            duration = None
            error = InvalidDateRangeError(get_user_message(exc, "")).message
        st.session_state["_apply_duration"] = (dates, duration, error)
    if error:
        application.set_date_error(error)
    else:
        application.set_duration(duration)


# =============================================================================
# Approvals
# =============================================================================


def render_approvals() -> None:
    st.title("User Approvals")
    if not can_approve(get_role()):
        st.warning("Only managers can review leave requests.")
        return
    api = get_user_api()
    user_id = get_actor_id()
    try:
        requests = api.get_all_user_leave_requests(user_id)
    except SmartLeaveError as exc:
        show_error(exc, "Failed to fetch leave requests")
        return

    status_col, type_col = st.columns(2)
    status = status_col.selectbox("Status", [ALL, *LEAVE_STATUSES], key="_approval_status")
    leave_type = type_col.selectbox("Leave Type", unique_leave_types_titled(requests), key="_approval_type")
    listed = filter_requests(requests, status, leave_type, case_insensitive=True)
    if not listed:
        st.info("No leave requests found.")
        return

    for req in listed:
        info, status_cell, approve, reject = st.columns([4, 1, 1, 1])
        info.markdown(f"{req.employee_name} ({humanize_role(req.employee_role)})  \n" + _request_line(req))
        status_cell.markdown(status_badge(req.leave_status))
        if not is_actionable(req):
            continue
        try:
            if approve.button("Approve", key=f"approve_{req.leave_id}"):
                api.approve_user_leave(user_id, req.requester_id)
                succeed("Leave request approved")
            if reject.button("Reject", key=f"reject_{req.leave_id}"):
                api.reject_user_leave(user_id, req.requester_id)
                succeed("Leave request rejected")
        except SmartLeaveError as exc:
            show_error(exc, "Action failed")


def user_views(role: str) -> dict:
    views = {
        "Profile": render_profile,
        "Leave Balance": render_leave_balance,
        "Leave Requests": render_leave_requests,
        "Holidays": render_holidays,
        "Apply Leave": render_apply_leave,
    }
    if can_approve(role):
        views["User Approvals"] = render_approvals
    return views
