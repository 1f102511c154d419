"""
Admin dashboard views.
"""

from __future__ import annotations

from datetime import date

import streamlit as st

from smart_leave.config import HOLIDAY_SHEET_URL, POLICY_FIELDS, get_settings
from smart_leave.exceptions import SmartLeaveError
from smart_leave.export import (
    LEAVE_BALANCES_FILENAME,
    REGISTRATION_HISTORY_FILENAME,
    USERS_FILENAME,
    format_registered_on,
    leave_balances_csv,
    registration_history_csv,
    users_csv,
)
from smart_leave.leave import (
    available_promotions,
    build_role,
    enabled_role_names,
    format_holiday_date,
    group_holidays,
    humanize_role,
    is_actionable,
    policy_role_options,
    role_options,
)
from smart_leave.listing import (
    USER_SORT_KEYS,
    SortState,
    search_records,
    search_users,
    sort_records,
    sort_users,
)
from smart_leave.logging_config import get_logger
from smart_leave.models import Admin, HolidayEntry, LeavePolicyEntry
from smart_leave.reports import build_report_charts
from smart_leave.session import get_actor_id, get_admin_api, get_email
from smart_leave.ui.components import (
    ask_confirmation,
    confirm,
    csv_download,
    load_or_empty,
    paged,
    records_table,
    show_error,
    status_badge,
    succeed,
)
from smart_leave.validation import validate_holiday_form, validate_policy_form, validate_role_form

logger = get_logger(__name__)


# =============================================================================
# Profile
# =============================================================================


def render_profile() -> None:
    st.title("Admin Profile")
    api = get_admin_api()
    admin_id = get_actor_id()
    try:
        admin = api.get_admin_details(admin_id)
    except SmartLeaveError as exc:
        show_error(exc, "Failed to load profile")
        return

    st.subheader(f"{admin.initial} · {admin.full_name}")
    st.caption(get_email() or admin.email)
    st.write(f"**Username:** {admin.user_name}")
    st.write(f"**Phone:** {admin.phone_number}")
    st.write(f"**Gender:** {admin.gender}")
    st.write(f"**Address:** {admin.address}")

    with st.expander("Edit Profile"):
        with st.form("admin_profile_edit"):
            edited = {
                "userName": st.text_input("Username", value=admin.user_name),
                "email": st.text_input("Email", value=admin.email),
                "firstName": st.text_input("First Name", value=admin.first_name),
                "lastName": st.text_input("Last Name", value=admin.last_name),
                "phoneNumber": st.text_input("Phone Number", value=admin.phone_number),
                "gender": st.text_input("Gender", value=admin.gender),
                "address": st.text_input("Address", value=admin.address),
            }
            submitted = st.form_submit_button("Save", type="primary")
    if not submitted:
        return
    updated = admin.model_copy(update=Admin.model_validate(edited).model_dump(exclude={"user_id"}))
    try:
        api.update_admin_details(admin_id, updated)
    except SmartLeaveError as exc:
        show_error(exc, "Failed to update profile")
        return
    succeed("Profile Updated. Your changes have been saved successfully.")


# =============================================================================
# Calendar
# =============================================================================


def render_calendar() -> None:
    st.title("Holiday Calendar")
    api = get_admin_api()
    admin_id = get_actor_id()
    st.markdown(f"[Open the holiday sheet]({HOLIDAY_SHEET_URL})")

    with st.form("add_holiday"):
        form = {
            "countryName": st.text_input("Country"),
            "calendarYear": st.text_input("Calendar Year", value=str(date.today().year)),
            "holidayName": st.text_input("Holiday Name"),
        }
        holiday_date = st.date_input("Holiday Date", value=None)
        form["holidayDate"] = holiday_date.isoformat() if holiday_date else ""
        submitted = st.form_submit_button("Add Holiday", type="primary")

    if submitted:
        is_valid, issues = validate_holiday_form(form)
        if not is_valid:
            for issue in issues:
                st.warning(issue)
        else:
            try:
                api.add_country_calendar(admin_id, HolidayEntry.model_validate(form))
            except SmartLeaveError as exc:
                show_error(exc, "Failed to add holiday")
            else:
                succeed("Holiday added successfully")

    if st.button("Update Calendar"):
        try:
            api.update_calendar(admin_id)
        except SmartLeaveError as exc:
            show_error(exc, "Failed to update calendar")
        else:
            succeed("Calendar updated successfully")

    st.divider()
    holidays = load_or_empty(api.get_all_holidays, admin_id)
    groups = group_holidays(holidays)
    if not groups:
        st.info("No holidays found.")
    for title, entries in groups.items():
        st.subheader(title)
        rows = []
        for holiday in entries:
            day_text, weekday = format_holiday_date(holiday.holiday_date)
            rows.append({"Holiday": holiday.holiday_name, "Date": day_text, "Day": holiday.holiday_day or weekday})
        records_table(rows)


# =============================================================================
# Roles and policies
# =============================================================================


def render_roles() -> None:
    st.title("Roles")
    api = get_admin_api()
    admin_id = get_actor_id()
    roles = load_or_empty(api.get_all_roles, admin_id)
    options = role_options(roles)
    available = enabled_role_names(options)

    with st.form("add_role"):
        role_name = st.selectbox(
            "Role",
            ["", *available],
            format_func=lambda name: humanize_role(name) or "Select a role",
        )
        description = st.text_input("Description (optional)")
        submitted = st.form_submit_button("Add Role", type="primary", disabled=not available)

    if submitted:
        is_valid, issues = validate_role_form(role_name)
        if not is_valid:
            for issue in issues:
                st.warning(issue)
        else:
            try:
                api.add_new_role(admin_id, build_role(role_name, description))
            except SmartLeaveError as exc:
                show_error(exc, "Failed to add role")
            else:
                succeed("Role added successfully")

    st.divider()
    records_table(
        [{"Role": role.role_name, "Description": role.description} for role in roles],
        empty="No roles added yet.",
    )


def render_policies() -> None:
    st.title("Leave Policies")
    api = get_admin_api()
    admin_id = get_actor_id()
    try:
        roles = api.get_all_roles(admin_id)
        policies = api.get_all_leave_policies(admin_id)
    except SmartLeaveError as exc:
        show_error(exc, "Failed to load roles or policies")
        return

    available = enabled_role_names(policy_role_options(roles, policies))
    with st.form("add_policy"):
        form = {"role": st.selectbox("Role", ["", *available])}
        columns = st.columns(len(POLICY_FIELDS))
        for column, field in zip(columns, POLICY_FIELDS):
            form[field] = column.number_input(field, min_value=0, step=1, value=0)
        submitted = st.form_submit_button("Add Policy", type="primary")

    if submitted:
        is_valid, issues = validate_policy_form(form, POLICY_FIELDS)
        if not is_valid:
            for issue in issues:
                st.warning(issue)
        else:
            try:
                api.add_leave_policies(admin_id, LeavePolicyEntry.model_validate(form))
            except SmartLeaveError as exc:
                show_error(exc, "Failed to add policy")
            else:
                succeed("Leave policy added")

    st.divider()
    records_table(
        [
            {
                "Role": p.role,
                "Sick": p.sick_leave,
                "Earned": p.earned_leave,
                "Casual": p.casual_leave,
                "Paternity": p.paternity_leave,
                "Maternity": p.maternity_leave,
                "Total": p.total_leaves,
            }
            for p in policies
        ],
        empty="No leave policies yet.",
    )


# =============================================================================
# Users
# =============================================================================


def render_promotion() -> None:
    st.title("User Promotion")
    api = get_admin_api()
    admin_id = get_actor_id()
    try:
        users = api.get_all_users()
    except SmartLeaveError as exc:
        show_error(exc, "Failed to fetch users")
        return

    promotable = [user for user in users if available_promotions(user.role_name)]
    if not promotable:
        st.info("No users can be promoted.")
        return

    user = st.selectbox(
        "User",
        promotable,
        format_func=lambda u: f"{u.full_name} ({humanize_role(u.role_name)})",
    )
    new_role = st.selectbox("New Role", ["", *available_promotions(user.role_name)], format_func=humanize_role)
    if st.button("Promote", type="primary"):
        if not new_role:
            st.error("Please select a new role")
            return
        try:
            api.promote_user(admin_id, user.user_id, new_role)
        except SmartLeaveError as exc:
            show_error(exc, "Promotion failed")
            return
        succeed("User promoted successfully")


def render_users() -> None:
    st.title("Users")
    api = get_admin_api()
    admin_id = get_actor_id()
    users = load_or_empty(api.get_all_users)

    search_col, sort_col = st.columns([2, 1])
    term = search_col.text_input("Search by name or email")
    sort_key = sort_col.selectbox("Sort by", list(USER_SORT_KEYS))
    listed = sort_users(search_users(users, term), sort_key)

    csv_download("Export CSV", users_csv(listed), USERS_FILENAME)
    if not listed:
        st.info("No users found.")
        return

    for user in paged(listed, "users", get_settings().users_page_size):
        name_col, email_col, role_col, action_col = st.columns([2, 3, 2, 1])
        name_col.write(f"{user.full_name}  \n{user.country_name} · {user.gender}")
        email_col.write(user.email)
        role_col.write(humanize_role(user.role_name))
        key = f"delete_user_{user.user_id}"
        if action_col.button("Delete", key=key):
            ask_confirmation(key)
        decision = confirm(key, f"Delete {user.full_name}? You won't be able to revert this!")
        if decision:
            try:
                api.delete_user(admin_id, user.user_id)
            except SmartLeaveError as exc:
                show_error(exc, "Failed to delete user.")
            else:
                succeed("User has been deleted.")


# =============================================================================
# Leave requests and reports
# =============================================================================


def render_leave_requests() -> None:
    st.title("Leave Requests")
    api = get_admin_api()
    admin_id = get_actor_id()
    requests = load_or_empty(api.get_all_leave_requests, admin_id)
    if not requests:
        st.info("No leave requests found.")
        return

    for req in requests:
        info, status_col, approve, reject = st.columns([4, 1, 1, 1])
        info.write(
            f"**{req.employee_name}** ({humanize_role(req.employee_role)})  \n"
            f"{req.leave_type} · {req.start_date} to {req.end_date} · {req.duration} day(s)  \n"
            f"{req.comments or ''}"
        )
        status_col.markdown(status_badge(req.leave_status))
        if not is_actionable(req):
            continue
        try:
            if approve.button("Approve", key=f"approve_{req.leave_id}"):
                api.approve_leave(admin_id, req.leave_id)
                logger.info("Leave approved", extra={"leave_id": req.leave_id})
                succeed("Leave approved")
            if reject.button("Reject", key=f"reject_{req.leave_id}"):
                api.reject_leave(admin_id, req.leave_id)
                logger.info("Leave rejected", extra={"leave_id": req.leave_id})
                succeed("Leave rejected")
        except SmartLeaveError as exc:
            show_error(exc, "Action failed")


def render_reports() -> None:
    st.title("Reports")
    api = get_admin_api()
    try:
        requests = api.get_all_leave_requests(get_actor_id())
    except SmartLeaveError as exc:
        show_error(exc, "Failed to fetch data")
        return

    for chart in build_report_charts(requests):
        st.subheader(chart.title)
        if chart.is_empty:
            st.info("No data available.")
            continue
        if chart.series_label:
            st.caption(chart.series_label)
        st.dataframe(chart.data, use_container_width=True, hide_index=True)


# =============================================================================
# Registration history and balances
# =============================================================================

_HISTORY_COLUMNS = {
    "registration_id": "Reg. ID",
    "first_name": "First Name",
    "last_name": "Last Name",
    "user_id": "User ID",
    "email": "Email",
    "role": "Role",
    "register_date": "Registered On",
}


def render_registration_history() -> None:
    st.title("Registration History")
    api = get_admin_api()
    history = load_or_empty(api.registration_history)

    sort_state = st.session_state.setdefault("_history_sort", SortState("registration_id"))
    term = st.text_input("Search")
    header_cols = st.columns(len(_HISTORY_COLUMNS))
    for column, (field, label) in zip(header_cols, _HISTORY_COLUMNS.items()):
        arrow = ""
        if sort_state.field == field:
            arrow = " ↑" if sort_state.order == "asc" else " ↓"
        if column.button(f"{label}{arrow}", key=f"sort_{field}"):
            sort_state.toggle(field)
            st.rerun()

    listed = sort_records(search_records(history, term), sort_state.field, sort_state.order)
    csv_download("Export CSV", registration_history_csv(listed), REGISTRATION_HISTORY_FILENAME)

    page = paged(listed, "history", get_settings().history_page_size)
    records_table(
        [
            {
                label: format_registered_on(entry.register_date) if field == "register_date" else getattr(entry, field)
                for field, label in _HISTORY_COLUMNS.items()
            }
            for entry in page
        ],
        empty="No registrations found.",
    )


def render_all_balances() -> None:
    st.title("All Users' Leave Balances")
    api = get_admin_api()
    try:
        balances = api.get_all_users_leave_balances(get_actor_id())
    except SmartLeaveError as exc:
        show_error(exc, "Failed to fetch leave balances")
        return

    page = paged(balances, "balances", get_settings().balances_page_size)
    csv_download("Export CSV", leave_balances_csv(page), LEAVE_BALANCES_FILENAME)
    records_table(
        [
            {
                "Name": b.full_name,
                "Sick Leave": b.sick_leave,
                "Casual Leave": b.casual_leave,
                "Loss of Pay": b.loss_of_pay,
                "Earned Leave": b.earned_leave,
                "Paternity Leave": b.paternity_leave,
                "Maternity Leave": b.maternity_leave,
                "Total Leaves": b.total_leaves,
            }
            for b in page
        ],
        empty="No leave balances found.",
    )


ADMIN_VIEWS = {
    "Profile": render_profile,
    "Holiday Calendar": render_calendar,
    "Roles": render_roles,
    "Leave Policies": render_policies,
    "User Promotion": render_promotion,
    "Users": render_users,
    "Leave Requests": render_leave_requests,
    "Reports": render_reports,
    "Registration History": render_registration_history,
    "All Users' Leave Balances": render_all_balances,
}
