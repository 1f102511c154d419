"""
Signed-out views: landing, logins (with account recovery) and registration.
"""

from __future__ import annotations

import streamlit as st

from smart_leave.api import AdminApi, ApiClient, UserApi
from smart_leave.config import COUNTRY_CODES, GENDERS
from smart_leave.exceptions import SmartLeaveError
from smart_leave.logging_config import get_logger
from smart_leave.models import LoginDetails
from smart_leave.session import ADMIN, USER, flash, go_to, start_session
from smart_leave.ui.components import show_error
from smart_leave.validation import (
    compose_admin_phone,
    country_code_label,
    extract_user_id,
    is_valid_otp,
    is_valid_recovery_email,
    is_valid_reset_password,
    normalize_gender,
    validate_admin_registration,
    validate_login,
    validate_user_registration,
)

logger = get_logger(__name__)

ADMIN_LOGIN_VIEW = "Admin Login"
ADMIN_REGISTRATION_VIEW = "Admin Registration"
USER_LOGIN_VIEW = "Employee Login"
USER_REGISTRATION_VIEW = "Employee Registration"


def _public_admin_api() -> AdminApi:
    return AdminApi(ApiClient())


def _public_user_api() -> UserApi:
    return UserApi(ApiClient())


def render_landing_page() -> None:
    st.title("Smart Leave Management")
    st.caption("Plan, apply for and approve leave in one place.")

    admin_col, user_col = st.columns(2)
    with admin_col:
        st.subheader("Administrators")
        st.write("Configure roles, leave policies and holiday calendars, and manage employees.")
        st.button("Admin Login", on_click=go_to, args=(ADMIN_LOGIN_VIEW,), use_container_width=True)
        st.button("Register as Admin", on_click=go_to, args=(ADMIN_REGISTRATION_VIEW,), use_container_width=True)
    with user_col:
        st.subheader("Employees")
        st.write("Check balances, apply for leave and follow your requests.")
        st.button("Employee Login", on_click=go_to, args=(USER_LOGIN_VIEW,), use_container_width=True)
        st.button("Register as Employee", on_click=go_to, args=(USER_REGISTRATION_VIEW,), use_container_width=True)


def _login_form(key: str) -> dict[str, str] | None:
    with st.form(key):
        user_name = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login", type="primary")
    if not submitted:
        return None
    form = {"userName": user_name, "password": password}
    is_valid, issues = validate_login(form)
    if not is_valid:
        for issue in issues:
            st.warning(issue)
        return None
    return form


def render_admin_login() -> None:
    st.title("Admin Login")
    form = _login_form("admin_login")
    if form is None:
        return
    try:
        result = _public_admin_api().login_admin(LoginDetails.model_validate(form))
    except SmartLeaveError as exc:
        show_error(exc, "Login failed. Please try again.")
        return
    start_session(ADMIN, result, user_name=form["userName"])
    flash("success", "Login Successful. Welcome to the Admin Dashboard!")
    go_to("Profile")
    st.rerun()


def render_user_login() -> None:
    st.title("Employee Login")
    form = _login_form("user_login")
    if form is not None:
        try:
            result = _public_user_api().login_user(LoginDetails.model_validate(form))
        except SmartLeaveError as exc:
            show_error(exc, "Login failed. Please try again.")
        else:
            start_session(USER, result, user_name=form["userName"])
            flash("success", "Login Successful")
            go_to("Profile")
            st.rerun()

    st.divider()
    forgot_user, forgot_pass = st.columns(2)
    if forgot_user.button("Forgot Username?"):
        _start_recovery("username")
    if forgot_pass.button("Forgot Password?"):
        _start_recovery("password")
    _render_recovery()


# =============================================================================
# Account recovery
# =============================================================================


def _start_recovery(kind: str) -> None:
    st.session_state["_recovery"] = {"kind": kind, "otp_sent": False, "user_id": None}


def _render_recovery() -> None:
    recovery = st.session_state.get("_recovery")
    if not recovery:
        return
    api = _public_user_api()

    if recovery.get("user_id") is not None:
        _render_new_password(api, recovery)
        return

    st.subheader(f"Recover your {recovery['kind']}")
    email = st.text_input("Registered email", key="_recovery_email")
    if st.button("Send OTP", key="_recovery_send"):
        if not is_valid_recovery_email(email):
            st.warning("Invalid Email. Please enter a valid email address.")
            return
        try:
            if recovery["kind"] == "username":
                api.generate_otp_for_username(email)
            else:
                api.generate_otp_for_password(email)
        except SmartLeaveError as exc:
            exc.log()
            st.error("Failed to send OTP. Please try again.")
            return
        recovery["otp_sent"] = True

    if not recovery["otp_sent"]:
        return
    otp = st.text_input("OTP", key="_recovery_otp")
    if st.button("Verify OTP", key="_recovery_verify"):
        if not is_valid_otp(otp):
            st.warning("Invalid OTP. Please enter a valid OTP.")
            return
        try:
            if recovery["kind"] == "username":
                reply = api.verify_otp_for_username(otp)
                st.info(f"Username Retrieved: {reply}")
                st.session_state["_recovery"] = None
                return
            user_id = extract_user_id(api.verify_otp_for_password(otp))
        except SmartLeaveError as exc:
            exc.log()
            st.error("Invalid OTP. Please try again.")
            return
        if user_id is None:
            logger.warning("Password OTP reply carried no user id")
            st.error("Invalid OTP. Please try again.")
            return
        recovery["user_id"] = user_id
        st.rerun()


def _render_new_password(api: UserApi, recovery: dict) -> None:
    st.info("OTP Verified. Please enter your new password.")
    new_password = st.text_input("New password", type="password", key="_recovery_new_password")
    if not st.button("Update Password", key="_recovery_update"):
        return
    if not is_valid_reset_password(new_password):
        st.warning("Invalid Password. Password must be at least 6 characters.")
        return
    try:
        api.update_new_password(recovery["user_id"], new_password)
    except SmartLeaveError as exc:
        exc.log()
        st.error("Failed to update password.")
        return
    st.session_state["_recovery"] = None
    st.success("Your password has been updated.")


# =============================================================================
# Registration
# =============================================================================


def render_admin_registration() -> None:
    st.title("Admin Registration")
    codes = list(COUNTRY_CODES)
    with st.form("admin_registration"):
        first, last = st.columns(2)
        form = {
            "firstName": first.text_input("First Name"),
            "lastName": last.text_input("Last Name"),
            "userName": st.text_input("Username"),
            "email": st.text_input("Email"),
        }
        code_col, number_col = st.columns([1, 2])
        country_code = code_col.selectbox("Code", codes, format_func=country_code_label)
        local_number = number_col.text_input("Phone Number", max_chars=12)
        form["address"] = st.text_input("Address")
        form["gender"] = normalize_gender(st.selectbox("Gender", ["", *GENDERS]))
        form["password"] = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Register", type="primary")

    if not submitted:
        return
    is_valid, issues = validate_admin_registration(form, local_number)
    if not is_valid:
        for issue in issues:
            st.warning(issue)
        return
    form["phoneNumber"] = compose_admin_phone(country_code, local_number)
    try:
        reply = _public_admin_api().register_admin(form)
    except SmartLeaveError as exc:
        show_error(exc, "Registration failed. Please try again.")
        return
    flash("success", f"Registration Successful. {reply or ''}".strip())
    go_to(ADMIN_LOGIN_VIEW)
    st.rerun()


def render_user_registration() -> None:
    st.title("Employee Registration")
    api = _public_user_api()
    try:
        countries = api.get_all_countries()
    except SmartLeaveError as exc:
        exc.log()
        countries = []

    with st.form("user_registration"):
        first, last = st.columns(2)
        form = {
            "firstName": first.text_input("First Name"),
            "lastName": last.text_input("Last Name"),
            "userName": st.text_input("Username"),
            "email": st.text_input("Email"),
            "phoneNumber": st.text_input("Phone Number", max_chars=10),
            "address": st.text_input("Address"),
            "gender": normalize_gender(st.selectbox("Gender", ["", *GENDERS])),
            "countryName": st.selectbox("Country", ["", *countries]),
            "password": st.text_input("Password", type="password"),
        }
        submitted = st.form_submit_button("Register", type="primary")

    if not submitted:
        return
    is_valid, issues = validate_user_registration(form)
    if not is_valid:
        for issue in issues:
            st.warning(issue)
        return
    try:
        reply = api.register_user(form)
    except SmartLeaveError as exc:
        show_error(exc, "Registration failed. Please try again.")
        return
    flash("success", f"Registration Successful. {reply or ''}".strip())
    go_to(USER_LOGIN_VIEW)
    st.rerun()
