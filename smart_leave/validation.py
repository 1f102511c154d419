"""
Form validation rules for Smart Leave.

Provides:
- regex checks for username, password, email and phone
- phone formatting for the admin registration form
- validate_*(): whole-form checks returning (is_valid, issues)
- extract_user_id(): pull the user id out of the OTP verification reply
"""

from __future__ import annotations

import re
from typing import Any

from smart_leave.config import COUNTRY_CODES

# At least one upper, one lower, one digit and one symbol; 8+ characters
PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Z])(?=.*[a-z])(?=.*\d)(?=.*[\W_]).{8,}$")

# At least one upper, one digit and one symbol; 4+ characters
USERNAME_PATTERN = re.compile(r"^(?=.*[A-Z])(?=.*\d)(?=.*[\W_]).{4,}$")

# Admin registration is stricter about the address shape than user registration
ADMIN_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9-]+\.[a-zA-Z]{2,}$")
USER_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Loose check used by the forgot-username/password dialogs
RECOVERY_EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

PHONE_PATTERN = re.compile(r"^\d{10}$")

_USER_ID_IN_MESSAGE = re.compile(r"UserId\s*:\s*(\d+)")
_NON_DIGITS = re.compile(r"\D")

MIN_OTP_LENGTH = 4
MIN_RESET_PASSWORD_LENGTH = 6


def is_valid_password(value: str) -> bool:
    return bool(PASSWORD_PATTERN.fullmatch(value or ""))


def is_valid_username(value: str) -> bool:
    return bool(USERNAME_PATTERN.fullmatch(value or ""))


def is_valid_admin_email(value: str) -> bool:
    return bool(ADMIN_EMAIL_PATTERN.fullmatch(value or ""))


def is_valid_user_email(value: str) -> bool:
    return bool(USER_EMAIL_PATTERN.fullmatch(value or ""))


def is_valid_recovery_email(value: str) -> bool:
    return bool(value) and bool(RECOVERY_EMAIL_PATTERN.search(value))


def is_valid_phone(value: str) -> bool:
    return bool(PHONE_PATTERN.fullmatch(value or ""))


def is_valid_otp(value: str) -> bool:
    return bool(value) and len(value) >= MIN_OTP_LENGTH


def is_valid_reset_password(value: str) -> bool:
    return bool(value) and len(value) >= MIN_RESET_PASSWORD_LENGTH


def digits_only(value: str) -> str:
    return _NON_DIGITS.sub("", value or "")


def normalize_gender(value: str) -> str:
    return (value or "").upper()


def format_phone_display(digits: str) -> str:
    """
    Format up to ten digits as ``XXX-XXX-XXXX``.

    Anything that is not exactly ten digits after cleaning is returned as
    the cleaned digits, unformatted.
    """
    raw = digits_only(digits)[:10]
    match = re.match(r"^(\d{3})(\d{3})(\d{4})$", raw)
    if not match:
        return raw
    return f"{match.group(1)}-{match.group(2)}-{match.group(3)}"


def compose_admin_phone(country_code: str, local_number: str) -> str:
    """Phone number as sent on admin registration, e.g. ``+91 - 987-654-3210``."""
    return f"{country_code} - {format_phone_display(local_number)}"


def _missing(form: dict[str, Any], field: str) -> bool:
    return not str(form.get(field) or "").strip()


def validate_admin_registration(form: dict[str, Any], local_number: str) -> tuple[bool, list[str]]:
    """
    Validate the admin registration form.

    Args:
        form: firstName, lastName, userName, email, password, address, gender.
        local_number: The ten-digit number typed beside the country code;
            separators are ignored.

    Returns:
        Tuple of (is_valid, list_of_issues).
    """
    issues: list[str] = []
    for field in ("firstName", "lastName", "address", "gender"):
        if _missing(form, field):
            issues.append(f"Missing required field: {field}")
    if not is_valid_admin_email(form.get("email", "")):
        issues.append("Enter a valid email address")
    if not is_valid_phone(digits_only(local_number)):
        issues.append("Phone number must be exactly 10 digits")
    if not is_valid_username(form.get("userName", "")):
        issues.append("Username needs 4+ characters with an uppercase letter, a digit and a symbol")
    if not is_valid_password(form.get("password", "")):
        issues.append("Password needs 8+ characters with upper and lower case letters, a digit and a symbol")
    return len(issues) == 0, issues


def validate_user_registration(form: dict[str, Any]) -> tuple[bool, list[str]]:
    """
    Validate the employee registration form.

    Returns:
        Tuple of (is_valid, list_of_issues).
    """
    issues: list[str] = []
    for field in ("firstName", "lastName", "address", "gender", "countryName"):
        if _missing(form, field):
            issues.append(f"Missing required field: {field}")
    if not is_valid_user_email(form.get("email", "")):
        issues.append("Enter a valid email address")
    if not is_valid_phone(form.get("phoneNumber", "")):
        issues.append("Phone number must be exactly 10 digits")
    if not is_valid_username(form.get("userName", "")):
        issues.append("Username needs 4+ characters with an uppercase letter, a digit and a symbol")
    if not is_valid_password(form.get("password", "")):
        issues.append("Password needs 8+ characters with upper and lower case letters, a digit and a symbol")
    return len(issues) == 0, issues


def validate_login(form: dict[str, Any]) -> tuple[bool, list[str]]:
    issues = [f"Missing required field: {field}" for field in ("userName", "password") if _missing(form, field)]
    return len(issues) == 0, issues


def validate_role_form(role_name: str) -> tuple[bool, list[str]]:
    if not (role_name or "").strip():
        return False, ["Select a role"]
    return True, []


def validate_holiday_form(form: dict[str, Any]) -> tuple[bool, list[str]]:
    issues = [
        f"Missing required field: {field}"
        for field in ("countryName", "calendarYear", "holidayName", "holidayDate")
        if _missing(form, field)
    ]
    year = str(form.get("calendarYear") or "").strip()
    if year and not (year.isdigit() and len(year) == 4):
        issues.append("Calendar year must be a four-digit year")
    return len(issues) == 0, issues


def validate_policy_form(form: dict[str, Any], fields: tuple[str, ...]) -> tuple[bool, list[str]]:
    """Role is required and every allowance must be a non-negative number."""
    issues: list[str] = []
    if _missing(form, "role"):
        issues.append("Select a role")
    for field in fields:
        value = form.get(field)
        if value is None or str(value).strip() == "":
            issues.append(f"Missing required field: {field}")
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            issues.append(f"{field} must be a number")
            continue
        if number < 0:
            issues.append(f"{field} cannot be negative")
    return len(issues) == 0, issues


def validate_password_change(old_password: str, new_password: str) -> tuple[bool, list[str]]:
    if not old_password or not new_password:
        return False, ["Please fill in both password fields"]
    return True, []


def extract_user_id(message: Any) -> int | None:
    """
    Find the user id in the password OTP verification reply.

    The backend answers with text like ``"OTP verified. UserId : 42"``.
    """
    if not isinstance(message, str):
        return None
    match = _USER_ID_IN_MESSAGE.search(message)
    if not match:
        return None
    return int(match.group(1))


def country_code_label(code: str) -> str:
    return f"{code} ({COUNTRY_CODES.get(code, '')})"
