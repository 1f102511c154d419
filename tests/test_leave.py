"""
Tests for smart_leave.leave module.

Covers:
- Balance lookup and the exceeds-balance rule
- Apply-leave form state
- Status labels
- Role options and promotions
- Holiday grouping and date formatting
"""

from datetime import date, datetime

import pytest


class TestBalance:
    def test_balance_key(self):
        from smart_leave.leave import balance_key

        assert balance_key("SICK") == "sickLeave"
        assert balance_key("Paternity") == "paternityLeave"

    def test_available_balance_from_model_and_mapping(self, sample_balance):
        from smart_leave.leave import available_balance
        from smart_leave.models import LeaveBalance

        assert available_balance(LeaveBalance.model_validate(sample_balance), "EARNED") == 10.0
        assert available_balance(sample_balance, "CASUAL") == 3.0
        assert available_balance(sample_balance, "UNKNOWN") is None
        assert available_balance(None, "SICK") is None
        assert available_balance({"sickLeave": "n/a"}, "SICK") is None

    @pytest.mark.parametrize(
        "leave_type,duration,expected",
        [
            ("SICK", 6, True),
            ("SICK", 5, False),
            ("SICK", 4.5, False),
            ("", 10, False),
            ("SICK", None, False),
            ("MATERNITY", 1, True),
        ],
    )
    def test_exceeds_balance(self, sample_balance, leave_type, duration, expected):
        from smart_leave.leave import exceeds_balance

        assert exceeds_balance(leave_type, duration, sample_balance) is expected

    def test_unknown_balance_never_blocks(self):
        from smart_leave.leave import exceeds_balance

        assert exceeds_balance("SICK", 100, {}) is False
        assert exceeds_balance("SICK", 100, None) is False

    def test_null_balance_counts_as_zero(self):
        from smart_leave.leave import available_balance, exceeds_balance
        from smart_leave.models import LeaveBalance

        assert available_balance({"sickLeave": None}, "SICK") == 0.0
        assert exceeds_balance("SICK", 1, {"sickLeave": None}) is True
        assert exceeds_balance("SICK", 0, {"sickLeave": None}) is False
        assert exceeds_balance("CASUAL", 1, LeaveBalance.model_validate({"casualLeave": None})) is True


class TestLeaveApplication:
    def _filled(self):
        from smart_leave.leave import LeaveApplication

        return LeaveApplication(
            leave_type="SICK",
            start_date="2025-01-06",
            end_date="2025-01-07",
            comments="Flu",
        )

    def test_valid_application(self, sample_balance):
        app = self._filled()
        app.set_duration("2")
        app.check_balance(sample_balance)

        assert app.duration == 2.0
        assert app.is_valid()
        assert app.to_payload() == {
            "startDate": "2025-01-06",
            "endDate": "2025-01-07",
            "leaveType": "SICK",
            "comments": "Flu",
            "duration": 2.0,
        }

    def test_blank_comments_invalid(self):
        app = self._filled()
        app.comments = "   "

        assert not app.is_valid()

    def test_payload_requires_fields(self):
        from smart_leave.exceptions import MissingRequiredFieldError

        app = self._filled()
        app.comments = "   "

        with pytest.raises(MissingRequiredFieldError) as excinfo:
            app.to_payload()
        assert excinfo.value.field == "comments"

    def test_date_error_blocks_and_clears_duration(self):
        app = self._filled()
        app.set_duration(3)
        app.set_date_error("End date must be after start date")

        assert app.duration is None
        assert app.date_error == "End date must be after start date"
        assert not app.is_valid()

        app.set_date_error("")
        assert app.date_error == "Failed to calculate duration. Please check your dates."

    def test_balance_error_blocks(self, sample_balance):
        from smart_leave.exceptions import InsufficientBalanceError

        app = self._filled()
        app.set_duration(9)

        assert app.check_balance(sample_balance) is True
        assert not app.is_valid()
        with pytest.raises(InsufficientBalanceError) as excinfo:
            app.raise_for_balance(sample_balance)
        assert excinfo.value.available == 5.0

    def test_clear_dates(self):
        app = self._filled()
        app.set_duration(1)
        app.clear_dates()

        assert app.duration is None
        assert app.date_error == ""

    def test_has_dates(self):
        from smart_leave.leave import LeaveApplication

        assert not LeaveApplication(start_date="2025-01-01").has_dates
        assert self._filled().has_dates

    def test_non_numeric_duration(self):
        app = self._filled()
        app.set_duration("three")

        assert app.duration is None


class TestStatus:
    @pytest.mark.parametrize(
        "status,label,color",
        [
            ("APPROVED", "Approved", "green"),
            ("REJECTED", "Rejected", "red"),
            ("CANCELED", "Cancelled", "orange"),
            ("PENDING", "Pending", "gray"),
            (None, "Pending", "gray"),
            (" APPROVED ", "Approved", "green"),
        ],
    )
    def test_labels(self, status, label, color):
        from smart_leave.leave import status_color, status_label

        assert status_label(status) == label
        assert status_color(status) == color

    def test_only_pending_is_actionable(self, sample_leave_requests):
        from smart_leave.leave import is_actionable, is_cancellable
        from smart_leave.models import LeaveRequest

        requests = [LeaveRequest.model_validate(r) for r in sample_leave_requests]

        assert [is_actionable(r) for r in requests] == [True, False, False, False]
        assert [is_cancellable(r) for r in requests] == [True, False, False, False]

    @pytest.mark.parametrize("role,expected", [("HR_MANAGER", True), ("TEAM_MANAGER", True), ("TEAM_LEAD", False), (None, False)])
    def test_can_approve(self, role, expected):
        from smart_leave.leave import can_approve

        assert can_approve(role) is expected


class TestRoles:
    def test_available_promotions(self):
        from smart_leave.leave import available_promotions

        assert available_promotions("TEAM_LEAD") == ["TEAM_MANAGER", "HR_MANAGER"]
        assert available_promotions("HR_MANAGER") == []
        assert available_promotions(None) == []

    def test_build_role_falls_back_to_predefined_description(self):
        from smart_leave.leave import build_role

        assert build_role("TEAM_LEAD").description == "Team Lead"
        assert build_role("TEAM_LEAD", "Leads a squad").description == "Leads a squad"

    def test_role_options_disable_existing(self):
        from smart_leave.leave import enabled_role_names, role_options
        from smart_leave.models import Role

        options = role_options([Role(role_name="TEAM_LEAD"), Role(role_name="ADMIN")])

        assert [o.role_name for o in options] == ["TEAM_MEMBER", "TEAM_LEAD", "TEAM_MANAGER", "HR_MANAGER"]
        assert enabled_role_names(options) == ["TEAM_MEMBER", "TEAM_MANAGER", "HR_MANAGER"]

    def test_policy_role_options(self):
        from smart_leave.leave import enabled_role_names, policy_role_options
        from smart_leave.models import LeavePolicy, Role

        roles = [Role(role_name="ADMIN"), Role(role_name="TEAM_MEMBER"), Role(role_name="TEAM_LEAD")]
        options = policy_role_options(roles, [LeavePolicy(role="TEAM_MEMBER")])

        assert [o.role_name for o in options] == ["TEAM_MEMBER", "TEAM_LEAD"]
        assert [o.disabled for o in options] == [True, False]
        assert enabled_role_names(options) == ["TEAM_LEAD"]

    def test_humanize_role(self):
        from smart_leave.leave import humanize_role

        assert humanize_role("TEAM_MANAGER") == "TEAM MANAGER"
        assert humanize_role(None) == ""


class TestHolidays:
    def test_group_holidays_keeps_first_seen_order(self):
        from smart_leave.leave import group_holidays
        from smart_leave.models import Holiday

        holidays = [
            Holiday(country_name="India", calendar_year=2025, holiday_name="Holi"),
            Holiday(country_name="UK", calendar_year=2025, holiday_name="Boxing Day"),
            Holiday(country_name="India", calendar_year=2025, holiday_name="Diwali"),
        ]

        groups = group_holidays(holidays)

        assert list(groups) == ["India (2025)", "UK (2025)"]
        assert [h.holiday_name for h in groups["India (2025)"]] == ["Holi", "Diwali"]

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2025-03-14", ("14-03-2025", "Friday")),
            ("2025-12-25T00:00:00", ("25-12-2025", "Thursday")),
            (date(2024, 2, 29), ("29-02-2024", "Thursday")),
            (datetime(2024, 1, 1, 9, 30), ("01-01-2024", "Monday")),
            ("garbage", ("Invalid Date", "N/A")),
            (None, ("Invalid Date", "N/A")),
        ],
    )
    def test_format_holiday_date(self, value, expected):
        from smart_leave.leave import format_holiday_date

        assert format_holiday_date(value) == expected
