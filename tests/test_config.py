"""
Tests for smart_leave.config module.

Covers:
- Settings defaults
- Environment variable overrides
- Singleton reload
- Domain constants
"""

import os
from unittest import mock

import pytest


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self):
        from smart_leave.config import Settings

        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings()

        assert settings.api_base_url == "http://localhost:8765"
        assert settings.request_timeout_seconds == 10.0
        assert settings.users_page_size == 5
        assert settings.history_page_size == 10
        assert settings.balances_page_size == 8
        assert settings.log_level == "INFO"
        assert settings.log_format is None
        assert settings.debug_mode is False

    def test_env_override_backend(self):
        from smart_leave.config import Settings

        env = {
            "SMART_LEAVE_API_URL": "https://leave.example.com/",
            "SMART_LEAVE_REQUEST_TIMEOUT": "2.5",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings()

        assert settings.api_base_url == "https://leave.example.com"
        assert settings.request_timeout_seconds == 2.5

    def test_env_override_page_sizes(self):
        from smart_leave.config import Settings

        env = {
            "SMART_LEAVE_USERS_PAGE_SIZE": "20",
            "SMART_LEAVE_HISTORY_PAGE_SIZE": "25",
            "SMART_LEAVE_BALANCES_PAGE_SIZE": "16",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings()

        assert settings.users_page_size == 20
        assert settings.history_page_size == 25
        assert settings.balances_page_size == 16

    def test_env_override_logging(self):
        from smart_leave.config import Settings

        with mock.patch.dict(os.environ, {"LOG_LEVEL": "debug", "LOG_FORMAT": "CONSOLE"}, clear=True):
            settings = Settings()

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "console"

    @pytest.mark.parametrize("value,expected", [("1", True), ("true", True), ("TRUE", True), ("0", False), ("no", False)])
    def test_debug_flag(self, value, expected):
        from smart_leave.config import Settings

        with mock.patch.dict(os.environ, {"DEBUG": value}, clear=True):
            settings = Settings()

        assert settings.debug_mode is expected

    def test_blank_url_keeps_default(self):
        from smart_leave.config import Settings

        with mock.patch.dict(os.environ, {"SMART_LEAVE_API_URL": "   "}, clear=True):
            settings = Settings()

        assert settings.api_base_url == "http://localhost:8765"


class TestSettingsSingleton:
    def test_reload_settings_picks_up_environment(self):
        from smart_leave import config

        with mock.patch.dict(os.environ, {"SMART_LEAVE_API_URL": "http://other:9000"}, clear=True):
            reloaded = config.reload_settings()
            assert config.get_settings() is reloaded
            assert reloaded.api_base_url == "http://other:9000"

        with mock.patch.dict(os.environ, {}, clear=True):
            config.reload_settings()


class TestConstants:
    def test_leave_types(self):
        from smart_leave.config import LEAVE_TYPES

        assert LEAVE_TYPES == ("SICK", "CASUAL", "EARNED", "MATERNITY", "PATERNITY")

    def test_promotion_map_only_moves_up(self):
        from smart_leave.config import ROLE_PROMOTION_MAP

        assert ROLE_PROMOTION_MAP["TEAM_MEMBER"] == ("TEAM_LEAD", "TEAM_MANAGER", "HR_MANAGER")
        assert ROLE_PROMOTION_MAP["TEAM_MANAGER"] == ("HR_MANAGER",)
        assert "HR_MANAGER" not in ROLE_PROMOTION_MAP

    def test_leave_statuses_order(self):
        from smart_leave.config import LEAVE_STATUSES

        assert LEAVE_STATUSES == ("PENDING", "APPROVED", "REJECTED", "CANCELED")

    def test_approver_roles(self):
        from smart_leave.config import APPROVER_ROLES

        assert APPROVER_ROLES == {"HR_MANAGER", "TEAM_MANAGER"}
