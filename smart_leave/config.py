"""
Smart Leave - Configuration Management
======================================
Centralized configuration with environment variable support.

Usage:
    from smart_leave.config import settings

    base_url = settings.api_base_url
    timeout = settings.request_timeout_seconds
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Application settings with environment variable overrides."""

    # Backend gateway
    api_base_url: str = "http://localhost:8765"
    request_timeout_seconds: float = 10.0

    # UI settings
    users_page_size: int = 5
    history_page_size: int = 10
    balances_page_size: int = 8

    # Logging
    log_level: str = "INFO"
    log_format: str | None = None

    # Feature flags
    debug_mode: bool = False

    def __post_init__(self):
        """Load overrides from environment variables."""
        self._load_env_overrides()

    def _load_env_overrides(self):
        """Load configuration from environment variables."""
        if base_url := os.environ.get("SMART_LEAVE_API_URL", "").strip():
            self.api_base_url = base_url.rstrip("/")
        if timeout := os.environ.get("SMART_LEAVE_REQUEST_TIMEOUT"):
            self.request_timeout_seconds = float(timeout)

        if page_size := os.environ.get("SMART_LEAVE_USERS_PAGE_SIZE"):
            self.users_page_size = int(page_size)
        if page_size := os.environ.get("SMART_LEAVE_HISTORY_PAGE_SIZE"):
            self.history_page_size = int(page_size)
        if page_size := os.environ.get("SMART_LEAVE_BALANCES_PAGE_SIZE"):
            self.balances_page_size = int(page_size)

        if level := os.environ.get("LOG_LEVEL"):
            self.log_level = level.upper()
        if log_format := os.environ.get("LOG_FORMAT"):
            self.log_format = log_format.lower()

        if os.environ.get("DEBUG", "").lower() in ("1", "true"):
            self.debug_mode = True


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
        if _settings.debug_mode:
            logger.info("Settings loaded with debug mode enabled")
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from environment."""
    global _settings
    _settings = Settings()
    return _settings


# Convenience alias
settings = get_settings()


# Leave types offered on the apply form, in display order
LEAVE_TYPES = (
    "SICK",
    "CASUAL",
    "EARNED",
    "MATERNITY",
    "PATERNITY",
)

LEAVE_STATUSES = ("PENDING", "APPROVED", "REJECTED", "CANCELED")

# Policy/balance fields, in the order the policy form asks for them
POLICY_FIELDS = (
    "sickLeave",
    "earnedLeave",
    "casualLeave",
    "paternityLeave",
    "maternityLeave",
)

ADMIN_ROLE = "ADMIN"

PREDEFINED_ROLES = {
    "TEAM_MEMBER": "Team Member",
    "TEAM_LEAD": "Team Lead",
    "TEAM_MANAGER": "Team Manager",
    "HR_MANAGER": "HR Manager",
}

ROLE_PROMOTION_MAP = {
    "TEAM_MEMBER": ("TEAM_LEAD", "TEAM_MANAGER", "HR_MANAGER"),
    "TEAM_LEAD": ("TEAM_MANAGER", "HR_MANAGER"),
    "TEAM_MANAGER": ("HR_MANAGER",),
}

# Roles that see the approvals queue
APPROVER_ROLES = frozenset({"HR_MANAGER", "TEAM_MANAGER"})

COUNTRY_CODES = {
    "+91": "India",
    "+1": "USA/Canada",
    "+44": "UK",
    "+61": "Australia",
}

GENDERS = ("MALE", "FEMALE", "OTHER")

HOLIDAY_SHEET_URL = (
    "https://docs.google.com/spreadsheets/d/1nkOpL4L6J9mDw2tLaezeO8KZnXxwhauCed1JG5u6bq8/edit?gid=0#gid=0"
)
