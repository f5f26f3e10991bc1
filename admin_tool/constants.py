"""Constants shared by the reconciliation and role-management tools."""
from __future__ import annotations

from typing import Final, Tuple

# Firestore layout
USERS_COLLECTION: Final[str] = "users"

# Firebase Auth caps list_users pages at 1000 records
MAX_PAGE_SIZE: Final[int] = 1000
DEFAULT_PAGE_SIZE: Final[int] = MAX_PAGE_SIZE

# Role claims
ADMIN_ROLE: Final[str] = "admin"
DEFAULT_ROLE: Final[str] = "user"
DEFAULT_TENANT_ID: Final[str] = "waterfilternet-cyprus"

# Synthesized user document defaults
FALLBACK_DISPLAY_NAME: Final[str] = "User"
DEFAULT_LOYALTY_TIER: Final[str] = "Bronze"
DEFAULT_TIME_SLOTS: Tuple[str, ...] = ("09:00-12:00",)
DEFAULT_AVAILABLE_DAYS: Tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
)
DEFAULT_REMINDER_DAYS_BEFORE: Final[int] = 14
DEFAULT_CONTACT_METHOD: Final[str] = "email"

__all__ = [
    "USERS_COLLECTION",
    "MAX_PAGE_SIZE",
    "DEFAULT_PAGE_SIZE",
    "ADMIN_ROLE",
    "DEFAULT_ROLE",
    "DEFAULT_TENANT_ID",
    "FALLBACK_DISPLAY_NAME",
    "DEFAULT_LOYALTY_TIER",
    "DEFAULT_TIME_SLOTS",
    "DEFAULT_AVAILABLE_DAYS",
    "DEFAULT_REMINDER_DAYS_BEFORE",
    "DEFAULT_CONTACT_METHOD",
]
