"""Default Firestore user documents derived from Firebase Auth records."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from admin_tool.constants import (
    ADMIN_ROLE,
    DEFAULT_AVAILABLE_DAYS,
    DEFAULT_CONTACT_METHOD,
    DEFAULT_LOYALTY_TIER,
    DEFAULT_REMINDER_DAYS_BEFORE,
    DEFAULT_ROLE,
    DEFAULT_TIME_SLOTS,
    FALLBACK_DISPLAY_NAME,
)
from admin_tool.user_service import IdentityRecord


def infer_role(record: IdentityRecord) -> str:
    return ADMIN_ROLE if record.custom_claims.get("role") == ADMIN_ROLE else DEFAULT_ROLE


def fallback_display_name(display_name: str | None, email: str | None) -> str:
    """Use the display name, else the email's local part, else ``"User"``."""

    if display_name:
        return display_name
    if email:
        local_part = email.split("@", 1)[0]
        if local_part:
            return local_part
    return FALLBACK_DISPLAY_NAME


def _isoformat(value: datetime | None, default: datetime) -> str:
    return (value or default).isoformat()


def default_loyalty() -> dict[str, Any]:
    return {"points": 0, "tier": DEFAULT_LOYALTY_TIER, "lastEarned": None}


def default_service_preferences() -> dict[str, Any]:
    return {
        "preferredTimeSlots": list(DEFAULT_TIME_SLOTS),
        "availableDays": list(DEFAULT_AVAILABLE_DAYS),
        "emailReminders": True,
        "smsReminders": False,
        "pushNotifications": True,
        "reminderDaysBefore": DEFAULT_REMINDER_DAYS_BEFORE,
        "preferredContactMethod": DEFAULT_CONTACT_METHOD,
        "specialInstructions": None,
    }


def build_user_document(record: IdentityRecord, *, now: datetime | None = None) -> dict[str, Any]:
    """Synthesize the starter ``users/{uid}`` document for an auth record.

    Pure apart from ``now``, which defaults to the current UTC time and only
    fills timestamps the provider did not report.
    """

    current = now or datetime.now(timezone.utc)

    return {
        "uid": record.uid,
        "email": record.email or "",
        "displayName": fallback_display_name(record.display_name, record.email),
        "photoUrl": record.photo_url or None,
        "phoneNumber": record.phone_number or None,
        "createdAt": _isoformat(record.created_at, current),
        "lastLogin": _isoformat(record.last_sign_in, current),
        "isEmailVerified": bool(record.email_verified),
        "role": infer_role(record),
        "wooCustomerId": None,
        "defaultAddressId": None,
        "marketingConsent": False,
        "loyalty": default_loyalty(),
        "servicePreferences": default_service_preferences(),
        "additionalInfo": None,
    }


__all__ = [
    "build_user_document",
    "default_loyalty",
    "default_service_preferences",
    "fallback_display_name",
    "infer_role",
]
