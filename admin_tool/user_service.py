"""Firebase Authentication access for the reconciliation and role tools."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterator, Mapping

from firebase_admin import auth as admin_auth
from firebase_admin import exceptions as firebase_exceptions
from google.api_core import exceptions as google_exceptions

from admin_tool.constants import ADMIN_ROLE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from admin_tool.errors import LookupNotFoundError, TransportError

logger = logging.getLogger(__name__)

_PROVIDER_ERRORS = (firebase_exceptions.FirebaseError, google_exceptions.GoogleAPICallError)


@dataclass(slots=True)
class IdentityRecord:
    uid: str
    email: str | None
    display_name: str | None
    photo_url: str | None = None
    phone_number: str | None = None
    email_verified: bool = False
    disabled: bool = False
    custom_claims: Mapping[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    last_sign_in: datetime | None = None

    @property
    def role(self) -> str | None:
        return str(self.custom_claims.get("role") or "") or None

    @property
    def is_admin(self) -> bool:
        return self.custom_claims.get("role") == ADMIN_ROLE


def _millis_to_datetime(value: Any) -> datetime | None:
    if value in {None, ""}:
        return None
    try:
        millis = int(value)
    except (TypeError, ValueError):
        return None
    seconds = millis / 1000
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def serialize_user(record: Any) -> IdentityRecord:
    """Convert an SDK ``UserRecord`` into an ``IdentityRecord``."""

    claims = dict(getattr(record, "custom_claims", None) or {})
    metadata = getattr(record, "user_metadata", None)

    return IdentityRecord(
        uid=getattr(record, "uid", ""),
        email=getattr(record, "email", None),
        display_name=getattr(record, "display_name", None),
        photo_url=getattr(record, "photo_url", None),
        phone_number=getattr(record, "phone_number", None),
        email_verified=bool(getattr(record, "email_verified", False)),
        disabled=bool(getattr(record, "disabled", False)),
        custom_claims=claims,
        created_at=_millis_to_datetime(getattr(metadata, "creation_timestamp", None)),
        last_sign_in=_millis_to_datetime(getattr(metadata, "last_sign_in_timestamp", None)),
    )


def _validate_page_size(page_size: int) -> None:
    if page_size <= 0 or page_size > MAX_PAGE_SIZE:
        raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")


class FirebaseIdentityProvider:
    """Thin wrapper over ``firebase_admin.auth`` bound to one app.

    ``auth_api`` defaults to the SDK module; tests pass an object exposing the
    same functions.
    """

    def __init__(self, app: Any = None, *, auth_api: Any = admin_auth) -> None:
        self._app = app
        self._auth = auth_api

    def list_page(
        self,
        page_token: str | None = None,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> tuple[list[IdentityRecord], str | None]:
        """Fetch a single page of users and the token for the next one."""

        _validate_page_size(page_size)
        try:
            page = self._auth.list_users(page_token=page_token, max_results=page_size, app=self._app)
        except _PROVIDER_ERRORS as exc:
            raise TransportError(f"Listing Firebase users failed: {exc}") from exc

        users = [serialize_user(record) for record in getattr(page, "users", [])]
        next_token = getattr(page, "next_page_token", None) or None
        return users, next_token

    def iter_users(self, *, page_size: int = DEFAULT_PAGE_SIZE) -> Iterator[IdentityRecord]:
        """Yield every user once, following page tokens until exhausted."""

        _validate_page_size(page_size)
        seen: set[str] = set()
        page_token: str | None = None
        pages = 0

        while True:
            users, page_token = self.list_page(page_token, page_size=page_size)
            pages += 1
            for user in users:
                if not user.uid or user.uid in seen:
                    continue
                seen.add(user.uid)
                yield user
            if not page_token:
                break

        logger.debug("Enumerated %d users across %d page(s)", len(seen), pages)

    def get_user_by_email(self, email: str) -> IdentityRecord:
        try:
            record = self._auth.get_user_by_email(email, app=self._app)
        except self._auth.UserNotFoundError as exc:
            raise LookupNotFoundError(email) from exc
        except _PROVIDER_ERRORS as exc:
            raise TransportError(f"Looking up {email} failed: {exc}") from exc
        return serialize_user(record)

    def set_custom_claims(self, uid: str, claims: Mapping[str, Any] | None) -> None:
        """Replace the user's whole claim set; ``None`` or empty clears it."""

        payload = dict(claims) if claims else None
        try:
            self._auth.set_custom_user_claims(uid, payload, app=self._app)
        except _PROVIDER_ERRORS as exc:
            raise TransportError(f"Updating custom claims for {uid} failed: {exc}") from exc


__all__ = [
    "IdentityRecord",
    "FirebaseIdentityProvider",
    "serialize_user",
]
