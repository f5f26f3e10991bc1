"""Grant, revoke and inspect the ``role=admin`` custom claim."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from admin_tool.constants import ADMIN_ROLE, DEFAULT_PAGE_SIZE
from admin_tool.user_service import FirebaseIdentityProvider, IdentityRecord

# Claim keys written alongside the role on assignment.
_ADMIN_CLAIM_KEYS = ("role", "company", "assignedAt")


@dataclass(slots=True)
class RoleChange:
    user: IdentityRecord
    claims: Mapping[str, Any]


@dataclass(slots=True)
class AdminSummary:
    uid: str
    email: str | None
    tenant_id: str | None
    assigned_at: str | None
    last_sign_in: datetime | None


@dataclass(slots=True)
class AdminCheck:
    user: IdentityRecord
    is_admin: bool
    claims: Mapping[str, Any]


def admin_claims(tenant_id: str, *, now: datetime | None = None) -> dict[str, Any]:
    assigned_at = (now or datetime.now(timezone.utc)).isoformat()
    return {"role": ADMIN_ROLE, "company": tenant_id, "assignedAt": assigned_at}


def assign_admin(
    provider: FirebaseIdentityProvider,
    email: str,
    *,
    tenant_id: str,
    now: datetime | None = None,
    preserve_existing: bool = False,
) -> RoleChange:
    """Give the user with ``email`` the admin claim set.

    By default the whole claim set is replaced. With ``preserve_existing``
    unrelated claims already on the user are kept. Raises
    ``LookupNotFoundError`` without touching Firebase when no user matches.
    """

    user = provider.get_user_by_email(email)
    claims: dict[str, Any] = dict(user.custom_claims) if preserve_existing else {}
    claims.update(admin_claims(tenant_id, now=now))
    provider.set_custom_claims(user.uid, claims)
    return RoleChange(user=user, claims=claims)


def revoke_admin(
    provider: FirebaseIdentityProvider,
    email: str,
    *,
    preserve_existing: bool = False,
) -> RoleChange:
    """Remove admin rights from the user with ``email``.

    Clears every custom claim unless ``preserve_existing`` is set, in which
    case only the keys written by ``assign_admin`` are dropped.
    """

    user = provider.get_user_by_email(email)
    claims: dict[str, Any] = {}
    if preserve_existing:
        claims = {key: value for key, value in user.custom_claims.items() if key not in _ADMIN_CLAIM_KEYS}
    provider.set_custom_claims(user.uid, claims or None)
    return RoleChange(user=user, claims=claims)


def list_admins(provider: FirebaseIdentityProvider, *, page_size: int = DEFAULT_PAGE_SIZE) -> list[AdminSummary]:
    admins: list[AdminSummary] = []
    for user in provider.iter_users(page_size=page_size):
        if not user.is_admin:
            continue
        admins.append(
            AdminSummary(
                uid=user.uid,
                email=user.email,
                tenant_id=user.custom_claims.get("company"),
                assigned_at=user.custom_claims.get("assignedAt"),
                last_sign_in=user.last_sign_in,
            )
        )
    return admins


def check_admin(provider: FirebaseIdentityProvider, email: str) -> AdminCheck:
    user = provider.get_user_by_email(email)
    claims = dict(user.custom_claims)
    return AdminCheck(user=user, is_admin=user.is_admin, claims=claims)


__all__ = [
    "RoleChange",
    "AdminSummary",
    "AdminCheck",
    "admin_claims",
    "assign_admin",
    "revoke_admin",
    "list_admins",
    "check_admin",
]
