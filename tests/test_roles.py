from __future__ import annotations

from datetime import datetime, timezone

import pytest

from admin_tool import roles
from admin_tool.errors import LookupNotFoundError

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)
TENANT = "waterfilternet-cyprus"


@pytest.fixture
def directory(fake_auth, make_user):
    records = [
        make_user("uid-1", email="owner@example.com", custom_claims={"role": "admin", "company": TENANT, "assignedAt": "2023-05-01T00:00:00+00:00"}),
        make_user("uid-2", email="customer@example.com", custom_claims={"plan": "gold"}),
        make_user("uid-3", email="staff@example.com", custom_claims={"role": "editor"}),
    ]
    for record in records:
        fake_auth.records[record.uid] = record
    return fake_auth


def test_assign_then_check(directory, provider):
    change = roles.assign_admin(provider, "customer@example.com", tenant_id=TENANT, now=NOW)

    assert change.claims == {"role": "admin", "company": TENANT, "assignedAt": NOW.isoformat()}
    assert directory.claim_updates == [("uid-2", change.claims)]

    result = roles.check_admin(provider, "customer@example.com")
    assert result.is_admin is True
    assert result.claims["company"] == TENANT
    assert result.claims["assignedAt"] == NOW.isoformat()
    # Replace-all semantics drop unrelated claims by default.
    assert "plan" not in result.claims


def test_assign_can_preserve_existing_claims(directory, provider):
    roles.assign_admin(provider, "customer@example.com", tenant_id=TENANT, now=NOW, preserve_existing=True)

    result = roles.check_admin(provider, "customer@example.com")
    assert result.is_admin is True
    assert result.claims["plan"] == "gold"


def test_revoke_then_check(directory, provider):
    roles.revoke_admin(provider, "owner@example.com")

    assert directory.claim_updates == [("uid-1", None)]
    result = roles.check_admin(provider, "owner@example.com")
    assert result.is_admin is False
    assert result.claims == {}


def test_revoke_preserving_unrelated_claims(directory, provider):
    directory.records["uid-1"].custom_claims = {"role": "admin", "company": TENANT, "plan": "gold"}

    change = roles.revoke_admin(provider, "owner@example.com", preserve_existing=True)

    assert change.claims == {"plan": "gold"}
    assert roles.check_admin(provider, "owner@example.com").is_admin is False


@pytest.mark.parametrize(
    "action",
    [
        lambda provider: roles.assign_admin(provider, "ghost@example.com", tenant_id=TENANT),
        lambda provider: roles.revoke_admin(provider, "ghost@example.com"),
        lambda provider: roles.check_admin(provider, "ghost@example.com"),
    ],
)
def test_unknown_email_leaves_claims_untouched(directory, provider, action):
    before = {uid: record.custom_claims for uid, record in directory.records.items()}

    with pytest.raises(LookupNotFoundError):
        action(provider)

    assert directory.claim_updates == []
    assert {uid: record.custom_claims for uid, record in directory.records.items()} == before


def test_list_admins_filters_on_exact_role(directory, provider, make_user):
    extra = make_user("uid-4", email="second@example.com", custom_claims={"role": "admin"}, last_sign_in=None)
    directory.records[extra.uid] = extra

    admins = roles.list_admins(provider, page_size=2)

    assert [admin.uid for admin in admins] == ["uid-1", "uid-4"]
    assert admins[0].tenant_id == TENANT
    assert admins[0].assigned_at == "2023-05-01T00:00:00+00:00"
    assert admins[1].tenant_id is None
    assert admins[1].last_sign_in is None
