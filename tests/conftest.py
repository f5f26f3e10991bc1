from __future__ import annotations

from types import SimpleNamespace

import pytest
from firebase_admin import exceptions as firebase_exceptions
from google.api_core import exceptions as google_exceptions

from admin_tool.user_service import FirebaseIdentityProvider
from admin_tool.user_store import UserDocumentStore


class FakeUserNotFoundError(Exception):
    pass


def make_record(
    uid="uid-1",
    *,
    email=None,
    display_name=None,
    custom_claims=None,
    created=1_700_000_000_000,
    last_sign_in=1_700_000_500_000,
    email_verified=True,
):
    metadata = SimpleNamespace(creation_timestamp=created, last_sign_in_timestamp=last_sign_in)
    return SimpleNamespace(
        uid=uid,
        email=email,
        display_name=display_name,
        photo_url=None,
        phone_number=None,
        email_verified=email_verified,
        disabled=False,
        custom_claims=custom_claims,
        user_metadata=metadata,
    )


class FakeAuth:
    """In-memory stand-in for ``firebase_admin.auth`` with token-based paging."""

    UserNotFoundError = FakeUserNotFoundError

    def __init__(self, records=()):
        self.records = {record.uid: record for record in records}
        self.list_calls: list[tuple[str | None, int]] = []
        self.claim_updates: list[tuple[str, dict | None]] = []
        self.fail_on_call: int | None = None

    def list_users(self, page_token=None, max_results=1000, app=None):  # noqa: ARG002
        if self.fail_on_call is not None and len(self.list_calls) == self.fail_on_call:
            raise firebase_exceptions.UnavailableError("auth backend unavailable")
        self.list_calls.append((page_token, max_results))

        users = list(self.records.values())
        start = int(page_token or 0)
        end = start + max_results
        next_token = str(end) if end < len(users) else ""
        return SimpleNamespace(users=users[start:end], next_page_token=next_token)

    def get_user_by_email(self, email, app=None):  # noqa: ARG002
        for record in self.records.values():
            if record.email == email:
                return record
        raise FakeUserNotFoundError(email)

    def set_custom_user_claims(self, uid, custom_claims, app=None):  # noqa: ARG002
        self.claim_updates.append((uid, custom_claims))
        self.records[uid].custom_claims = custom_claims


class FakeSnapshot:
    def __init__(self, data):
        self._data = data
        self.exists = data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocumentRef:
    def __init__(self, client: "FakeFirestoreClient", collection: str, doc_id: str):
        self._client = client
        self._collection = collection
        self.id = doc_id

    def get(self):
        if self.id in self._client.fail_reads:
            raise google_exceptions.ServiceUnavailable("firestore read unavailable")
        return FakeSnapshot(self._client.data.setdefault(self._collection, {}).get(self.id))

    def set(self, data):
        if self.id in self._client.fail_writes:
            raise google_exceptions.ServiceUnavailable("firestore write unavailable")
        self._client.writes.append((self._collection, self.id))
        self._client.data.setdefault(self._collection, {})[self.id] = dict(data)


class FakeCollection:
    def __init__(self, client: "FakeFirestoreClient", name: str):
        self._client = client
        self._name = name

    def document(self, doc_id):
        return FakeDocumentRef(self._client, self._name, doc_id)


class FakeFirestoreClient:
    def __init__(self):
        self.data: dict[str, dict[str, dict]] = {}
        self.writes: list[tuple[str, str]] = []
        self.fail_reads: set[str] = set()
        self.fail_writes: set[str] = set()

    def collection(self, name):
        return FakeCollection(self, name)


@pytest.fixture
def fake_auth():
    return FakeAuth()


@pytest.fixture
def provider(fake_auth):
    return FirebaseIdentityProvider(auth_api=fake_auth)


@pytest.fixture
def firestore_client():
    return FakeFirestoreClient()


@pytest.fixture
def store(firestore_client):
    return UserDocumentStore(firestore_client)


@pytest.fixture
def make_user():
    return make_record
