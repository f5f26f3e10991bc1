from __future__ import annotations

from pathlib import Path

import pytest

from admin_tool import clients
from admin_tool.config import AdminConfig
from admin_tool.errors import ConfigurationError


def _config() -> AdminConfig:
    return AdminConfig(
        credentials_path=Path("/secrets/firebase-admin-key.json"),
        service_account_info={"project_id": "waterfilternet-82513"},
        project_id="waterfilternet-82513",
        users_collection="customers",
    )


def test_initialize_admin_app_uses_certificate(monkeypatch):
    calls = []

    def fake_get_app(name):
        raise ValueError(f"no app named {name}")

    def fake_initialize_app(cred, options=None, name=None):
        calls.append((cred, options, name))
        return "app"

    monkeypatch.setattr(clients.firebase_admin, "get_app", fake_get_app)
    monkeypatch.setattr(clients.firebase_admin, "initialize_app", fake_initialize_app)
    monkeypatch.setattr(clients.credentials, "Certificate", lambda path: ("cert", path))

    assert clients.initialize_admin_app(_config()) == "app"
    assert calls == [
        (("cert", "/secrets/firebase-admin-key.json"), {"projectId": "waterfilternet-82513"}, clients.APP_NAME)
    ]


def test_initialize_admin_app_reuses_existing(monkeypatch):
    monkeypatch.setattr(clients.firebase_admin, "get_app", lambda name: f"existing-{name}")

    def fail_initialize(*args, **kwargs):  # noqa: ARG001
        raise AssertionError("should not initialize twice")

    monkeypatch.setattr(clients.firebase_admin, "initialize_app", fail_initialize)

    assert clients.initialize_admin_app(_config()) == f"existing-{clients.APP_NAME}"


def test_bad_certificate_is_a_configuration_error(monkeypatch):
    def fake_get_app(name):
        raise ValueError(name)

    def bad_certificate(path):
        raise ValueError(f"Invalid service account certificate: {path}")

    monkeypatch.setattr(clients.firebase_admin, "get_app", fake_get_app)
    monkeypatch.setattr(clients.credentials, "Certificate", bad_certificate)

    with pytest.raises(ConfigurationError):
        clients.initialize_admin_app(_config())


def test_build_services_wires_store_collection(monkeypatch):
    captured = {}

    class FakeClient:
        def __init__(self, project=None, credentials=None):
            captured["project"] = project
            captured["credentials"] = credentials

    monkeypatch.setattr(
        clients.service_account.Credentials,
        "from_service_account_info",
        lambda info: ("sa", info["project_id"]),
    )
    monkeypatch.setattr(clients.firestore, "Client", FakeClient)
    monkeypatch.setattr(clients, "initialize_admin_app", lambda config: "app")

    services = clients.build_services(_config())

    assert captured == {"project": "waterfilternet-82513", "credentials": ("sa", "waterfilternet-82513")}
    assert services.store.collection_name == "customers"
    assert services.provider._app == "app"
