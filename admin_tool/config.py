"""Environment-driven configuration for the Firebase admin scripts."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from dotenv import load_dotenv

from admin_tool.constants import DEFAULT_PAGE_SIZE, DEFAULT_TENANT_ID, MAX_PAGE_SIZE, USERS_COLLECTION
from admin_tool.errors import ConfigurationError

REPO_ROOT = Path(__file__).resolve().parents[1]
ENV_PATH = REPO_ROOT / ".env"
DEFAULT_CREDENTIAL_FILE = Path("firebase-admin-key.json")

_REQUIRED_FIELDS = {"type", "project_id", "private_key", "client_email"}
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(slots=True)
class AdminConfig:
    """Resolved settings shared by every admin script."""

    credentials_path: Path
    service_account_info: Mapping[str, Any]
    project_id: str
    tenant_id: str = DEFAULT_TENANT_ID
    users_collection: str = USERS_COLLECTION
    page_size: int = DEFAULT_PAGE_SIZE
    preserve_claims: bool = False


def load_env(path: Path = ENV_PATH) -> None:
    if path.is_file():
        load_dotenv(path, override=False)


def _env_value(env: Mapping[str, str], *keys: str) -> str:
    for key in keys:
        value = (env.get(key) or "").strip()
        if value:
            return value
    return ""


def resolve_credentials_path(env: Mapping[str, str], *, root: Path = REPO_ROOT) -> Path:
    """Pick the service-account file from the environment or the fixed default path."""

    raw_path = _env_value(env, "GOOGLE_APPLICATION_CREDENTIALS", "FIREBASE_SERVICE_ACCOUNT")
    path = Path(raw_path).expanduser() if raw_path else DEFAULT_CREDENTIAL_FILE
    if not path.is_absolute():
        path = (root / path).resolve()
    return path


def read_service_account(path: Path) -> dict[str, Any]:
    """Load and sanity-check a service-account JSON file."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigurationError(
            f"Firebase service account file not found at {path}. "
            "Download it from Firebase Console > Project Settings > Service Accounts, "
            "or set GOOGLE_APPLICATION_CREDENTIALS / FIREBASE_SERVICE_ACCOUNT."
        ) from exc
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Unable to read service account file {path}: {exc}") from exc

    if not isinstance(payload, Mapping):
        raise ConfigurationError(f"Service account file {path} does not contain a JSON object")

    missing = sorted(_REQUIRED_FIELDS - payload.keys())
    if missing:
        raise ConfigurationError(
            f"Service account file {path} is missing fields: {', '.join(missing)}"
        )
    return dict(payload)


def _parse_page_size(raw: str) -> int:
    if not raw:
        return DEFAULT_PAGE_SIZE
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"AUTH_LIST_PAGE_SIZE must be an integer, got {raw!r}") from exc
    if value <= 0 or value > MAX_PAGE_SIZE:
        raise ConfigurationError(f"AUTH_LIST_PAGE_SIZE must be between 1 and {MAX_PAGE_SIZE}")
    return value


def load_config(env: Mapping[str, str] | None = None, *, root: Path = REPO_ROOT) -> AdminConfig:
    """Build an ``AdminConfig`` from environment variables.

    Raises ``ConfigurationError`` when the credential file cannot be used, so
    callers can abort before touching Firebase.
    """

    source = os.environ if env is None else env

    credentials_path = resolve_credentials_path(source, root=root)
    info = read_service_account(credentials_path)

    project_id = _env_value(source, "GCP_PROJECT_ID", "GCP_PROJECT") or str(info["project_id"]).strip()
    if not project_id:
        raise ConfigurationError("GCP_PROJECT_ID is not set and the service account has no project_id")

    return AdminConfig(
        credentials_path=credentials_path,
        service_account_info=info,
        project_id=project_id,
        tenant_id=_env_value(source, "ADMIN_TENANT_ID") or DEFAULT_TENANT_ID,
        users_collection=_env_value(source, "FIRESTORE_USERS_COLLECTION") or USERS_COLLECTION,
        page_size=_parse_page_size(_env_value(source, "AUTH_LIST_PAGE_SIZE")),
        preserve_claims=_env_value(source, "ADMIN_PRESERVE_CLAIMS").lower() in _TRUTHY,
    )


__all__ = [
    "AdminConfig",
    "DEFAULT_CREDENTIAL_FILE",
    "ENV_PATH",
    "REPO_ROOT",
    "load_config",
    "load_env",
    "read_service_account",
    "resolve_credentials_path",
]
