"""Construct the Firebase Auth and Firestore handles used by the scripts."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import firebase_admin
from firebase_admin import credentials
from google.cloud import firestore
from google.oauth2 import service_account

from admin_tool.config import AdminConfig
from admin_tool.errors import ConfigurationError
from admin_tool.user_service import FirebaseIdentityProvider
from admin_tool.user_store import UserDocumentStore

logger = logging.getLogger(__name__)

APP_NAME = "admin-tool"


@dataclass(slots=True)
class Services:
    provider: FirebaseIdentityProvider
    store: UserDocumentStore


def initialize_admin_app(config: AdminConfig) -> firebase_admin.App:
    """Return the admin app for ``config``, initializing it on first use."""

    try:
        return firebase_admin.get_app(APP_NAME)
    except ValueError:
        pass

    try:
        cred = credentials.Certificate(str(config.credentials_path))
        app = firebase_admin.initialize_app(cred, {"projectId": config.project_id}, name=APP_NAME)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Firebase Admin SDK could not initialize: {exc}") from exc

    logger.info("Firebase Admin SDK initialized for project %s", config.project_id)
    return app


def build_firestore_client(config: AdminConfig) -> Any:
    try:
        creds = service_account.Credentials.from_service_account_info(dict(config.service_account_info))
    except ValueError as exc:
        raise ConfigurationError(f"Invalid service account credentials: {exc}") from exc
    return firestore.Client(project=config.project_id, credentials=creds)


def build_identity_provider(config: AdminConfig) -> FirebaseIdentityProvider:
    return FirebaseIdentityProvider(initialize_admin_app(config))


def build_services(config: AdminConfig) -> Services:
    return Services(
        provider=build_identity_provider(config),
        store=UserDocumentStore(build_firestore_client(config), config.users_collection),
    )


__all__ = [
    "APP_NAME",
    "Services",
    "initialize_admin_app",
    "build_firestore_client",
    "build_identity_provider",
    "build_services",
]
