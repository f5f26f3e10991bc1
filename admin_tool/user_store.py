"""Firestore-backed storage for synthesized user documents."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from google.api_core import exceptions as google_exceptions

from admin_tool.constants import USERS_COLLECTION
from admin_tool.errors import RecordError

logger = logging.getLogger(__name__)


class UserDocumentStore:
    """Read and write ``users/{uid}`` documents through a Firestore client."""

    def __init__(self, client: Any, collection: str = USERS_COLLECTION) -> None:
        self._client = client
        self.collection_name = collection

    def _document(self, uid: str):
        if not uid:
            raise RecordError("User document key must not be empty", uid=uid)
        return self._client.collection(self.collection_name).document(uid)

    def exists(self, uid: str) -> bool:
        try:
            snapshot = self._document(uid).get()
        except google_exceptions.GoogleAPIError as exc:
            raise RecordError(f"Reading {self.collection_name}/{uid} failed: {exc}", uid=uid) from exc
        return bool(getattr(snapshot, "exists", False))

    def put(self, uid: str, document: Mapping[str, Any]) -> None:
        """Write the document at ``uid``, replacing whatever is stored there."""

        try:
            self._document(uid).set(dict(document))
        except google_exceptions.GoogleAPIError as exc:
            raise RecordError(f"Writing {self.collection_name}/{uid} failed: {exc}", uid=uid) from exc

    def create_if_absent(self, uid: str, document: Mapping[str, Any]) -> bool:
        """Write the document only when nothing is stored at ``uid`` yet.

        Returns ``True`` when a document was written. Existing documents are
        left untouched.
        """

        if self.exists(uid):
            return False
        self.put(uid, document)
        logger.debug("Created %s/%s", self.collection_name, uid)
        return True


__all__ = ["UserDocumentStore"]
