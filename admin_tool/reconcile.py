"""Copy Firebase Auth users into Firestore ``users`` documents when missing."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from admin_tool.constants import DEFAULT_PAGE_SIZE
from admin_tool.errors import RecordError
from admin_tool.synthesizer import build_user_document
from admin_tool.user_service import FirebaseIdentityProvider, IdentityRecord
from admin_tool.user_store import UserDocumentStore

logger = logging.getLogger(__name__)

CREATED = "created"
SKIPPED = "skipped"
FAILED = "error"


@dataclass(slots=True)
class RecordOutcome:
    record: IdentityRecord
    status: str
    role: str | None = None
    message: str | None = None


@dataclass(slots=True)
class RecordFailure:
    uid: str
    email: str | None
    message: str


@dataclass(slots=True)
class ReconcileReport:
    total: int = 0
    created: int = 0
    skipped: int = 0
    failures: list[RecordFailure] = field(default_factory=list)

    @property
    def errors(self) -> int:
        return len(self.failures)


def _reconcile_record(record: IdentityRecord, store: UserDocumentStore, now: datetime) -> RecordOutcome:
    if store.exists(record.uid):
        return RecordOutcome(record=record, status=SKIPPED)

    document = build_user_document(record, now=now)
    store.put(record.uid, document)
    return RecordOutcome(record=record, status=CREATED, role=document["role"])


def reconcile_users(
    provider: FirebaseIdentityProvider,
    store: UserDocumentStore,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    now: datetime | None = None,
    on_outcome: Callable[[RecordOutcome], None] | None = None,
) -> ReconcileReport:
    """Create a default document for every auth user without one.

    The full user list is enumerated before any write; a ``TransportError``
    while listing aborts the run. Failures on individual records are counted
    and the run moves on to the next record. Existing documents are never
    modified.
    """

    records = list(provider.iter_users(page_size=page_size))
    report = ReconcileReport(total=len(records))
    logger.info("Reconciling %d Firebase Auth users into '%s'", report.total, store.collection_name)

    for record in records:
        current = now or datetime.now(timezone.utc)
        try:
            outcome = _reconcile_record(record, store, current)
        except RecordError as exc:
            logger.warning("Failed to reconcile user %s: %s", record.uid, exc)
            outcome = RecordOutcome(record=record, status=FAILED, message=str(exc))
        except Exception as exc:
            logger.warning("Unexpected error reconciling user %s: %s", record.uid, exc)
            outcome = RecordOutcome(record=record, status=FAILED, message=str(exc))

        if outcome.status == CREATED:
            report.created += 1
        elif outcome.status == SKIPPED:
            report.skipped += 1
        else:
            report.failures.append(
                RecordFailure(uid=record.uid, email=record.email, message=outcome.message or "")
            )

        if on_outcome is not None:
            on_outcome(outcome)

    return report


__all__ = [
    "CREATED",
    "SKIPPED",
    "FAILED",
    "RecordOutcome",
    "RecordFailure",
    "ReconcileReport",
    "reconcile_users",
]
