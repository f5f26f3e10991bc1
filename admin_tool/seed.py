"""Bootstrap the ``users`` collection from a hand-maintained JSON file."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping

from admin_tool.errors import RecordError
from admin_tool.user_store import UserDocumentStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SeedReport:
    written: int = 0
    skipped: int = 0
    failures: list[tuple[str, str]] = field(default_factory=list)

    @property
    def errors(self) -> int:
        return len(self.failures)


def load_seed_file(path: Path) -> list[dict[str, Any]]:
    """Read a JSON array of user documents, each keyed by a non-empty ``uid``."""

    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a JSON array of user documents")

    documents: list[dict[str, Any]] = []
    for index, item in enumerate(payload):
        if not isinstance(item, Mapping):
            raise ValueError(f"Entry #{index} in {path} is not an object")
        uid = str(item.get("uid") or "").strip()
        if not uid:
            raise ValueError(f"Entry #{index} in {path} has no uid")
        documents.append({**item, "uid": uid})
    return documents


def _with_timestamps(document: Mapping[str, Any], now: datetime) -> dict[str, Any]:
    stamped = dict(document)
    stamped.setdefault("createdAt", now.isoformat())
    stamped.setdefault("lastLogin", now.isoformat())
    return stamped


def seed_user_documents(
    store: UserDocumentStore,
    documents: Iterable[Mapping[str, Any]],
    *,
    overwrite: bool = True,
    now: datetime | None = None,
) -> SeedReport:
    """Write seed documents at their uid, continuing past per-document failures."""

    current = now or datetime.now(timezone.utc)
    report = SeedReport()

    for document in documents:
        uid = str(document.get("uid") or "")
        payload = _with_timestamps(document, current)
        try:
            if overwrite:
                store.put(uid, payload)
            elif not store.create_if_absent(uid, payload):
                report.skipped += 1
                continue
        except RecordError as exc:
            logger.warning("Failed to seed user %s: %s", uid, exc)
            report.failures.append((uid, str(exc)))
            continue
        except Exception as exc:
            logger.warning("Unexpected error seeding user %s: %s", uid, exc)
            report.failures.append((uid, str(exc)))
            continue
        report.written += 1

    return report


__all__ = ["SeedReport", "load_seed_file", "seed_user_documents"]
