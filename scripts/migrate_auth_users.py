#!/usr/bin/env python
"""Create Firestore ``users`` documents for Firebase Auth users that lack one."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from admin_tool.cli import configure_logging, load_script_config, print_error
from admin_tool.clients import build_services
from admin_tool.errors import ConfigurationError, TransportError
from admin_tool.reconcile import CREATED, SKIPPED, RecordOutcome, ReconcileReport, reconcile_users


def print_outcome(outcome: RecordOutcome) -> None:
    label = outcome.record.email or outcome.record.uid
    if outcome.status == CREATED:
        print(f"Created Firestore document for {label} ({outcome.role})")
    elif outcome.status == SKIPPED:
        print(f"Skipping {label} - already exists in Firestore")
    else:
        print_error(f"Error processing user {label}: {outcome.message}")


def print_summary(report: ReconcileReport) -> None:
    print()
    print("=== Migration Complete ===")
    print(f"Created: {report.created} users")
    print(f"Skipped: {report.skipped} users (already existed)")
    print(f"Errors: {report.errors} users")
    print(f"Total processed: {report.total} users")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sync Firebase Auth users into the Firestore users collection.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log SDK activity to stderr.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_script_config()
        services = build_services(config)
    except ConfigurationError as exc:
        print_error(f"Failed to initialize Firebase Admin: {exc}")
        return 1

    print("Starting user migration from Firebase Auth to Firestore...")
    try:
        report = reconcile_users(
            services.provider,
            services.store,
            page_size=config.page_size,
            on_outcome=print_outcome,
        )
    except TransportError as exc:
        print_error(f"Migration failed: {exc}")
        return 1

    print_summary(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
