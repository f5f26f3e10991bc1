#!/usr/bin/env python
"""Initialize the Firestore users collection from a JSON list of documents."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from admin_tool.cli import configure_logging, load_script_config, print_error
from admin_tool.clients import build_firestore_client
from admin_tool.errors import ConfigurationError
from admin_tool.seed import load_seed_file, seed_user_documents
from admin_tool.user_store import UserDocumentStore


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Write seed user documents into Firestore.")
    parser.add_argument("path", type=Path, help="JSON file holding an array of user documents")
    parser.add_argument(
        "--no-overwrite",
        action="store_true",
        help="Skip documents that already exist instead of replacing them.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log SDK activity to stderr.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        documents = load_seed_file(args.path)
    except (OSError, ValueError) as exc:
        print_error(f"Could not read seed file: {exc}")
        return 1

    try:
        config = load_script_config()
        store = UserDocumentStore(build_firestore_client(config), config.users_collection)
    except ConfigurationError as exc:
        print_error(f"Failed to initialize Firestore: {exc}")
        return 1

    print(f"Seeding {len(documents)} user document(s) into '{store.collection_name}'...")
    report = seed_user_documents(store, documents, overwrite=not args.no_overwrite)

    print(f"Written: {report.written}")
    print(f"Skipped: {report.skipped} (already existed)")
    print(f"Errors: {report.errors}")
    for uid, message in report.failures:
        print_error(f"   {uid}: {message}")
    return 0 if not report.failures else 1


if __name__ == "__main__":
    sys.exit(main())
