#!/usr/bin/env python
"""Check that the service account can reach Firebase Auth and Firestore."""
from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from admin_tool.cli import configure_logging, load_script_config, print_error
from admin_tool.clients import build_services
from admin_tool.errors import AdminToolError


def main() -> int:
    configure_logging()

    try:
        config = load_script_config()
    except AdminToolError as exc:
        print_error(str(exc))
        return 1

    print(f"Using credentials: {config.credentials_path}")
    print(f"Target project: {config.project_id}")

    try:
        services = build_services(config)
        users, _next_token = services.provider.list_page(page_size=1)
        print(f"Firebase Auth reachable: first page returned {len(users)} user(s).")
        if users:
            exists = services.store.exists(users[0].uid)
            state = "present" if exists else "missing"
            print(f"Firestore reachable: {config.users_collection}/{users[0].uid} is {state}.")
    except AdminToolError as exc:
        print_error(f"Firebase check failed: {exc}")
        return 1

    print("Firebase Admin SDK initialized successfully with .env configuration.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
