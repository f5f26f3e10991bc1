#!/usr/bin/env python
"""Manage the Firebase admin role (role=admin custom claim) by email.

Usage:
  python scripts/admin_manager.py add-admin <email>
  python scripts/admin_manager.py remove-admin <email>
  python scripts/admin_manager.py list-admins
  python scripts/admin_manager.py check-admin <email>
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from admin_tool.cli import configure_logging, format_timestamp, load_script_config, print_error
from admin_tool.clients import build_identity_provider
from admin_tool.config import AdminConfig
from admin_tool.errors import ConfigurationError, LookupNotFoundError, TransportError
from admin_tool.roles import assign_admin, check_admin, list_admins, revoke_admin
from admin_tool.user_service import FirebaseIdentityProvider

EMAIL_COMMANDS = ("add-admin", "remove-admin", "check-admin")
COMMANDS = EMAIL_COMMANDS + ("list-admins", "help")

USAGE_EPILOG = """\
commands:
  add-admin <email>      Add admin role to user
  remove-admin <email>   Remove admin role from user
  list-admins            List all admin users
  check-admin <email>    Check if user is admin
  help                   Show this help message

The user must be registered in Firebase Auth before adding the admin role.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="admin_manager.py",
        description="Grant, revoke and inspect the Firebase admin role.",
        epilog=USAGE_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("command", nargs="?", help="One of: " + ", ".join(COMMANDS))
    parser.add_argument("email", nargs="?", help="Email of the Firebase user")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log SDK activity to stderr.")
    return parser


def add_admin(provider: FirebaseIdentityProvider, config: AdminConfig, email: str) -> None:
    print(f"Looking up user: {email}")
    change = assign_admin(
        provider,
        email,
        tenant_id=config.tenant_id,
        preserve_existing=config.preserve_claims,
    )
    print("Admin role assigned.")
    print(f"   User: {email}")
    print(f"   UID: {change.user.uid}")
    print(f"   Company: {change.claims['company']}")
    print("Note: existing sessions keep their old claims until the ID token is refreshed.")


def remove_admin(provider: FirebaseIdentityProvider, config: AdminConfig, email: str) -> None:
    print(f"Looking up user: {email}")
    change = revoke_admin(provider, email, preserve_existing=config.preserve_claims)
    print("Admin role removed.")
    print(f"   User: {email}")
    print(f"   UID: {change.user.uid}")


def show_admins(provider: FirebaseIdentityProvider, config: AdminConfig) -> None:
    print("Scanning all users for admin roles...")
    admins = list_admins(provider, page_size=config.page_size)
    if not admins:
        print("No admin users found.")
        return

    print(f"Found {len(admins)} admin user(s):")
    for index, admin in enumerate(admins, start=1):
        print(f"{index}. {admin.email}")
        print(f"   UID: {admin.uid}")
        print(f"   Company: {admin.tenant_id or 'Not set'}")
        print(f"   Assigned: {admin.assigned_at or 'Unknown'}")
        print(f"   Last Sign In: {format_timestamp(admin.last_sign_in)}")


def show_admin_status(provider: FirebaseIdentityProvider, email: str) -> None:
    print(f"Checking admin status for: {email}")
    result = check_admin(provider, email)
    user = result.user

    print("User Details:")
    print(f"   Email: {user.email}")
    print(f"   UID: {user.uid}")
    print(f"   Email Verified: {user.email_verified}")
    print(f"   Created: {format_timestamp(user.created_at, 'Unknown')}")
    print(f"   Last Sign In: {format_timestamp(user.last_sign_in)}")

    print("Custom Claims:")
    if not result.claims:
        print("   No custom claims set")
    for key, value in result.claims.items():
        print(f"   {key}: {value}")

    print(f"Admin Status: {'YES' if result.is_admin else 'NO'}")


def run_command(command: str, email: str | None, config: AdminConfig, provider: FirebaseIdentityProvider) -> None:
    if command == "add-admin":
        add_admin(provider, config, email or "")
    elif command == "remove-admin":
        remove_admin(provider, config, email or "")
    elif command == "check-admin":
        show_admin_status(provider, email or "")
    else:
        show_admins(provider, config)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args, extras = parser.parse_known_args(argv)
    command = args.command

    if extras:
        print_error(f"Unrecognized arguments: {' '.join(extras)}")
        parser.print_help(sys.stderr)
        return 1

    if command == "help":
        parser.print_help()
        return 0
    if command not in COMMANDS:
        print_error(f"Unknown command: {command}" if command else "A command is required.")
        parser.print_help(sys.stderr)
        return 1
    if command in EMAIL_COMMANDS and not args.email:
        print_error(f"Email required for {command} command")
        parser.print_help(sys.stderr)
        return 1

    configure_logging(args.verbose)

    try:
        config = load_script_config()
        provider = build_identity_provider(config)
        run_command(command, args.email, config, provider)
    except ConfigurationError as exc:
        print_error(f"Failed to initialize Firebase Admin SDK: {exc}")
        return 1
    except LookupNotFoundError as exc:
        print_error(f"User not found: {exc.email}. The user must sign up first.")
        return 1
    except TransportError as exc:
        print_error(f"Firebase request failed: {exc}")
        return 1
    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
