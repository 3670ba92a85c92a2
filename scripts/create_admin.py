"""
Name: Admin Bootstrap Script

Responsibilities:
  - Create an admin user (idempotent) or promote an existing one (--force-reset)
  - Hash passwords with Argon2
  - Store user in PostgreSQL through the same repository the API uses

Usage:
  DATABASE_URL=postgresql://... python scripts/create_admin.py
  python scripts/create_admin.py --email ops@example.com --full-name "Ops" --force-reset
"""

from __future__ import annotations

import argparse
import getpass
import os
import sys

from app.application.dev_seed_admin import AdminSeedOutcome, ensure_admin_user
from app.identity.auth_users import hash_password
from app.identity.users import normalize_email
from app.infrastructure.db.pool import close_pool, init_pool
from app.infrastructure.repositories.postgres import PostgresUserRepository

DEFAULT_EMAIL = "admin@example.com"
DEFAULT_PASSWORD = "admin123"
DEFAULT_FULL_NAME = "Admin User"


def _require_database_url() -> str:
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise SystemExit("DATABASE_URL is required to create a user.")
    return db_url


def _prompt_password() -> str:
    password = getpass.getpass("Password: ")
    if not password:
        raise SystemExit("Password is required.")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        raise SystemExit("Passwords do not match.")
    return password


def _parse_args(argv: list[str]) -> argparse.Namespace:
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(
        description="Create (or promote) an admin user for the catalog."
    )
    parser.add_argument(
        "--email",
        default=DEFAULT_EMAIL,
        help=f"Admin email (default: {DEFAULT_EMAIL})",
    )
    parser.add_argument(
        "--full-name",
        default=DEFAULT_FULL_NAME,
        help=f"Display name (default: {DEFAULT_FULL_NAME})",
    )
    parser.add_argument(
        "--password",
        help=f"Admin password (default: {DEFAULT_PASSWORD})",
    )
    parser.add_argument(
        "--prompt",
        action="store_true",
        help="Ask for the password interactively instead of using the default",
    )
    parser.add_argument(
        "--force-reset",
        action="store_true",
        help="If the user exists, promote it to admin and reset its password",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    email = normalize_email(args.email)
    if not email:
        raise SystemExit("Email is required.")
    password = _prompt_password() if args.prompt else (args.password or DEFAULT_PASSWORD)

    pool = init_pool(_require_database_url(), min_size=1, max_size=1)
    try:
        outcome = ensure_admin_user(
            PostgresUserRepository(pool),
            email=email,
            password=password,
            full_name=args.full_name,
            password_hasher=hash_password,
            force_reset=args.force_reset,
        )
    finally:
        close_pool()

    if outcome == AdminSeedOutcome.SKIPPED:
        print(f"User already exists: email={email} (use --force-reset to promote)")
    else:
        print(f"Admin {outcome.value}: email={email}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
