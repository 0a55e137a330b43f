#!/usr/bin/env python3
# =============================================================================
# scripts/create_admin.py - Bootstrap an Admin User
# =============================================================================
# Creates an admin user in Supabase Auth. The admin role is stored in the
# user's metadata ({"role": "admin", "username": ...}), which is what the
# API's admin guard checks.
#
# Usage:
#   poetry run python scripts/create_admin.py --email admin@karmic.com --password '...'
#
#   # Or take DEFAULT_ADMIN_EMAIL / DEFAULT_ADMIN_PASSWORD from .env
#   poetry run python scripts/create_admin.py
#
# Prerequisites:
#   - SUPABASE_URL and SUPABASE_SERVICE_KEY must be set (.env file)
# =============================================================================

import argparse
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.auth.models import ADMIN_ROLE
from app.config import settings
from lib.supabase_client import SupabaseClient

logger = logging.getLogger("create_admin")


def find_user(client, email: str):
    """Return the Supabase Auth user with this email, or None."""
    users = client.auth.admin.list_users()
    return next((user for user in users if (user.email or "").lower() == email.lower()), None)


def create_admin(email: str, password: str, username: str) -> bool:
    """
    Create the admin user unless one with this email already exists.

    Returns:
        True if a user was created, False if it already existed
    """
    client = SupabaseClient.get_client()

    existing = find_user(client, email)
    if existing:
        logger.info(f"Admin user already exists: {existing.email}")
        return False

    response = client.auth.admin.create_user({
        "email": email,
        "password": password,
        # Created server-side, no confirmation email needed
        "email_confirm": True,
        "user_metadata": {
            "role": ADMIN_ROLE,
            "username": username,
        },
    })

    logger.info(f"Admin user created in Supabase Auth: {response.user.email}")
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the catalog admin user in Supabase Auth")
    parser.add_argument("--email", default=settings.DEFAULT_ADMIN_EMAIL, help="Admin email (login name)")
    parser.add_argument("--password", default=settings.DEFAULT_ADMIN_PASSWORD, help="Admin password")
    parser.add_argument("--username", default=settings.DEFAULT_ADMIN_USERNAME, help="Display username")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")

    if not args.password:
        logger.error("No password given: pass --password or set DEFAULT_ADMIN_PASSWORD")
        return 1

    try:
        create_admin(args.email, args.password, args.username)
    except Exception as e:
        logger.error(f"Error creating admin: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
