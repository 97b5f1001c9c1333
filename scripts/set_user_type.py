#!/usr/bin/env python3
"""
Change a user's plan (basic, premium or admin).

There is no payment flow; plans are granted by an operator with this script
or through PUT /admin/users/{user_id}/user-type. Run from project root:
  python scripts/set_user_type.py --email you@example.com --user-type premium
  python scripts/set_user_type.py --user-id 5cff2718-2d6a-42ba-aab8-ce494aad3074 --user-type admin

Requires: DATABASE_URL in environment (.env or export).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Run from project root; ensure content_studio is importable
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv(project_root / ".env")
load_dotenv(project_root / ".env.local")

from content_studio.core.logging import configure_logging
from content_studio.db.session import get_sessionmaker
from content_studio.models.user import UserType
from content_studio.services.user_service import set_user_type
from content_studio.stores.sql import SqlStore


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Change the plan of a user")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--email", help="Email of the user")
    target.add_argument("--user-id", help="Id of the user")
    parser.add_argument(
        "--user-type",
        required=True,
        choices=[user_type.value for user_type in UserType],
        help="New plan",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging()

    db = get_sessionmaker()()
    try:
        store = SqlStore(db)
        if args.email:
            user = store.find_user_by_email(args.email)
            if not user:
                print(f"❌ No user with email {args.email}")
                return 1
            user_id = user.id
        else:
            user_id = args.user_id

        user = set_user_type(store, user_id, UserType(args.user_type))
        if not user:
            print(f"❌ No user with id {user_id}")
            return 1

        print(f"✅ {user.email} is now {args.user_type}")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
