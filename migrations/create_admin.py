#!/usr/bin/env python3
"""
Create an admin account, or reset the password of an existing one.

Run with: python -m migrations.create_admin USERNAME [--email EMAIL]
The password is prompted for and never echoed.
"""

import argparse
import asyncio
import getpass
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dsolar.database import ADMINS, close_client, ensure_indexes, get_database  # noqa: E402
from dsolar.security_utils import hash_password  # noqa: E402
from dsolar.shared.dates import utc_now  # noqa: E402

MIN_PASSWORD_LENGTH = 8


async def upsert_admin(db, username: str, password: str, email: str | None = None) -> bool:
    """Returns True when a new admin was created, False when an existing one was updated"""
    await ensure_indexes(db)
    fields = {"password": hash_password(password), "updated_at": utc_now()}
    if email:
        fields["email"] = email
    result = await db[ADMINS].update_one(
        {"username": username},
        {"$set": fields, "$setOnInsert": {"username": username, "created_at": utc_now()}},
        upsert=True,
    )
    return result.upserted_id is not None


async def main(username: str, email: str | None) -> int:
    password = getpass.getpass("Password: ")
    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"❌ Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return 1
    if password != getpass.getpass("Confirm password: "):
        print("❌ Passwords do not match")
        return 1

    try:
        created = await upsert_admin(get_database(), username, password, email)
    finally:
        await close_client()

    print(f"✅ Admin '{username}' {'created' if created else 'updated'}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or reset an admin account")
    parser.add_argument("username")
    parser.add_argument("--email", default=None)
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.username.strip(), args.email)))
