"""Seed an admin account.

    python -m storerate.scripts.create_admin --email admin@storerate.com --password 'Admin@123'
"""
from __future__ import annotations

import argparse
import asyncio
import sys

from storerate.core.config import get_settings
from storerate.core.db import Database
from storerate.core.errors import DuplicateEmailError, ValidationError
from storerate.core.security import PasswordHasher
from storerate.models.enums import UserRole
from storerate.services.accounts import create_admin_managed_user

DEFAULT_NAME = "System Administrator User"
DEFAULT_ADDRESS = "123 Admin Street, City, State, ZIP"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Create an admin user")
    p.add_argument("--email", required=True)
    p.add_argument("--password", required=True)
    p.add_argument("--name", default=DEFAULT_NAME)
    p.add_argument("--address", default=DEFAULT_ADDRESS)
    return p.parse_args(argv)


async def create_admin(args: argparse.Namespace, db: Database, hasher: PasswordHasher) -> int:
    async with db.sessionmaker() as session:
        try:
            user = await create_admin_managed_user(
                session,
                hasher,
                name=args.name,
                email=args.email,
                address=args.address,
                password=args.password,
                role=UserRole.admin,
            )
        except DuplicateEmailError:
            print(f"[create-admin] {args.email} already exists, nothing to do")
            return 0
        except ValidationError as e:
            print(f"[create-admin] {e.message}", file=sys.stderr)
            return 2
    print(f"[create-admin] created admin id={user['id']} email={user['email']}")
    return 0


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    db = Database.from_settings(settings)
    try:
        return await create_admin(args, db, PasswordHasher(rounds=settings.BCRYPT_ROUNDS))
    finally:
        await db.dispose()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
