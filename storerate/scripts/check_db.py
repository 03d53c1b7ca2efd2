"""Check that the configured database is reachable.

    python -m storerate.scripts.check_db
"""
from __future__ import annotations

import asyncio
import sys

from sqlalchemy import text
from sqlalchemy.engine import make_url

from storerate.core.config import get_database_settings
from storerate.core.db import Database


def masked_url(url: str) -> str:
    return make_url(url).render_as_string(hide_password=True)


async def check(db: Database) -> object:
    async with db.engine.connect() as conn:
        res = await conn.execute(text("SELECT CURRENT_TIMESTAMP"))
        return res.scalar_one()


async def main() -> int:
    settings = get_database_settings()
    print(f"[check-db] connecting to {masked_url(settings.DATABASE_URL)}")
    db = Database.from_settings(settings)
    try:
        now = await check(db)
    except Exception as e:
        print(f"[check-db] connection failed: {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    finally:
        await db.dispose()
    print(f"[check-db] ok, server time {now}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
