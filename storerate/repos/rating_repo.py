from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select, func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.models.rating import Rating
from storerate.models.user import User

# Dialects with INSERT ... ON CONFLICT DO UPDATE support.
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class RatingRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def upsert(self, *, user_id: int, store_id: int, rating: int) -> Rating:
        """Insert or overwrite the (user, store) rating in one statement.

        created_at is only written on first insert; updated_at moves on every call.
        """
        dialect = self.session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise RuntimeError(f"Rating upsert is not supported on dialect {dialect!r}")

        now = datetime.now(timezone.utc)
        stmt = insert(Rating).values(
            user_id=user_id,
            store_id=store_id,
            rating=rating,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Rating.user_id, Rating.store_id],
            set_={"rating": stmt.excluded.rating, "updated_at": stmt.excluded.updated_at},
        ).returning(Rating)
        res = await self.session.execute(stmt.execution_options(populate_existing=True))
        return res.scalar_one()

    async def count(self) -> int:
        res = await self.session.execute(select(func.count(Rating.id)))
        return int(res.scalar_one() or 0)

    async def count_for_store(self, store_id: int) -> int:
        res = await self.session.execute(select(func.count(Rating.id)).where(Rating.store_id == store_id))
        return int(res.scalar_one() or 0)

    async def average_for_store(self, store_id: int) -> float:
        res = await self.session.execute(
            select(func.coalesce(func.avg(Rating.rating), 0)).where(Rating.store_id == store_id)
        )
        return float(res.scalar_one() or 0)

    async def raters_for_store(self, store_id: int) -> list[dict]:
        res = await self.session.execute(
            select(User.id, User.name, User.email, Rating.rating, Rating.created_at, Rating.updated_at)
            .select_from(Rating)
            .join(User, Rating.user_id == User.id)
            .where(Rating.store_id == store_id)
            .order_by(Rating.created_at.desc(), Rating.id.desc())
        )
        return [
            {
                "id": r.id,
                "name": r.name,
                "email": r.email,
                "rating": r.rating,
                "created_at": r.created_at,
                "updated_at": r.updated_at,
            }
            for r in res.all()
        ]
