from __future__ import annotations

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.models.store import Store
from storerate.repos.listing import ListingParams, build_store_listing


class StoreRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, store_id: int) -> Store | None:
        res = await self.session.execute(select(Store).where(Store.id == store_id))
        return res.scalar_one_or_none()

    async def get_by_owner(self, user_id: int) -> Store | None:
        res = await self.session.execute(select(Store).where(Store.user_id == user_id))
        return res.scalar_one_or_none()

    async def create(self, *, user_id: int) -> Store:
        store = Store(user_id=user_id)
        self.session.add(store)
        await self.session.flush()
        return store

    async def count(self) -> int:
        res = await self.session.execute(select(func.count(Store.id)))
        return int(res.scalar_one() or 0)

    async def list_for_admin(self, params: ListingParams) -> list[dict]:
        res = await self.session.execute(build_store_listing(params))
        return [
            {
                "id": r.id,
                "user_id": r.user_id,
                "name": r.name,
                "email": r.email,
                "address": r.address,
                "average_rating": float(r.average_rating or 0),
            }
            for r in res.all()
        ]

    async def list_for_user(self, params: ListingParams, *, caller_id: int) -> list[dict]:
        res = await self.session.execute(build_store_listing(params, caller_id=caller_id))
        return [
            {
                "id": r.id,
                "name": r.name,
                "address": r.address,
                "average_rating": float(r.average_rating or 0),
                "user_rating": r.user_rating,
            }
            for r in res.all()
        ]
