from __future__ import annotations

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.models.user import User
from storerate.repos.listing import ListingParams, build_user_listing


class UserRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> User | None:
        res = await self.session.execute(select(User).where(User.email == email))
        return res.scalar_one_or_none()

    async def get(self, user_id: int) -> User | None:
        res = await self.session.execute(select(User).where(User.id == user_id))
        return res.scalar_one_or_none()

    async def create(self, *, name: str, email: str, password_hash: str, address: str, role: str) -> User:
        user = User(name=name, email=email, password_hash=password_hash, address=address, role=role)
        self.session.add(user)
        await self.session.flush()
        return user

    async def set_password_hash(self, user: User, password_hash: str) -> None:
        user.password_hash = password_hash
        await self.session.flush()

    async def count(self) -> int:
        res = await self.session.execute(select(func.count(User.id)))
        return int(res.scalar_one() or 0)

    async def list_filtered(self, params: ListingParams) -> list[dict]:
        res = await self.session.execute(build_user_listing(params))
        return [
            {
                "id": r.id,
                "name": r.name,
                "email": r.email,
                "address": r.address,
                "role": r.role,
                "average_rating": float(r.average_rating) if r.average_rating is not None else None,
            }
            for r in res.all()
        ]
