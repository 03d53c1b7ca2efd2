from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from storerate.core.errors import NotFoundError, ValidationError
from storerate.models.rating import Rating
from storerate.repos.rating_repo import RatingRepo
from storerate.repos.store_repo import StoreRepo
from storerate.services.validation import check_rating

log = logging.getLogger(__name__)


def rating_out(r: Rating) -> dict:
    return {
        "id": r.id,
        "user_id": r.user_id,
        "store_id": r.store_id,
        "rating": r.rating,
        "created_at": r.created_at,
        "updated_at": r.updated_at,
    }


async def submit_rating(db: AsyncSession, *, user_id: int, store_id: int | None, rating) -> dict:
    value = check_rating(rating)
    if store_id is None:
        raise ValidationError("Store id is required")
    if not await StoreRepo(db).get(store_id):
        raise NotFoundError("Store not found")

    row = await RatingRepo(db).upsert(user_id=user_id, store_id=store_id, rating=value)
    out = rating_out(row)
    await db.commit()
    log.info("rating upserted user_id=%s store_id=%s rating=%s", user_id, store_id, value)
    return out
