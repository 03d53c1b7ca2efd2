from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.access import require_store_owner
from storerate.api.deps import get_db
from storerate.core.errors import NotFoundError
from storerate.core.security import TokenIdentity
from storerate.repos.rating_repo import RatingRepo
from storerate.repos.store_repo import StoreRepo
from storerate.schemas.stores import StoreDashboardOut

router = APIRouter()


@router.get("/dashboard", response_model=StoreDashboardOut)
async def dashboard(
    identity: TokenIdentity = Depends(require_store_owner),
    db: AsyncSession = Depends(get_db),
):
    # Scoped to the caller's own store; no store is a 404, not a 403.
    store = await StoreRepo(db).get_by_owner(identity.id)
    if not store:
        raise NotFoundError("Store not found")

    ratings = RatingRepo(db)
    raters = await ratings.raters_for_store(store.id)
    return StoreDashboardOut(
        storeId=store.id,
        averageRating=await ratings.average_for_store(store.id),
        totalRatings=await ratings.count_for_store(store.id),
        ratedBy=raters,
    )
