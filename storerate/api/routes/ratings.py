from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.access import require_user
from storerate.api.deps import get_db
from storerate.core.security import TokenIdentity
from storerate.schemas.ratings import RatingSubmit, RatingSubmitResponse
from storerate.services.ratings import submit_rating

router = APIRouter()


@router.post("", response_model=RatingSubmitResponse)
async def submit(
    payload: RatingSubmit,
    identity: TokenIdentity = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    row = await submit_rating(db, user_id=identity.id, store_id=payload.store_id, rating=payload.rating)
    return {"message": "Rating submitted successfully", "rating": row}
