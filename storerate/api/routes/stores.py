from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.access import require_authenticated
from storerate.api.deps import get_db
from storerate.core.security import TokenIdentity
from storerate.repos.listing import USER_STORE_SORTS, ListingParams
from storerate.repos.store_repo import StoreRepo
from storerate.schemas.stores import StoreOut

router = APIRouter()


@router.get("", response_model=list[StoreOut])
async def list_stores(
    name: str | None = None,
    address: str | None = None,
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
    identity: TokenIdentity = Depends(require_authenticated),
    db: AsyncSession = Depends(get_db),
):
    params = ListingParams.build(
        filters={"name": name, "address": address},
        sort_by=sort_by,
        sort_order=sort_order,
        allowed_sorts=USER_STORE_SORTS,
    )
    return await StoreRepo(db).list_for_user(params, caller_id=identity.id)
