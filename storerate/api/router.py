from __future__ import annotations

from fastapi import APIRouter, Depends

from storerate.api.access import require_admin
from storerate.api.routes import health, auth, admin, stores, ratings, store_owner

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(admin.router, prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])
router.include_router(stores.router, prefix="/stores", tags=["stores"])
router.include_router(ratings.router, prefix="/ratings", tags=["ratings"])
router.include_router(store_owner.router, prefix="/store", tags=["store-owner"])
