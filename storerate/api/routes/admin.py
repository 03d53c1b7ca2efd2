from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.deps import get_db, get_hasher
from storerate.core.security import PasswordHasher
from storerate.repos.listing import ADMIN_STORE_SORTS, USER_SORTS, ListingParams
from storerate.repos.rating_repo import RatingRepo
from storerate.repos.store_repo import StoreRepo
from storerate.repos.user_repo import UserRepo
from storerate.schemas.admin import AdminDashboardOut, AdminStoreOut, AdminUserCreate, AdminUserOut
from storerate.schemas.auth import SignupResponse
from storerate.services import accounts

# Role gate (admin only) is attached where this router is mounted.
router = APIRouter()


@router.get("/dashboard", response_model=AdminDashboardOut)
async def dashboard(db: AsyncSession = Depends(get_db)):
    return AdminDashboardOut(
        totalUsers=await UserRepo(db).count(),
        totalStores=await StoreRepo(db).count(),
        totalRatings=await RatingRepo(db).count(),
    )


@router.post("/users", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: AdminUserCreate,
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
):
    user = await accounts.create_admin_managed_user(
        db,
        hasher,
        name=payload.name,
        email=payload.email,
        address=payload.address,
        password=payload.password,
        role=payload.role,
    )
    return {"message": "User created successfully", "user": user}


@router.get("/stores", response_model=list[AdminStoreOut])
async def list_stores(
    name: str | None = None,
    email: str | None = None,
    address: str | None = None,
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
    db: AsyncSession = Depends(get_db),
):
    params = ListingParams.build(
        filters={"name": name, "email": email, "address": address},
        sort_by=sort_by,
        sort_order=sort_order,
        allowed_sorts=ADMIN_STORE_SORTS,
    )
    return await StoreRepo(db).list_for_admin(params)


@router.get("/users", response_model=list[AdminUserOut])
async def list_users(
    name: str | None = None,
    email: str | None = None,
    address: str | None = None,
    role: str | None = None,
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
    db: AsyncSession = Depends(get_db),
):
    params = ListingParams.build(
        filters={"name": name, "email": email, "address": address, "role": role},
        sort_by=sort_by,
        sort_order=sort_order,
        allowed_sorts=USER_SORTS,
    )
    return await UserRepo(db).list_filtered(params)
