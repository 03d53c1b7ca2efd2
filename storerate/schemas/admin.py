from __future__ import annotations

from pydantic import BaseModel


class AdminUserCreate(BaseModel):
    name: str | None = None
    email: str | None = None
    address: str | None = None
    password: str | None = None
    role: str | None = None


class AdminDashboardOut(BaseModel):
    """Frontend expects camelCase keys here."""

    totalUsers: int = 0
    totalStores: int = 0
    totalRatings: int = 0


class AdminStoreOut(BaseModel):
    id: int
    user_id: int
    name: str
    email: str
    address: str
    average_rating: float = 0.0


class AdminUserOut(BaseModel):
    id: int
    name: str
    email: str
    address: str
    role: str
    # only set for store owners
    average_rating: float | None = None
