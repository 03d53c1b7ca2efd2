from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class StoreOut(BaseModel):
    id: int
    name: str
    address: str
    average_rating: float = 0.0
    user_rating: int | None = None


class RaterOut(BaseModel):
    id: int
    name: str
    email: str
    rating: int
    created_at: datetime
    updated_at: datetime


class StoreDashboardOut(BaseModel):
    storeId: int
    averageRating: float = 0.0
    totalRatings: int = 0
    ratedBy: list[RaterOut] = []
