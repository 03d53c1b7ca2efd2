from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class RatingSubmit(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    store_id: int | None = Field(default=None, alias="storeId")
    # strict: JSON true or "4" must not be coerced into a rating
    rating: StrictInt | None = None


class RatingOut(BaseModel):
    id: int
    user_id: int
    store_id: int
    rating: int
    created_at: datetime
    updated_at: datetime


class RatingSubmitResponse(BaseModel):
    message: str
    rating: RatingOut
