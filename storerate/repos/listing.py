"""Filterable, sortable listing statements for stores and users.

Filter values are always bound parameters. Sort keys are looked up in a fixed
column map, so raw ``sortBy`` / ``sortOrder`` input never reaches the SQL text.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field

from sqlalchemy import Select, and_, case, false, func, null, select
from sqlalchemy.orm import aliased

from storerate.models.enums import UserRole
from storerate.models.rating import Rating
from storerate.models.store import Store
from storerate.models.user import User

DEFAULT_SORT = "name"

ADMIN_STORE_SORTS = ("name", "email", "address", "rating")
USER_STORE_SORTS = ("name", "address", "rating")
USER_SORTS = ("name", "email", "address", "role", "rating")


class SortOrder(str, enum.Enum):
    asc = "asc"
    desc = "desc"

    @classmethod
    def parse(cls, raw: str | None) -> "SortOrder":
        if raw and raw.strip().lower() == cls.desc.value:
            return cls.desc
        return cls.asc


@dataclass(frozen=True)
class ListingParams:
    filters: dict[str, str] = field(default_factory=dict)
    sort_by: str = DEFAULT_SORT
    sort_order: SortOrder = SortOrder.asc

    @classmethod
    def build(
        cls,
        *,
        filters: dict[str, str | None],
        sort_by: str | None,
        sort_order: str | None,
        allowed_sorts: tuple[str, ...],
    ) -> "ListingParams":
        clean = {k: v for k, v in filters.items() if v is not None and v.strip()}
        return cls(filters=clean, sort_by=resolve_sort(sort_by, allowed_sorts), sort_order=SortOrder.parse(sort_order))


def resolve_sort(raw: str | None, allowed: tuple[str, ...]) -> str:
    key = (raw or "").strip().lower()
    return key if key in allowed else DEFAULT_SORT


def _like(value: str) -> str:
    return f"%{value.strip()}%"


def _apply_order(stmt: Select, column, order: SortOrder, tiebreak, *, nulls_last: bool = False) -> Select:
    primary = column.desc() if order is SortOrder.desc else column.asc()
    if nulls_last:
        primary = primary.nulls_last()
    return stmt.order_by(primary, tiebreak.asc())


def build_store_listing(params: ListingParams, *, caller_id: int | None = None) -> Select:
    """Stores with their owner's fields and average rating.

    With ``caller_id`` the caller's own rating is joined in as ``user_rating``
    (null when the caller has not rated the store).
    """
    average_rating = func.coalesce(func.avg(Rating.rating), 0).label("average_rating")

    stmt = (
        select(
            Store.id.label("id"),
            User.id.label("user_id"),
            User.name.label("name"),
            User.email.label("email"),
            User.address.label("address"),
            average_rating,
        )
        .select_from(Store)
        .join(User, Store.user_id == User.id)
        .outerjoin(Rating, Rating.store_id == Store.id)
    )
    group_by = [Store.id, User.id, User.name, User.email, User.address]

    if caller_id is not None:
        mine = aliased(Rating, name="my_rating")
        stmt = stmt.outerjoin(mine, and_(mine.store_id == Store.id, mine.user_id == caller_id))
        stmt = stmt.add_columns(mine.rating.label("user_rating"))
        group_by.append(mine.rating)

    f = params.filters
    if "name" in f:
        stmt = stmt.where(User.name.ilike(_like(f["name"])))
    if "email" in f:
        stmt = stmt.where(User.email.ilike(_like(f["email"])))
    if "address" in f:
        stmt = stmt.where(User.address.ilike(_like(f["address"])))

    sort_columns = {
        "name": User.name,
        "email": User.email,
        "address": User.address,
        "rating": average_rating,
    }
    stmt = stmt.group_by(*group_by)
    return _apply_order(stmt, sort_columns[params.sort_by], params.sort_order, Store.id)


def build_user_listing(params: ListingParams) -> Select:
    """Users, with their store's average rating when they own one."""
    store_average = case(
        (Store.id.is_(None), null()),
        else_=func.coalesce(func.avg(Rating.rating), 0),
    ).label("average_rating")

    stmt = (
        select(User.id, User.name, User.email, User.address, User.role, store_average)
        .select_from(User)
        .outerjoin(Store, Store.user_id == User.id)
        .outerjoin(Rating, Rating.store_id == Store.id)
    )

    f = params.filters
    if "name" in f:
        stmt = stmt.where(User.name.ilike(_like(f["name"])))
    if "email" in f:
        stmt = stmt.where(User.email.ilike(_like(f["email"])))
    if "address" in f:
        stmt = stmt.where(User.address.ilike(_like(f["address"])))
    if "role" in f:
        role = UserRole.parse(f["role"].strip())
        # exact match; an unknown role matches nothing
        stmt = stmt.where(User.role == role.value) if role else stmt.where(false())

    sort_columns = {
        "name": User.name,
        "email": User.email,
        "address": User.address,
        "role": User.role,
        "rating": store_average,
    }
    stmt = stmt.group_by(User.id, User.name, User.email, User.address, User.role, Store.id)
    # users without a store have no rating and sort after owners either way
    return _apply_order(
        stmt, sort_columns[params.sort_by], params.sort_order, User.id, nulls_last=params.sort_by == "rating"
    )
