import pytest
import pytest_asyncio
from sqlalchemy import func, select

from storerate.core.errors import NotFoundError, ValidationError
from storerate.models.enums import UserRole
from storerate.models.rating import Rating
from storerate.repos.rating_repo import RatingRepo
from storerate.repos.store_repo import StoreRepo
from storerate.services.ratings import submit_rating


@pytest_asyncio.fixture
async def store(app, make_user):
    owner = await make_user(name="Corner Bakery And Coffee House", email="bakery@example.com", role=UserRole.store_owner)
    async with app.state.db.sessionmaker() as s:
        return await StoreRepo(s).get_by_owner(owner["id"])


@pytest.mark.parametrize("value", [0, 6])
async def test_out_of_range(db, normal_user, store, value):
    with pytest.raises(ValidationError):
        await submit_rating(db, user_id=normal_user["id"], store_id=store.id, rating=value)


async def test_unknown_store(db, normal_user):
    with pytest.raises(NotFoundError):
        await submit_rating(db, user_id=normal_user["id"], store_id=9999, rating=3)


async def test_resubmission_overwrites_in_place(app, normal_user, store):
    async with app.state.db.sessionmaker() as s:
        first = await submit_rating(s, user_id=normal_user["id"], store_id=store.id, rating=3)
    async with app.state.db.sessionmaker() as s:
        second = await submit_rating(s, user_id=normal_user["id"], store_id=store.id, rating=5)

    assert second["id"] == first["id"]
    assert second["rating"] == 5
    assert second["created_at"] == first["created_at"]
    assert second["updated_at"] > second["created_at"]

    async with app.state.db.sessionmaker() as s:
        rows = (await s.execute(select(Rating).where(Rating.store_id == store.id))).scalars().all()
        assert len(rows) == 1
        assert rows[0].rating == 5
        assert rows[0].updated_at > rows[0].created_at


async def test_average_over_users(app, make_user, normal_user, store):
    other = await make_user(name="Second Shopper Account Two", email="second@example.com")
    async with app.state.db.sessionmaker() as s:
        await submit_rating(s, user_id=normal_user["id"], store_id=store.id, rating=2)
        await submit_rating(s, user_id=other["id"], store_id=store.id, rating=5)

    async with app.state.db.sessionmaker() as s:
        repo = RatingRepo(s)
        assert await repo.average_for_store(store.id) == pytest.approx(3.5)
        assert await repo.count_for_store(store.id) == 2
        raters = await repo.raters_for_store(store.id)
        assert {r["email"] for r in raters} == {"shopper@example.com", "second@example.com"}
        n = (await s.execute(select(func.count(Rating.id)))).scalar_one()
    assert n == 2


async def test_average_defaults_to_zero(app, store):
    async with app.state.db.sessionmaker() as s:
        assert await RatingRepo(s).average_for_store(store.id) == 0.0
