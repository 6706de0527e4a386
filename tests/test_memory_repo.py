"""Contract checks for the in-memory repositories."""

from datetime import date

import pytest

from filmorate_api.core.exceptions import DuplicatedDataError, NotFoundError
from filmorate_api.db.memory import MemoryStore
from filmorate_api.models.films import Film
from filmorate_api.models.reference import MpaRating
from filmorate_api.models.users import FriendshipStatus, User
from filmorate_api.services.repositories.memory_repo import (
    MemoryFilmsRepo,
    MemoryUsersRepo,
)
from filmorate_api.services.repositories.reference_repo import (
    memory_genres_repo,
    memory_mpa_repo,
)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


def film(**kw) -> Film:
    return Film(name=kw.pop("name", "F"), release_date=date(2000, 1, 1),
                duration=90, mpa=MpaRating(id=1, name="G"), **kw)


def user(email: str) -> User:
    return User(email=email, login=email.split("@")[0], name="n",
                birthday=date(1990, 1, 1))


async def test_ids_are_sequential_and_update_needs_existing(store):
    repo = MemoryFilmsRepo(store)
    first = await repo.create(film())
    second = await repo.create(film())
    assert (first.id, second.id) == (1, 2)

    with pytest.raises(NotFoundError):
        await repo.update(film(id=99))
    with pytest.raises(NotFoundError):
        await repo.delete(99)


async def test_returned_models_are_copies(store):
    repo = MemoryFilmsRepo(store)
    created = await repo.create(film())
    created.likes.add(7)
    created.name = "changed"

    stored = await repo.find_by_id(created.id)
    assert stored.likes == set()
    assert stored.name == "F"


async def test_like_add_remove(store):
    repo = MemoryFilmsRepo(store)
    created = await repo.create(film())
    await repo.add_like(created.id, 5)
    await repo.add_like(created.id, 5)
    assert (await repo.find_by_id(created.id)).likes == {5}
    assert await repo.remove_like(created.id, 5) is True
    assert await repo.remove_like(created.id, 5) is False
    with pytest.raises(NotFoundError):
        await repo.add_like(99, 5)


async def test_email_unique_on_create_and_update(store):
    repo = MemoryUsersRepo(store)
    a = await repo.create(user("a@x.com"))
    b = await repo.create(user("b@x.com"))
    assert await repo.exists_by_email("a@x.com")
    assert not await repo.exists_by_email("c@x.com")

    with pytest.raises(DuplicatedDataError):
        await repo.create(user("a@x.com"))
    with pytest.raises(DuplicatedDataError):
        await repo.update(b.model_copy(update={"email": "a@x.com"}))
    await repo.update(a.model_copy(update={"name": "same email ok"}))


async def test_friend_edges_upsert_and_sorted(store):
    repo = MemoryUsersRepo(store)
    a, b, c = [await repo.create(user(f"{n}@x.com")) for n in "abc"]
    await repo.save_friendship(a.id, c.id, FriendshipStatus.unconfirmed)
    await repo.save_friendship(a.id, b.id, FriendshipStatus.unconfirmed)
    await repo.save_friendship(a.id, c.id, FriendshipStatus.confirmed)

    stored = await repo.find_by_id(a.id)
    assert stored.friend_ids() == [b.id, c.id]
    assert stored.edge_to(c.id).status is FriendshipStatus.confirmed
    assert await repo.remove_friendship(a.id, b.id) is True
    assert await repo.remove_friendship(a.id, b.id) is False


async def test_user_delete_cascades(store):
    films, users = MemoryFilmsRepo(store), MemoryUsersRepo(store)
    a, b = await users.create(user("a@x.com")), await users.create(user("b@x.com"))
    f = await films.create(film())
    await films.add_like(f.id, b.id)
    await users.save_friendship(a.id, b.id, FriendshipStatus.unconfirmed)

    await users.delete(b.id)

    assert (await films.find_by_id(f.id)).likes == set()
    assert (await users.find_by_id(a.id)).friends == []


async def test_reference_lookup():
    genres, mpa = memory_genres_repo(), memory_mpa_repo()
    assert len(await genres.find_all()) == 6
    assert len(await mpa.find_all()) == 5
    assert await genres.exists(6) and not await genres.exists(7)
    with pytest.raises(NotFoundError):
        await mpa.find_by_id(6)
