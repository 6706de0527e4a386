from datetime import date

from filmorate_api.core.config import settings
from filmorate_api.db.memory import get_memory_store, reset_memory_store
from filmorate_api.dependencies import (
    get_film_service,
    get_films_repo,
    get_genres_repo,
    get_mpa_repo,
    get_user_service,
    get_users_repo,
)
from filmorate_api.models.films import Film
from filmorate_api.models.reference import MpaRating
from filmorate_api.models.users import User
from filmorate_api.services.repositories.memory_repo import (
    MemoryFilmsRepo,
    MemoryUsersRepo,
)
from filmorate_api.services.repositories.reference_repo import (
    MemoryReferenceRepo,
)


def test_tests_run_on_memory_storage():
    assert settings.storage == "memory"


async def test_memory_repos_are_selected():
    assert isinstance(await get_films_repo(), MemoryFilmsRepo)
    assert isinstance(await get_users_repo(), MemoryUsersRepo)
    assert isinstance(await get_genres_repo(), MemoryReferenceRepo)
    assert isinstance(await get_mpa_repo(), MemoryReferenceRepo)


async def test_film_and_user_services_share_one_store():
    film_svc = await get_film_service(await get_films_repo(),
                                      await get_users_repo(),
                                      await get_genres_repo(),
                                      await get_mpa_repo())
    user_svc = await get_user_service(await get_users_repo())

    user = await user_svc.create_user(
        User(email="a@b.com", login="a", birthday=date(1990, 1, 1)))
    film = await film_svc.create_film(
        Film(name="F", release_date=date(2000, 1, 1), duration=90,
             mpa=MpaRating(id=1)))
    await film_svc.add_like(film.id, user.id)
    assert (await film_svc.get_film(film.id)).likes == {user.id}


def test_memory_store_is_singleton_until_reset():
    first = get_memory_store()
    assert get_memory_store() is first
    reset_memory_store()
    assert get_memory_store() is not first
