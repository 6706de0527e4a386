from fastapi import Depends

from filmorate_api.core.config import settings
from filmorate_api.db.memory import get_memory_store
from filmorate_api.db.postgres import get_pool
from filmorate_api.models.reference import Genre, MpaRating
from filmorate_api.services.film_service import FilmService
from filmorate_api.services.repositories.base import (
    FilmsRepo,
    ReferenceRepo,
    UsersRepo,
)
from filmorate_api.services.repositories.films_repo import PgFilmsRepo
from filmorate_api.services.repositories.memory_repo import (
    MemoryFilmsRepo,
    MemoryUsersRepo,
)
from filmorate_api.services.repositories.reference_repo import (
    memory_genres_repo,
    memory_mpa_repo,
    pg_genres_repo,
    pg_mpa_repo,
)
from filmorate_api.services.repositories.users_repo import PgUsersRepo
from filmorate_api.services.user_service import UserService


def use_memory() -> bool:
    return settings.storage == "memory"


async def get_films_repo() -> FilmsRepo:
    if use_memory():
        return MemoryFilmsRepo(get_memory_store())
    return PgFilmsRepo(await get_pool())


async def get_users_repo() -> UsersRepo:
    if use_memory():
        return MemoryUsersRepo(get_memory_store())
    return PgUsersRepo(await get_pool())


async def get_genres_repo() -> ReferenceRepo[Genre]:
    if use_memory():
        return memory_genres_repo()
    return pg_genres_repo(await get_pool())


async def get_mpa_repo() -> ReferenceRepo[MpaRating]:
    if use_memory():
        return memory_mpa_repo()
    return pg_mpa_repo(await get_pool())


async def get_user_service(
        users: UsersRepo = Depends(get_users_repo),
) -> UserService:
    return UserService(users)


async def get_film_service(
        films: FilmsRepo = Depends(get_films_repo),
        users: UsersRepo = Depends(get_users_repo),
        genres: ReferenceRepo[Genre] = Depends(get_genres_repo),
        mpa: ReferenceRepo[MpaRating] = Depends(get_mpa_repo),
) -> FilmService:
    # фильмам нужны пользователи: лайк ставит существующий user
    return FilmService(films, users, genres, mpa)
