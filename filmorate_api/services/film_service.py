"""Service layer for films: CRUD orchestration, likes and popularity."""

from __future__ import annotations

import logging

from filmorate_api.core.exceptions import NotFoundError, ValidationError
from filmorate_api.models.films import Film
from filmorate_api.models.reference import Genre, MpaRating
from filmorate_api.services.validators import validate_film
from .repositories.base import FilmsRepo, ReferenceRepo, UsersRepo

log = logging.getLogger(__name__)

DEFAULT_POPULAR_COUNT = 10


class FilmService:
    """Films with their likes; users are only resolved, never changed."""

    def __init__(
        self,
        films: FilmsRepo,
        users: UsersRepo,
        genres: ReferenceRepo[Genre],
        mpa: ReferenceRepo[MpaRating],
    ) -> None:
        self.films = films
        self.users = users
        self.genres = genres
        self.mpa = mpa

    # ----- READ -----

    async def list_films(self) -> list[Film]:
        return await self.films.find_all()

    async def get_film(self, film_id: int) -> Film:
        film = await self.films.find_by_id(film_id)
        if film is None:
            raise NotFoundError(f"Film with id {film_id} not found")
        return film

    # ----- WRITE -----

    async def create_film(self, film: Film) -> Film:
        validate_film(film)
        await self._resolve_references(film)
        await self._ensure_users(film.likes)
        film.id = None
        created = await self.films.create(film)
        log.info("film_created", extra={"film_id": created.id})
        return created

    async def update_film(self, film: Film) -> Film:
        """Full overwrite; likes are kept when the body does not carry them."""
        if film.id is None:
            raise ValidationError("Film id must be specified")
        existing = await self.get_film(film.id)
        validate_film(film)
        await self._resolve_references(film)
        if "likes" in film.model_fields_set:
            await self._ensure_users(film.likes)
        else:
            film.likes = existing.likes
        return await self.films.update(film)

    async def delete_film(self, film_id: int) -> None:
        await self.films.delete(film_id)

    # ----- LIKES -----

    async def add_like(self, film_id: int, user_id: int) -> None:
        await self.get_film(film_id)
        await self._ensure_user(user_id)
        await self.films.add_like(film_id, user_id)
        log.info("like_added", extra={"film_id": film_id, "user_id": user_id})

    async def remove_like(self, film_id: int, user_id: int) -> None:
        await self.get_film(film_id)
        await self._ensure_user(user_id)
        removed = await self.films.remove_like(film_id, user_id)
        log.info("like_removed",
                 extra={"film_id": film_id, "user_id": user_id,
                        "existed": removed})

    async def get_popular(
        self,
        count: int = DEFAULT_POPULAR_COUNT,
    ) -> list[Film]:
        """Top ``count`` films by like count; ties go to the lower id."""
        if count <= 0:
            raise ValidationError("count must be a positive number")
        films = await self.films.find_all()
        films.sort(key=lambda f: (-len(f.likes), f.id))
        return films[:count]

    # ----- helpers -----

    async def _ensure_user(self, user_id: int) -> None:
        if await self.users.find_by_id(user_id) is None:
            raise NotFoundError(f"User with id {user_id} not found")

    async def _ensure_users(self, user_ids: set[int]) -> None:
        for user_id in sorted(user_ids):
            await self._ensure_user(user_id)

    async def _resolve_references(self, film: Film) -> None:
        """Check MPA/genre ids (unknown -> 404), then fill in seeded names.

        ``genres: null`` means no genres. Duplicates collapse, the list
        is ordered by id.
        """
        genre_ids = sorted({genre.id for genre in film.genres or []})
        if not await self.mpa.exists(film.mpa.id):
            raise NotFoundError(f"MPA rating with id {film.mpa.id} not found")
        for genre_id in genre_ids:
            if not await self.genres.exists(genre_id):
                raise NotFoundError(f"Genre with id {genre_id} not found")
        film.mpa = await self.mpa.find_by_id(film.mpa.id)
        film.genres = [await self.genres.find_by_id(genre_id)
                       for genre_id in genre_ids]
