"""Postgres repository for films, their genre links and likes."""

from __future__ import annotations

import logging
from typing import Any, Dict

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from filmorate_api.core.exceptions import NotFoundError
from filmorate_api.models.films import Film
from filmorate_api.models.reference import Genre, MpaRating
from .base import FilmsRepo

log = logging.getLogger(__name__)

SELECT_FILMS = """
SELECT f.film_id, f.name, f.description, f.release_date, f.duration,
       f.mpa_id, m.mpa_rating
FROM films f
JOIN mpa_ratings m ON f.mpa_id = m.mpa_id
"""


class PgFilmsRepo(FilmsRepo):
    """CRUD over ``films`` + ``film_genre`` + ``film_likes``.

    Every public method runs in one transaction (one pooled connection).
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def create(self, film: Film) -> Film:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                "INSERT INTO films"
                " (name, description, release_date, duration, mpa_id)"
                " VALUES (%s, %s, %s, %s, %s) RETURNING film_id",
                (film.name, film.description, film.release_date,
                 film.duration, film.mpa.id),
            )
            row = await cur.fetchone()
            created = film.model_copy(update={"id": row["film_id"]})
            await self._save_genres(conn, created)
            await self._save_likes(conn, created)
        return created

    async def update(self, film: Film) -> Film:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                "UPDATE films SET name = %s, description = %s,"
                " release_date = %s, duration = %s, mpa_id = %s"
                " WHERE film_id = %s",
                (film.name, film.description, film.release_date,
                 film.duration, film.mpa.id, film.id),
            )
            if cur.rowcount == 0:
                raise NotFoundError(f"Film with id {film.id} not found")
            # полная замена связей, без диффа
            await conn.execute(
                "DELETE FROM film_genre WHERE film_id = %s", (film.id,))
            await self._save_genres(conn, film)
            await conn.execute(
                "DELETE FROM film_likes WHERE film_id = %s", (film.id,))
            await self._save_likes(conn, film)
        log.info("film_updated", extra={"film_id": film.id})
        return film

    async def delete(self, film_id: int) -> None:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                "DELETE FROM films WHERE film_id = %s", (film_id,))
            if cur.rowcount == 0:
                raise NotFoundError(f"Film with id {film_id} not found")
        log.info("film_deleted", extra={"film_id": film_id})

    async def find_by_id(self, film_id: int) -> Film | None:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                SELECT_FILMS + " WHERE f.film_id = %s", (film_id,))
            row = await cur.fetchone()
            if row is None:
                return None
            return await self._assemble(conn, row)

    async def find_all(self) -> list[Film]:
        async with self._pool.connection() as conn:
            cur = await conn.execute(SELECT_FILMS + " ORDER BY f.film_id")
            rows = await cur.fetchall()
            return [await self._assemble(conn, row) for row in rows]

    async def add_like(self, film_id: int, user_id: int) -> None:
        async with self._pool.connection() as conn:
            await conn.execute(
                "INSERT INTO film_likes (film_id, user_id) VALUES (%s, %s)"
                " ON CONFLICT (film_id, user_id) DO NOTHING",
                (film_id, user_id),
            )

    async def remove_like(self, film_id: int, user_id: int) -> bool:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                "DELETE FROM film_likes WHERE film_id = %s AND user_id = %s",
                (film_id, user_id),
            )
            return cur.rowcount > 0

    # ---------- helpers ----------

    async def _assemble(
        self,
        conn: AsyncConnection,
        row: Dict[str, Any],
    ) -> Film:
        """Scalar row + one query for genres + one for likes."""
        genres_cur = await conn.execute(
            "SELECT g.genre_id, g.genre_name FROM film_genre fg"
            " JOIN genres g ON fg.genre_id = g.genre_id"
            " WHERE fg.film_id = %s ORDER BY g.genre_id",
            (row["film_id"],),
        )
        likes_cur = await conn.execute(
            "SELECT user_id FROM film_likes WHERE film_id = %s",
            (row["film_id"],),
        )
        return Film(
            id=row["film_id"],
            name=row["name"],
            description=row["description"],
            release_date=row["release_date"],
            duration=row["duration"],
            mpa=MpaRating(id=row["mpa_id"], name=row["mpa_rating"]),
            genres=[Genre(id=g["genre_id"], name=g["genre_name"])
                    for g in await genres_cur.fetchall()],
            likes={r["user_id"] for r in await likes_cur.fetchall()},
        )

    @staticmethod
    async def _save_genres(conn: AsyncConnection, film: Film) -> None:
        if not film.genres:
            return
        async with conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO film_genre (film_id, genre_id) VALUES (%s, %s)"
                " ON CONFLICT (film_id, genre_id) DO NOTHING",
                [(film.id, genre.id) for genre in film.genres],
            )

    @staticmethod
    async def _save_likes(conn: AsyncConnection, film: Film) -> None:
        if not film.likes:
            return
        async with conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO film_likes (film_id, user_id) VALUES (%s, %s)"
                " ON CONFLICT (film_id, user_id) DO NOTHING",
                [(film.id, user_id) for user_id in sorted(film.likes)],
            )
