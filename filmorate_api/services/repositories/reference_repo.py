"""Genre and MPA rating lookups: constant tables or seeded Postgres tables."""

from __future__ import annotations

from typing import Sequence

from psycopg import sql
from psycopg_pool import AsyncConnectionPool

from filmorate_api.core.exceptions import NotFoundError
from filmorate_api.models.reference import Genre, MpaRating
from .base import RefT, ReferenceRepo


GENRES: tuple[Genre, ...] = (
    Genre(id=1, name="Комедия"),
    Genre(id=2, name="Драма"),
    Genre(id=3, name="Мультфильм"),
    Genre(id=4, name="Триллер"),
    Genre(id=5, name="Документальный"),
    Genre(id=6, name="Боевик"),
)

MPA_RATINGS: tuple[MpaRating, ...] = (
    MpaRating(id=1, name="G"),
    MpaRating(id=2, name="PG"),
    MpaRating(id=3, name="PG-13"),
    MpaRating(id=4, name="R"),
    MpaRating(id=5, name="NC-17"),
)


class MemoryReferenceRepo(ReferenceRepo[RefT]):
    def __init__(self, items: Sequence[RefT], label: str) -> None:
        self._items = {item.id: item for item in items}
        self._label = label

    async def find_all(self) -> list[RefT]:
        return [self._items[key].model_copy()
                for key in sorted(self._items)]

    async def find_by_id(self, item_id: int) -> RefT:
        item = self._items.get(item_id)
        if item is None:
            raise NotFoundError(f"{self._label} with id {item_id} not found")
        return item.model_copy()

    async def exists(self, item_id: int) -> bool:
        return item_id in self._items


class PgReferenceRepo(ReferenceRepo[RefT]):
    """Reads a two-column seed table ``(<id_col>, <name_col>)``."""

    def __init__(
        self,
        pool: AsyncConnectionPool,
        model: type[RefT],
        table: str,
        id_col: str,
        name_col: str,
        label: str,
    ) -> None:
        self._pool = pool
        self._model = model
        self._label = label
        self._select = sql.SQL(
            "SELECT {id} AS id, {name} AS name FROM {table}").format(
            id=sql.Identifier(id_col),
            name=sql.Identifier(name_col),
            table=sql.Identifier(table),
        )
        self._id_col = sql.Identifier(id_col)

    async def find_all(self) -> list[RefT]:
        query = self._select + sql.SQL(" ORDER BY {}").format(self._id_col)
        async with self._pool.connection() as conn:
            rows = await (await conn.execute(query)).fetchall()
        return [self._model(**row) for row in rows]

    async def find_by_id(self, item_id: int) -> RefT:
        query = self._select + sql.SQL(" WHERE {} = %s").format(self._id_col)
        async with self._pool.connection() as conn:
            row = await (await conn.execute(query, (item_id,))).fetchone()
        if row is None:
            raise NotFoundError(f"{self._label} with id {item_id} not found")
        return self._model(**row)

    async def exists(self, item_id: int) -> bool:
        query = self._select + sql.SQL(" WHERE {} = %s").format(self._id_col)
        async with self._pool.connection() as conn:
            row = await (await conn.execute(query, (item_id,))).fetchone()
        return row is not None


def memory_genres_repo() -> MemoryReferenceRepo[Genre]:
    return MemoryReferenceRepo(GENRES, "Genre")


def memory_mpa_repo() -> MemoryReferenceRepo[MpaRating]:
    return MemoryReferenceRepo(MPA_RATINGS, "MPA rating")


def pg_genres_repo(pool: AsyncConnectionPool) -> PgReferenceRepo[Genre]:
    return PgReferenceRepo(pool, Genre, "genres", "genre_id", "genre_name",
                           "Genre")


def pg_mpa_repo(pool: AsyncConnectionPool) -> PgReferenceRepo[MpaRating]:
    return PgReferenceRepo(pool, MpaRating, "mpa_ratings", "mpa_id",
                           "mpa_rating", "MPA rating")
