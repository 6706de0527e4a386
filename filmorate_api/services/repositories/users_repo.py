"""Postgres repository for users and their friendship edges."""

from __future__ import annotations

import logging
from typing import Any, Dict

from psycopg import AsyncConnection, errors
from psycopg_pool import AsyncConnectionPool

from filmorate_api.core.exceptions import DuplicatedDataError, NotFoundError
from filmorate_api.models.users import Friendship, FriendshipStatus, User
from .base import UsersRepo

log = logging.getLogger(__name__)

SELECT_USERS = "SELECT user_id, email, login, name, birthday FROM users"


class PgUsersRepo(UsersRepo):
    """CRUD over ``users`` + ``friends``.

    The unique index on ``users.email`` backs the service-level
    ``exists_by_email`` check against concurrent registrations.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def create(self, user: User) -> User:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    "INSERT INTO users (email, login, name, birthday)"
                    " VALUES (%s, %s, %s, %s) RETURNING user_id",
                    (user.email, user.login, user.name, user.birthday),
                )
                row = await cur.fetchone()
                created = user.model_copy(update={"id": row["user_id"]})
                await self._save_friends(conn, created)
        except errors.UniqueViolation as error:
            raise DuplicatedDataError(
                f"Email {user.email} is already in use") from error
        log.info("user_created", extra={"user_id": created.id})
        return created

    async def update(self, user: User) -> User:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    "UPDATE users SET email = %s, login = %s, name = %s,"
                    " birthday = %s WHERE user_id = %s",
                    (user.email, user.login, user.name, user.birthday,
                     user.id),
                )
                if cur.rowcount == 0:
                    raise NotFoundError(f"User with id {user.id} not found")
                await conn.execute(
                    "DELETE FROM friends WHERE user_id = %s", (user.id,))
                await self._save_friends(conn, user)
        except errors.UniqueViolation as error:
            raise DuplicatedDataError(
                f"Email {user.email} is already in use") from error
        log.info("user_updated", extra={"user_id": user.id})
        return user

    async def delete(self, user_id: int) -> None:
        # лайки и рёбра дружбы в обе стороны удаляет ON DELETE CASCADE
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                "DELETE FROM users WHERE user_id = %s", (user_id,))
            if cur.rowcount == 0:
                raise NotFoundError(f"User with id {user_id} not found")
        log.info("user_deleted", extra={"user_id": user_id})

    async def find_by_id(self, user_id: int) -> User | None:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                SELECT_USERS + " WHERE user_id = %s", (user_id,))
            row = await cur.fetchone()
            if row is None:
                return None
            return await self._assemble(conn, row)

    async def find_all(self) -> list[User]:
        async with self._pool.connection() as conn:
            cur = await conn.execute(SELECT_USERS + " ORDER BY user_id")
            rows = await cur.fetchall()
            return [await self._assemble(conn, row) for row in rows]

    async def exists_by_email(self, email: str) -> bool:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                "SELECT COUNT(*) AS cnt FROM users WHERE email = %s",
                (email,))
            row = await cur.fetchone()
        return row["cnt"] > 0

    async def save_friendship(
        self,
        user_id: int,
        friend_id: int,
        status: FriendshipStatus,
    ) -> None:
        async with self._pool.connection() as conn:
            await conn.execute(
                "INSERT INTO friends (user_id, followed_user_id, status)"
                " VALUES (%s, %s, %s)"
                " ON CONFLICT (user_id, followed_user_id)"
                " DO UPDATE SET status = EXCLUDED.status",
                (user_id, friend_id, status.value),
            )

    async def remove_friendship(self, user_id: int, friend_id: int) -> bool:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                "DELETE FROM friends"
                " WHERE user_id = %s AND followed_user_id = %s",
                (user_id, friend_id),
            )
            return cur.rowcount > 0

    # ---------- helpers ----------

    async def _assemble(
        self,
        conn: AsyncConnection,
        row: Dict[str, Any],
    ) -> User:
        cur = await conn.execute(
            "SELECT followed_user_id, status FROM friends"
            " WHERE user_id = %s ORDER BY followed_user_id",
            (row["user_id"],),
        )
        friends = [
            Friendship(friend_id=r["followed_user_id"],
                       status=FriendshipStatus(r["status"]))
            for r in await cur.fetchall()
        ]
        return User(
            id=row["user_id"],
            email=row["email"],
            login=row["login"],
            name=row["name"],
            birthday=row["birthday"],
            friends=friends,
        )

    @staticmethod
    async def _save_friends(conn: AsyncConnection, user: User) -> None:
        if not user.friends:
            return
        async with conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO friends (user_id, followed_user_id, status)"
                " VALUES (%s, %s, %s)"
                " ON CONFLICT (user_id, followed_user_id) DO NOTHING",
                [(user.id, edge.friend_id, edge.status.value)
                 for edge in user.friends],
            )
