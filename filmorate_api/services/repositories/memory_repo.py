"""In-process repositories over ``filmorate_api.db.memory.MemoryStore``.

Same contract as the Postgres repositories, including the email unique
constraint and cascading deletes. Stored models are copied on the way in
and out so callers never mutate the store directly.
"""

from __future__ import annotations

from filmorate_api.core.exceptions import DuplicatedDataError, NotFoundError
from filmorate_api.db.memory import MemoryStore
from filmorate_api.models.films import Film
from filmorate_api.models.users import Friendship, FriendshipStatus, User
from .base import FilmsRepo, UsersRepo


class MemoryFilmsRepo(FilmsRepo):

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def create(self, film: Film) -> Film:
        film_id = next(self._store.film_seq)
        stored = film.model_copy(update={"id": film_id}, deep=True)
        self._store.films[film_id] = stored
        return stored.model_copy(deep=True)

    async def update(self, film: Film) -> Film:
        if film.id not in self._store.films:
            raise NotFoundError(f"Film with id {film.id} not found")
        self._store.films[film.id] = film.model_copy(deep=True)
        return film

    async def delete(self, film_id: int) -> None:
        if self._store.films.pop(film_id, None) is None:
            raise NotFoundError(f"Film with id {film_id} not found")

    async def find_by_id(self, film_id: int) -> Film | None:
        film = self._store.films.get(film_id)
        return None if film is None else film.model_copy(deep=True)

    async def find_all(self) -> list[Film]:
        return [self._store.films[key].model_copy(deep=True)
                for key in sorted(self._store.films)]

    async def add_like(self, film_id: int, user_id: int) -> None:
        self._film(film_id).likes.add(user_id)

    async def remove_like(self, film_id: int, user_id: int) -> bool:
        likes = self._film(film_id).likes
        existed = user_id in likes
        likes.discard(user_id)
        return existed

    def _film(self, film_id: int) -> Film:
        film = self._store.films.get(film_id)
        if film is None:
            raise NotFoundError(f"Film with id {film_id} not found")
        return film


class MemoryUsersRepo(UsersRepo):

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def create(self, user: User) -> User:
        self._ensure_email_free(user.email, owner_id=None)
        user_id = next(self._store.user_seq)
        stored = user.model_copy(update={"id": user_id}, deep=True)
        stored.friends.sort(key=lambda edge: edge.friend_id)
        self._store.users[user_id] = stored
        return stored.model_copy(deep=True)

    async def update(self, user: User) -> User:
        if user.id not in self._store.users:
            raise NotFoundError(f"User with id {user.id} not found")
        self._ensure_email_free(user.email, owner_id=user.id)
        stored = user.model_copy(deep=True)
        stored.friends.sort(key=lambda edge: edge.friend_id)
        self._store.users[user.id] = stored
        return user

    async def delete(self, user_id: int) -> None:
        if self._store.users.pop(user_id, None) is None:
            raise NotFoundError(f"User with id {user_id} not found")
        for film in self._store.films.values():
            film.likes.discard(user_id)
        for other in self._store.users.values():
            other.friends = [edge for edge in other.friends
                             if edge.friend_id != user_id]

    async def find_by_id(self, user_id: int) -> User | None:
        user = self._store.users.get(user_id)
        return None if user is None else user.model_copy(deep=True)

    async def find_all(self) -> list[User]:
        return [self._store.users[key].model_copy(deep=True)
                for key in sorted(self._store.users)]

    async def exists_by_email(self, email: str) -> bool:
        return any(user.email == email
                   for user in self._store.users.values())

    async def save_friendship(
        self,
        user_id: int,
        friend_id: int,
        status: FriendshipStatus,
    ) -> None:
        user = self._user(user_id)
        edge = user.edge_to(friend_id)
        if edge is not None:
            edge.status = status
            return
        user.friends.append(Friendship(friend_id=friend_id, status=status))
        user.friends.sort(key=lambda e: e.friend_id)

    async def remove_friendship(self, user_id: int, friend_id: int) -> bool:
        user = self._user(user_id)
        before = len(user.friends)
        user.friends = [edge for edge in user.friends
                        if edge.friend_id != friend_id]
        return len(user.friends) < before

    def _user(self, user_id: int) -> User:
        user = self._store.users.get(user_id)
        if user is None:
            raise NotFoundError(f"User with id {user_id} not found")
        return user

    def _ensure_email_free(self, email: str | None, owner_id: int | None):
        for user in self._store.users.values():
            if user.email == email and user.id != owner_id:
                raise DuplicatedDataError(f"Email {email} is already in use")
