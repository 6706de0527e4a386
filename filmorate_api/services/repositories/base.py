"""Storage contracts shared by the Postgres and in-memory repositories.

Services depend only on these classes, so either backend (or a test
double) can be plugged in through ``filmorate_api.dependencies``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from filmorate_api.models.films import Film
from filmorate_api.models.reference import Genre, MpaRating
from filmorate_api.models.users import FriendshipStatus, User

RefT = TypeVar("RefT", Genre, MpaRating)


class FilmsRepo(ABC):

    @abstractmethod
    async def create(self, film: Film) -> Film:
        """Insert film with its genre links and likes; return it with id."""

    @abstractmethod
    async def update(self, film: Film) -> Film:
        """Overwrite film by id, replacing genre links and likes.

        Raises NotFoundError when no film has this id.
        """

    @abstractmethod
    async def delete(self, film_id: int) -> None:
        """Delete film with its likes and genre links (NotFoundError)."""

    @abstractmethod
    async def find_by_id(self, film_id: int) -> Film | None: ...

    @abstractmethod
    async def find_all(self) -> list[Film]:
        """All films ordered by id."""

    @abstractmethod
    async def add_like(self, film_id: int, user_id: int) -> None:
        """Idempotently add a like."""

    @abstractmethod
    async def remove_like(self, film_id: int, user_id: int) -> bool:
        """Remove a like; return whether it existed."""


class UsersRepo(ABC):

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert user with outgoing friendship edges.

        Raises DuplicatedDataError when the email is taken.
        """

    @abstractmethod
    async def update(self, user: User) -> User:
        """Overwrite user by id, replacing outgoing friendship edges."""

    @abstractmethod
    async def delete(self, user_id: int) -> None:
        """Delete user, their likes and edges in both directions."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> User | None: ...

    @abstractmethod
    async def find_all(self) -> list[User]: ...

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool: ...

    @abstractmethod
    async def save_friendship(
        self,
        user_id: int,
        friend_id: int,
        status: FriendshipStatus,
    ) -> None:
        """Insert edge user -> friend or overwrite its status."""

    @abstractmethod
    async def remove_friendship(self, user_id: int, friend_id: int) -> bool:
        """Remove edge user -> friend; return whether it existed."""


class ReferenceRepo(ABC, Generic[RefT]):
    """Read-only lookup over a fixed id -> name table."""

    @abstractmethod
    async def find_all(self) -> list[RefT]: ...

    @abstractmethod
    async def find_by_id(self, item_id: int) -> RefT:
        """Raises NotFoundError outside the seeded ids."""

    @abstractmethod
    async def exists(self, item_id: int) -> bool: ...
